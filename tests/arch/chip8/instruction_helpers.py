"""
命令単体テスト用の共通ヘルパー。
"""
import random

from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.arch.chip8.instructions import Quirks, decode_opcode, execute_instruction


class InstructionTestMixin:
    """
    CPUを生成し、任意の命令語を0x200で1つだけ実行するためのヘルパー。
    """
    quirks = Quirks()

    def setUp(self):
        self.cpu = Chip8Cpu(rng=random.Random(1234), quirks=self.quirks)
        self.state = self.cpu.get_state()
        self.regs = self.state.registers

    def _execute(self, word, pc=0x200):
        self.state.pc = pc
        op = decode_opcode(word)
        self.state.pc += 2
        execute_instruction(op, self.cpu._context())
        return op
