import unittest

from chip8_core.common.errors import StackOverflow, StackUnderflow
from instruction_helpers import InstructionTestMixin


class TestChip8ControlInstructions(InstructionTestMixin, unittest.TestCase):
    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_pushes_return_address(self):
        self._execute(0x2400, pc=0x210)
        self.assertEqual(self.state.pc, 0x400)
        self.assertEqual(self.state.stack.entries(), [0x212])
        self.assertEqual(self.state.sp, 1)

    # @intent:test_case_balance CALL と RET の組でPCとスタック深さが呼び出し前に戻ることを検証します。
    def test_call_then_ret_restores_pc_and_depth(self):
        self._execute(0x2200, pc=0x300)
        self._execute(0x00EE, pc=0x200)
        self.assertEqual(self.state.pc, 0x302)
        self.assertEqual(self.state.sp, 0)

    def test_ret_on_empty_stack(self):
        with self.assertRaises(StackUnderflow):
            self._execute(0x00EE)

    def test_seventeenth_call_overflows(self):
        for _ in range(16):
            self._execute(0x2200)
        self.assertEqual(self.state.sp, 16)
        with self.assertRaises(StackOverflow):
            self._execute(0x2200)

    def test_se_imm(self):
        self.regs.set(3, 0x12)
        self._execute(0x3312)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x3313)
        self.assertEqual(self.state.pc, 0x202)

    def test_sne_imm(self):
        self.regs.set(3, 0x12)
        self._execute(0x4312)
        self.assertEqual(self.state.pc, 0x202)
        self._execute(0x4313)
        self.assertEqual(self.state.pc, 0x204)

    def test_se_reg(self):
        self.regs.set(1, 0x44)
        self.regs.set(2, 0x44)
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x204)
        self.regs.set(2, 0x45)
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x202)

    def test_sne_reg(self):
        self.regs.set(1, 0x44)
        self.regs.set(2, 0x45)
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x204)
        self.regs.set(2, 0x44)
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x202)

    def test_jp_v0(self):
        self.regs.set(0, 0x10)
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)


if __name__ == '__main__':
    unittest.main()
