# src/chip8_core/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from dataclasses import dataclass, field
from typing import List, Tuple
import random

from chip8_core.core.snapshot import Operation
from chip8_core.core.state import Chip8CpuState, FLAG_REGISTER
from chip8_core.devices.display import DisplayBuffer
from chip8_core.devices.keypad import Keypad
from chip8_core.devices.timers import TimerPair
from chip8_core.transport.memory import Memory

# @intent:responsibility 処理系ごとに挙動が分かれる命令の動作を切り替える設定です。
# @intent:rationale 既定値はCOSMAC VIP以降の一般的なインタプリタ（Vxをシフト、Fx55/Fx65でIを変更しない）に合わせます。
@dataclass(frozen=True)
class Quirks:
    shift_uses_vy: bool = False # True: 8xy6/8xyE は Vy をシフトして Vx に格納
    load_store_increments_i: bool = False # True: Fx55/Fx65 の後 I += x + 1

# @intent:responsibility 命令の実行に必要な全ての構成要素を束ねます。
# @intent:rationale 各命令の実行関数は同一シグネチャ (ctx, op) を持ち、テーブルから呼び出されます。
@dataclass
class ExecutionContext:
    state: Chip8CpuState
    memory: Memory
    display: DisplayBuffer
    keypad: Keypad
    timers: TimerPair
    rng: random.Random = field(default_factory=random.Random)
    quirks: Quirks = field(default_factory=Quirks)

    def v(self, index: int) -> int:
        return self.state.registers.get(index)

    def set_v(self, index: int, value: int) -> None:
        self.state.registers.set(index, value & 0xFF)

    # @intent:utility_function フラグレジスタVFを0/1に設定します。
    # @intent:rationale 演算結果の格納後に呼ぶこと。x == F の場合はフラグが結果を上書きします。
    def set_flag(self, flag: bool) -> None:
        self.state.registers.set(FLAG_REGISTER, 1 if flag else 0)

    # @intent:utility_function 次の命令をスキップします（PC += 2）。
    def skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

# @intent:utility_function 16bit命令語を4つのニブルと即値 (kk, nnn) に分解します。
def decode_fields(word: int) -> Tuple[int, int, int, int, int, int]:
    """(op, x, y, n, kk, nnn) を返します。"""
    op = (word & 0xF000) >> 12
    x = (word & 0x0F00) >> 8
    y = (word & 0x00F0) >> 4
    n = word & 0x000F
    return op, x, y, n, word & 0x00FF, word & 0x0FFF

# @intent:utility_function Operationオブジェクトを組み立てます。
def make_operation(word: int, key: str, mnemonic: str, operands: List[str] = None) -> Operation:
    op, x, y, n, _, _ = decode_fields(word)
    return Operation(word, key, mnemonic, list(operands or []), (op, x, y, n))

# --- オペランド表記 ---
def reg(index: int) -> str:
    return f"V{index:X}"

def imm(value: int) -> str:
    return f"#${value:02X}"

def addr(value: int) -> str:
    return f"${value:03X}"
