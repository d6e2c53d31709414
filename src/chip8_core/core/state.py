# chip8_core/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CHIP-8 CPUの状態（汎用レジスタ、アドレスレジスタ、PC、コールスタック、実行モード）
を保持するデータ構造を定義します。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional

from chip8_core.common.errors import InvalidRegister, StackOverflow, StackUnderflow

NUM_REGISTERS = 16
STACK_DEPTH = 16
INITIAL_PC = 0x200
FLAG_REGISTER = 0xF

# @intent:responsibility CPUの実行モードを定義します。
# @intent:rationale Fx0Aのキー待ちをブロッキング呼び出しではなく状態タグとして表現し、
#                  外部のステップループがポーリングで再開できるようにします。
class CpuMode(Enum):
    RUNNING = "RUNNING"
    AWAITING_KEY = "AWAITING_KEY"
    FAULTED = "FAULTED"

# @intent:responsibility 16本の8bit汎用レジスタ(V0-VF)と16bitアドレスレジスタ(I)を保持します。
class RegisterFile:
    """
    V0-VF と I を保持するレジスタファイル。
    VFは汎用レジスタであると同時に、キャリー/ボロー/衝突フラグとして上書きされます。
    """
    def __init__(self):
        self._v = bytearray(NUM_REGISTERS)
        self._i = 0x0000

    def _check_index(self, index: int) -> None:
        if not 0 <= index < NUM_REGISTERS:
            raise InvalidRegister(f"Register index {index} out of range (0-15).")

    def get(self, index: int) -> int:
        self._check_index(index)
        return self._v[index]

    # @intent:pre-condition valueは8bit値である必要があります。ラップアラウンドは呼び出し側（命令実装）の責務です。
    def set(self, index: int, value: int) -> None:
        self._check_index(index)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Value {value} is not an 8-bit value.")
        self._v[index] = value

    # @intent:rationale Iはポインタでありメモリ書き込みではないため、予約領域の制約は受けません。
    def get_i(self) -> int:
        return self._i

    def set_i(self, value: int) -> None:
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"Value {value} is not a 16-bit value.")
        self._i = value

    def values(self) -> List[int]:
        """V0-VFの値のコピーを返します。"""
        return list(self._v)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegisterFile):
            return NotImplemented
        return self._v == other._v and self._i == other._i

    def __repr__(self) -> str:
        regs = " ".join(f"V{n:X}={value:02X}" for n, value in enumerate(self._v))
        return f"RegisterFile({regs} I={self._i:04X})"

# @intent:responsibility 最大16段の戻りアドレススタックを保持します。
class CallStack:
    """
    固定深さのコールスタック。depth (スタックポインタ) が0のとき空です。
    """
    def __init__(self):
        self._entries: List[int] = []

    @property
    def depth(self) -> int:
        return len(self._entries)

    def push(self, address: int) -> None:
        if len(self._entries) >= STACK_DEPTH:
            raise StackOverflow(f"Call stack overflow: already {STACK_DEPTH} levels deep.")
        self._entries.append(address)

    def pop(self) -> int:
        if not self._entries:
            raise StackUnderflow("Return with an empty call stack.")
        return self._entries.pop()

    def entries(self) -> List[int]:
        """底から順に並んだ戻りアドレスのコピーを返します。"""
        return list(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CallStack):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return "CallStack([" + ", ".join(f"{a:#05x}" for a in self._entries) + "])"

# @intent:responsibility CHIP-8 CPUのレジスタ状態と実行モードを保持します。
@dataclass
class Chip8CpuState:
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    タイマー、ディスプレイ、キーパッドは外部コラボレータと共有されるため、
    ここではなくdevicesパッケージで管理します。
    """
    pc: int = INITIAL_PC  # Program Counter
    registers: RegisterFile = field(default_factory=RegisterFile)
    stack: CallStack = field(default_factory=CallStack)
    mode: CpuMode = CpuMode.RUNNING
    wait_register: Optional[int] = None # Fx0A の格納先レジスタ
    keys_held_at_wait: FrozenSet[int] = frozenset() # Fx0A 開始時に押されていたキー

    @property
    def sp(self) -> int:
        return self.stack.depth

    @property
    def i(self) -> int:
        return self.registers.get_i()

    @i.setter
    def i(self, value: int) -> None:
        self.registers.set_i(value)

    @property
    def vf(self) -> int:
        return self.registers.get(FLAG_REGISTER)
