"""
共通の例外定義を提供するモジュール。

CHIP-8実行中に発生しうる全ての異常は Chip8Error を基底とします。
各クラスは同種の状況で従来送出していた組み込み例外（IndexError, ValueError など）も継承しており、
既存の呼び出し側のハンドリングを壊しません。
"""
from typing import Optional


# @intent:responsibility CHIP-8コアで発生する全ての例外の基底クラスです。
# @intent:rationale 実行を中断させた命令のPCとオペコードを後から付与できるようにし、
#                  呼び出し側（ドライバ/デバッガ）が原因箇所を特定できるようにします。
class Chip8Error(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.pc: Optional[int] = None
        self.opcode: Optional[int] = None

    # @intent:responsibility 例外に発生地点（PCとオペコード）を記録します。
    def annotate(self, pc: int, opcode: Optional[int]) -> 'Chip8Error':
        self.pc = pc
        self.opcode = opcode
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.pc is None:
            return message
        location = f"PC={self.pc:#05x}"
        if self.opcode is not None:
            location += f", opcode={self.opcode:04X}"
        return f"{message} ({location})"


class OutOfBounds(Chip8Error, IndexError):
    """アドレスが 0x000-0xFFF の範囲外。"""


class ProtectedRegionViolation(Chip8Error, ValueError):
    """インタプリタ予約領域 (0x000-0x1FF) への書き込み。"""


class RomTooLarge(Chip8Error, ValueError):
    """ROMがプログラム領域 (0x200-0xFFF) に収まらない。"""


class InvalidRegister(Chip8Error, IndexError):
    """レジスタ番号が 0-15 の範囲外。"""


class StackOverflow(Chip8Error, RuntimeError):
    """17段目のサブルーチン呼び出し。"""


class StackUnderflow(Chip8Error, RuntimeError):
    """空のスタックからの復帰。"""


class UnknownOpcode(Chip8Error, ValueError):
    """どの命令パターンにも一致しないオペコード。"""


# @intent:responsibility FAULTED状態のCPUに対してstepが要求されたことを示します。
# @intent:rationale 異常終了後の状態は未定義であるため、resetが呼ばれるまで実行を拒否します。
class CpuFaulted(Chip8Error, RuntimeError):
    pass
