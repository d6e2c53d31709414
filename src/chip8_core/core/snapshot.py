# chip8_core/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令の実行結果（命令の詳細、メタデータ、メモリアクセス）を記録した
不変のデータ構造を定義します。デバッガやインスペクタへの情報提供に用います。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from chip8_core.core.state import Chip8CpuState
from chip8_core.transport.memory import MemoryAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（オペコード、ニーモニック、オペランド、ニブル分解）を記録するデータクラス。
    """
    opcode: int # 16bit命令語 例: 0x8124
    key: str # 実行テーブルのキー 例: "8xy4"
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    fields: Tuple[int, int, int, int] = (0, 0, 0, 0) # (op, x, y, n)

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def x(self) -> int:
        return self.fields[1]

    @property
    def y(self) -> int:
        return self.fields[2]

    @property
    def n(self) -> int:
        return self.fields[3]

    @property
    def kk(self) -> int:
        return self.opcode & 0x00FF

    @property
    def nnn(self) -> int:
        return self.opcode & 0x0FFF

    # @intent:responsibility ニーモニックとオペランドを連結した表示用文字列を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計ステップ数、命令アドレス、表示情報）を記録するデータクラス。
    """
    step_count: int
    pc: int # この命令をフェッチしたアドレス
    info: Optional[str] = None # 例: "0x0200: ADD V1, V2"

# @intent:responsibility ある1ステップの実行結果を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUの状態と1ステップ分のメモリアクセスを記録した不変のデータ構造。
    operationがNoneの場合、そのステップはキー待ちのため命令を実行していません。
    """
    state: Chip8CpuState
    operation: Optional[Operation]
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)

    # @intent:rationale stateは実行後の状態への参照であり、コピーではありません。
    #                  履歴として保持する側（Debugger）が必要に応じて値を抜き出します。
