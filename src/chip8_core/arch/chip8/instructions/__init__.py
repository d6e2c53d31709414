"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_core.common.errors import UnknownOpcode
from chip8_core.core.snapshot import Operation
from .base import ExecutionContext, Quirks, decode_fields
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility 16bit命令語をデコードします。
def decode_opcode(word: int) -> Operation:
    """
    CHIP-8の命令語をデコードし、Operationオブジェクトを返します。
    どのパターンにも一致しない場合は UnknownOpcode を送出します。
    """
    selector, table = DECODE_MAP[(word >> 12) & 0xF]
    decoder = table.get(selector(word))
    if decoder is None:
        raise UnknownOpcode(f"Unknown opcode {word:04X}.")
    return decoder(word)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, ctx: ExecutionContext) -> None:
    """
    デコードされた命令を実行し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP.get(operation.key)
    if executor is None:
        raise UnknownOpcode(f"No executor for opcode {operation.opcode_hex} ({operation.key}).")
    executor(ctx, operation)

__all__ = [
    "ExecutionContext",
    "Quirks",
    "decode_fields",
    "decode_opcode",
    "execute_instruction",
]
