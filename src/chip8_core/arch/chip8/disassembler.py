# src/chip8_core/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用しますが、アクセスログを汚さないように
Memory.peek を使用します。
"""
from typing import List

from chip8_core.arch.chip8.instructions import decode_opcode
from chip8_core.common.errors import UnknownOpcode
from chip8_core.common.types import DisassemblyLine
from chip8_core.transport.memory import MEMORY_SIZE, Memory

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: Memory, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    命令として解釈できない語はデータ (DW)、範囲末尾の端数1バイトは (DB) として表示します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, MEMORY_SIZE)

    while current_addr < end_addr:
        # 範囲の末尾に1バイトのみ残った場合はデータとして扱う
        if current_addr + 1 >= end_addr:
            value = memory.peek(current_addr)
            result.append((current_addr, f"{value:02X}", f"DB ${value:02X}"))
            break

        word = (memory.peek(current_addr) << 8) | memory.peek(current_addr + 1)
        hex_bytes = f"{word >> 8:02X} {word & 0xFF:02X}"
        try:
            mnemonic_str = decode_opcode(word).text()
        except UnknownOpcode:
            mnemonic_str = f"DW ${word:04X}"

        result.append((current_addr, hex_bytes, mnemonic_str))
        current_addr += 2

    return result
