# tests/arch/chip8/test_disassembler.py
"""
chip8_core.arch.chip8.disassemblerモジュールの単体テスト。
"""
import pytest

from chip8_core.arch.chip8.disassembler import disassemble
from chip8_core.transport.memory import Memory

# @intent:test_suite 逆アセンブラが2バイト単位で命令を表示用タプルに変換することの検証。

@pytest.fixture
def memory():
    return Memory()

def test_disassemble_program(memory):
    memory.load_rom(bytes.fromhex("00E0A22AD015"))
    lines = disassemble(memory, 0x200, 6)
    assert lines == [
        (0x200, "00 E0", "CLS"),
        (0x202, "A2 2A", "LD I, $22A"),
        (0x204, "D0 15", "DRW V0, V1, 5"),
    ]

# @intent:test_case_data 命令として解釈できない語はDWとして表示されることを検証します。
def test_unknown_word_is_data(memory):
    memory.load_rom(bytes.fromhex("FFFF"))
    assert disassemble(memory, 0x200, 2) == [(0x200, "FF FF", "DW $FFFF")]

# @intent:test_case_odd_length 範囲末尾の端数1バイトが次のバイトと組み合わされず DB として表示されることを検証します。
def test_odd_length_trailing_byte_is_data(memory):
    memory.load_rom(bytes.fromhex("00E06A"))
    lines = disassemble(memory, 0x200, 3)
    assert lines == [
        (0x200, "00 E0", "CLS"),
        (0x202, "6A", "DB $6A"),
    ]

def test_trailing_byte_at_end_of_memory(memory):
    lines = disassemble(memory, 0xFFF, 1)
    assert lines == [(0xFFF, "00", "DB $00")]

# @intent:test_case_no_log 逆アセンブルがメモリアクセスログを汚さないことを検証します。
def test_does_not_record_activity(memory):
    memory.load_rom(bytes.fromhex("1200"))
    disassemble(memory, 0x200, 2)
    assert memory.get_and_clear_activity_log() == []

def test_range_is_clamped_to_memory(memory):
    lines = disassemble(memory, 0xFFC, 100)
    assert [line[0] for line in lines] == [0xFFC, 0xFFE]
