# tests/transport/test_memory.py
"""
chip8_core.transport.memoryモジュールの単体テスト。
"""
import pytest

from chip8_core.common.errors import OutOfBounds, ProtectedRegionViolation, RomTooLarge
from chip8_core.transport.memory import (
    Memory, MemoryAccessType, FONT_SET, DEFAULT_FONT_ADDRESS, MAX_ROM_SIZE, PROGRAM_START,
)

# @intent:test_suite メモリの保護領域、境界チェック、ROM/フォントのロード、アクセスログを検証します。

class TestMemory:
    @pytest.fixture
    def memory(self):
        return Memory()

    # @intent:test_case_init フォントが予約領域にロードされ、それ以外はゼロであることを検証します。
    def test_font_loaded_at_construction(self, memory):
        assert memory.get_size() == 4096
        assert memory.dump(DEFAULT_FONT_ADDRESS, len(FONT_SET)) == FONT_SET
        assert memory.peek(0x000) == 0
        assert memory.peek(PROGRAM_START) == 0

    def test_font_sprite_address(self, memory):
        assert memory.font_sprite_address(0x0) == 0x050
        assert memory.font_sprite_address(0xA) == 0x050 + 50
        assert memory.font_sprite_address(0x1F) == 0x050 + 75 # 下位4bitのみ使用

    def test_custom_font_address(self):
        memory = Memory(font_address=0x000)
        assert memory.peek(0x000) == 0xF0
        assert memory.font_sprite_address(1) == 5

    def test_font_address_outside_reserved_region(self):
        with pytest.raises(ValueError):
            Memory(font_address=0x1C0)

    # @intent:test_case_protection 予約領域への書き込みは失敗し、0x200への書き込みは成功することを検証します。
    def test_write_protected_region(self, memory):
        with pytest.raises(ProtectedRegionViolation):
            memory.write(0x000, 0x12)
        with pytest.raises(ProtectedRegionViolation):
            memory.write(0x1FF, 0x12)
        memory.write(0x200, 0x12)
        assert memory.read(0x200) == 0x12

    def test_read_write_out_of_bounds(self, memory):
        with pytest.raises(OutOfBounds):
            memory.read(0x1000)
        with pytest.raises(OutOfBounds):
            memory.read(-1)
        with pytest.raises(OutOfBounds):
            memory.write(0x1000, 0x00)
        memory.write(0xFFF, 0xAB)
        assert memory.read(0xFFF) == 0xAB

    def test_write_invalid_data(self, memory):
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            memory.write(0x300, 0x100)

    # @intent:test_case_rom ROMが0x200から配置されることを検証します。
    def test_load_rom(self, memory):
        memory.load_rom(b"\x12\x34\x56")
        assert memory.dump(0x200, 3) == b"\x12\x34\x56"
        assert memory.get_and_clear_activity_log() == []

    def test_load_rom_max_size(self, memory):
        memory.load_rom(bytes([0xAA]) * MAX_ROM_SIZE)
        assert MAX_ROM_SIZE == 3584
        assert memory.peek(0xFFF) == 0xAA

    def test_load_rom_too_large(self, memory):
        with pytest.raises(RomTooLarge):
            memory.load_rom(bytes(MAX_ROM_SIZE + 1))

    # @intent:test_case_log 読み書きがログに記録され、peekは記録されないことを検証します。
    def test_activity_log(self, memory):
        memory.write(0x300, 0x42)
        memory.read(0x300)
        memory.peek(0x300)
        log = memory.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x300, 0x42, MemoryAccessType.WRITE),
            (0x300, 0x42, MemoryAccessType.READ),
        ]
        assert memory.get_and_clear_activity_log() == []

    def test_clear_reloads_font(self, memory):
        memory.load_rom(b"\xFF\xFF")
        memory.clear()
        assert memory.peek(0x200) == 0
        assert memory.dump(DEFAULT_FONT_ADDRESS, len(FONT_SET)) == FONT_SET

    def test_dump_bounds(self, memory):
        assert memory.dump(0xFFE, 0) == b""
        with pytest.raises(OutOfBounds):
            memory.dump(0xFFE, 3)
