import unittest

from chip8_core.common.errors import OutOfBounds
from chip8_core.core.state import CpuMode
from instruction_helpers import InstructionTestMixin


class TestChip8IoInstructions(InstructionTestMixin, unittest.TestCase):
    def _sprite(self, address, rows):
        self.cpu.memory.load_rom(bytes(address - 0x200) + bytes(rows))
        self.state.i = address

    def test_cls(self):
        self.cpu.display.toggle_pixel(5, 5)
        self._execute(0x00E0)
        self.assertEqual(self.cpu.display.lit_count(), 0)

    def test_drw_sets_pixels(self):
        self._sprite(0x300, [0b10100000])
        self.regs.set(1, 10)
        self.regs.set(2, 3)
        self._execute(0xD121)
        self.assertTrue(self.cpu.display.get_pixel(10, 3))
        self.assertFalse(self.cpu.display.get_pixel(11, 3))
        self.assertTrue(self.cpu.display.get_pixel(12, 3))
        self.assertEqual(self.cpu.display.lit_count(), 2)
        self.assertEqual(self.regs.get(0xF), 0)

    # @intent:test_case_collision 同じスプライトを2回描画すると画素が消え、2回目のみVF=1となることを検証します。
    def test_drw_twice_collides_and_erases(self):
        self._sprite(0x300, [0xFF])
        self._execute(0xD011)
        self.assertEqual(self.regs.get(0xF), 0)
        self.assertEqual(self.cpu.display.lit_count(), 8)
        self._execute(0xD011)
        self.assertEqual(self.regs.get(0xF), 1)
        self.assertEqual(self.cpu.display.lit_count(), 0)

    def test_drw_wraps_around_edges(self):
        self._sprite(0x300, [0xC0, 0xC0])
        self.regs.set(1, 63)
        self.regs.set(2, 31)
        self._execute(0xD122)
        display = self.cpu.display
        self.assertTrue(display.get_pixel(63, 31))
        self.assertTrue(display.get_pixel(0, 31))
        self.assertTrue(display.get_pixel(63, 0))
        self.assertTrue(display.get_pixel(0, 0))
        self.assertEqual(display.lit_count(), 4)

    def test_drw_font_digit(self):
        self.regs.set(0, 0x0)
        self._execute(0xF029)
        self._execute(0xD005)
        rows = self.cpu.get_display_snapshot()
        self.assertEqual(rows[0][:4], (True, True, True, True))
        self.assertEqual(rows[1][:4], (True, False, False, True))
        self.assertEqual(self.cpu.display.lit_count(), 14)

    def test_drw_zero_rows(self):
        self._sprite(0x300, [0xFF])
        self.regs.set(0xF, 1)
        self._execute(0xD010)
        self.assertEqual(self.cpu.display.lit_count(), 0)
        self.assertEqual(self.regs.get(0xF), 0)

    def test_drw_past_end_of_memory(self):
        self.state.i = 0xFFF
        with self.assertRaises(OutOfBounds):
            self._execute(0xD012)

    def test_skp(self):
        self.regs.set(7, 0xA)
        self._execute(0xE79E)
        self.assertEqual(self.state.pc, 0x202)
        self.cpu.set_key(0xA, True)
        self._execute(0xE79E)
        self.assertEqual(self.state.pc, 0x204)

    def test_sknp(self):
        self.regs.set(7, 0xA)
        self._execute(0xE7A1)
        self.assertEqual(self.state.pc, 0x204)
        self.cpu.set_key(0xA, True)
        self._execute(0xE7A1)
        self.assertEqual(self.state.pc, 0x202)

    def test_skp_uses_low_nibble_of_vx(self):
        self.regs.set(7, 0x1A)
        self.cpu.set_key(0xA, True)
        self._execute(0xE79E)
        self.assertEqual(self.state.pc, 0x204)

    def test_ld_key_enters_wait_mode(self):
        self.cpu.set_key(3, True)
        self._execute(0xF50A)
        self.assertEqual(self.state.mode, CpuMode.AWAITING_KEY)
        self.assertEqual(self.state.wait_register, 5)
        self.assertEqual(self.state.keys_held_at_wait, frozenset({3}))
        self.assertEqual(self.state.pc, 0x202)


if __name__ == '__main__':
    unittest.main()
