# tests/common/test_errors.py
"""
chip8_core.common.errorsモジュールの単体テスト。
"""
import pytest

from chip8_core.common.errors import (
    Chip8Error, OutOfBounds, ProtectedRegionViolation, RomTooLarge,
    InvalidRegister, StackOverflow, StackUnderflow, UnknownOpcode, CpuFaulted,
)

# @intent:test_suite 例外階層と発生地点の付与を検証します。

class TestChip8Error:
    # @intent:test_case_hierarchy 各例外が Chip8Error と対応する組み込み例外の両方を継承していることを検証します。
    @pytest.mark.parametrize("cls, builtin", [
        (OutOfBounds, IndexError),
        (ProtectedRegionViolation, ValueError),
        (RomTooLarge, ValueError),
        (InvalidRegister, IndexError),
        (StackOverflow, RuntimeError),
        (StackUnderflow, RuntimeError),
        (UnknownOpcode, ValueError),
        (CpuFaulted, RuntimeError),
    ])
    def test_hierarchy(self, cls, builtin):
        err = cls("boom")
        assert isinstance(err, Chip8Error)
        assert isinstance(err, builtin)

    def test_message_without_location(self):
        err = UnknownOpcode("Unknown opcode 0123.")
        assert str(err) == "Unknown opcode 0123."
        assert err.pc is None
        assert err.opcode is None

    # @intent:test_case_annotate annotateでPCとオペコードが付与され、文字列表現に含まれることを検証します。
    def test_annotate_adds_location(self):
        err = StackUnderflow("Return with an empty call stack.").annotate(0x204, 0x00EE)
        assert err.pc == 0x204
        assert err.opcode == 0x00EE
        assert str(err) == "Return with an empty call stack. (PC=0x204, opcode=00EE)"

    def test_annotate_without_opcode(self):
        err = OutOfBounds("bad fetch").annotate(0x1000, None)
        assert str(err) == "bad fetch (PC=0x1000)"
