# tests/core/test_snapshot.py
"""
chip8_core.core.snapshotモジュールの単体テスト。
"""
import dataclasses
import pytest

from chip8_core.core.snapshot import Metadata, Operation, Snapshot
from chip8_core.core.state import Chip8CpuState
from chip8_core.transport.memory import MemoryAccess, MemoryAccessType

# @intent:test_suite 1ステップの実行結果を記録する不変データ構造の検証。

class TestOperation:
    @pytest.fixture
    def operation(self):
        return Operation(0xD12F, "Dxyn", "DRW", ["V1", "V2", "15"], (0xD, 0x1, 0x2, 0xF))

    def test_fields(self, operation):
        assert operation.opcode_hex == "D12F"
        assert (operation.x, operation.y, operation.n) == (1, 2, 0xF)
        assert operation.kk == 0x2F
        assert operation.nnn == 0x12F

    def test_text(self, operation):
        assert operation.text() == "DRW V1, V2, 15"
        assert Operation(0x00E0, "00E0", "CLS").text() == "CLS"

    # @intent:test_case_immutability Operationが不変であることを検証します。
    def test_immutable(self, operation):
        with pytest.raises(dataclasses.FrozenInstanceError):
            operation.mnemonic = "NOP"

class TestSnapshot:
    def test_init(self):
        state = Chip8CpuState()
        access = MemoryAccess(0x200, 0x12, MemoryAccessType.READ)
        snapshot = Snapshot(
            state=state,
            operation=None,
            metadata=Metadata(step_count=1, pc=0x200),
            memory_activity=[access],
        )
        assert snapshot.state is state
        assert snapshot.metadata.info is None
        assert snapshot.memory_activity == [access]
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.operation = None

    def test_default_activity_is_empty(self):
        snapshot = Snapshot(Chip8CpuState(), None, Metadata(0, 0x200))
        assert snapshot.memory_activity == []
