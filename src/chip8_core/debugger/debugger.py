# chip8_core/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional
import logging

from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.core.snapshot import Snapshot
from chip8_core.core.state import CpuMode
from chip8_core.transport.memory import MemoryAccessType

logger = logging.getLogger(__name__)

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した
    OPCODE_MATCH = "OPCODE_MATCH"       # 特定の命令語が実行された

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_name は get_register_map() のキー（"V0"-"VF", "I", "PC", "SP", "DT", "ST"）です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUE, OPCODE_MATCHで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True                  # 有効/無効状態

# @intent:responsibility run() が停止した理由を表します。
class StopReason(Enum):
    BREAKPOINT = "BREAKPOINT"
    AWAITING_KEY = "AWAITING_KEY"
    STEP_LIMIT = "STEP_LIMIT"
    STOPPED = "STOPPED"

# @intent:data_structure 実行履歴の1エントリ。Snapshotの状態は参照であるため、レジスタ値はここで固定します。
@dataclass(frozen=True)
class TraceEntry:
    snapshot: Snapshot
    registers: Dict[str, int]

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, cpu: Chip8Cpu, history_size: int = 1024):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers: Dict[str, int] = self._cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        self._history: Deque[TraceEntry] = deque(maxlen=history_size)

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        """
        ブレークポイント条件を追加します。
        """
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[TraceEntry]:
        """
        現在の実行履歴（古い順）を返します。
        """
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def _pc_breakpoint_at(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    def _check_other_breakpoints(self, snapshot: Snapshot, registers: Dict[str, int]) -> bool:
        """
        Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.memory_activity:
                    if access.access_type == MemoryAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.memory_activity:
                    if access.access_type == MemoryAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name in registers and registers[bp.register_name] == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                name = bp.register_name
                if name in registers and name in self._previous_registers:
                    if registers[name] != self._previous_registers[name]:
                        return True
            elif bp.condition_type == BreakpointConditionType.OPCODE_MATCH:
                if snapshot.operation is not None and snapshot.operation.opcode == bp.value:
                    return True
        return False

    def step_instruction(self) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshotを返します。
        """
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot
        self._history.append(TraceEntry(snapshot, self._cpu.get_register_map()))
        return snapshot

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """
        ブレークポイント、キー待ち、ステップ上限、または stop() まで実行を継続します。
        開始地点のPCブレークポイントは無視して1命令進めます。
        CPUが例外を送出した場合も実行中フラグは解除されます。
        """
        self._running = True
        try:
            return self._run_loop(max_steps)
        finally:
            self._running = False

    def _run_loop(self, max_steps: Optional[int]) -> StopReason:
        steps = 0
        first = True

        while self._running:
            if max_steps is not None and steps >= max_steps:
                return StopReason.STEP_LIMIT

            current_pc = self._cpu.get_state().pc
            if not first and self._pc_breakpoint_at(current_pc):
                logger.info("Breakpoint hit at PC: %#06x", current_pc)
                return StopReason.BREAKPOINT
            first = False

            self._previous_registers = self._cpu.get_register_map()
            snapshot = self.step_instruction()
            steps += 1

            if self._check_other_breakpoints(snapshot, self._history[-1].registers):
                logger.info("Breakpoint hit at PC: %#06x", snapshot.metadata.pc)
                return StopReason.BREAKPOINT

            if self._cpu.mode == CpuMode.AWAITING_KEY:
                logger.info("Waiting for key at PC: %#06x", snapshot.state.pc)
                return StopReason.AWAITING_KEY

        return StopReason.STOPPED

    def stop(self) -> None:
        self._running = False
