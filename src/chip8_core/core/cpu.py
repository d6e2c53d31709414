# chip8_core/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Dict
import logging

from chip8_core.common.errors import Chip8Error, CpuFaulted
from chip8_core.common.types import DisassemblyLine, RegisterLayoutInfo
from chip8_core.core.snapshot import Snapshot, Operation, Metadata
from chip8_core.core.state import Chip8CpuState, CpuMode
from chip8_core.transport.memory import Memory

logger = logging.getLogger(__name__)

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    Memoryとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:responsibility CPUの状態とメモリへの参照を初期化します。
    def __init__(self, memory: Memory):
        self._memory = memory
        self._state: Chip8CpuState = self._create_initial_state()
        self._step_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> Chip8CpuState:
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        """
        CPUのレジスタ、スタック、実行モードを初期値にリセットします。
        """
        self._state = self._create_initial_state()
        self._step_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> Chip8CpuState:
        return self._state

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:responsibility メモリから次の命令語をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチした命令語を解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（ログクリア→待機判定→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    #                  アーキテクチャ固有の振る舞い（キー待ちなど）はフックメソッドで対応します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点のCPU状態とメモリアクセスを含むSnapshotオブジェクトを返します。
        実行中に Chip8Error が発生した場合、CPUはFAULTED状態となり、例外はPCとオペコードを付与して再送出されます。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._memory.get_and_clear_activity_log()
        initial_pc = self._state.pc

        if self._state.mode == CpuMode.FAULTED:
            raise CpuFaulted("CPU is faulted; reset is required.").annotate(initial_pc, None)

        # 2. 待機判定 (Hook)
        wait_snapshot = self._handle_wait(initial_pc)
        if wait_snapshot:
            return wait_snapshot

        opcode = None
        try:
            # 3. フェッチ
            opcode = self._fetch()

            # 4. デコード
            operation = self._decode(opcode)

            # 5. PC更新 (Hook)
            self._update_pc(operation)

            # 6. 実行
            self._execute(operation)
        except Chip8Error as e:
            self._state.mode = CpuMode.FAULTED
            e.annotate(initial_pc, opcode)
            logger.error("Execution fault: %s", e)
            raise

        # 7. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility キー待ち状態の場合の処理を行います。
    # @intent:return 待機を継続する場合はその状態のSnapshot、そうでなければNone。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        """
        待機状態の処理。デフォルトは何もしない（Noneを返す）。
        """
        return None

    # @intent:responsibility 命令実行前にPCを更新します。
    def _update_pc(self, operation: Operation) -> None:
        """
        命令実行前のPC更新。CHIP-8の命令長は常に2バイト。
        """
        self._state.pc = (self._state.pc + 2) & 0xFFFF

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Optional[Operation]) -> Snapshot:
        memory_activity = self._memory.get_and_clear_activity_log()
        self._step_count += 1

        if operation is None:
            info = f"{initial_pc:#06x}: (waiting for key)"
        else:
            info = f"{initial_pc:#06x}: {operation.text()}"

        return Snapshot(
            state=self.get_state(), # 実行後の状態（コピーではない）
            operation=operation,
            metadata=Metadata(step_count=self._step_count, pc=initial_pc, info=info),
            memory_activity=memory_activity
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        インスペクタがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_bytes, mnemonic) のタプルリストを返す。
        """
        pass
