# src/chip8_core/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

このモジュールはCHIP-8 CPUの具体的な実装を提供し、AbstractCpuインターフェースを実装します。
タイマー、ディスプレイ、キーパッドはCPUインスタンスが所有し、外部コラボレータ（描画・音声・入力）には
アクセサを通じて公開します。
"""
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import random

from chip8_core.arch.chip8 import disassembler
from chip8_core.arch.chip8.instructions import ExecutionContext, Quirks, decode_opcode, execute_instruction
from chip8_core.common.types import DisassemblyLine, RegisterInfo, RegisterLayoutInfo
from chip8_core.core.cpu import AbstractCpu
from chip8_core.core.snapshot import Operation, Snapshot
from chip8_core.core.state import Chip8CpuState, CpuMode, NUM_REGISTERS
from chip8_core.devices.display import DisplayBuffer
from chip8_core.devices.keypad import Keypad
from chip8_core.devices.timers import TimerPair
from chip8_core.transport.memory import Memory

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。

    命令ステップ (step) とタイマーの減算 (tick_timers) は独立したエントリポイントであり、
    呼び出しのタイミングは外部スケジューラが決定します。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition rngは乱数命令 (Cxkk) が使用する乱数源です。テストでは固定シードのインスタンスを渡します。
    def __init__(self, memory: Optional[Memory] = None, rng: Optional[random.Random] = None,
                 quirks: Optional[Quirks] = None):
        super().__init__(memory if memory is not None else Memory())
        self._display = DisplayBuffer()
        self._keypad = Keypad()
        self._timers = TimerPair()
        self._rng = rng if rng is not None else random.Random()
        self._quirks = quirks if quirks is not None else Quirks()

    # @intent:responsibility CHIP-8の初期状態（PC=0x200、全レジスタ0）を生成します。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 全ての可変状態をゼロに戻し、フォントテーブルを再ロードします。
    # @intent:rationale 部分的なリセットは提供しません。ROMを含むメモリもクリアされます。
    def reset(self) -> None:
        super().reset()
        self._memory.clear()
        self._display.clear()
        self._keypad.reset()
        self._timers.reset()
        logger.info("CPU reset")

    # @intent:responsibility ROMイメージを0x200からロードします。
    def load_rom(self, data: Sequence[int]) -> None:
        self._memory.load_rom(data)

    # @intent:responsibility ディレイ/サウンドタイマーを1回減算します。60Hzで外部から呼び出されます。
    def tick_timers(self) -> None:
        self._timers.tick()

    # --- 外部コラボレータ向けアクセサ ---
    @property
    def memory(self) -> Memory:
        return self._memory

    @property
    def display(self) -> DisplayBuffer:
        return self._display

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def timers(self) -> TimerPair:
        return self._timers

    @property
    def quirks(self) -> Quirks:
        return self._quirks

    @property
    def mode(self) -> CpuMode:
        return self._state.mode

    def get_display_snapshot(self) -> Tuple[Tuple[bool, ...], ...]:
        return self._display.get_pixels()

    def get_sound_timer(self) -> int:
        return self._timers.sound_value()

    def set_key(self, key: int, pressed: bool) -> None:
        self._keypad.set_pressed(key, pressed)

    def _context(self) -> ExecutionContext:
        return ExecutionContext(
            state=self._state,
            memory=self._memory,
            display=self._display,
            keypad=self._keypad,
            timers=self._timers,
            rng=self._rng,
            quirks=self._quirks,
        )

    # @intent:responsibility Fx0A によるキー待ち状態を処理します。
    # @intent:flow 待機開始後に新たに押されたキーがなければPCを変えずに待機Snapshotを返します。
    #              見つかった場合はVxにキー番号を格納してRUNNINGに戻り、通常のフェッチへ進みます。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        state = self._state
        if state.mode != CpuMode.AWAITING_KEY:
            return None

        pressed = self._keypad.pressed_keys()
        # 待機開始時に押されていたキーは、一度離されるまで新規押下とみなさない
        state.keys_held_at_wait = state.keys_held_at_wait & pressed
        new_keys = pressed - state.keys_held_at_wait
        if not new_keys:
            return self._create_snapshot(current_pc, None)

        key = min(new_keys)
        state.registers.set(state.wait_register, key)
        logger.debug("Key %X stored in V%X, resuming at %#05x", key, state.wait_register, current_pc)
        state.mode = CpuMode.RUNNING
        state.wait_register = None
        state.keys_held_at_wait = frozenset()
        return None

    # @intent:responsibility 現在のPCから2バイト（ビッグエンディアン）の命令語をフェッチします。
    # @intent:rationale PCの更新はこの時点では行わず、_update_pcで行います。
    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._memory.read(pc) << 8) | self._memory.read(pc + 1)

    # @intent:responsibility 命令語をデコードし、Operationオブジェクトを返します。
    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility Operationを実行し、状態を更新します。
    def _execute(self, operation: Operation) -> None:
        logger.debug("%#05x: %s %s", self._state.pc - 2, operation.opcode_hex, operation.text())
        execute_instruction(operation, self._context())

    # @intent:responsibility インスペクタ表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        reg_map = {f"V{n:X}": value for n, value in enumerate(s.registers.values())}
        reg_map.update({
            "I": s.i, "PC": s.pc, "SP": s.sp,
            "DT": self._timers.delay_value(), "ST": self._timers.sound_value(),
        })
        return reg_map

    # @intent:responsibility レジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(NUM_REGISTERS)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._memory, start_addr, length)
