# chip8_core/scheduler.py
"""
命令ステップとタイマー減算の2つのクロックを駆動するスケジューラ。

CPU自身はどちらのクロックも自走させません。このモジュールは経過時間を各クロックの周期と比較する
タイムアキュムレータ方式で step() と tick_timers() を呼び出します。
"""
from dataclasses import dataclass
from typing import Callable
import logging
import time

from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.devices.timers import TIMER_HZ

logger = logging.getLogger(__name__)

# 浮動小数点の累積誤差で周期境界の処理が1回欠けるのを防ぐ
_EPSILON = 1e-9

# @intent:data_structure 1回の advance で実行された処理数。
@dataclass(frozen=True)
class AdvanceResult:
    steps: int
    ticks: int

# @intent:responsibility 経過時間に応じてCPUのステップとタイマーの減算を発行します。
class ClockScheduler:
    """
    タイムアキュムレータ方式のスケジューラ。
    max_steps_per_advance は長時間停止後に大量のステップが一度に実行されるのを防ぐ上限です。
    """
    def __init__(self, cpu: Chip8Cpu, cpu_hz: int = 500, timer_hz: int = TIMER_HZ,
                 max_steps_per_advance: int = 1000):
        if cpu_hz <= 0 or timer_hz <= 0:
            raise ValueError("Clock rates must be positive.")
        self._cpu = cpu
        self._cpu_hz = cpu_hz
        self._timer_hz = timer_hz
        self._step_period = 1.0 / cpu_hz
        self._tick_period = 1.0 / timer_hz
        self._max_steps = max_steps_per_advance
        self._step_acc = 0.0
        self._tick_acc = 0.0

    @property
    def cpu_hz(self) -> int:
        return self._cpu_hz

    @property
    def timer_hz(self) -> int:
        return self._timer_hz

    # @intent:responsibility 経過時間を加算し、各クロックの周期が経過した回数だけ処理を実行します。
    # @intent:flow 両方のクロックが期限に達している場合は、期限を過ぎてからの時間が長い方（先に期限を迎えた方）から処理します。
    def advance(self, elapsed: float) -> AdvanceResult:
        if elapsed < 0:
            raise ValueError(f"Elapsed time must not be negative: {elapsed}")
        self._step_acc += elapsed
        self._tick_acc += elapsed

        steps = 0
        ticks = 0
        while True:
            step_due = self._step_acc + _EPSILON >= self._step_period
            tick_due = self._tick_acc + _EPSILON >= self._tick_period
            if not (step_due or tick_due):
                break

            if tick_due and (not step_due or
                             self._tick_acc - self._tick_period >= self._step_acc - self._step_period):
                self._tick_acc -= self._tick_period
                self._cpu.tick_timers()
                ticks += 1
                continue

            if steps >= self._max_steps:
                logger.warning("Dropping %.4fs of CPU time behind schedule", self._step_acc)
                self._step_acc = 0.0
                continue
            self._step_acc -= self._step_period
            self._cpu.step()
            steps += 1

        return AdvanceResult(steps=steps, ticks=ticks)

    # @intent:responsibility 指定時間のあいだ、実時間に合わせてCPUを駆動します。
    # @intent:pre-condition clockは単調増加する秒単位の時刻を返す関数です（テストでは差し替え可能）。
    def run_for(self, seconds: float, clock: Callable[[], float] = time.monotonic,
                sleep: Callable[[float], None] = time.sleep) -> AdvanceResult:
        start = last = clock()
        total_steps = 0
        total_ticks = 0
        while True:
            now = clock()
            result = self.advance(now - last)
            last = now
            total_steps += result.steps
            total_ticks += result.ticks
            if now - start >= seconds:
                break
            sleep(min(self._step_period, self._tick_period))
        return AdvanceResult(steps=total_steps, ticks=total_ticks)
