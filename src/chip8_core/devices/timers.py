# chip8_core/devices/timers.py
"""
ディレイタイマーとサウンドタイマー。

両タイマーは外部スケジューラから60Hzで tick() され、命令の実行速度とは独立して減少します。
"""

TIMER_HZ = 60

def _check_byte(value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Timer value {value} is not an 8-bit value.")

# @intent:responsibility 2つの8bitダウンカウンタ（delay, sound）を保持します。
class TimerPair:
    def __init__(self):
        self._delay = 0
        self._sound = 0

    # @intent:responsibility 非ゼロのタイマーを1ずつ減らします。0では飽和し、負の値に回り込みません。
    def tick(self) -> None:
        if self._delay > 0:
            self._delay -= 1
        if self._sound > 0:
            self._sound -= 1

    def delay_value(self) -> int:
        return self._delay

    def sound_value(self) -> int:
        return self._sound

    def set_delay(self, value: int) -> None:
        _check_byte(value)
        self._delay = value

    def set_sound(self, value: int) -> None:
        _check_byte(value)
        self._sound = value

    # @intent:responsibility オーディオコラボレータ向けに、トーンを鳴らすべきかを返します。
    def is_sound_active(self) -> bool:
        return self._sound > 0

    def reset(self) -> None:
        self._delay = 0
        self._sound = 0
