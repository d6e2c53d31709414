from dataclasses import dataclass, field
from typing import Optional

from chip8_core.devices.timers import TIMER_HZ
from chip8_core.transport.memory import DEFAULT_FONT_ADDRESS

@dataclass
class ClockConfig:
    cpu_hz: int = 500 # 命令ステップの周波数
    timer_hz: int = TIMER_HZ # タイマー減算の周波数

@dataclass
class QuirksConfig:
    shift_uses_vy: bool = False
    load_store_increments_i: bool = False

@dataclass
class SystemConfig:
    architecture: str = "CHIP8"
    font_address: int = DEFAULT_FONT_ADDRESS
    seed: Optional[int] = None # Noneの場合は非決定的な乱数源
    clock: ClockConfig = field(default_factory=ClockConfig)
    quirks: QuirksConfig = field(default_factory=QuirksConfig)
    rom: Optional[str] = None # ロードするROMファイルのパス
