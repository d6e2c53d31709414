import logging
import random
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.arch.chip8.instructions import Quirks
from chip8_core.scheduler import ClockScheduler
from chip8_core.transport.memory import Memory
from .models import SystemConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、Memory、CPU、乱数源を生成・接続し、ROMをロードします。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Chip8Cpu:
        if config.architecture != "CHIP8":
            raise ValueError(f"Unsupported architecture: {config.architecture}")

        memory = Memory(font_address=config.font_address)
        quirks = Quirks(
            shift_uses_vy=config.quirks.shift_uses_vy,
            load_store_increments_i=config.quirks.load_store_increments_i,
        )
        cpu = Chip8Cpu(memory, rng=random.Random(config.seed), quirks=quirks)

        if config.rom:
            self.load_rom_file(cpu, config.rom)

        return cpu

    # @intent:responsibility ROMファイルを読み込み、CPUのメモリにロードします。
    def load_rom_file(self, cpu: Chip8Cpu, path: str) -> None:
        with open(path, 'rb') as f:
            data = f.read()
        logger.info("Loading ROM %s", path)
        cpu.load_rom(data)

    # @intent:responsibility 構成のクロック設定（命令ステップとタイマーの周波数）でCPUを駆動するスケジューラを生成します。
    def build_scheduler(self, cpu: Chip8Cpu, config: SystemConfig) -> ClockScheduler:
        return ClockScheduler(cpu, cpu_hz=config.clock.cpu_hz, timer_hz=config.clock.timer_hz)
