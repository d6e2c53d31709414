"""
chip8_core: CHIP-8 インタプリタのCPU実行エンジン。
"""
from chip8_core.arch.chip8 import Chip8Cpu, Quirks
from chip8_core.core.state import CpuMode

__version__ = "0.1.0"

__all__ = ["Chip8Cpu", "CpuMode", "Quirks", "__version__"]
