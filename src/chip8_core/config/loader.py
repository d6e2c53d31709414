import logging
import os
import yaml
from typing import Dict, Any, Optional
from .models import SystemConfig, ClockConfig, QuirksConfig

logger = logging.getLogger(__name__)

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        config = self._parse_config(data or {})
        # ROMパスは設定ファイルの位置を基準に解決する
        if config.rom and not os.path.isabs(config.rom):
            config.rom = os.path.join(os.path.dirname(os.path.abspath(path)), config.rom)
        return config

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")

        arch = str(data.get("architecture", "CHIP8")).upper()

        # Parse Clock
        clock_data = data.get("clock", {}) or {}
        clock = ClockConfig(
            cpu_hz=self._parse_positive_int(clock_data.get("cpu_hz", ClockConfig.cpu_hz), "clock.cpu_hz"),
            timer_hz=self._parse_positive_int(clock_data.get("timer_hz", ClockConfig.timer_hz), "clock.timer_hz"),
        )

        # Parse Quirks
        quirks_data = data.get("quirks", {}) or {}
        known = {"shift_uses_vy", "load_store_increments_i"}
        for name in quirks_data:
            if name not in known:
                logger.warning("Ignoring unknown quirk '%s'", name)
        quirks = QuirksConfig(
            shift_uses_vy=self._parse_bool(quirks_data.get("shift_uses_vy", False), "quirks.shift_uses_vy"),
            load_store_increments_i=self._parse_bool(
                quirks_data.get("load_store_increments_i", False), "quirks.load_store_increments_i"),
        )

        seed = data.get("seed")
        return SystemConfig(
            architecture=arch,
            font_address=self._parse_int(data.get("font_address", SystemConfig.font_address)),
            seed=None if seed is None else self._parse_int(seed),
            clock=clock,
            quirks=quirks,
            rom=data.get("rom"),
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")

    def _parse_positive_int(self, value: Any, name: str) -> int:
        result = self._parse_int(value)
        if result <= 0:
            raise ValueError(f"{name} must be positive, got {result}")
        return result

    def _parse_bool(self, value: Any, name: str) -> bool:
        if isinstance(value, bool):
            return value
        raise ValueError(f"{name} must be true or false, got {value!r}")

def load_config(path: Optional[str] = None) -> SystemConfig:
    """pathがNoneの場合は既定値の構成を返します。"""
    if path is None:
        return SystemConfig()
    return ConfigLoader().load_from_file(path)
