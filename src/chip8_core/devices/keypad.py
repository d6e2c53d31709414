# chip8_core/devices/keypad.py
"""
16キー (0x0-0xF) のキーパッド状態。

状態を書き換えるのは外部の入力コラボレータのみで、CPUからは読み取り専用です。
"""
from typing import FrozenSet
import logging

logger = logging.getLogger(__name__)

NUM_KEYS = 16

# @intent:responsibility 各キーの押下状態を保持します。
class Keypad:
    def __init__(self):
        self._pressed = [False] * NUM_KEYS

    def _check_key(self, key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key {key} out of range (0x0-0xF).")

    def is_pressed(self, key: int) -> bool:
        self._check_key(key)
        return self._pressed[key]

    # @intent:responsibility キーの押下/解放を記録します。入力コラボレータ専用です。
    def set_pressed(self, key: int, pressed: bool) -> None:
        self._check_key(key)
        if self._pressed[key] != pressed:
            logger.debug("Key %X %s", key, "pressed" if pressed else "released")
        self._pressed[key] = pressed

    def pressed_keys(self) -> FrozenSet[int]:
        return frozenset(k for k, p in enumerate(self._pressed) if p)

    def reset(self) -> None:
        self._pressed = [False] * NUM_KEYS
