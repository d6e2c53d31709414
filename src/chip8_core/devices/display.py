# chip8_core/devices/display.py
"""
64x32 モノクロのディスプレイバッファ。

描画命令 (Dxyn) によるXORトグルと、クリア命令 (00E0) によってのみ変更されます。
描画バックエンドは get_pixels() でスナップショットを読み取ります。
"""
from typing import Tuple

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:responsibility 画素の状態を保持し、XORトグルと衝突検出を提供します。
class DisplayBuffer:
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self._width = width
        self._height = height
        self._pixels = [bytearray(width) for _ in range(height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        for row in self._pixels:
            row[:] = bytes(self._width)

    # @intent:responsibility 画素を反転し、反転前に点灯していたか（＝衝突）を返します。
    # @intent:rationale 座標は画面端で折り返します。
    def toggle_pixel(self, x: int, y: int) -> bool:
        row = self._pixels[y % self._height]
        col = x % self._width
        was_set = row[col] == 1
        row[col] ^= 1
        return was_set

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[y % self._height][x % self._width] == 1

    # @intent:responsibility 描画コラボレータ向けに、行ごとの不変スナップショットを返します。
    def get_pixels(self) -> Tuple[Tuple[bool, ...], ...]:
        return tuple(tuple(p == 1 for p in row) for row in self._pixels)

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._pixels)

    def render_text(self, on: str = "#", off: str = ".") -> str:
        """画面をテキストとして描画します。ログやCLIでのダンプ用。"""
        return "\n".join("".join(on if p else off for p in row) for row in self._pixels)
