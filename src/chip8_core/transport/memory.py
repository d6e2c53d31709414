# chip8_core/transport/memory.py
"""
Transport Layer (メモリ)

このモジュールは、CHIP-8の4KBアドレス空間を管理し、
予約領域の保護、ROM/フォントのロード、およびアクセスの記録に関する責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence
import logging

from chip8_core.common.errors import OutOfBounds, ProtectedRegionViolation, RomTooLarge

logger = logging.getLogger(__name__)

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START
DEFAULT_FONT_ADDRESS = 0x050
FONT_GLYPH_SIZE = 5

# @intent:constant 16進数字 0-F のスプライト（各5バイト、上位4ビットのみ使用）。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility メモリアクセスを記録するためのタイプを定義します。
class MemoryAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class MemoryAccess:
    """
    メモリ上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: MemoryAccessType

# @intent:responsibility CHIP-8の4096バイトのメモリ空間を提供します。
# @intent:rationale 全てのアクセスを記録し、Snapshotに含めることで命令ごとの副作用を観測可能にします。
class Memory:
    """
    CHIP-8のメモリ（0x000-0xFFF）。
    0x000-0x1FFはインタプリタ予約領域であり、フォントテーブルのみが配置されます。
    この領域への通常の書き込みは ProtectedRegionViolation となります。
    """
    # @intent:responsibility メモリ領域を確保し、フォントテーブルを予約領域にロードします。
    # @intent:pre-condition font_addressはフォント全体が予約領域に収まる位置である必要があります。
    def __init__(self, font_address: int = DEFAULT_FONT_ADDRESS):
        if not 0 <= font_address <= PROGRAM_START - len(FONT_SET):
            raise ValueError(
                f"Font address {font_address:#05x} does not fit in the reserved region "
                f"(0x000-{PROGRAM_START - 1:#05x})."
            )
        self._memory = bytearray(MEMORY_SIZE)
        self._font_address = font_address
        self._activity_log: List[MemoryAccess] = []
        self._load_font(FONT_SET)

    @property
    def font_address(self) -> int:
        return self._font_address

    # @intent:responsibility フォントテーブルを予約領域にコピーします。構築時とクリア時のみ呼ばれます。
    def _load_font(self, font: bytes) -> None:
        self._memory[self._font_address:self._font_address + len(font)] = font

    # @intent:responsibility 16進数字 digit のフォントスプライトの先頭アドレスを返します。
    def font_sprite_address(self, digit: int) -> int:
        return self._font_address + (digit & 0xF) * FONT_GLYPH_SIZE

    # @intent:responsibility メモリアクセスをログに記録します。
    def _log_access(self, address: int, data: int, access_type: MemoryAccessType) -> None:
        self._activity_log.append(MemoryAccess(address=address, data=data, access_type=access_type))

    # @intent:responsibility 記録されたアクセスログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        """
        現在のアクセスログを返し、内部ログをクリアします。
        """
        log = self._activity_log
        self._activity_log = []
        return log

    def _check_bounds(self, address: int) -> None:
        if not 0 <= address < MEMORY_SIZE:
            raise OutOfBounds(f"Address {address:#06x} out of bounds for memory of size {MEMORY_SIZE:#06x}.")

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    # @intent:pre-condition アドレスは 0x000-0xFFF の範囲内である必要があります。
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アクセスはログに記録されます。
        """
        self._check_bounds(address)
        data = self._memory[address]
        self._log_access(address, data, MemoryAccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します（ログ記録なし）。
        逆アセンブラやインスペクタ用。
        """
        self._check_bounds(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition アドレスは 0x200-0xFFF、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        if address < PROGRAM_START:
            raise ProtectedRegionViolation(f"Write to reserved address {address:#05x} is not allowed.")
        self._check_bounds(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data
        self._log_access(address, data, MemoryAccessType.WRITE)

    # @intent:responsibility ROMイメージをプログラム領域 (0x200〜) にそのままコピーします。
    # @intent:rationale ロードは命令実行ではないため、アクセスログには記録しません。
    def load_rom(self, data: Sequence[int]) -> None:
        rom = bytes(data)
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLarge(f"ROM of {len(rom)} bytes exceeds the {MAX_ROM_SIZE} bytes of program space.")
        self._memory[PROGRAM_START:PROGRAM_START + len(rom)] = rom
        logger.info("Loaded %d byte ROM at %#05x", len(rom), PROGRAM_START)

    # @intent:responsibility 全領域をゼロクリアし、フォントテーブルを再ロードします。
    def clear(self) -> None:
        self._memory = bytearray(MEMORY_SIZE)
        self._activity_log = []
        self._load_font(FONT_SET)

    # @intent:responsibility 指定範囲のバイト列をログなしで返します。
    def dump(self, start: int, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"Length {length} must not be negative.")
        if length:
            self._check_bounds(start)
            self._check_bounds(start + length - 1)
        return bytes(self._memory[start:start + length])

    # @intent:responsibility メモリのサイズを返します。
    def get_size(self) -> int:
        return MEMORY_SIZE
