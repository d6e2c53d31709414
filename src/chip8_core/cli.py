# src/chip8_core/cli.py
"""
コマンドラインのエントリポイント。
ROMファイルを読み込み、プログラム領域の逆アセンブル結果を表示します。
"""
import logging
import os
import sys
import yaml
from typing import List, Optional

from chip8_core.common.errors import Chip8Error
from chip8_core.config.builder import SystemBuilder
from chip8_core.config.loader import load_config
from chip8_core.transport.memory import PROGRAM_START

CONFIG_ENV = "CHIP8_CORE_CONFIG"
LOG_LEVEL_ENV = "CHIP8_CORE_LOG_LEVEL"
USAGE = "usage: chip8-core <file>"

# @intent:utility_function 環境変数からログレベルを取得します。未知のレベル名は ValueError とします。
def _log_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level in {LOG_LEVEL_ENV}: {name}")
    return level

# @intent:responsibility 引数を検証し、ROMをロードして逆アセンブル結果を標準出力に表示します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    引数の数が正しくない場合は使用方法を表示して終了します（終了コードは区別しません）。
    """
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(USAGE)
        return 0

    rom_path = args[0]
    try:
        logging.basicConfig(level=_log_level(), format="[%(levelname)s] %(name)s: %(message)s")
        config = load_config(os.environ.get(CONFIG_ENV))
        cpu = SystemBuilder().build_system(config)
        with open(rom_path, 'rb') as f:
            rom = f.read()
        cpu.load_rom(rom)
    except (OSError, ValueError, yaml.YAMLError, Chip8Error) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for address, hex_bytes, mnemonic in cpu.disassemble(PROGRAM_START, len(rom)):
        print(f"{address:04X}  {hex_bytes:<5}  {mnemonic}")
    return 0

if __name__ == '__main__':
    sys.exit(main())
