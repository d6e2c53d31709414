# src/chip8_core/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。

CHIP-8のエンコーディングは上位ニブルで大分類され、一部の分類では
下位ニブル（8xyN, 5xy0, 9xy0）、下位バイト（ExNN, FxNN）、または命令語全体（00E0, 00EE）で
さらに区別されます。デコードはこの2段階のテーブル参照で行います。
"""
from . import load
from . import alu
from . import control
from . import io

# @intent:utility_function 2段目のテーブルを引くためのキーを命令語から取り出すセレクタ群。
def select_none(word: int) -> None:
    return None

def select_low_nibble(word: int) -> int:
    return word & 0x000F

def select_low_byte(word: int) -> int:
    return word & 0x00FF

def select_word(word: int) -> int:
    return word

# @intent:map 上位ニブルから (セレクタ, {サブキー: デコード関数}) へのマッピングテーブル。
DECODE_MAP = {
    0x0: (select_word, {
        0x00E0: io.decode_cls,
        0x00EE: control.decode_ret,
    }),
    0x1: (select_none, {None: control.decode_jp}),
    0x2: (select_none, {None: control.decode_call}),
    0x3: (select_none, {None: control.decode_se_imm}),
    0x4: (select_none, {None: control.decode_sne_imm}),
    0x5: (select_low_nibble, {0x0: control.decode_se_reg}),
    0x6: (select_none, {None: load.decode_ld_imm}),
    0x7: (select_none, {None: alu.decode_add_imm}),
    0x8: (select_low_nibble, {
        0x0: load.decode_ld_reg,
        0x1: alu.decode_or,
        0x2: alu.decode_and,
        0x3: alu.decode_xor,
        0x4: alu.decode_add_reg,
        0x5: alu.decode_sub,
        0x6: alu.decode_shr,
        0x7: alu.decode_subn,
        0xE: alu.decode_shl,
    }),
    0x9: (select_low_nibble, {0x0: control.decode_sne_reg}),
    0xA: (select_none, {None: load.decode_ld_i}),
    0xB: (select_none, {None: control.decode_jp_v0}),
    0xC: (select_none, {None: alu.decode_rnd}),
    0xD: (select_none, {None: io.decode_drw}),
    0xE: (select_low_byte, {
        0x9E: io.decode_skp,
        0xA1: io.decode_sknp,
    }),
    0xF: (select_low_byte, {
        0x07: load.decode_ld_vx_dt,
        0x0A: io.decode_ld_key,
        0x15: load.decode_ld_dt_vx,
        0x18: load.decode_ld_st_vx,
        0x1E: load.decode_add_i,
        0x29: load.decode_ld_font,
        0x33: load.decode_ld_bcd,
        0x55: load.decode_ld_store,
        0x65: load.decode_ld_load,
    }),
}

# @intent:map 命令パターン（Operation.key）から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    "00EE": control.execute_ret,
    "1nnn": control.execute_jp,
    "2nnn": control.execute_call,
    "3xkk": control.execute_se_imm,
    "4xkk": control.execute_sne_imm,
    "5xy0": control.execute_se_reg,
    "9xy0": control.execute_sne_reg,
    "Bnnn": control.execute_jp_v0,

    # Load/Store
    "6xkk": load.execute_ld_imm,
    "8xy0": load.execute_ld_reg,
    "Annn": load.execute_ld_i,
    "Fx07": load.execute_ld_vx_dt,
    "Fx15": load.execute_ld_dt_vx,
    "Fx18": load.execute_ld_st_vx,
    "Fx1E": load.execute_add_i,
    "Fx29": load.execute_ld_font,
    "Fx33": load.execute_ld_bcd,
    "Fx55": load.execute_ld_store,
    "Fx65": load.execute_ld_load,

    # ALU
    "7xkk": alu.execute_add_imm,
    "8xy1": alu.execute_or,
    "8xy2": alu.execute_and,
    "8xy3": alu.execute_xor,
    "8xy4": alu.execute_add_reg,
    "8xy5": alu.execute_sub,
    "8xy6": alu.execute_shr,
    "8xy7": alu.execute_subn,
    "8xyE": alu.execute_shl,
    "Cxkk": alu.execute_rnd,

    # I/O
    "00E0": io.execute_cls,
    "Dxyn": io.execute_drw,
    "Ex9E": io.execute_skp,
    "ExA1": io.execute_sknp,
    "Fx0A": io.execute_ld_key,
}
