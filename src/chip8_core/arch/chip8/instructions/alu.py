# src/chip8_core/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFを変更する命令は、結果をVxに格納した後にフラグを書き込みます。
そのため x == F の場合、VFにはフラグ値が残ります。
"""
from chip8_core.core.snapshot import Operation
from .base import ExecutionContext, make_operation, reg, imm

def _xy(word: int):
    return [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)]

# --- ADD Vx, byte (7xkk) ---
def decode_add_imm(word: int) -> Operation:
    return make_operation(word, "7xkk", "ADD", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

# @intent:responsibility 即値を加算します。8bitで回り込み、VFは変更しません。
def execute_add_imm(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, ctx.v(op.x) + op.kk)

# --- OR / AND / XOR (8xy1, 8xy2, 8xy3) ---
def decode_or(word: int) -> Operation:
    return make_operation(word, "8xy1", "OR", _xy(word))

def execute_or(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, ctx.v(op.x) | ctx.v(op.y))

def decode_and(word: int) -> Operation:
    return make_operation(word, "8xy2", "AND", _xy(word))

def execute_and(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, ctx.v(op.x) & ctx.v(op.y))

def decode_xor(word: int) -> Operation:
    return make_operation(word, "8xy3", "XOR", _xy(word))

def execute_xor(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, ctx.v(op.x) ^ ctx.v(op.y))

# --- ADD Vx, Vy (8xy4) ---
def decode_add_reg(word: int) -> Operation:
    return make_operation(word, "8xy4", "ADD", _xy(word))

# @intent:responsibility Vx + Vy を計算し、255を超えた場合VF=1（キャリー）とします。
def execute_add_reg(ctx: ExecutionContext, op: Operation) -> None:
    res = ctx.v(op.x) + ctx.v(op.y)
    ctx.set_v(op.x, res)
    ctx.set_flag(res > 0xFF)

# --- SUB Vx, Vy (8xy5) ---
def decode_sub(word: int) -> Operation:
    return make_operation(word, "8xy5", "SUB", _xy(word))

# @intent:responsibility Vx - Vy を計算します。VF = 1 if Vx > Vy（ボローなし）。
def execute_sub(ctx: ExecutionContext, op: Operation) -> None:
    v1, v2 = ctx.v(op.x), ctx.v(op.y)
    ctx.set_v(op.x, v1 - v2)
    ctx.set_flag(v1 > v2)

# --- SUBN Vx, Vy (8xy7) ---
def decode_subn(word: int) -> Operation:
    return make_operation(word, "8xy7", "SUBN", _xy(word))

# @intent:responsibility Vy - Vx を計算してVxに格納します。VF = 1 if Vy > Vx。
def execute_subn(ctx: ExecutionContext, op: Operation) -> None:
    v1, v2 = ctx.v(op.x), ctx.v(op.y)
    ctx.set_v(op.x, v2 - v1)
    ctx.set_flag(v2 > v1)

# --- SHR Vx (8xy6) ---
def decode_shr(word: int) -> Operation:
    return make_operation(word, "8xy6", "SHR", _xy(word))

# @intent:responsibility 1bit右シフトします。VFにはシフト前の最下位ビットが入ります。
def execute_shr(ctx: ExecutionContext, op: Operation) -> None:
    src = ctx.v(op.y) if ctx.quirks.shift_uses_vy else ctx.v(op.x)
    ctx.set_v(op.x, src >> 1)
    ctx.set_flag((src & 0x01) != 0)

# --- SHL Vx (8xyE) ---
def decode_shl(word: int) -> Operation:
    return make_operation(word, "8xyE", "SHL", _xy(word))

# @intent:responsibility 1bit左シフトします。VFにはシフト前の最上位ビットが入ります。
def execute_shl(ctx: ExecutionContext, op: Operation) -> None:
    src = ctx.v(op.y) if ctx.quirks.shift_uses_vy else ctx.v(op.x)
    ctx.set_v(op.x, src << 1)
    ctx.set_flag((src & 0x80) != 0)

# --- RND Vx, byte (Cxkk) ---
def decode_rnd(word: int) -> Operation:
    return make_operation(word, "Cxkk", "RND", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

# @intent:responsibility 注入された乱数源から1バイトを取り出し、kkでマスクしてVxに格納します。
def execute_rnd(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, ctx.rng.randrange(0x100) & op.kk)
