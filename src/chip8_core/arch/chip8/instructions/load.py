# src/chip8_core/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、アドレスレジスタ、タイマー、メモリ転送）の実装。
"""
from chip8_core.core.snapshot import Operation
from .base import ExecutionContext, make_operation, reg, imm, addr

def _x(word: int) -> int:
    return (word >> 8) & 0xF

# --- LD Vx, byte (6xkk) ---
def decode_ld_imm(word: int) -> Operation:
    return make_operation(word, "6xkk", "LD", [reg(_x(word)), imm(word & 0xFF)])

def execute_ld_imm(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, op.kk)

# --- LD Vx, Vy (8xy0) ---
def decode_ld_reg(word: int) -> Operation:
    return make_operation(word, "8xy0", "LD", [reg(_x(word)), reg((word >> 4) & 0xF)])

def execute_ld_reg(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, ctx.v(op.y))

# --- LD I, addr (Annn) ---
def decode_ld_i(word: int) -> Operation:
    return make_operation(word, "Annn", "LD", ["I", addr(word & 0x0FFF)])

def execute_ld_i(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.i = op.nnn

# --- LD Vx, DT (Fx07) ---
def decode_ld_vx_dt(word: int) -> Operation:
    return make_operation(word, "Fx07", "LD", [reg(_x(word)), "DT"])

def execute_ld_vx_dt(ctx: ExecutionContext, op: Operation) -> None:
    ctx.set_v(op.x, ctx.timers.delay_value())

# --- LD DT, Vx (Fx15) ---
def decode_ld_dt_vx(word: int) -> Operation:
    return make_operation(word, "Fx15", "LD", ["DT", reg(_x(word))])

def execute_ld_dt_vx(ctx: ExecutionContext, op: Operation) -> None:
    ctx.timers.set_delay(ctx.v(op.x))

# --- LD ST, Vx (Fx18) ---
def decode_ld_st_vx(word: int) -> Operation:
    return make_operation(word, "Fx18", "LD", ["ST", reg(_x(word))])

def execute_ld_st_vx(ctx: ExecutionContext, op: Operation) -> None:
    ctx.timers.set_sound(ctx.v(op.x))

# --- ADD I, Vx (Fx1E) ---
def decode_add_i(word: int) -> Operation:
    return make_operation(word, "Fx1E", "ADD", ["I", reg(_x(word))])

# @intent:responsibility I += Vx。16bitで回り込み、VFは変更しません。
def execute_add_i(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.i = (ctx.state.i + ctx.v(op.x)) & 0xFFFF

# --- LD F, Vx (Fx29) ---
def decode_ld_font(word: int) -> Operation:
    return make_operation(word, "Fx29", "LD", ["F", reg(_x(word))])

# @intent:responsibility Vxの下位4bitが示す16進数字のフォントスプライトのアドレスをIに設定します。
def execute_ld_font(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.i = ctx.memory.font_sprite_address(ctx.v(op.x))

# --- LD B, Vx (Fx33) ---
def decode_ld_bcd(word: int) -> Operation:
    return make_operation(word, "Fx33", "LD", ["B", reg(_x(word))])

# @intent:responsibility Vxの10進3桁（百、十、一の位）を I, I+1, I+2 に格納します。
def execute_ld_bcd(ctx: ExecutionContext, op: Operation) -> None:
    value = ctx.v(op.x)
    base = ctx.state.i
    ctx.memory.write(base, value // 100)
    ctx.memory.write(base + 1, (value // 10) % 10)
    ctx.memory.write(base + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
def decode_ld_store(word: int) -> Operation:
    return make_operation(word, "Fx55", "LD", ["[I]", reg(_x(word))])

# @intent:responsibility V0..Vx を I から始まるメモリに格納します。
def execute_ld_store(ctx: ExecutionContext, op: Operation) -> None:
    base = ctx.state.i
    for index in range(op.x + 1):
        ctx.memory.write(base + index, ctx.v(index))
    if ctx.quirks.load_store_increments_i:
        ctx.state.i = (base + op.x + 1) & 0xFFFF

# --- LD Vx, [I] (Fx65) ---
def decode_ld_load(word: int) -> Operation:
    return make_operation(word, "Fx65", "LD", [reg(_x(word)), "[I]"])

# @intent:responsibility I から始まるメモリを V0..Vx に読み込みます。
def execute_ld_load(ctx: ExecutionContext, op: Operation) -> None:
    base = ctx.state.i
    for index in range(op.x + 1):
        ctx.set_v(index, ctx.memory.read(base + index))
    if ctx.quirks.load_store_increments_i:
        ctx.state.i = (base + op.x + 1) & 0xFFFF
