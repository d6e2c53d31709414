# src/chip8_core/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_core.core.snapshot import Operation
from .base import ExecutionContext, make_operation, reg, imm, addr

# --- RET (00EE) ---
# @intent:responsibility RET命令をデコードします。
def decode_ret(word: int) -> Operation:
    return make_operation(word, "00EE", "RET")

# @intent:responsibility RET命令を実行し、スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.pc = ctx.state.stack.pop()

# --- JP addr (1nnn) ---
def decode_jp(word: int) -> Operation:
    return make_operation(word, "1nnn", "JP", [addr(word & 0x0FFF)])

# @intent:responsibility JP命令を実行し、PCを絶対アドレスに設定します。
def execute_jp(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.pc = op.nnn

# --- CALL addr (2nnn) ---
def decode_call(word: int) -> Operation:
    return make_operation(word, "2nnn", "CALL", [addr(word & 0x0FFF)])

# @intent:responsibility CALL命令を実行し、戻りアドレスをプッシュしてからジャンプします。
def execute_call(ctx: ExecutionContext, op: Operation) -> None:
    # state.pc はフェッチ時点で既に次の命令を指している
    ctx.state.stack.push(ctx.state.pc)
    ctx.state.pc = op.nnn

# --- SE Vx, byte (3xkk) ---
def decode_se_imm(word: int) -> Operation:
    return make_operation(word, "3xkk", "SE", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

def execute_se_imm(ctx: ExecutionContext, op: Operation) -> None:
    if ctx.v(op.x) == op.kk:
        ctx.skip()

# --- SNE Vx, byte (4xkk) ---
def decode_sne_imm(word: int) -> Operation:
    return make_operation(word, "4xkk", "SNE", [reg((word >> 8) & 0xF), imm(word & 0xFF)])

def execute_sne_imm(ctx: ExecutionContext, op: Operation) -> None:
    if ctx.v(op.x) != op.kk:
        ctx.skip()

# --- SE Vx, Vy (5xy0) ---
def decode_se_reg(word: int) -> Operation:
    return make_operation(word, "5xy0", "SE", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)])

def execute_se_reg(ctx: ExecutionContext, op: Operation) -> None:
    if ctx.v(op.x) == ctx.v(op.y):
        ctx.skip()

# --- SNE Vx, Vy (9xy0) ---
def decode_sne_reg(word: int) -> Operation:
    return make_operation(word, "9xy0", "SNE", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)])

def execute_sne_reg(ctx: ExecutionContext, op: Operation) -> None:
    if ctx.v(op.x) != ctx.v(op.y):
        ctx.skip()

# --- JP V0, addr (Bnnn) ---
def decode_jp_v0(word: int) -> Operation:
    return make_operation(word, "Bnnn", "JP", [reg(0), addr(word & 0x0FFF)])

# @intent:responsibility JP V0命令を実行します。ターゲットが0xFFFを超えた場合は次のフェッチで OutOfBounds となります。
def execute_jp_v0(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.pc = (op.nnn + ctx.v(0)) & 0xFFFF
