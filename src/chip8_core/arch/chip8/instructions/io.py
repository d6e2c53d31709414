# src/chip8_core/arch/chip8/instructions/io.py
"""
入出力命令（画面クリア、スプライト描画、キー入力）の実装。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.core.state import CpuMode
from .base import ExecutionContext, make_operation, reg

def _x(word: int) -> int:
    return (word >> 8) & 0xF

# --- CLS (00E0) ---
def decode_cls(word: int) -> Operation:
    return make_operation(word, "00E0", "CLS")

def execute_cls(ctx: ExecutionContext, op: Operation) -> None:
    ctx.display.clear()

# --- DRW Vx, Vy, nibble (Dxyn) ---
def decode_drw(word: int) -> Operation:
    return make_operation(word, "Dxyn", "DRW", [reg(_x(word)), reg((word >> 4) & 0xF), str(word & 0xF)])

# @intent:responsibility I から n バイトのスプライトを (Vx, Vy) にXOR描画します。
# @intent:rationale 各画素の座標は画面端で折り返します。点灯画素を消した場合 VF=1（衝突）。
def execute_drw(ctx: ExecutionContext, op: Operation) -> None:
    origin_x = ctx.v(op.x)
    origin_y = ctx.v(op.y)
    base = ctx.state.i
    collision = False
    for row in range(op.n):
        sprite = ctx.memory.read(base + row)
        for bit in range(8):
            if sprite & (0x80 >> bit):
                if ctx.display.toggle_pixel(origin_x + bit, origin_y + row):
                    collision = True
    ctx.set_flag(collision)

# --- SKP Vx (Ex9E) ---
def decode_skp(word: int) -> Operation:
    return make_operation(word, "Ex9E", "SKP", [reg(_x(word))])

# @intent:responsibility Vxの下位4bitが示すキーが押されていれば次の命令をスキップします。
def execute_skp(ctx: ExecutionContext, op: Operation) -> None:
    if ctx.keypad.is_pressed(ctx.v(op.x) & 0xF):
        ctx.skip()

# --- SKNP Vx (ExA1) ---
def decode_sknp(word: int) -> Operation:
    return make_operation(word, "ExA1", "SKNP", [reg(_x(word))])

def execute_sknp(ctx: ExecutionContext, op: Operation) -> None:
    if not ctx.keypad.is_pressed(ctx.v(op.x) & 0xF):
        ctx.skip()

# --- LD Vx, K (Fx0A) ---
def decode_ld_key(word: int) -> Operation:
    return make_operation(word, "Fx0A", "LD", [reg(_x(word)), "K"])

# @intent:responsibility CPUをキー待ち状態に遷移させます。値の格納は新たなキー押下を検出したステップで行います。
# @intent:rationale 待機開始時点で押されていたキーを記録し、押しっぱなしのキーで即座に解除されないようにします。
def execute_ld_key(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.mode = CpuMode.AWAITING_KEY
    ctx.state.wait_register = op.x
    ctx.state.keys_held_at_wait = ctx.keypad.pressed_keys()
