# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御フロー命令（画面消去、ジャンプ、サブルーチン、条件スキップ、キー判定）の実装。
"""
from retro_chip8.arch.chip8.decoder import Instruction
from retro_chip8.arch.chip8.instructions.base import ExecutionContext, instruction_address, skip_next
from retro_chip8.core.errors import InvalidInstructionError, StackUnderflowError


# --- 0x0 family ---
# @intent:responsibility 00E0 (CLS): 画面を全消去します。
def execute_cls(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.display.clear()

# @intent:responsibility 00EE (RET): スタックから復帰アドレスを取り出してPCに設定します。
# @intent:pre-condition スタックが空の場合は StackUnderflowError（致命的）。
def execute_ret(ctx: ExecutionContext, ins: Instruction) -> None:
    if not ctx.state.stack:
        raise StackUnderflowError(
            f"Return with empty call stack at {instruction_address(ctx):#05x}"
        )
    ctx.state.pc = ctx.state.stack.pop()

SYSTEM_MAP = {
    0x0E0: execute_cls,
    0x0EE: execute_ret,
}

# @intent:responsibility 0NNN ファミリのディスパッチ。0NNN（機械語ルーチン呼び出し）は未サポートで致命的エラー。
def execute_family_0(ctx: ExecutionContext, ins: Instruction) -> None:
    handler = SYSTEM_MAP.get(ins.nnn)
    if handler is None:
        raise InvalidInstructionError(instruction_address(ctx), ins.word)
    handler(ctx, ins)


# --- Jumps ---
# @intent:responsibility 1NNN (JP addr)
def execute_jp(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.pc = ins.nnn

# @intent:responsibility 2NNN (CALL addr): 次の命令のアドレスをプッシュしてジャンプします。
def execute_call(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.stack.append(ctx.state.pc)
    ctx.state.pc = ins.nnn

# @intent:responsibility BNNN (JP V0, addr)。Quirk有効時は BXNN（V[X] + XNN）。
def execute_jp_offset(ctx: ExecutionContext, ins: Instruction) -> None:
    reg = ins.x if ctx.quirks.jump_uses_vx else 0
    ctx.state.pc = ctx.state.v[reg] + ins.nnn


# --- Conditional skips ---
# @intent:responsibility 3XNN (SE Vx, byte)
def execute_se_imm(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] == ins.nn:
        skip_next(ctx)

# @intent:responsibility 4XNN (SNE Vx, byte)
def execute_sne_imm(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] != ins.nn:
        skip_next(ctx)

# @intent:responsibility 5XY0 (SE Vx, Vy)。下位4bitは参照しません。
def execute_se_reg(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] == ctx.state.v[ins.y]:
        skip_next(ctx)

# @intent:responsibility 9XY0 (SNE Vx, Vy)
def execute_sne_reg(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.state.v[ins.x] != ctx.state.v[ins.y]:
        skip_next(ctx)


# --- 0xE family (keypad) ---
# @intent:rationale キー番号は V[X] の下位4bitを使用します。
def execute_skp(ctx: ExecutionContext, ins: Instruction) -> None:
    if ctx.keypad.is_pressed(ctx.state.v[ins.x] & 0xF):
        skip_next(ctx)

def execute_sknp(ctx: ExecutionContext, ins: Instruction) -> None:
    if not ctx.keypad.is_pressed(ctx.state.v[ins.x] & 0xF):
        skip_next(ctx)

KEY_MAP = {
    0x9E: execute_skp,
    0xA1: execute_sknp,
}

def execute_family_e(ctx: ExecutionContext, ins: Instruction) -> None:
    handler = KEY_MAP.get(ins.nn)
    if handler is None:
        raise InvalidInstructionError(instruction_address(ctx), ins.word)
    handler(ctx, ins)
