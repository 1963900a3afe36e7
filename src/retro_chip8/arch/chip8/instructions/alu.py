# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VF を変更する命令では、必ず演算結果を V[X] に書き込んだ後に VF へフラグを書き込みます。
これにより X == F の場合でもフラグが最終値として残ります。
"""
from retro_chip8.arch.chip8.decoder import Instruction
from retro_chip8.arch.chip8.instructions.base import ExecutionContext, instruction_address
from retro_chip8.arch.chip8.state import VF
from retro_chip8.core.errors import InvalidInstructionError


# @intent:responsibility 6XNN (LD Vx, byte)
def execute_ld_imm(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ins.nn

# @intent:responsibility 7XNN (ADD Vx, byte)。8bitで折り返し、VFは変更しません。
def execute_add_imm(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = (ctx.state.v[ins.x] + ins.nn) & 0xFF

# @intent:responsibility CXNN (RND Vx, byte)
def execute_rnd(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ctx.rng.randrange(256) & ins.nn


# --- 0x8 family ---
def execute_ld_reg(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ctx.state.v[ins.y]

def execute_or(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] |= ctx.state.v[ins.y]

def execute_and(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] &= ctx.state.v[ins.y]

def execute_xor(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] ^= ctx.state.v[ins.y]

# @intent:responsibility 8XY4 (ADD Vx, Vy): VF = キャリー
def execute_add_reg(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    res = v[ins.x] + v[ins.y]
    v[ins.x] = res & 0xFF
    v[VF] = 1 if res > 0xFF else 0

# @intent:responsibility 8XY5 (SUB Vx, Vy): VF = NOT ボロー
def execute_sub(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    vx, vy = v[ins.x], v[ins.y]
    v[ins.x] = (vx - vy) & 0xFF
    v[VF] = 1 if vx >= vy else 0

# @intent:responsibility 8XY7 (SUBN Vx, Vy): V[X] = V[Y] - V[X], VF = NOT ボロー
def execute_subn(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    vx, vy = v[ins.x], v[ins.y]
    v[ins.x] = (vy - vx) & 0xFF
    v[VF] = 1 if vy >= vx else 0

# @intent:responsibility 8XY6 (SHR Vx {, Vy}): VF = 押し出されたbit0
# @intent:rationale Quirk無効時は V[Y] を一切参照しません。
def execute_shr(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    if ctx.quirks.shift_copies_vy:
        v[ins.x] = v[ins.y]
    val = v[ins.x]
    v[ins.x] = val >> 1
    v[VF] = val & 0x01

# @intent:responsibility 8XYE (SHL Vx {, Vy}): VF = 押し出されたbit7
def execute_shl(ctx: ExecutionContext, ins: Instruction) -> None:
    v = ctx.state.v
    if ctx.quirks.shift_copies_vy:
        v[ins.x] = v[ins.y]
    val = v[ins.x]
    v[ins.x] = (val << 1) & 0xFF
    v[VF] = (val >> 7) & 0x01

ALU_MAP = {
    0x0: execute_ld_reg,
    0x1: execute_or,
    0x2: execute_and,
    0x3: execute_xor,
    0x4: execute_add_reg,
    0x5: execute_sub,
    0x6: execute_shr,
    0x7: execute_subn,
    0xE: execute_shl,
}

# @intent:responsibility 8XYN ファミリのディスパッチ。未定義の N は致命的エラー。
def execute_family_8(ctx: ExecutionContext, ins: Instruction) -> None:
    handler = ALU_MAP.get(ins.n)
    if handler is None:
        raise InvalidInstructionError(instruction_address(ctx), ins.word)
    handler(ctx, ins)
