# src/retro_chip8/arch/chip8/instructions/memory.py
"""
インデックスレジスタ、描画、タイマー、BCD、ブロック転送命令の実装。
"""
from retro_chip8.arch.chip8.decoder import Instruction
from retro_chip8.arch.chip8.font import glyph_address
from retro_chip8.arch.chip8.instructions.base import (
    ExecutionContext, instruction_address, read_byte, write_byte
)
from retro_chip8.arch.chip8.state import VF
from retro_chip8.core.errors import InvalidInstructionError


# @intent:responsibility ANNN (LD I, addr)
def execute_ld_i(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.i = ins.nnn

# @intent:responsibility DXYN (DRW Vx, Vy, nibble): I から N 行のスプライトをXOR描画します。
# @intent:rationale 原点座標を読み取ってから VF をリセットします（X/Y が F の場合に備えて）。
def execute_drw(ctx: ExecutionContext, ins: Instruction) -> None:
    state = ctx.state
    x = state.v[ins.x]
    y = state.v[ins.y]
    state.v[VF] = 0
    sprite = [read_byte(ctx, state.i + row) for row in range(ins.n)]
    if ctx.display.draw_sprite(x, y, sprite):
        state.v[VF] = 1


# --- 0xF family ---
def execute_ld_vx_dt(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.v[ins.x] = ctx.state.delay_timer.value

# @intent:responsibility FX0A (LD Vx, K): キー押下待ち。
# @intent:rationale スレッドを止めず、押下がなければPCを巻き戻して同じ命令を次のstepで再実行します。
def execute_ld_vx_k(ctx: ExecutionContext, ins: Instruction) -> None:
    key = ctx.keypad.first_pressed()
    if key is None:
        ctx.state.pc = (ctx.state.pc - 2) & 0xFFFF
    else:
        ctx.state.v[ins.x] = key

def execute_ld_dt_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.delay_timer.value = ctx.state.v[ins.x]

def execute_ld_st_vx(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.sound_timer.value = ctx.state.v[ins.x]

# @intent:responsibility FX1E (ADD I, Vx)。I はマスクしません。
def execute_add_i(ctx: ExecutionContext, ins: Instruction) -> None:
    state = ctx.state
    state.i = (state.i + state.v[ins.x]) & 0xFFFF
    if ctx.quirks.add_index_sets_vf:
        state.v[VF] = 1 if state.i > 0xFFF else 0

# @intent:responsibility FX29 (LD F, Vx): V[X] の下位4bitのグリフアドレスを I に設定します。
def execute_ld_f(ctx: ExecutionContext, ins: Instruction) -> None:
    ctx.state.i = glyph_address(ctx.state.v[ins.x])

# @intent:responsibility FX33 (LD B, Vx): 10進3桁（百、十、一）を I, I+1, I+2 に格納します。
def execute_ld_b(ctx: ExecutionContext, ins: Instruction) -> None:
    value = ctx.state.v[ins.x]
    i = ctx.state.i
    write_byte(ctx, i, value // 100)
    write_byte(ctx, i + 1, (value // 10) % 10)
    write_byte(ctx, i + 2, value % 10)

# @intent:responsibility FX55 (LD [I], Vx): V0..VX をメモリ I..I+X に格納します。
def execute_store(ctx: ExecutionContext, ins: Instruction) -> None:
    state = ctx.state
    for offset in range(ins.x + 1):
        write_byte(ctx, state.i + offset, state.v[offset])
    if ctx.quirks.load_store_increments_i:
        state.i = (state.i + ins.x + 1) & 0xFFFF

# @intent:responsibility FX65 (LD Vx, [I]): メモリ I..I+X から V0..VX を読み込みます。
def execute_load(ctx: ExecutionContext, ins: Instruction) -> None:
    state = ctx.state
    for offset in range(ins.x + 1):
        state.v[offset] = read_byte(ctx, state.i + offset)
    if ctx.quirks.load_store_increments_i:
        state.i = (state.i + ins.x + 1) & 0xFFFF

MISC_MAP = {
    0x07: execute_ld_vx_dt,
    0x0A: execute_ld_vx_k,
    0x15: execute_ld_dt_vx,
    0x18: execute_ld_st_vx,
    0x1E: execute_add_i,
    0x29: execute_ld_f,
    0x33: execute_ld_b,
    0x55: execute_store,
    0x65: execute_load,
}

def execute_family_f(ctx: ExecutionContext, ins: Instruction) -> None:
    handler = MISC_MAP.get(ins.nn)
    if handler is None:
        raise InvalidInstructionError(instruction_address(ctx), ins.word)
    handler(ctx, ins)
