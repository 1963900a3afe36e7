# src/retro_chip8/arch/chip8/instructions/maps.py
"""
CHIP-8 命令マップとデコード/実行ロジック。

上位4bit（命令ファミリ）で実行関数を選択します。ファミリ内のサブオペコードは
各ファミリのハンドラが判定します。
"""
from typing import Callable, Dict, List, Optional, Tuple

from retro_chip8.arch.chip8.decoder import Instruction
from retro_chip8.arch.chip8.instructions import alu, control, memory
from retro_chip8.arch.chip8.instructions.base import ExecutionContext
from retro_chip8.config.models import QuirkConfig
from retro_chip8.core.snapshot import Operation

ExecFunc = Callable[[ExecutionContext, Instruction], None]

FAMILY_MAP: Dict[int, ExecFunc] = {
    0x0: control.execute_family_0,
    0x1: control.execute_jp,
    0x2: control.execute_call,
    0x3: control.execute_se_imm,
    0x4: control.execute_sne_imm,
    0x5: control.execute_se_reg,
    0x6: alu.execute_ld_imm,
    0x7: alu.execute_add_imm,
    0x8: alu.execute_family_8,
    0x9: control.execute_sne_reg,
    0xA: memory.execute_ld_i,
    0xB: control.execute_jp_offset,
    0xC: alu.execute_rnd,
    0xD: memory.execute_drw,
    0xE: control.execute_family_e,
    0xF: memory.execute_family_f,
}


# @intent:responsibility デコード済み命令を実行します。
def execute_instruction(ctx: ExecutionContext, ins: Instruction) -> None:
    FAMILY_MAP[ins.op](ctx, ins)


# --- Mnemonic table (ログ/Snapshot表示用) ---
def _vx(ins: Instruction) -> str:
    return f"V{ins.x:X}"

def _vy(ins: Instruction) -> str:
    return f"V{ins.y:X}"

def _addr(ins: Instruction) -> str:
    return f"${ins.nnn:03X}"

def _byte(ins: Instruction) -> str:
    return f"#{ins.nn:02X}"

_ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

_MISC_FORMS: Dict[int, Tuple[str, Callable[[Instruction], List[str]]]] = {
    0x07: ("LD", lambda ins: [_vx(ins), "DT"]),
    0x0A: ("LD", lambda ins: [_vx(ins), "K"]),
    0x15: ("LD", lambda ins: ["DT", _vx(ins)]),
    0x18: ("LD", lambda ins: ["ST", _vx(ins)]),
    0x1E: ("ADD", lambda ins: ["I", _vx(ins)]),
    0x29: ("LD", lambda ins: ["F", _vx(ins)]),
    0x33: ("LD", lambda ins: ["B", _vx(ins)]),
    0x55: ("LD", lambda ins: ["[I]", _vx(ins)]),
    0x65: ("LD", lambda ins: [_vx(ins), "[I]"]),
}


# @intent:responsibility 命令ワードからニーモニックとオペランドを求めます。
# @intent:rationale 不正な命令でもデコード自体は失敗させず "UNKNOWN" とし、実行時に致命的エラーとします。
# @intent:pre-condition quirks は BNNN の表記（V0 か V[X] か）の決定にのみ使用します。
def decode_operation(ins: Instruction, quirks: Optional[QuirkConfig] = None) -> Operation:
    op = ins.op
    mnemonic, operands = "UNKNOWN", [f"${ins.word:04X}"]

    if op == 0x0:
        if ins.nnn == 0x0E0:
            mnemonic, operands = "CLS", []
        elif ins.nnn == 0x0EE:
            mnemonic, operands = "RET", []
    elif op == 0x1:
        mnemonic, operands = "JP", [_addr(ins)]
    elif op == 0x2:
        mnemonic, operands = "CALL", [_addr(ins)]
    elif op == 0x3:
        mnemonic, operands = "SE", [_vx(ins), _byte(ins)]
    elif op == 0x4:
        mnemonic, operands = "SNE", [_vx(ins), _byte(ins)]
    elif op == 0x5:
        mnemonic, operands = "SE", [_vx(ins), _vy(ins)]
    elif op == 0x6:
        mnemonic, operands = "LD", [_vx(ins), _byte(ins)]
    elif op == 0x7:
        mnemonic, operands = "ADD", [_vx(ins), _byte(ins)]
    elif op == 0x8:
        if ins.n in _ALU_MNEMONICS:
            mnemonic, operands = _ALU_MNEMONICS[ins.n], [_vx(ins), _vy(ins)]
    elif op == 0x9:
        mnemonic, operands = "SNE", [_vx(ins), _vy(ins)]
    elif op == 0xA:
        mnemonic, operands = "LD", ["I", _addr(ins)]
    elif op == 0xB:
        offset_reg = _vx(ins) if quirks is not None and quirks.jump_uses_vx else "V0"
        mnemonic, operands = "JP", [offset_reg, _addr(ins)]
    elif op == 0xC:
        mnemonic, operands = "RND", [_vx(ins), _byte(ins)]
    elif op == 0xD:
        mnemonic, operands = "DRW", [_vx(ins), _vy(ins), f"#{ins.n:X}"]
    elif op == 0xE:
        if ins.nn == 0x9E:
            mnemonic, operands = "SKP", [_vx(ins)]
        elif ins.nn == 0xA1:
            mnemonic, operands = "SKNP", [_vx(ins)]
    elif op == 0xF:
        form = _MISC_FORMS.get(ins.nn)
        if form:
            mnemonic, operands = form[0], form[1](ins)

    return Operation(opcode_hex=f"{ins.word:04X}", mnemonic=mnemonic, operands=operands, length=2)
