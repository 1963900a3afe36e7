# src/retro_chip8/arch/chip8/instructions/base.py
"""
命令実行の共通部品（実行コンテキスト、メモリアクセス）。
"""
import random
from dataclasses import dataclass

from retro_chip8.arch.chip8.display import Display
from retro_chip8.arch.chip8.keypad import Keypad
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.config.models import QuirkConfig
from retro_chip8.transport.bus import Bus

ADDRESS_MASK = 0xFFF  # 12bitアドレス空間


# @intent:responsibility 命令ハンドラが操作する全ての対象をまとめたもの。
# @intent:rationale 命令ハンドラはCPUクラスに依存せず、この束だけを受け取る関数として実装します。
@dataclass
class ExecutionContext:
    state: Chip8CpuState
    bus: Bus
    display: Display
    keypad: Keypad
    quirks: QuirkConfig
    rng: random.Random


# @intent:responsibility 命令の先頭アドレス（PCは既に次の命令を指している）を返します。
def instruction_address(ctx: ExecutionContext) -> int:
    return (ctx.state.pc - 2) & 0xFFFF


# @intent:responsibility 12bitにマスクしたアドレスから1バイト読み出します。
# @intent:rationale I は範囲外の値を取り得るため、メモリアクセス時にのみアドレスバス幅へ丸めます。
def read_byte(ctx: ExecutionContext, address: int) -> int:
    return ctx.bus.read(address & ADDRESS_MASK)


def write_byte(ctx: ExecutionContext, address: int, data: int) -> None:
    ctx.bus.write(address & ADDRESS_MASK, data & 0xFF)


def skip_next(ctx: ExecutionContext) -> None:
    ctx.state.pc = (ctx.state.pc + 2) & 0xFFFF
