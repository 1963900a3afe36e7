# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPUの状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.arch.chip8.timers import CountdownTimer
from retro_chip8.core.state import CpuState

PC_RESET_VALUE = 0x200
REGISTER_COUNT = 16
VF = 0xF  # フラグを兼ねる汎用レジスタの番号


# @intent:responsibility CHIP-8 CPUのレジスタ（PC, I, V0-VF）、コールスタック、タイマー値を保持します。
# @intent:rationale VFは通常の配列要素として保持し、構造上の特別扱いはしません。
#                  フラグとしての書き込み順序は各命令の実装側で保証します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態。
    """
    pc: int = PC_RESET_VALUE
    i: int = 0x0000
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    stack: List[int] = field(default_factory=list)
    delay_timer: CountdownTimer = field(default_factory=CountdownTimer)
    sound_timer: CountdownTimer = field(default_factory=CountdownTimer)

    # @intent:responsibility 現在のコールスタックの深さ。
    @property
    def sp(self) -> int:
        return len(self.stack)
