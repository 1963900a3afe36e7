from dataclasses import dataclass, field
from typing import Optional


# @intent:responsibility 実装間で挙動が分かれる命令（Quirk）の切り替えを保持します。
# @intent:rationale 起動時に固定され実行中は変更しないため、frozen とします。全て False が古典的挙動です。
@dataclass(frozen=True)
class QuirkConfig:
    shift_copies_vy: bool = False  # 8XY6/8XYE: シフト前に V[X] = V[Y]
    jump_uses_vx: bool = False  # BNNN を BXNN（V[X] + XNN）として扱う
    load_store_increments_i: bool = False  # FX55/FX65: 転送後に I += X + 1
    add_index_sets_vf: bool = False  # FX1E: I が 0xFFF を超えたら VF = 1


@dataclass(frozen=True)
class TimingConfig:
    instructions_per_second: int = 700
    timer_hz: int = 60

    # @intent:responsibility 1フレーム（タイマー1回分）あたりに実行する命令数。
    @property
    def instructions_per_frame(self) -> int:
        return max(1, self.instructions_per_second // self.timer_hz)


@dataclass
class SystemConfig:
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    seed: Optional[int] = None  # CXNN 用乱数のシード（None の場合は非決定的）
