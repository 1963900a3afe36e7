# retro_chip8/host/runner.py
"""
ホストループ本体（ヘッドレス）。

1フレーム（1/60秒相当）ごとに、設定された命令数だけ step() を実行し、
その後で両タイマーを1回減算します。実時間での待機は呼び出し側（UIのQTimer等）が行います。
"""
import logging
from typing import Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import TimingConfig

logger = logging.getLogger(__name__)


# @intent:responsibility 命令実行とタイマー減算の周期を管理します。
class FrameRunner:
    def __init__(self, cpu: Chip8Cpu, timing: Optional[TimingConfig] = None):
        self._cpu = cpu
        self._timing = timing or TimingConfig()
        self._frame_count = 0

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def frame_interval_ms(self) -> float:
        return 1000.0 / self._timing.timer_hz

    # @intent:responsibility 1フレーム分を実行し、サウンドを鳴らすべきかどうかを返します。
    # @intent:post-condition step() の致命的エラーはそのまま送出され、タイマーは減算されません。
    def run_frame(self) -> bool:
        for _ in range(self._timing.instructions_per_frame):
            self._cpu.step()
        self._cpu.tick_timers()
        self._frame_count += 1
        return self._cpu.is_sound_active()

    def run_frames(self, count: int) -> bool:
        sound = False
        for _ in range(count):
            sound = self.run_frame()
        return sound
