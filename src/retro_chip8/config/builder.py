import random
from typing import Tuple

from retro_chip8.arch.chip8.cpu import Chip8Cpu, create_memory_bus
from retro_chip8.transport.bus import Bus
from .models import SystemConfig

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、CPUを生成・接続します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        bus = create_memory_bus()
        rng = random.Random(config.seed)
        cpu = Chip8Cpu(bus, quirks=config.quirks, rng=rng)
        return cpu, bus
