# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 仮想マシンの中心モジュール。

メモリ（Bus経由）、レジスタ、スタック、表示ビットマップ、キーパッド、タイマーを所有し、
1命令ずつの実行（step）と、ホストループ用の参照・更新APIを提供します。
命令の実行ペースとタイマーの60Hz減算は外部（ホストループ）が制御します。
"""
import logging
import random
from typing import Optional

from retro_chip8.arch.chip8.decoder import decode
from retro_chip8.arch.chip8.display import Display
from retro_chip8.arch.chip8.font import FONT_GLYPHS, FONT_START_ADDR
from retro_chip8.arch.chip8.instructions import decode_operation, execute_instruction
from retro_chip8.arch.chip8.instructions.base import ADDRESS_MASK, ExecutionContext
from retro_chip8.arch.chip8.keypad import Keypad
from retro_chip8.arch.chip8.state import PC_RESET_VALUE, Chip8CpuState
from retro_chip8.common.types import DisplayRows, RegisterMap
from retro_chip8.config.models import QuirkConfig
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import RAM, Bus

logger = logging.getLogger(__name__)

MEMORY_SIZE = 0x1000  # 4KB
PROGRAM_START = PC_RESET_VALUE
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


# @intent:responsibility 4KB RAM を 0x000-0xFFF にマップした標準構成のバスを生成します。
def create_memory_bus() -> Bus:
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    return bus


# @intent:responsibility CHIP-8 の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシン。

    Quirk設定は生成時に固定され、実行中に変更することはできません。
    乱数源（CXNN用）は rng で差し替え可能で、テストでは固定シードを使用します。
    """
    # @intent:pre-condition bus を渡す場合、0x000-0xFFF の全域が書き込み可能なデバイスにマップされていること。
    def __init__(self, bus: Optional[Bus] = None, quirks: Optional[QuirkConfig] = None,
                 rng: Optional[random.Random] = None):
        self._quirks = quirks or QuirkConfig()
        self._rng = rng or random.Random()
        self._display = Display()
        self._keypad = Keypad()
        super().__init__(bus or create_memory_bus())
        self._initialize_memory()
        self._ctx = self._create_context()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    def _create_context(self) -> ExecutionContext:
        return ExecutionContext(
            state=self._state,
            bus=self._bus,
            display=self._display,
            keypad=self._keypad,
            quirks=self._quirks,
            rng=self._rng,
        )

    # @intent:responsibility メモリをゼロクリアし、フォントを先頭領域に配置します。
    def _initialize_memory(self) -> None:
        self._bus.clear_memory()
        self._bus.load_block(FONT_START_ADDR, FONT_GLYPHS)

    # @intent:responsibility 生成直後の状態（フォントのみのメモリ、PC=0x200、画面・キー・タイマー消去）に戻します。
    def reset(self) -> None:
        super().reset()
        self._display.clear()
        self._keypad.clear()
        self._initialize_memory()
        self._ctx = self._create_context()

    @property
    def quirks(self) -> QuirkConfig:
        return self._quirks

    def get_state(self) -> Chip8CpuState:
        return self._state

    # --- Program load ---
    # @intent:responsibility プログラムを 0x200 から書き込みます。
    # @intent:pre-condition プログラムは 4096 - 0x200 バイト以下であること。超える場合は ProgramTooLargeError。
    def load(self, program: bytes) -> None:
        program = bytes(program)
        if len(program) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(
                f"Program of {len(program)} bytes exceeds the {MAX_PROGRAM_SIZE} byte program area."
            )
        self._bus.load_block(PROGRAM_START, program)
        logger.info("Loaded %d byte program at %#05x", len(program), PROGRAM_START)

    # --- Instruction cycle ---
    # @intent:responsibility PCからビッグエンディアンの16bit命令ワードをフェッチします。PCの更新は_update_pcで行います。
    def _fetch(self) -> int:
        pc = self._state.pc
        hi = self._bus.read(pc & ADDRESS_MASK)
        lo = self._bus.read((pc + 1) & ADDRESS_MASK)
        return (hi << 8) | lo

    def _decode(self, opcode: int) -> Operation:
        return decode_operation(decode(opcode), self._quirks)

    def _execute(self, opcode: int, operation: Operation) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%#05x: %04X %s %s", (self._state.pc - 2) & 0xFFFF, opcode,
                         operation.mnemonic, ", ".join(operation.operands))
        execute_instruction(self._ctx, decode(opcode))

    # --- Display ---
    # @intent:responsibility 現在の64x32ビットマップの読み取り専用コピーを返します。
    def get_screen(self) -> DisplayRows:
        return self._display.rows()

    def get_pixel(self, x: int, y: int) -> bool:
        return self._display.get_pixel(x, y)

    # --- Keypad ---
    def set_key(self, key: int, pressed: bool) -> None:
        self._keypad.set_key(key, pressed)

    def press_key(self, key: int) -> None:
        self._keypad.press(key)

    def release_key(self, key: int) -> None:
        self._keypad.release(key)

    def is_key_pressed(self, key: int) -> bool:
        return self._keypad.is_pressed(key)

    # --- Timers ---
    def get_delay_timer(self) -> int:
        return self._state.delay_timer.value

    def get_sound_timer(self) -> int:
        return self._state.sound_timer.value

    def decrement_delay_timer(self) -> None:
        self._state.delay_timer.decrement()

    def decrement_sound_timer(self) -> None:
        self._state.sound_timer.decrement()

    # @intent:responsibility 両タイマーを1回ずつ減算します。ホストループが60Hzで呼び出します。
    def tick_timers(self) -> None:
        self.decrement_delay_timer()
        self.decrement_sound_timer()

    def is_sound_active(self) -> bool:
        return self._state.sound_timer.active

    # --- Inspection ---
    # @intent:responsibility ログを記録せずにメモリを読み出します（UI/テスト用）。
    def read_memory(self, address: int, length: int = 1) -> bytes:
        return bytes(self._bus.peek((address + offset) & ADDRESS_MASK) for offset in range(length))

    def get_register_map(self) -> RegisterMap:
        s = self._state
        registers = {"PC": s.pc, "I": s.i}
        registers.update({f"V{index:X}": value for index, value in enumerate(s.v)})
        registers.update({
            "DT": s.delay_timer.value,
            "ST": s.sound_timer.value,
            "SP": s.sp,
        })
        return registers
