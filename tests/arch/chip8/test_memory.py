# tests/arch/chip8/test_memory.py
"""
インデックス、描画、タイマー、BCD、ブロック転送命令（ANNN, DXYN, FXNN）の単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.font import FONT_GLYPHS, glyph_address
from retro_chip8.config.models import QuirkConfig
from retro_chip8.core.errors import InvalidInstructionError

# @intent:test_suite メモリとIに関わる命令の規則を検証します。


class TestIndex:
    def test_load_index(self, machine):
        cpu = machine(0xA123)
        cpu.step()
        assert cpu.get_state().i == 0x123

    def test_add_index_does_not_touch_vf_by_default(self, machine):
        cpu = machine(0xAFFF, 0xF31E)
        state = cpu.get_state()
        state.v[3], state.v[0xF] = 0x02, 0x77
        cpu.step()
        cpu.step()
        assert state.i == 0x1001
        assert state.v[0xF] == 0x77

    # @intent:test_case Quirk有効時、Iが12bit範囲を超えるとVF=1、超えなければVF=0。
    def test_add_index_overflow_quirk(self, machine):
        quirks = QuirkConfig(add_index_sets_vf=True)
        cpu = machine(0xAFFF, 0xF31E, quirks=quirks)
        state = cpu.get_state()
        state.v[3] = 0x02
        cpu.step()
        cpu.step()
        assert state.i == 0x1001
        assert state.v[0xF] == 1

        cpu = machine(0xA100, 0xF31E, quirks=quirks)
        state = cpu.get_state()
        state.v[3], state.v[0xF] = 0x02, 1
        cpu.step()
        cpu.step()
        assert state.i == 0x102
        assert state.v[0xF] == 0

    @pytest.mark.parametrize("value", [0x0, 0x7, 0xF, 0x1A])
    def test_font_glyph_address(self, machine, value):
        cpu = machine(0xF229)
        cpu.get_state().v[2] = value
        cpu.step()
        i = cpu.get_state().i
        assert i == glyph_address(value) == (value & 0xF) * 5
        assert cpu.read_memory(i, 5) == FONT_GLYPHS[i:i + 5]


class TestTimersAndKeys:
    def test_delay_timer_round_trip(self, machine):
        cpu = machine(0xF415, 0xF507)
        cpu.get_state().v[4] = 0x3C
        cpu.step()
        assert cpu.get_delay_timer() == 0x3C
        cpu.decrement_delay_timer()
        cpu.step()
        assert cpu.get_state().v[5] == 0x3B

    def test_sound_timer(self, machine):
        cpu = machine(0xF418)
        cpu.get_state().v[4] = 2
        cpu.step()
        assert cpu.get_sound_timer() == 2
        assert cpu.is_sound_active()

    # @intent:test_case キー押下待ちは押下なしの間PCを進めず、押下後に最小番号のキーを格納して進むことを検証します。
    def test_wait_for_key(self, machine):
        cpu = machine(0xF70A)
        for _ in range(5):
            cpu.step()
            assert cpu.get_state().pc == 0x200
        cpu.press_key(0xC)
        cpu.press_key(0x4)
        cpu.step()
        state = cpu.get_state()
        assert state.pc == 0x202
        assert state.v[7] == 0x4


class TestBcd:
    @pytest.mark.parametrize("value, digits", [
        (0, b"\x00\x00\x00"),
        (7, b"\x00\x00\x07"),
        (42, b"\x00\x04\x02"),
        (255, b"\x02\x05\x05"),
        (109, b"\x01\x00\x09"),
    ])
    def test_bcd(self, machine, value, digits):
        cpu = machine(0xA300, 0xF633)
        cpu.get_state().v[6] = value
        cpu.step()
        cpu.step()
        assert cpu.read_memory(0x300, 3) == digits
        assert cpu.get_state().i == 0x300


class TestBlockTransfer:
    def test_store_registers(self, machine):
        cpu = machine(0xA400, 0xF355)
        state = cpu.get_state()
        state.v[:5] = [1, 2, 3, 4, 5]
        cpu.step()
        cpu.step()
        assert cpu.read_memory(0x400, 5) == bytes([1, 2, 3, 4, 0])
        assert state.i == 0x400

    def test_load_registers(self, machine, assemble):
        cpu = machine()
        cpu.load(assemble(0xA204, 0xF265) + bytes([9, 8, 7, 6]))
        cpu.step()
        cpu.step()
        state = cpu.get_state()
        assert state.v[:4] == [9, 8, 7, 0]
        assert state.i == 0x204

    @pytest.mark.parametrize("word", [0xF355, 0xF365])
    def test_increment_index_quirk(self, machine, word):
        cpu = machine(0xA400, word, quirks=QuirkConfig(load_store_increments_i=True))
        cpu.step()
        cpu.step()
        assert cpu.get_state().i == 0x404

    def test_store_wraps_at_end_of_memory(self, machine):
        cpu = machine(0xAFFF, 0xF155)
        state = cpu.get_state()
        state.v[0], state.v[1] = 0xAA, 0xBB
        cpu.step()
        cpu.step()
        assert cpu.read_memory(0xFFF) == b"\xAA"
        assert cpu.read_memory(0x000) == b"\xBB"

    @pytest.mark.parametrize("word", [0xF000, 0xF108, 0xF166, 0xF2FF])
    def test_undefined_misc_operation_is_fatal(self, machine, word):
        cpu = machine(word)
        with pytest.raises(InvalidInstructionError):
            cpu.step()


class TestDraw:
    # @intent:test_case 同じスプライトを2回描画すると画面が元に戻り、2回目は衝突を報告することを検証します。
    def test_double_draw_restores_screen(self, machine):
        cpu = machine(0x6105, 0x6203, 0xA000 + 0x50 - 5, 0xD125, 0xD125)
        for _ in range(3):
            cpu.step()
        before = cpu.get_screen()
        cpu.step()
        assert cpu.get_state().v[0xF] == 0
        drawn = cpu.get_screen()
        assert drawn != before
        cpu.step()
        assert cpu.get_state().v[0xF] == 1
        assert cpu.get_screen() == before

    def test_origin_wraps_but_sprite_clips(self, machine):
        cpu = machine(0xA000, 0xD125)
        state = cpu.get_state()
        state.v[1], state.v[2] = 64 + 62, 32 + 30
        cpu.step()
        cpu.step()
        lit = {(x, y) for y, row in enumerate(cpu.get_screen()) for x, p in enumerate(row) if p}
        # '0' glyph rows 0xF0, 0x90: 2 visible columns (62, 63), 2 visible rows (30, 31)
        assert lit == {(62, 30), (63, 30), (62, 31)}
        assert state.v[0xF] == 0

    def test_vf_reset_before_drawing(self, machine):
        cpu = machine(0xA000, 0xD015)
        state = cpu.get_state()
        state.v[0xF] = 1
        cpu.step()
        cpu.step()
        assert state.v[0xF] == 0

    def test_origin_read_from_vf_before_reset(self, machine):
        cpu = machine(0xA000, 0xDF05)
        state = cpu.get_state()
        state.v[0xF], state.v[0] = 10, 0
        cpu.step()
        cpu.step()
        assert cpu.get_pixel(10, 0)
        assert not cpu.get_pixel(0, 0)
