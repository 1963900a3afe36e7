# tests/arch/chip8/test_keypad_timers.py
"""
キーパッドとカウントダウンタイマーの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.keypad import Keypad
from retro_chip8.arch.chip8.timers import CountdownTimer


class TestKeypad:
    def test_press_and_release(self):
        keypad = Keypad()
        keypad.press(0xF)
        assert keypad.is_pressed(0xF)
        keypad.release(0xF)
        assert not keypad.is_pressed(0xF)

    def test_first_pressed_is_lowest_index(self):
        keypad = Keypad()
        assert keypad.first_pressed() is None
        keypad.set_key(0x9, True)
        keypad.set_key(0x2, True)
        assert keypad.first_pressed() == 0x2

    @pytest.mark.parametrize("key", [-1, 16, 0x20])
    def test_out_of_range_key(self, key):
        keypad = Keypad()
        with pytest.raises(ValueError):
            keypad.press(key)

    def test_clear(self):
        keypad = Keypad()
        keypad.press(3)
        keypad.clear()
        assert not any(keypad.is_pressed(key) for key in range(16))


class TestCountdownTimer:
    # @intent:test_case 0 からの減算は 0 のまま（255へ折り返さない）ことを検証します。
    def test_floor_at_zero(self):
        timer = CountdownTimer()
        timer.decrement()
        assert timer.value == 0
        assert not timer.active

    def test_counts_down(self):
        timer = CountdownTimer(3)
        for expected in (2, 1, 0, 0):
            timer.decrement()
            assert timer.value == expected

    def test_value_is_eight_bit(self):
        timer = CountdownTimer()
        timer.value = 0x1FF
        assert timer.value == 0xFF
