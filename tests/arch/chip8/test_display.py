# tests/arch/chip8/test_display.py
"""
retro_chip8.arch.chip8.displayモジュールの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.display import SCREEN_HEIGHT, SCREEN_WIDTH, Display

# @intent:test_suite XOR合成、衝突判定、クリップ規則を検証します。


class TestDisplay:
    def test_initially_blank(self):
        display = Display()
        rows = display.rows()
        assert len(rows) == SCREEN_HEIGHT
        assert all(len(row) == SCREEN_WIDTH for row in rows)
        assert not any(any(row) for row in rows)

    def test_msb_is_leftmost(self):
        display = Display()
        display.draw_sprite(0, 0, [0b10000001])
        assert display.get_pixel(0, 0)
        assert display.get_pixel(7, 0)
        assert not display.get_pixel(1, 0)

    def test_collision_only_when_pixel_turned_off(self):
        display = Display()
        assert display.draw_sprite(0, 0, [0b11000000]) is False
        assert display.draw_sprite(1, 0, [0b10000000]) is True
        assert display.lit_pixels() == ((0, 0),)

    # @intent:test_case 右下端 (60, 30) に高さ4で描くと 60-63列 / 30-31行のみが変化することを検証します。
    def test_clipping_at_bottom_right(self):
        display = Display()
        collision = display.draw_sprite(60, 30, [0xFF] * 4)
        assert collision is False
        assert set(display.lit_pixels()) == {(x, y) for x in range(60, 64) for y in (30, 31)}

    def test_clipped_pixels_do_not_collide(self):
        display = Display()
        display.draw_sprite(0, 0, [0xFF])  # 左上 (0..7, 0) を点灯
        assert display.draw_sprite(60, 30, [0xFF] * 4) is False
        assert display.get_pixel(0, 0)

    def test_origin_is_wrapped(self):
        display = Display()
        display.draw_sprite(SCREEN_WIDTH + 3, SCREEN_HEIGHT + 2, [0x80])
        assert display.lit_pixels() == ((3, 2),)

    def test_clear(self):
        display = Display()
        display.draw_sprite(10, 10, [0xFF, 0xFF])
        display.clear()
        assert display.lit_pixels() == ()

    def test_rows_is_a_copy(self):
        display = Display()
        rows = display.rows()
        display.draw_sprite(0, 0, [0x80])
        assert rows[0][0] is False
        assert display.rows()[0][0] is True

    def test_get_pixel_out_of_range(self):
        display = Display()
        with pytest.raises(IndexError):
            display.get_pixel(SCREEN_WIDTH, 0)

    def test_empty_sprite_draws_nothing(self):
        display = Display()
        assert display.draw_sprite(5, 5, []) is False
        assert display.to_bytes() == bytes(SCREEN_WIDTH * SCREEN_HEIGHT)
