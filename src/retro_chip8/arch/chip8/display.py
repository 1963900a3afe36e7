# src/retro_chip8/arch/chip8/display.py
"""
64x32 モノクロ表示ビットマップ。

スプライトはXORで合成されます。既に点灯している画素を消灯させた場合を
「衝突」と呼び、描画命令はその有無を返します。
画面端を越える画素はクリップされ、反対側へ回り込むことはありません。
"""
from typing import Iterable, Tuple

from retro_chip8.common.types import DisplayRows

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


# @intent:responsibility 表示ビットマップの保持とスプライト合成を行います。
class Display:
    """
    行優先（row-major）の 1bit/画素 ビットマップ。
    外部（レンダラ）は rows() や get_pixel() で読み取るのみで、直接変更しません。
    """
    def __init__(self):
        self._pixels = bytearray(SCREEN_WIDTH * SCREEN_HEIGHT)

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT):
            raise IndexError(f"Pixel ({x}, {y}) is outside the {SCREEN_WIDTH}x{SCREEN_HEIGHT} screen.")
        return bool(self._pixels[y * SCREEN_WIDTH + x])

    # @intent:responsibility スプライトを (x, y) を原点としてXOR描画し、衝突の有無を返します。
    # @intent:pre-condition sprite_rows の各要素は1行分の8bit値（MSBが左端）。
    # @intent:rationale 原点のみ画面サイズで剰余を取り、はみ出した画素はクリップします。
    def draw_sprite(self, x: int, y: int, sprite_rows: Iterable[int]) -> bool:
        origin_x = x % SCREEN_WIDTH
        origin_y = y % SCREEN_HEIGHT
        collision = False

        for row_offset, row_bits in enumerate(sprite_rows):
            py = origin_y + row_offset
            if py >= SCREEN_HEIGHT:
                break
            base = py * SCREEN_WIDTH
            for col in range(SPRITE_WIDTH):
                px = origin_x + col
                if px >= SCREEN_WIDTH:
                    break
                if row_bits & (0x80 >> col):
                    index = base + px
                    if self._pixels[index]:
                        collision = True
                    self._pixels[index] ^= 1
        return collision

    # @intent:responsibility 画面全体の読み取り専用コピーを返します。
    def rows(self) -> DisplayRows:
        return tuple(
            tuple(bool(p) for p in self._pixels[y * SCREEN_WIDTH:(y + 1) * SCREEN_WIDTH])
            for y in range(SCREEN_HEIGHT)
        )

    # @intent:responsibility 点灯画素の座標一覧を返します。描画や比較用。
    def lit_pixels(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(
            (index % SCREEN_WIDTH, index // SCREEN_WIDTH)
            for index, pixel in enumerate(self._pixels) if pixel
        )

    def to_bytes(self) -> bytes:
        return bytes(self._pixels)
