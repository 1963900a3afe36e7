# src/retro_chip8/arch/chip8/font.py
"""
組み込みフォント（16進数字 0-F）の定義。
"""

# @intent:constant フォントはメモリ先頭から配置されます。
FONT_START_ADDR = 0x000
GLYPH_HEIGHT = 5  # 1文字あたりのバイト数（行数）

# 各行の上位4bitのみ使用（4x5ドット）
FONT_GLYPHS = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

FONT_END_ADDR = FONT_START_ADDR + len(FONT_GLYPHS)  # 80 (exclusive)


# @intent:responsibility 16進数字（下位4bitのみ有効）に対応するグリフの先頭アドレスを返します。
def glyph_address(digit: int) -> int:
    return FONT_START_ADDR + (digit & 0xF) * GLYPH_HEIGHT
