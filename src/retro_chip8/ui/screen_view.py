"""
Screen View モジュール。

CHIP-8 の 64x32 ビットマップを拡大してラスタライズするウィジェット。
"""
from PySide6.QtCore import QSize
from PySide6.QtGui import QColor, QPainter, QPaintEvent
from PySide6.QtWidgets import QWidget

from retro_chip8.arch.chip8.display import SCREEN_HEIGHT, SCREEN_WIDTH
from retro_chip8.common.types import DisplayRows

# --- 色定義 ---
COLOR_BG = "#101010"
COLOR_PIXEL = "#E0E0E0"

DEFAULT_SCALE = 12


# @intent:responsibility 画面ビットマップのコピーを保持し、paintEventで描画します。
class ScreenView(QWidget):
    def __init__(self, scale: int = DEFAULT_SCALE, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._rows: DisplayRows = tuple((False,) * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT))
        self.setMinimumSize(SCREEN_WIDTH * 4, SCREEN_HEIGHT * 4)

    def sizeHint(self) -> QSize:
        return QSize(SCREEN_WIDTH * self._scale, SCREEN_HEIGHT * self._scale)

    # @intent:responsibility 新しい画面内容を受け取り、再描画を要求します。
    def set_screen(self, rows: DisplayRows) -> None:
        self._rows = rows
        self.update()

    def lit_pixel_count(self) -> int:
        return sum(sum(1 for pixel in row if pixel) for row in self._rows)

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(COLOR_BG))
        # ウィジェットサイズに合わせて整数倍率で拡大
        scale = max(1, min(self.width() // SCREEN_WIDTH, self.height() // SCREEN_HEIGHT))
        pixel_color = QColor(COLOR_PIXEL)
        for y, row in enumerate(self._rows):
            for x, lit in enumerate(row):
                if lit:
                    painter.fillRect(x * scale, y * scale, scale, scale, pixel_color)
        painter.end()
