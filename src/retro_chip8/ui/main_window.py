# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
画面表示、キー入力、60Hzのフレームタイマーを束ね、FrameRunnerを駆動します。
"""
import logging
from typing import Optional

from PySide6.QtCore import QTimer, Slot
from PySide6.QtGui import QAction, QColor, QKeyEvent, QPalette
from PySide6.QtWidgets import QApplication, QFileDialog, QLabel, QMainWindow, QMessageBox

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import SystemConfig
from retro_chip8.core.errors import Chip8Error
from retro_chip8.host.runner import FrameRunner
from retro_chip8.loader.loader import BinaryLoader
from .keymap import to_chip8_key
from .screen_view import ScreenView

logger = logging.getLogger(__name__)


# @intent:responsibility アプリケーションのメインウィンドウを定義し、バックエンドとUIを接続します。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[SystemConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Retro CHIP-8")

        self._config = config or SystemConfig()
        self._rom_path: Optional[str] = None

        self.screen_view = ScreenView()
        self.setCentralWidget(self.screen_view)
        self.sound_label = QLabel("")
        self.statusBar().addPermanentWidget(self.sound_label)

        self._frame_timer = QTimer(self)
        self._frame_timer.timeout.connect(self._on_frame)

        self._setup_backend()
        self._set_dark_theme()
        self._create_menus()

    # @intent:responsibility 現在の設定からマシンとホストループを構築します。
    def _setup_backend(self):
        self.cpu, self.bus = SystemBuilder().build_system(self._config)
        self.runner = FrameRunner(self.cpu, self._config.timing)
        self._frame_timer.setInterval(int(self.runner.frame_interval_ms))

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.open_rom_action = QAction("Open ROM...", self)
        self.open_rom_action.setShortcut("Ctrl+O")
        self.open_rom_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(self.open_rom_action)

        self.load_config_action = QAction("Load Config...", self)
        self.load_config_action.triggered.connect(self._load_config_dialog)
        file_menu.addAction(self.load_config_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.setShortcut("Ctrl+R")
        self.reset_action.triggered.connect(self._reload)
        file_menu.addAction(self.reset_action)

    # @intent:responsibility ROMをロードして実行を開始します。
    def load_rom(self, path: str) -> None:
        self.cpu.reset()
        size = BinaryLoader().load_binary(path, self.cpu)
        self._rom_path = path
        self.screen_view.set_screen(self.cpu.get_screen())
        self.statusBar().showMessage(f"Loaded {path} ({size} bytes)")
        self.start()

    # @intent:responsibility load_rom の失敗（ファイルなし、サイズ超過）をダイアログで報告します。
    def open_rom(self, path: str) -> bool:
        try:
            self.load_rom(path)
        except (OSError, Chip8Error) as e:
            logger.error("Failed to load ROM %s: %s", path, e)
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")
            return False
        return True

    def start(self) -> None:
        self._frame_timer.start()

    def stop(self) -> None:
        self._frame_timer.stop()

    @property
    def running(self) -> bool:
        return self._frame_timer.isActive()

    # @intent:responsibility 1フレーム分を実行して画面とサウンド表示を更新します。
    # @intent:post-condition 致命的エラー時はタイマーを停止し、エラー内容を表示します。
    @Slot()
    def _on_frame(self):
        try:
            sound = self.runner.run_frame()
        except Chip8Error as e:
            self.stop()
            self.statusBar().showMessage(f"Halted: {e}")
            QMessageBox.critical(self, "Machine Halted", str(e))
            return
        self.screen_view.set_screen(self.cpu.get_screen())
        self.sound_label.setText("BEEP" if sound else "")

    def keyPressEvent(self, event: QKeyEvent):
        key = to_chip8_key(event.key())
        if key is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self.cpu.press_key(key)

    def keyReleaseEvent(self, event: QKeyEvent):
        key = to_chip8_key(event.key())
        if key is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self.cpu.release_key(key)

    @Slot()
    def _open_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            self.open_rom(file_name)

    @Slot()
    def _load_config_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                self.apply_config(ConfigLoader().load_from_file(file_name))
            except (OSError, Chip8Error) as e:
                QMessageBox.critical(self, "Error", f"Failed to load config: {e}")

    # @intent:responsibility 新しい設定でマシンを作り直します。Quirkは生成時に固定されるため再構築が必要です。
    def apply_config(self, config: SystemConfig) -> None:
        self.stop()
        self._config = config
        self._setup_backend()
        if self._rom_path:
            self.load_rom(self._rom_path)

    @Slot()
    def _reload(self):
        self.stop()
        if self._rom_path:
            self.load_rom(self._rom_path)
        else:
            self.cpu.reset()
            self.screen_view.set_screen(self.cpu.get_screen())

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        QApplication.setPalette(dark_palette)

    def closeEvent(self, event):
        self.stop()
        super().closeEvent(event)
