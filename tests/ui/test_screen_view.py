import os
import sys
import unittest
from unittest import mock

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import QApplication

from retro_chip8.arch.chip8.display import SCREEN_HEIGHT, SCREEN_WIDTH
from retro_chip8.config.models import QuirkConfig, SystemConfig
from retro_chip8.ui.app import main
from retro_chip8.ui.keymap import KEY_MAP, to_chip8_key
from retro_chip8.ui.main_window import MainWindow
from retro_chip8.ui.screen_view import ScreenView


class TestScreenView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_initially_blank(self):
        view = ScreenView()
        self.assertEqual(view.lit_pixel_count(), 0)
        self.assertEqual(view.sizeHint().width(), SCREEN_WIDTH * 12)

    def test_set_screen_and_paint(self):
        view = ScreenView(scale=4)
        rows = tuple(tuple(x == y for x in range(SCREEN_WIDTH)) for y in range(SCREEN_HEIGHT))
        view.set_screen(rows)
        self.assertEqual(view.lit_pixel_count(), SCREEN_HEIGHT)
        view.resize(view.sizeHint())
        image = view.grab().toImage()
        self.assertFalse(image.isNull())


class TestKeyMap(unittest.TestCase):
    def test_covers_all_sixteen_keys(self):
        self.assertEqual(sorted(KEY_MAP.values()), list(range(16)))

    def test_lookup(self):
        self.assertEqual(to_chip8_key(Qt.Key_X), 0x0)
        self.assertEqual(to_chip8_key(Qt.Key_4), 0xC)
        self.assertIsNone(to_chip8_key(Qt.Key_P))


class TestMainWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_key_events_update_keypad(self):
        window = MainWindow()
        window.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_W, Qt.NoModifier))
        self.assertTrue(window.cpu.is_key_pressed(0x5))
        window.keyReleaseEvent(QKeyEvent(QEvent.KeyRelease, Qt.Key_W, Qt.NoModifier))
        self.assertFalse(window.cpu.is_key_pressed(0x5))

    def test_load_rom_and_run_frame(self):
        import tempfile
        # CLS / LD I, 0 / DRW V0, V0, 5 / JP self
        program = bytes.fromhex("00E0A000D0051206")
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "test.ch8")
            with open(path, "wb") as f:
                f.write(program)
            window = MainWindow()
            window.load_rom(path)
            self.assertTrue(window.running)
            window._on_frame()
            window.stop()
        self.assertGreater(window.screen_view.lit_pixel_count(), 0)
        self.assertFalse(window.running)

    # @intent:test_case 存在しないROMやサイズ超過のROMはダイアログで報告され、実行は開始されません。
    def test_open_rom_reports_failures(self):
        import tempfile
        with tempfile.TemporaryDirectory() as tmp:
            too_large = os.path.join(tmp, "big.ch8")
            with open(too_large, "wb") as f:
                f.write(bytes(0x1000))
            missing = os.path.join(tmp, "missing.ch8")
            window = MainWindow()
            for path in (missing, too_large):
                with mock.patch("retro_chip8.ui.main_window.QMessageBox.critical") as critical:
                    self.assertFalse(window.open_rom(path))
                critical.assert_called_once()
        self.assertFalse(window.running)

    def test_fatal_instruction_stops_timer(self):
        window = MainWindow()
        window.cpu.load(bytes.fromhex("0123"))
        window.start()
        with mock.patch("retro_chip8.ui.main_window.QMessageBox.critical") as critical:
            window._on_frame()
        self.assertFalse(window.running)
        critical.assert_called_once()
        self.assertTrue(window.cpu.halted)

    def test_apply_config_rebuilds_machine(self):
        window = MainWindow()
        window.apply_config(SystemConfig(quirks=QuirkConfig(shift_copies_vy=True)))
        self.assertTrue(window.cpu.quirks.shift_copies_vy)



class TestApp(unittest.TestCase):
    def test_unreadable_config_exits_with_usage_error(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as cm:
                main(["-c", os.path.join(os.path.dirname(__file__), "missing.yaml")])
        self.assertEqual(cm.exception.code, 2)


if __name__ == '__main__':
    unittest.main()
