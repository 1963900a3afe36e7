# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
コマンドライン引数を解析し、メインウィンドウを起動します。
"""
import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import SystemConfig
from retro_chip8.core.errors import ConfigError
from .main_window import MainWindow


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 virtual machine")
    parser.add_argument("rom", nargs="?", help="CHIP-8 program file to run")
    parser.add_argument("-c", "--config", help="YAML file with quirk and timing settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    except (OSError, ConfigError) as e:
        parser.error(f"cannot load config: {e}")

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config)
    main_win.show()
    if args.rom:
        main_win.open_rom(args.rom)
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
