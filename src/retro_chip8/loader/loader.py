# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
生バイナリ形式（.ch8）のプログラムファイルを読み込み、マシンにロードします。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)


class BinaryLoader:
    """
    ファイル内容をそのまま 0x200 からロードするローダー。
    サイズ超過は Chip8Cpu.load が ProgramTooLargeError として拒否します。
    """
    def load_binary(self, file_path: Union[str, Path], cpu: Chip8Cpu) -> int:
        data = Path(file_path).read_bytes()
        logger.info("Read %d bytes from %s", len(data), file_path)
        cpu.load(data)
        return len(data)
