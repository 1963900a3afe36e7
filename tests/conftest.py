# tests/conftest.py
"""
テスト共通のフィクスチャ。
"""
import random

import pytest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import QuirkConfig


def assemble(*words: int) -> bytes:
    """16bit命令ワード列をビッグエンディアンのバイト列に変換します。"""
    return b"".join(word.to_bytes(2, "big") for word in words)


# @intent:test_fixture 命令ワード列をロード済みのマシンを生成するファクトリ。
@pytest.fixture
def machine():
    def _make(*words: int, quirks: QuirkConfig = None, seed: int = 1234) -> Chip8Cpu:
        cpu = Chip8Cpu(quirks=quirks, rng=random.Random(seed))
        cpu.load(assemble(*words))
        return cpu
    return _make


@pytest.fixture(name="assemble")
def assemble_fixture():
    return assemble
