"""
CHIP-8命令セット実装パッケージ。
"""
from .maps import FAMILY_MAP, decode_operation, execute_instruction
