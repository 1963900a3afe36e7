# src/retro_chip8/arch/chip8/decoder.py
"""
命令ワードのビットフィールド分解。

16bitの命令ワード（ビッグエンディアンでフェッチ済みの整数値）から、
各命令ファミリが使用する重複したビットフィールドを取り出します。
分解は純粋なシフトとマスクのみで行われ、全ての 0x0000-0xFFFF に対して失敗しません。
命令として有効かどうかはディスパッチ時に判定されます。
"""
from typing import NamedTuple


# @intent:data_structure デコード済みの命令フィールド。不変。
class Instruction(NamedTuple):
    word: int
    op: int   # bits 12-15: 命令ファミリ
    x: int    # bits 8-11: レジスタ番号
    y: int    # bits 4-7: レジスタ番号
    n: int    # bits 0-3: 4bit即値
    nn: int   # bits 0-7: 8bit即値
    nnn: int  # bits 0-11: 12bitアドレス/即値


# @intent:responsibility 命令ワードを各フィールドに分解します。
# @intent:pre-condition word は 16bit に収まる値であること（上位ビットは切り捨てられます）。
def decode(word: int) -> Instruction:
    word &= 0xFFFF
    return Instruction(
        word=word,
        op=(word >> 12) & 0xF,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF,
    )
