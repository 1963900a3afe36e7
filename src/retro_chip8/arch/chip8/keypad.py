# src/retro_chip8/arch/chip8/keypad.py
"""
16キーのキーパッド状態。
ホスト側の入力層が押下状態を設定し、CPUは読み取るのみです。
"""
from typing import List, Optional

KEY_COUNT = 16


# @intent:responsibility キー 0x0-0xF の瞬間的な押下状態を保持します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    # @intent:pre-condition key は 0..15 であること。範囲外は ValueError。
    def _check(self, key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is not in range 0x0-0xF.")

    def set_key(self, key: int, pressed: bool) -> None:
        self._check(key)
        self._keys[key] = bool(pressed)

    def press(self, key: int) -> None:
        self.set_key(key, True)

    def release(self, key: int) -> None:
        self.set_key(key, False)

    def is_pressed(self, key: int) -> bool:
        self._check(key)
        return self._keys[key]

    # @intent:responsibility 押下中のキーのうち最も小さい番号を返します。押下なしの場合はNone。
    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def clear(self) -> None:
        self._keys = [False] * KEY_COUNT
