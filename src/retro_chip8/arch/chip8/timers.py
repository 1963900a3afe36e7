# src/retro_chip8/arch/chip8/timers.py
"""
遅延タイマー／サウンドタイマー。
"""


# @intent:responsibility 8bitのカウントダウンタイマー。外部から一定周期（60Hz）で decrement() されます。
# @intent:invariant 値は常に 0..255 の範囲にあり、0 からの減算は 0 のまま（ラップしない）。
class CountdownTimer:
    def __init__(self, value: int = 0):
        self._value = 0
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self._value = value & 0xFF

    def decrement(self) -> None:
        if self._value > 0:
            self._value -= 1

    @property
    def active(self) -> bool:
        return self._value > 0

    def __repr__(self) -> str:
        return f"CountdownTimer({self._value})"

    def __eq__(self, other) -> bool:
        if isinstance(other, CountdownTimer):
            return self._value == other._value
        return NotImplemented
