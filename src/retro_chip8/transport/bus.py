# retro_chip8/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8 の 4KB アドレス空間をデバイス（通常は RAM 1つ）へ振り分けます。
命令実行中の読み書きは記録され、ステップ毎の Snapshot に添付されます。
フォントやプログラムの一括転送は命令実行ではないため記録しません。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple


class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"


# @intent:responsibility 1回のバスアクセス（アドレス、8bitデータ、種別）を記録します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType


# @intent:responsibility バスに接続されるデバイスのインターフェース。アドレスはデバイス内オフセットです。
class Device(ABC):
    @abstractmethod
    def read(self, offset: int) -> int:
        pass

    @abstractmethod
    def write(self, offset: int, data: int) -> None:
        pass

    @abstractmethod
    def get_size(self) -> int:
        pass

    # @intent:responsibility 連続領域をまとめて書き込みます。既定では1バイトずつwriteします。
    def load_data(self, offset: int, data: bytes) -> None:
        for index, value in enumerate(data):
            self.write(offset + index, value)


class RAM(Device):
    """
    バイト単位で読み書きできるメモリ。生成時はゼロで埋められています。
    """
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)

    def _check(self, offset: int) -> None:
        if not 0 <= offset < len(self._memory):
            raise IndexError(f"Address {offset} out of bounds for RAM of size {len(self._memory)}.")

    def read(self, offset: int) -> int:
        self._check(offset)
        return self._memory[offset]

    # @intent:pre-condition data は 0-255 の値であること。
    def write(self, offset: int, data: int) -> None:
        self._check(offset)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[offset] = data

    def load_data(self, offset: int, data: bytes) -> None:
        end = offset + len(data)
        if offset < 0 or end > len(self._memory):
            raise IndexError(f"Block {offset}..{end} out of bounds for RAM of size {len(self._memory)}.")
        self._memory[offset:end] = data

    def clear(self) -> None:
        self._memory[:] = bytes(len(self._memory))

    def get_size(self) -> int:
        return len(self._memory)


class MappedRegion(NamedTuple):
    start: int
    end: int  # inclusive
    device: Device

    def contains(self, address: int) -> bool:
        return self.start <= address <= self.end


# @intent:responsibility アドレスをデバイスへディスパッチし、命令実行中のアクセスを記録します。
class Bus:
    def __init__(self):
        self._regions: List[MappedRegion] = []
        self._activity: List[BusAccess] = []

    # @intent:pre-condition 0 <= start_address <= end_address で、範囲の大きさがデバイスのサイズと一致すること。
    # @intent:rationale 範囲の重複は検査しません。先に登録された領域が優先されます。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")
        span = end_address - start_address + 1
        if device.get_size() != span:
            raise ValueError(
                f"{type(device).__name__} of {device.get_size()} bytes cannot be mapped to a {span} byte range."
            )
        self._regions.append(MappedRegion(start_address, end_address, device))

    def _resolve(self, address: int) -> MappedRegion:
        for region in self._regions:
            if region.contains(address):
                return region
        raise IndexError(f"Address {address:#06x} not mapped to any device.")

    def read(self, address: int) -> int:
        region = self._resolve(address)
        data = region.device.read(address - region.start)
        self._activity.append(BusAccess(address, data, BusAccessType.READ))
        return data

    # @intent:responsibility 記録を残さずに読み出します（UI・テストからの参照用）。
    def peek(self, address: int) -> int:
        region = self._resolve(address)
        return region.device.read(address - region.start)

    def write(self, address: int, data: int) -> None:
        region = self._resolve(address)
        region.device.write(address - region.start, data)
        self._activity.append(BusAccess(address, data, BusAccessType.WRITE))

    # @intent:responsibility バイト列を記録なしで一括転送します。
    # @intent:pre-condition 転送範囲全体が単一の領域に収まること。
    def load_block(self, address: int, data: bytes) -> None:
        region = self._resolve(address)
        if address + len(data) - 1 > region.end:
            raise IndexError(
                f"Block {address:#06x}+{len(data)} crosses the end of the region at {region.end:#06x}."
            )
        region.device.load_data(address - region.start, bytes(data))

    # @intent:responsibility 接続された全RAMをゼロクリアします。
    def clear_memory(self) -> None:
        for region in self._regions:
            if isinstance(region.device, RAM):
                region.device.clear()

    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log, self._activity = self._activity, []
        return log
