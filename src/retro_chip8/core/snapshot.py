# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str  # 例: "6A2F"
    mnemonic: str  # 例: "LD"
    operands: List[str] = field(default_factory=list)  # 例: ["VA", "#2F"]
    length: int = 2  # 命令のバイト長


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計命令数、命令の先頭アドレスなど）を記録するデータクラス。
    """
    instruction_count: int
    address: int = 0
    symbol_info: Optional[str] = None  # 例: "LD VA, #2F"


# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令実行後の、CPUとバスの状態を記録した不変のデータ構造。
    state は実行後の状態のコピーであり、以降の step() の影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
