# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import copy
import logging
from abc import ABC, abstractmethod

from retro_chip8.common.types import RegisterMap
from retro_chip8.core.errors import Chip8Error, MachineHaltedError
from retro_chip8.core.snapshot import Metadata, Operation, Snapshot
from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import Bus

logger = logging.getLogger(__name__)


# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._instruction_count: int = 0
        self._halted: bool = False
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。致命的エラーによる停止も解除されます。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._instruction_count = 0
        self._halted = False
        self._bus.get_and_clear_activity_log()

    def get_state(self) -> CpuState:
        """
        現在のCPUの状態を返します。返されるオブジェクトは内部状態そのものです。
        """
        return self._state

    @property
    def halted(self) -> bool:
        """致命的エラーにより停止している場合にTrue。"""
        return self._halted

    @property
    def instruction_count(self) -> int:
        return self._instruction_count

    # @intent:responsibility メモリから次の命令ワードをフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチした命令ワードを解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, opcode: int, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ログクリア→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    # @intent:post-condition 致命的エラー（Chip8Error）は停止フラグを立てた上で呼び出し元へ送出されます。
    def step(self) -> Snapshot:
        if self._halted:
            raise MachineHaltedError("Machine is halted after a fatal error; call reset() first.")

        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        try:
            opcode = self._fetch()
            operation = self._decode(opcode)
            self._update_pc(operation)
            self._execute(opcode, operation)
        except Chip8Error as e:
            self._halted = True
            logger.error("Fatal error at %#05x: %s", initial_pc, e)
            raise

        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 命令実行前にPCを更新します。デフォルトは命令長分進める。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    # @intent:responsibility 実行結果からSnapshotオブジェクトを生成します。
    # @intent:rationale 状態は可変のため、Snapshotにはdeepcopyを格納して以降の実行から切り離します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._instruction_count += 1

        symbol_info = operation.mnemonic
        if operation.operands:
            symbol_info += " " + ", ".join(operation.operands)

        return Snapshot(
            state=copy.deepcopy(self._state),
            operation=operation,
            metadata=Metadata(
                instruction_count=self._instruction_count,
                address=initial_pc,
                symbol_info=symbol_info,
            ),
            bus_activity=bus_activity,
        )

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass
