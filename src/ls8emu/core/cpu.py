# ls8emu/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクル（フェッチ→デコード→実行→PC更新）の駆動に関する
抽象化を提供します。具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import copy
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Tuple

from ls8emu.transport.bus import Bus
from ls8emu.transport.console import Console, StdioConsole
from ls8emu.core.errors import CpuFault
from ls8emu.core.snapshot import Snapshot, Operation, Metadata
from ls8emu.core.state import CpuState
from ls8emu.common.types import SymbolMap, RegisterLayoutInfo

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus, console: Optional[Console] = None):
        self._bus = bus
        self._console: Console = console if console is not None else StdioConsole()
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        self._symbol_map: SymbolMap = {}
        self._reverse_symbol_map: Dict[int, str] = {}
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility シンボルマップを設定します。
    def set_symbol_map(self, symbol_map: SymbolMap) -> None:
        """
        シンボルマップ（ラベル名とアドレスの対応表）を設定します。
        """
        self._symbol_map = symbol_map
        self._reverse_symbol_map = {addr: name for name, addr in symbol_map.items()}

    def get_symbol_map(self) -> SymbolMap:
        return self._symbol_map

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        """
        現在のCPUの状態（レジスタ値など）を返します。
        """
        return self._state

    # @intent:responsibility 保存された状態でCPUの状態を置き換えます。
    def restore_state(self, state: CpuState) -> None:
        self._state = copy.deepcopy(state)

    # @intent:responsibility 現在のPCから命令（オペコード）をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチしたオペコードを解析し、Operationオブジェクトに変換します。
    # @intent:post-condition 分岐テーブルに存在しないオペコードの場合はCpuFaultを送出します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    # @intent:return 命令がPCを明示的に指定する場合（ジャンプ等）はその値、そうでなければNone。
    @abstractmethod
    def _execute(self, operation: Operation) -> Optional[int]:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ログクリア→HALT判定→フェッチ→デコード→実行→PC更新→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUとバスの状態を含むSnapshotオブジェクトを返します。
        フォルトが発生した場合は診断メッセージを出力してCPUを停止状態にします（例外は送出しません）。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        # 2. HALT判定 (Hook)
        halt_snapshot = self._handle_halt(initial_pc)
        if halt_snapshot:
            return halt_snapshot

        # 3. フェッチ
        opcode = self._fetch()

        # 4. デコード
        try:
            operation = self._decode(opcode)
        except CpuFault as fault:
            return self._handle_fault(initial_pc, self._unknown_operation(opcode), fault)

        # 5. 実行
        try:
            next_pc = self._execute(operation)
        except CpuFault as fault:
            return self._handle_fault(initial_pc, operation, fault)

        # 6. PC更新 (Hook)
        self._update_pc(operation, next_pc)

        # 7. Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility HALT状態の場合の処理を行います。
    # @intent:return HALT中であればその状態のSnapshot、そうでなければNone。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        return None

    # @intent:responsibility 命令実行後にPCを更新します。
    def _update_pc(self, operation: Operation, next_pc: Optional[int]) -> None:
        if next_pc is not None:
            self._state.pc = next_pc
        else:
            self._state.pc = self._state.pc + operation.length

    # @intent:responsibility デコードできなかったオペコードを表すOperationを生成します。
    def _unknown_operation(self, opcode: int) -> Operation:
        return Operation(opcode_hex=f"{opcode:02X}", mnemonic="UNKNOWN", operands=[f"${opcode:02X}"], length=1)

    # @intent:responsibility フォルトを診断チャネルへ報告し、CPUを停止させます。
    # @intent:post-condition PCはフォルトを起こした命令を指したまま残ります。
    def _handle_fault(self, initial_pc: int, operation: Operation, fault: CpuFault) -> Snapshot:
        message = str(fault)
        self._console.report(f"{message} at PC {initial_pc:#04x}")
        self._state.halted = True
        return self._create_snapshot(initial_pc, operation, fault=message)

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation, fault: Optional[str] = None) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._cycle_count += operation.cycle_count

        symbol_label = self._reverse_symbol_map.get(initial_pc, "")
        symbol_info = f"{symbol_label}: " if symbol_label else ""
        symbol_info += f"{operation.mnemonic}"
        if operation.operands:
            symbol_info += " " + ", ".join(operation.operands)

        # 状態はコピーして保持する（以降のステップでSnapshot内の値が変化しないように）
        return Snapshot(
            state=copy.deepcopy(self._state),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, address=initial_pc, symbol_info=symbol_info, fault=fault),
            bus_activity=bus_activity
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        トレース出力がCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        """
        現在のフラグの各ビットの状態を辞書形式で返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_bytes, mnemonic) のタプルリストを返す。
        """
        pass
