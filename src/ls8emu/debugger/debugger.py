# ls8emu/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行ループ（クロック）を駆動し、CPUが停止するか、
ユーザーが指定した条件（ブレークポイント）が成立するまで命令を1つずつ実行する責務を負います。
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, List, Optional
import time

from ls8emu.core.cpu import AbstractCpu
from ls8emu.core.snapshot import Snapshot, BusAccessType

# @intent:constant 保持する実行履歴の既定の上限。古いSnapshotから破棄されます。
DEFAULT_HISTORY_LIMIT = 1000

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_name は get_register_map() のキー（"R0"-"R7", "SP", "PC", "IR", "FL"）で指定します。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, cpu: AbstractCpu, history_limit: Optional[int] = DEFAULT_HISTORY_LIMIT):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers = self._cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        # history_limit=None の場合は無制限に保持します
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)
        self._step_count: int = 0

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    # @intent:responsibility このDebuggerが実行した命令の総数を返します（履歴の上限とは無関係）。
    def get_step_count(self) -> int:
        return self._step_count

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def is_running(self) -> bool:
        return self._running

    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        """
        Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        registers = self._cpu.get_register_map()

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name in registers and registers[bp.register_name] == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                if bp.register_name in registers and bp.register_name in self._previous_registers:
                    if registers[bp.register_name] != self._previous_registers[bp.register_name]:
                        return True
        return False

    def _pc_breakpoint_hit(self, pc: int) -> bool:
        for bp in self._breakpoints:
            if bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc:
                return True
        return False

    def step_instruction(self) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshotを返します。
        """
        self._previous_registers = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot
        self._history.append(snapshot)
        self._step_count += 1
        return snapshot

    # @intent:responsibility CPUが停止するまで一定間隔で step を繰り返すクロックとして動作します。
    # @intent:rationale interval はあくまで人間が観測するためのペーシングであり、0なら待ち時間なしで実行します。
    def run(self, max_steps: Optional[int] = None, interval: float = 0.0,
            on_step: Optional[Callable[[Snapshot], None]] = None) -> Optional[Snapshot]:
        """
        CPUがHLT/フォルトで停止するか、ブレークポイントにヒットするか、stop()が呼ばれるか、
        max_steps に達するまで実行を継続します。最後に実行したステップのSnapshotを返します。
        on_step が指定された場合、各ステップのSnapshotを引数に呼び出します（トレース出力用）。
        """
        self._running = True
        steps = 0
        # 現在のPCにあるブレークポイントからは再開できるよう、最初の1命令だけはPC_MATCHを無視する
        resume_pc: Optional[int] = self._cpu.get_state().pc

        while self._running:
            if self._cpu.get_state().halted:
                break
            if max_steps is not None and steps >= max_steps:
                break

            current_pc = self._cpu.get_state().pc
            if current_pc != resume_pc and self._pc_breakpoint_hit(current_pc):
                print(f"Breakpoint hit at PC: {current_pc:#04x}")
                break

            resume_pc = None
            snapshot = self.step_instruction()
            steps += 1
            if on_step:
                on_step(snapshot)

            if self._check_other_breakpoints(snapshot):
                print(f"Breakpoint hit at PC: {snapshot.state.pc:#04x}")
                break

            if interval > 0:
                time.sleep(interval)

        self._running = False
        return self._last_snapshot

    # @intent:responsibility 実行ループを停止します（HLTと同等の効果をループ側から与える）。
    def stop(self) -> None:
        self._running = False
