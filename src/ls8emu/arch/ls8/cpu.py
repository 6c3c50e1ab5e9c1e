# src/ls8emu/arch/ls8/cpu.py
"""
LS-8 CPUエミュレーションの中心モジュール（ディスパッチエンジン）。
"""
import copy
from typing import Dict, List, Optional, Tuple

from ls8emu.core.snapshot import Operation, Metadata, Snapshot
from ls8emu.common.types import RegisterLayoutInfo, RegisterInfo
from ls8emu.core.cpu import AbstractCpu
from ls8emu.arch.ls8.state import Ls8CpuState, REGISTER_COUNT
from ls8emu.transport.bus import Bus
from ls8emu.transport.console import Console
from ls8emu.arch.ls8.instructions import decode_opcode, execute_instruction, ExecutionContext
from ls8emu.arch.ls8 import disassembler

# @intent:responsibility LS-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行、PC更新）を提供します。
class Ls8Cpu(AbstractCpu):
    """
    LS-8 CPUをエミュレートするクラス。

    1回の step() でPCの命令をフェッチし、分岐テーブルのハンドラを実行します。
    ハンドラがPCを返さなかった場合、PCはオペコード上位2ビットのオペランド数に従って前進します。
    """
    def __init__(self, bus: Bus, console: Optional[Console] = None, clear_flags_on_compare: bool = False):
        super().__init__(bus, console)
        self._clear_flags_on_compare = clear_flags_on_compare

    def _create_initial_state(self) -> Ls8CpuState:
        return Ls8CpuState()

    # @intent:responsibility プログラムロード用に、指定アドレスへ1バイト書き込みます。
    def poke(self, address: int, value: int) -> None:
        self._bus.write(address, value)

    # @intent:responsibility PCのバイトをIRへフェッチします。
    def _fetch(self) -> int:
        self._state.ir = self._bus.read(self._state.pc)
        return self._state.ir

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._bus, self._state.pc)

    def _execute(self, operation: Operation) -> Optional[int]:
        ctx = ExecutionContext(
            state=self._state,
            bus=self._bus,
            console=self._console,
            clear_flags_on_compare=self._clear_flags_on_compare,
        )
        return execute_instruction(operation, ctx)

    # @intent:responsibility ジャンプ先があればそれを、なければ 1 + オペランド数 だけPCを進めます。
    # @intent:rationale アドレス空間は8ビットのため、PCは0xFFで折り返します。
    def _update_pc(self, operation: Operation, next_pc: Optional[int]) -> None:
        if next_pc is not None:
            self._state.pc = next_pc & 0xFF
        else:
            self._state.pc = (self._state.pc + operation.length) & 0xFF

    # @intent:responsibility HALT状態の場合、フェッチを行わずに停止中のSnapshotを返します。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        if not self._state.halted:
            return None
        operation = Operation(opcode_hex=f"{self._state.ir:02X}", mnemonic="HLT (suspended)", length=0)
        return Snapshot(
            state=copy.deepcopy(self._state),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, address=current_pc, symbol_info=f"PC: {current_pc:#04x} -> HLT (suspended)"),
            bus_activity=[],
        )

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"R{i}": s.reg[i] for i in range(REGISTER_COUNT)}
        regs.update({"SP": s.sp, "PC": s.pc, "IR": s.ir, "FL": s.fl})
        return regs

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"R{i}", 8) for i in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Special", [
                RegisterInfo("PC", 8), RegisterInfo("IR", 8), RegisterInfo("FL", 8), RegisterInfo("SP", 8)
            ]),
        ]

    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {"E": s.flag_e, "G": s.flag_g, "L": s.flag_l}

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
