# tests/debugger/test_debugger.py
"""
Debuggerの実行制御とブレークポイントのテスト。
"""
import pytest

from ls8emu.transport.bus import Bus
from ls8emu.transport.console import BufferConsole
from ls8emu.arch.ls8.cpu import Ls8Cpu
from ls8emu.debugger.debugger import (
    Debugger,
    BreakpointCondition,
    BreakpointConditionType,
    DEFAULT_HISTORY_LIMIT,
)

# LDI R0,8 / LDI R1,9 / MUL R0,R1 / PRN R0 / HLT
MULT_PROGRAM = [0x99, 0x00, 0x08, 0x99, 0x01, 0x09, 0xAA, 0x00, 0x01, 0x43, 0x00, 0x01]
# LDI R0,3 / JMP R0  (0x03で無限ループ)
LOOP_PROGRAM = [0x99, 0x00, 0x03, 0x50, 0x00]

def make_debugger(program, **kwargs):
    bus = Bus()
    console = BufferConsole()
    cpu = Ls8Cpu(bus, console)
    for addr, byte in enumerate(program):
        cpu.poke(addr, byte)
    return Debugger(cpu, **kwargs), cpu, console

# @intent:test_suite クロックとしての実行ループと各種ブレークポイントの停止条件を検証します。
class TestDebuggerRun:
    def test_run_until_halt(self):
        debugger, cpu, console = make_debugger(MULT_PROGRAM)
        last = debugger.run()
        assert console.values == [72]
        assert cpu.get_state().halted
        assert last.operation.mnemonic == "HLT"
        assert len(debugger.get_history()) == 5
        assert not debugger.is_running()

    def test_run_on_halted_cpu_does_nothing(self):
        debugger, cpu, _ = make_debugger([0x01])
        debugger.run()
        history = debugger.get_history()
        debugger.run()
        assert debugger.get_history() == history

    def test_max_steps(self):
        debugger, cpu, console = make_debugger(MULT_PROGRAM)
        debugger.run(max_steps=3)
        assert len(debugger.get_history()) == 3
        assert cpu.get_state().pc == 0x09
        assert not cpu.get_state().halted
        assert console.values == []

    def test_fault_stops_run(self):
        debugger, cpu, console = make_debugger([0xFF])
        last = debugger.run()
        assert cpu.get_state().halted
        assert last.metadata.fault.startswith("Unknown opcode")
        assert console.messages == [last.metadata.fault + " at PC 0x00"]

    def test_on_step_callback_and_stop(self):
        debugger, _, _ = make_debugger(MULT_PROGRAM)
        seen = []

        def on_step(snapshot):
            seen.append(snapshot.metadata.address)
            if len(seen) == 2:
                debugger.stop()

        debugger.run(on_step=on_step)
        assert seen == [0x00, 0x03]
        assert len(debugger.get_history()) == 2

class TestBreakpoints:
    def test_pc_breakpoint_stops_before_execution_and_resumes(self, capsys):
        debugger, cpu, console = make_debugger(MULT_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x06))

        debugger.run()
        assert cpu.get_state().pc == 0x06
        assert cpu.get_state().reg[0] == 8
        assert "Breakpoint hit at PC: 0x06" in capsys.readouterr().out

        debugger.run()
        assert cpu.get_state().halted
        assert console.values == [72]

    def test_register_value_breakpoint(self):
        debugger, _, _ = make_debugger(MULT_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(
            BreakpointConditionType.REGISTER_VALUE, value=72, register_name="R0"))
        last = debugger.run()
        assert last.operation.mnemonic == "MUL"

    def test_register_change_breakpoint(self):
        debugger, _, _ = make_debugger(MULT_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(
            BreakpointConditionType.REGISTER_CHANGE, register_name="R1"))
        last = debugger.run()
        assert last.metadata.address == 0x03

    def test_memory_write_breakpoint_on_push(self):
        # LDI R0,5 / PUSH R0 / HLT
        debugger, _, _ = make_debugger([0x99, 0x00, 0x05, 0x4D, 0x00, 0x01])
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0xF3))
        last = debugger.run()
        assert last.operation.mnemonic == "PUSH"
        assert last.state.sp == 0xF3

    def test_memory_read_breakpoint_on_fetch(self):
        debugger, _, console = make_debugger(MULT_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_READ, address=0x09))
        last = debugger.run()
        assert last.operation.mnemonic == "PRN"
        assert console.values == [72]

    def test_disabled_breakpoint_is_ignored(self):
        debugger, cpu, _ = make_debugger(MULT_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x06, enabled=False))
        debugger.run()
        assert cpu.get_state().halted

    def test_breakpoint_management(self):
        debugger, _, _ = make_debugger(MULT_PROGRAM)
        bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x03)
        debugger.add_breakpoint(bp)
        debugger.add_breakpoint(bp)
        assert debugger.get_breakpoints() == [bp]

        moved = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x09)
        debugger.update_breakpoint(bp, moved)
        assert debugger.get_breakpoints() == [moved]

        debugger.remove_breakpoint(moved)
        assert debugger.get_breakpoints() == []

    def test_step_instruction_records_history(self):
        debugger, _, _ = make_debugger(MULT_PROGRAM)
        snapshot = debugger.step_instruction()
        assert debugger.get_last_snapshot() is snapshot
        assert debugger.get_history() == [snapshot]

    # @intent:test_case_resume 再開時の1命令もmax_stepsと他のブレークポイント判定の対象になることを検証します。
    def test_resume_step_respects_max_steps_zero(self):
        debugger, cpu, _ = make_debugger(MULT_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x00))
        assert debugger.run(max_steps=0) is None
        assert debugger.get_step_count() == 0
        assert cpu.get_state().pc == 0x00

    def test_resume_step_checks_other_breakpoints(self):
        debugger, cpu, console = make_debugger(MULT_PROGRAM)
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x06))
        debugger.add_breakpoint(BreakpointCondition(
            BreakpointConditionType.REGISTER_VALUE, value=72, register_name="R0"))

        debugger.run()
        assert cpu.get_state().pc == 0x06

        last = debugger.run()
        assert last.operation.mnemonic == "MUL"
        assert cpu.get_state().pc == 0x09
        assert console.values == []

class TestHistory:
    # @intent:test_case_bounded 無限ループを長時間実行しても履歴が上限を超えて増えないことを検証します。
    def test_history_is_bounded_by_default(self):
        debugger, cpu, _ = make_debugger(LOOP_PROGRAM)
        last = debugger.run(max_steps=DEFAULT_HISTORY_LIMIT * 5)

        history = debugger.get_history()
        assert len(history) == DEFAULT_HISTORY_LIMIT
        assert history[-1] is last
        assert debugger.get_step_count() == DEFAULT_HISTORY_LIMIT * 5
        assert not cpu.get_state().halted

    def test_custom_history_limit_keeps_latest(self):
        debugger, _, _ = make_debugger(LOOP_PROGRAM, history_limit=3)
        debugger.run(max_steps=100)

        history = debugger.get_history()
        assert len(history) == 3
        assert all(s.operation.mnemonic == "JMP" for s in history)
        assert debugger.get_step_count() == 100
