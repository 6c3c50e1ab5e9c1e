# tests/arch/ls8/test_ls8_disassembler.py
"""
ls8emu.arch.ls8.disassemblerモジュールの単体テスト。
"""
from ls8emu.transport.bus import Bus
from ls8emu.transport.console import BufferConsole
from ls8emu.arch.ls8.cpu import Ls8Cpu
from ls8emu.arch.ls8 import opcodes as op

# @intent:test_suite 逆アセンブルがバスログを汚さず、命令長に従って進むことを検証します。

def _make_cpu(program):
    bus = Bus()
    cpu = Ls8Cpu(bus, console=BufferConsole())
    for i, b in enumerate(program):
        cpu.poke(i, b)
    bus.get_and_clear_activity_log()
    return cpu, bus

def test_disassemble_program():
    cpu, bus = _make_cpu([op.LDI, 0, 8, op.PRN, 0, op.HLT])
    listing = cpu.disassemble(0x00, 6)
    assert listing == [
        (0x00, "99 00 08", "LDI R0, 8"),
        (0x03, "43 00", "PRN R0"),
        (0x05, "01", "HLT"),
    ]
    assert bus.get_and_clear_activity_log() == []

def test_disassemble_unknown_byte():
    cpu, _ = _make_cpu([0xFF, op.NOP])
    listing = cpu.disassemble(0x00, 2)
    assert listing == [
        (0x00, "FF", "DB $FF"),
        (0x01, "00", "NOP"),
    ]

def test_disassemble_stops_at_end_of_memory():
    cpu, _ = _make_cpu([])
    listing = cpu.disassemble(0xFE, 10)
    assert [addr for addr, _, _ in listing] == [0xFE, 0xFF]
