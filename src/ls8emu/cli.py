# ls8emu/cli.py
"""
コンソールアプリケーションのエントリポイント。
プログラムファイルをロードし、CPUが停止するまで実行します。
"""
import argparse
import sys
from typing import List, Optional

import yaml

from ls8emu.config.builder import SystemBuilder
from ls8emu.config.loader import ConfigLoader
from ls8emu.config.models import SystemConfig
from ls8emu.core.snapshot import Snapshot
from ls8emu.debugger.debugger import Debugger
from ls8emu.loader.loader import AssemblyLoader, ProgramLoader
from ls8emu.transport.console import StdioConsole

# @intent:constant 終了ステータス。
EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_CPU_FAULT = 2

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ls8", description="LS-8 8-bit CPU emulator")
    parser.add_argument("program", help="program file (.ls8 binary text, or .asm assembly source)")
    parser.add_argument("--config", help="machine configuration YAML file")
    parser.add_argument("--trace", action="store_true", help="print one trace line per executed instruction")
    parser.add_argument("--max-steps", type=int, default=None, help="stop after N instructions")
    parser.add_argument("--interval-ms", type=int, default=None,
                        help="clock interval between instructions (overrides the configuration)")
    return parser

# @intent:utility_function 1ステップ分のトレース行（アドレス、命令バイト、ニーモニック、レジスタ）を整形します。
def format_trace_line(snapshot: Snapshot) -> str:
    address = snapshot.metadata.address if snapshot.metadata.address is not None else 0
    op = snapshot.operation
    hex_bytes = " ".join([op.opcode_hex] + [f"{b:02X}" for b in op.operand_bytes[:max(op.length - 1, 0)]])
    regs = " ".join(f"{v:02X}" for v in snapshot.state.reg)
    return f"{address:02X}: {hex_bytes:<8} {snapshot.metadata.symbol_info or '':<20} | {regs} | FL={snapshot.state.fl:03b}"

def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。終了ステータスを返します。
    """
    args = _build_parser().parse_args(argv)
    console = StdioConsole()

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
        cpu, bus = SystemBuilder().build_system(config, console)
        if args.program.lower().endswith(".asm"):
            cpu.set_symbol_map(AssemblyLoader().load_assembly(args.program, bus))
        else:
            ProgramLoader().load_program(args.program, bus)
    except (OSError, ValueError, IndexError, yaml.YAMLError) as e:
        print(f"ls8: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    interval_ms = args.interval_ms if args.interval_ms is not None else config.clock_interval_ms
    on_step = (lambda snapshot: print(format_trace_line(snapshot))) if args.trace else None

    debugger = Debugger(cpu)
    last = debugger.run(max_steps=args.max_steps, interval=interval_ms / 1000.0, on_step=on_step)

    if last is not None and last.metadata.fault:
        return EXIT_CPU_FAULT
    if not cpu.get_state().halted:
        print(f"ls8: stopped after {debugger.get_step_count()} instructions without HLT", file=sys.stderr)
    return EXIT_OK

if __name__ == '__main__':
    sys.exit(main())
