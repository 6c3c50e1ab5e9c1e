import re
from typing import Optional, Tuple

from ls8emu.transport.bus import Bus, RAM
from ls8emu.transport.console import Console
from ls8emu.arch.ls8.cpu import Ls8Cpu
from ls8emu.arch.ls8.state import REGISTER_COUNT
from .models import SystemConfig, CpuInitialState

_REGISTER_NAME_RE = re.compile(r'^r([0-9]+)$')

def _check_byte(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"initial_state {name} must be within 0-255: {value}")
    return value

# @intent:responsibility システム構成（Config）に基づいて、RAM、Bus、CPUを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig, console: Optional[Console] = None) -> Tuple[Ls8Cpu, Bus]:
        bus = Bus(RAM())

        cpu = Ls8Cpu(bus, console=console, clear_flags_on_compare=config.clear_flags_on_compare)

        # 初期状態の適用
        self.apply_initial_state(cpu, config.initial_state)

        return cpu, bus

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    # @intent:pre-condition PCとレジスタ値は0-255の範囲であること（範囲外はValueError、切り詰めは行いません）。
    def apply_initial_state(self, cpu: Ls8Cpu, config_state: CpuInitialState) -> None:
        """
        CPUをリセットし、Configから指定された初期値（PC、R0-R7、SP）を適用します。
        """
        cpu.reset()
        state = cpu.get_state()
        state.pc = _check_byte("pc", config_state.pc)

        for reg_name, value in config_state.registers.items():
            _check_byte(reg_name, value)
            if reg_name == "sp":
                state.sp = value
                continue
            match = _REGISTER_NAME_RE.match(reg_name)
            if not match or int(match.group(1)) >= REGISTER_COUNT:
                raise ValueError(f"Unknown register in initial_state: {reg_name}")
            state.set_reg(int(match.group(1)), value)
