from dataclasses import dataclass, field

from ls8emu.transport.bus import ADDRESS_SPACE_SIZE

@dataclass
class CpuInitialState:
    pc: int = 0x00
    registers: dict = field(default_factory=dict) # 例: {"r0": 0, "sp": 0xF4}

@dataclass
class SystemConfig:
    memory_size: int = ADDRESS_SPACE_SIZE
    clock_interval_ms: int = 1 # 0ならスリープなしで連続実行
    clear_flags_on_compare: bool = False # Trueの場合CMPの前にFLをクリアする
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
