import yaml
from typing import Dict, Any

from ls8emu.transport.bus import ADDRESS_SPACE_SIZE
from .models import SystemConfig, CpuInitialState

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a mapping.")

        memory_size = self._parse_int(data.get("memory_size", ADDRESS_SPACE_SIZE))
        if memory_size != ADDRESS_SPACE_SIZE:
            raise ValueError(f"Unsupported memory_size {memory_size}: LS-8 has a fixed {ADDRESS_SPACE_SIZE}-byte address space.")

        clock_interval_ms = self._parse_int(data.get("clock_interval_ms", 1))
        if clock_interval_ms < 0:
            raise ValueError(f"clock_interval_ms must not be negative: {clock_interval_ms}")

        clear_flags = data.get("clear_flags_on_compare", False)
        if not isinstance(clear_flags, bool):
            raise ValueError(f"clear_flags_on_compare must be a boolean: {clear_flags}")

        # Parse Initial State
        initial_state_data = self._parse_mapping("initial_state", data.get("initial_state"))
        registers_data = self._parse_mapping("initial_state.registers", initial_state_data.get("registers"))
        registers = {
            str(name).lower(): self._parse_byte(f"register {name}", value)
            for name, value in registers_data.items()
        }
        initial_state = CpuInitialState(
            pc=self._parse_byte("pc", initial_state_data.get("pc", 0)),
            registers=registers
        )

        return SystemConfig(
            memory_size=memory_size,
            clock_interval_ms=clock_interval_ms,
            clear_flags_on_compare=clear_flags,
            initial_state=initial_state
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            try:
                if lowered.startswith("0x"):
                    return int(lowered, 16)
                if lowered.startswith("0b"):
                    return int(lowered, 2)
                return int(lowered)
            except ValueError:
                pass
        raise ValueError(f"Invalid integer format: {value}")

    # @intent:utility_function 省略可能なマッピング項目を検証します。未指定(None)は空のマッピングとして扱います。
    def _parse_mapping(self, key: str, value: Any) -> Dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError(f"{key} must be a mapping: {value}")
        return value

    def _parse_byte(self, name: str, value: Any) -> int:
        number = self._parse_int(value)
        if not 0 <= number <= 0xFF:
            raise ValueError(f"initial_state {name} must be within 0-255: {number}")
        return number
