# ls8emu/loader/assembler.py
"""
LS-8用の簡易2パスアセンブラ。
AssemblyLoaderから利用されます。

書式:
    label:  MNEMONIC operand, operand   ; comment
    ORG n   ; 以降の配置アドレスを変更
    DB n, n ; 生バイトを配置
"""
import re
from typing import Tuple, List, Optional

from ls8emu.common.types import SymbolMap
from ls8emu.arch.ls8.opcodes import OPCODES, LDI, operand_count, instruction_length
from ls8emu.arch.ls8.state import REGISTER_COUNT

_REGISTER_RE = re.compile(r'^R([0-9]+)$', re.IGNORECASE)

# @intent:responsibility LS-8アセンブリソースをバイナリ（アドレスと値の組）に変換します。
class Ls8Assembler:
    def assemble(self, lines: List[str]) -> Tuple[SymbolMap, List[Tuple[int, int]]]:
        """
        アセンブリソースを行単位で解析し、シンボルマップとバイナリデータを返します。
        """
        parsed_lines = [self._parse_line(line) for line in lines]
        symbol_map = self._collect_symbols(parsed_lines)
        return symbol_map, self._emit(parsed_lines, symbol_map)

    def _parse_line(self, line: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        line = line.split(';')[0].strip()
        if not line:
            return None, None, None

        label = None
        if ':' in line:
            label, rest = line.split(':', 1)
            label = label.strip()
            line = rest.strip()

        if not line:
            return label, None, None

        parts = re.split(r'\s+', line, maxsplit=1)
        mnemonic = parts[0].upper()
        operands = parts[1] if len(parts) > 1 else ""
        return label, mnemonic, operands

    def _split_operands(self, operands: str) -> List[str]:
        return [o.strip() for o in operands.split(',') if o.strip()]

    # @intent:utility_function 多様な数値表現（$, 0x, 0b）およびラベル名を数値に変換します。
    def _parse_val(self, val_str: str, symbol_map: SymbolMap) -> int:
        val_str = val_str.strip()
        if val_str.startswith('$'):
            return int(val_str[1:], 16)
        lowered = val_str.lower()
        try:
            if lowered.startswith('0x'):
                return int(lowered, 16)
            if lowered.startswith('0b'):
                return int(lowered, 2)
            return int(val_str)
        except ValueError:
            if val_str in symbol_map:
                return symbol_map[val_str]
            raise ValueError(f"Undefined symbol or invalid value: {val_str}")

    def _parse_byte(self, val_str: str, symbol_map: SymbolMap) -> int:
        value = self._parse_val(val_str, symbol_map)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Value out of 8-bit range: {val_str}")
        return value

    def _parse_register(self, val_str: str) -> int:
        match = _REGISTER_RE.match(val_str.strip())
        if not match or int(match.group(1)) >= REGISTER_COUNT:
            raise ValueError(f"Invalid register: {val_str}")
        return int(match.group(1))

    # First pass: ラベルのアドレスを確定する
    def _collect_symbols(self, parsed_lines) -> SymbolMap:
        symbol_map: SymbolMap = {}
        temp_pc = 0
        for label, mnemonic, operands in parsed_lines:
            if label:
                if label in symbol_map:
                    raise ValueError(f"Duplicate label: {label}")
                symbol_map[label] = temp_pc
            if not mnemonic:
                continue

            if mnemonic == "ORG":
                temp_pc = self._parse_val(operands, {})
            elif mnemonic == "DB":
                temp_pc += len(self._split_operands(operands))
            elif mnemonic in OPCODES:
                temp_pc += instruction_length(OPCODES[mnemonic])
            else:
                raise ValueError(f"Unknown mnemonic: {mnemonic}")
        return symbol_map

    # Second pass: バイナリを生成する
    def _emit(self, parsed_lines, symbol_map: SymbolMap) -> List[Tuple[int, int]]:
        binary_data: List[Tuple[int, int]] = []
        current_pc = 0
        for _, mnemonic, operands in parsed_lines:
            if not mnemonic:
                continue

            if mnemonic == "ORG":
                current_pc = self._parse_val(operands, {})
                continue

            if mnemonic == "DB":
                for val_str in self._split_operands(operands):
                    binary_data.append((current_pc, self._parse_byte(val_str, symbol_map)))
                    current_pc += 1
                continue

            opcode = OPCODES[mnemonic]
            args = self._split_operands(operands)
            if len(args) != operand_count(opcode):
                raise ValueError(
                    f"{mnemonic} expects {operand_count(opcode)} operand(s), got {len(args)}: {operands}"
                )

            if opcode == LDI:
                operand_bytes = [self._parse_register(args[0]), self._parse_byte(args[1], symbol_map)]
            else:
                operand_bytes = [self._parse_register(a) for a in args]

            for i, b in enumerate([opcode] + operand_bytes):
                binary_data.append((current_pc + i, b))
            current_pc += 1 + len(operand_bytes)

        return binary_data
