# ls8emu/loader/loader.py
"""
コードローダーモジュール。
LS-8テキスト形式（1行1バイトの2進数表記）とアセンブリソースのロードをサポートします。
"""
import re
from typing import List

from ls8emu.transport.bus import Bus
from ls8emu.common.types import SymbolMap
from ls8emu.loader.assembler import Ls8Assembler

_BINARY_BYTE_RE = re.compile(r'^[01]{8}$')

class ProgramLoader:
    """
    LS-8のプログラムファイル（.ls8）を解析し、データをバスにロードするローダー。

    '#' 以降はコメント、空行は無視され、残りの各行は8桁の2進数1バイトである必要があります。
    """
    def parse_program(self, lines: List[str]) -> List[int]:
        program = []
        for line_num, line in enumerate(lines, 1):
            line = line.split('#')[0].strip()
            if not line:
                continue
            if not _BINARY_BYTE_RE.match(line):
                raise ValueError(f"Invalid instruction on line {line_num}: {line}")
            program.append(int(line, 2))
        return program

    # @intent:responsibility ファイルを読み込み、startアドレスから順にバスへ書き込みます。
    # @intent:return 書き込んだバイト数。
    def load_program(self, file_path: str, bus: Bus, start: int = 0) -> int:
        with open(file_path, 'r', encoding="utf-8") as f:
            program = self.parse_program(f.readlines())

        for offset, byte_data in enumerate(program):
            bus.write(start + offset, byte_data)
        return len(program)

class AssemblyLoader:
    """
    アセンブリソースコードを解析し、シンボル情報を抽出し、
    バイナリに変換してバスにロードするローダー。
    """
    def load_assembly(self, file_path: str, bus: Bus) -> SymbolMap:
        with open(file_path, 'r', encoding="utf-8") as f:
            lines = f.readlines()

        symbol_map, binary_data = Ls8Assembler().assemble(lines)
        for addr, data in binary_data:
            bus.write(addr, data)

        return symbol_map
