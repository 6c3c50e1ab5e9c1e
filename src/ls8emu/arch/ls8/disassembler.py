# src/ls8emu/arch/ls8/disassembler.py
"""
LS-8 Disassembler

メモリ上のバイナリデータを解析し、LS-8のニーモニックに変換します。
Instruction Layerのデコードロジックを再利用しますが、バスアクセスログを汚さないように
PeekBusラッパーを使用します。
"""
from typing import List, Tuple

from ls8emu.transport.bus import Bus, ADDRESS_SPACE_SIZE
from ls8emu.core.errors import UnknownOpcodeError
from ls8emu.arch.ls8.instructions import decode_opcode

# @intent:utility_class バスへのアクセスをPeek（ログなし読み込み）に変換するラッパーです。
class PeekBus:
    def __init__(self, bus: Bus):
        self._bus = bus

    def read(self, address: int) -> int:
        return self._bus.peek(address)

    def write(self, address: int, data: int) -> None:
        pass

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを逆アセンブルします。
    分岐テーブルにないバイトは "DB $xx" として1バイトずつ表示します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, ADDRESS_SPACE_SIZE)
    peek_bus = PeekBus(bus)

    while current_addr < end_addr:
        opcode = bus.peek(current_addr)

        try:
            operation = decode_opcode(opcode, peek_bus, current_addr)
        except UnknownOpcodeError:
            result.append((current_addr, f"{opcode:02X}", f"DB ${opcode:02X}"))
            current_addr += 1
            continue

        # 命令が実際に使用するオペランドのみを表示する
        hex_bytes = f"{opcode:02X}"
        for b in operation.operand_bytes[:operation.length - 1]:
            hex_bytes += f" {b:02X}"

        mnemonic_str = operation.mnemonic
        if operation.operands:
            mnemonic_str += " " + ", ".join(operation.operands)

        result.append((current_addr, hex_bytes, mnemonic_str))
        current_addr += operation.length

    return result
