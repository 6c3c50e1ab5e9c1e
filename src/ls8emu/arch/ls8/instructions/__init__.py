# src/ls8emu/arch/ls8/instructions/__init__.py
"""
LS-8命令セット実装パッケージ。
"""
from typing import Optional

from ls8emu.transport.bus import Bus
from ls8emu.core.errors import UnknownOpcodeError
from ls8emu.core.snapshot import Operation
from ls8emu.arch.ls8.opcodes import MNEMONICS, instruction_length
from .base import ExecutionContext
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility LS-8のオペコードをデコードします。
# @intent:post-condition 分岐テーブルにないオペコードはオペランドを読む前にUnknownOpcodeErrorを送出します。
def decode_opcode(opcode: int, bus: Bus, pc: int) -> Operation:
    """
    LS-8のオペコードをデコードし、Operationオブジェクトを返します。
    オペランドは命令が使用するか否かに関わらず、PC+1とPC+2から常に2バイト読み出します。
    """
    formatter = DECODE_MAP.get(opcode)
    if formatter is None:
        raise UnknownOpcodeError(opcode)

    operand_a = bus.read((pc + 1) & 0xFF)
    operand_b = bus.read((pc + 2) & 0xFF)
    return Operation(
        opcode_hex=f"{opcode:02X}",
        mnemonic=MNEMONICS[opcode],
        operands=formatter(operand_a, operand_b),
        operand_bytes=[operand_a, operand_b],
        cycle_count=1,
        length=instruction_length(opcode),
    )

# @intent:responsibility デコードされたLS-8命令を実行します。
# @intent:return ハンドラが明示したPC（ジャンプ先）、またはNone。
def execute_instruction(operation: Operation, ctx: ExecutionContext) -> Optional[int]:
    executor = EXECUTE_MAP[int(operation.opcode_hex, 16)]
    operand_a, operand_b = operation.operand_bytes
    return executor(ctx, operand_a, operand_b)
