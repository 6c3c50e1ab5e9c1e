# src/ls8emu/arch/ls8/instructions/load.py
"""
ロード命令と出力命令（LDI, PRN）の実装。
"""
from typing import Optional

from .base import ExecutionContext

# @intent:responsibility LDI R,I: レジスタに即値をロードします。
def execute_ldi(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    ctx.state.set_reg(operand_a, operand_b)
    return None

# @intent:responsibility PRN R: レジスタの値を10進数で出力コラボレータに送ります。
def execute_prn(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    ctx.console.print_value(ctx.state.get_reg(operand_a))
    return None
