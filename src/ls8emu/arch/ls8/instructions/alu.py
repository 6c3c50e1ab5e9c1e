# src/ls8emu/arch/ls8/instructions/alu.py
"""
算術論理演算命令の実装。全てALUへ委譲します。
"""
from typing import Optional

from ls8emu.arch.ls8.alu import alu as alu_op, compare
from .base import ExecutionContext

# --- 2オペランド命令 (R, R) ---

def execute_add(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "ADD", operand_a, operand_b)
    return None

def execute_sub(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "SUB", operand_a, operand_b)
    return None

def execute_mul(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "MUL", operand_a, operand_b)
    return None

# @intent:post-condition 除数が0の場合はArithmeticFaultを送出します（CPUは停止）。
def execute_div(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "DIV", operand_a, operand_b)
    return None

def execute_mod(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "MOD", operand_a, operand_b)
    return None

def execute_and(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "AND", operand_a, operand_b)
    return None

def execute_or(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "OR", operand_a, operand_b)
    return None

def execute_xor(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "XOR", operand_a, operand_b)
    return None

# @intent:responsibility CMP R,R: 比較結果をFLに反映します（レジスタは変更しません）。
def execute_cmp(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    compare(ctx.state, operand_a, operand_b, clear_flags=ctx.clear_flags_on_compare)
    return None

# --- 1オペランド命令 (R) ---

def execute_inc(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "INC", operand_a)
    return None

def execute_dec(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "DEC", operand_a)
    return None

def execute_not(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    alu_op(ctx.state, "NOT", operand_a)
    return None
