# src/ls8emu/arch/ls8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、停止）の実装。

PCを変更する命令は次のPCを戻り値として返し、ディスパッチエンジンが既定のPC前進の代わりにその値を採用します。
"""
from typing import Optional

from .base import ExecutionContext
from .stack import pop_value

# --- CALL ---
# @intent:responsibility CALL R: レジスタの値を次のPCとして返します。
# @intent:pre-condition 戻りアドレスのプッシュはCALL自身では行いません。
#                       呼び出し側が事前にPUSHしておく必要があります（RETはそれをポップします）。
def execute_call(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    return ctx.state.get_reg(operand_a)

# --- RET ---
# @intent:responsibility RET: スタックから値をポップし、それを次のPCとして返します。
def execute_ret(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    return pop_value(ctx.state, ctx.bus)

# --- JMP ---
def execute_jmp(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    return ctx.state.get_reg(operand_a)

# --- JEQ ---
# @intent:responsibility JEQ R: Eフラグがセットされている場合にレジスタの値へ分岐します。
def execute_jeq(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    target = ctx.state.get_reg(operand_a)
    if ctx.state.flag_e:
        return target
    return None

# --- JNE ---
# @intent:responsibility JNE R: Eフラグがクリアされている場合にレジスタの値へ分岐します。
def execute_jne(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    target = ctx.state.get_reg(operand_a)
    if not ctx.state.flag_e:
        return target
    return None

# --- HLT ---
def execute_hlt(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    ctx.state.halted = True
    return None

# --- NOP ---
def execute_nop(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    # Intentional: NOP (No Operation)
    return None
