# src/ls8emu/arch/ls8/instructions/stack.py
"""
スタック操作命令（PUSH, POP）の実装。

スタックはメモリとSP(R7)の上に成り立つ規約であり、下位アドレスに向かって伸びます。
PUSHはSPをデクリメントしてから書き込み、POPは読み出してからSPをインクリメントします。
オーバーフロー/アンダーフローの検査は行いません。
"""
from typing import Optional

from ls8emu.transport.bus import Bus
from ls8emu.arch.ls8.state import Ls8CpuState, SP_REGISTER
from ls8emu.arch.ls8.alu import alu
from .base import ExecutionContext

# @intent:utility_function 値をスタックへプッシュします。SPの更新はALUのDECを介して行います。
def push_value(state: Ls8CpuState, bus: Bus, value: int) -> None:
    alu(state, "DEC", SP_REGISTER)
    bus.write(state.sp, value & 0xFF)

# @intent:utility_function スタックから値をポップします。SPの更新はALUのINCを介して行います。
def pop_value(state: Ls8CpuState, bus: Bus) -> int:
    value = bus.read(state.sp)
    alu(state, "INC", SP_REGISTER)
    return value

# @intent:responsibility PUSH R: レジスタの値をスタックにプッシュします。
def execute_push(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    value = ctx.state.get_reg(operand_a)
    push_value(ctx.state, ctx.bus, value)
    return None

# @intent:responsibility POP R: スタックから値をポップしてレジスタに格納します。
def execute_pop(ctx: ExecutionContext, operand_a: int, operand_b: int) -> Optional[int]:
    # レジスタ番号の検証をメモリ読み出し・SP更新より先に行う
    ctx.state.get_reg(operand_a)
    ctx.state.set_reg(operand_a, pop_value(ctx.state, ctx.bus))
    return None
