# src/ls8emu/arch/ls8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義（分岐テーブル）。
"""
from types import MappingProxyType

from ls8emu.arch.ls8 import opcodes as op
from . import base
from . import load
from . import alu
from . import stack
from . import control

# @intent:map オペコード（整数）からオペランド表示フォーマッタへのマッピングテーブル。
DECODE_MAP = MappingProxyType({
    # Load/IO
    op.LDI: base.format_reg_imm,
    op.PRN: base.format_reg,

    # Stack
    op.PUSH: base.format_reg,
    op.POP: base.format_reg,

    # ALU
    op.ADD: base.format_reg_reg,
    op.SUB: base.format_reg_reg,
    op.MUL: base.format_reg_reg,
    op.DIV: base.format_reg_reg,
    op.MOD: base.format_reg_reg,
    op.AND: base.format_reg_reg,
    op.OR: base.format_reg_reg,
    op.XOR: base.format_reg_reg,
    op.CMP: base.format_reg_reg,
    op.INC: base.format_reg,
    op.DEC: base.format_reg,
    op.NOT: base.format_reg,

    # Control
    op.CALL: base.format_reg,
    op.RET: base.format_none,
    op.JMP: base.format_reg,
    op.JEQ: base.format_reg,
    op.JNE: base.format_reg,
    op.HLT: base.format_none,
    op.NOP: base.format_none,
})

# @intent:map オペコード（整数）から実行関数へのマッピングテーブル。モジュール読み込み時に一度だけ構築され、以後変更されません。
EXECUTE_MAP = MappingProxyType({
    # Load/IO
    op.LDI: load.execute_ldi,
    op.PRN: load.execute_prn,

    # Stack
    op.PUSH: stack.execute_push,
    op.POP: stack.execute_pop,

    # ALU
    op.ADD: alu.execute_add,
    op.SUB: alu.execute_sub,
    op.MUL: alu.execute_mul,
    op.DIV: alu.execute_div,
    op.MOD: alu.execute_mod,
    op.AND: alu.execute_and,
    op.OR: alu.execute_or,
    op.XOR: alu.execute_xor,
    op.CMP: alu.execute_cmp,
    op.INC: alu.execute_inc,
    op.DEC: alu.execute_dec,
    op.NOT: alu.execute_not,

    # Control
    op.CALL: control.execute_call,
    op.RET: control.execute_ret,
    op.JMP: control.execute_jmp,
    op.JEQ: control.execute_jeq,
    op.JNE: control.execute_jne,
    op.HLT: control.execute_hlt,
    op.NOP: control.execute_nop,
})
