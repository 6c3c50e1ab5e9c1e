"""
LS-8 ALU (算術論理演算ユニット)。

レジスタ間の算術・論理演算と、CMPによるフラグ(E/G/L)の更新を担当します。
全ての演算結果は8ビットに切り詰められてレジスタに格納されます。
"""
from ls8emu.arch.ls8.state import Ls8CpuState, E_FLAG, G_FLAG, L_FLAG
from ls8emu.core.errors import ArithmeticFault

# @intent:constant 1オペランドで動作するALU演算。
UNARY_OPS = ("INC", "DEC", "NOT")

# @intent:responsibility 指定された演算をレジスタ reg_a（と reg_b）に対して実行し、結果を reg_a に格納します。
# @intent:pre-condition reg_a, reg_b は 0-7 のレジスタ番号であること（範囲外はRegisterIndexError）。
def alu(state: Ls8CpuState, op: str, reg_a: int, reg_b: int = 0) -> None:
    """
    op は ADD SUB MUL DIV MOD AND OR XOR INC DEC NOT のいずれか。
    CMPはフラグのみを変更するため compare() を使用します。
    """
    a = state.get_reg(reg_a)

    if op in UNARY_OPS:
        if op == "INC":
            result = a + 1
        elif op == "DEC":
            result = a - 1
        else:
            result = ~a
        state.set_reg(reg_a, result & 0xFF)
        return

    b = state.get_reg(reg_b)
    if op == "ADD":
        result = a + b
    elif op == "SUB":
        result = a - b
    elif op == "MUL":
        result = a * b
    elif op == "DIV":
        if b == 0:
            raise ArithmeticFault("DIV", reg_b, b)
        result = a // b
    elif op == "MOD":
        if b == 0:
            raise ArithmeticFault("MOD", reg_b, b)
        result = a % b
    elif op == "AND":
        result = a & b
    elif op == "OR":
        result = a | b
    elif op == "XOR":
        result = a ^ b
    else:
        raise ValueError(f"Unsupported ALU operation: {op}")

    state.set_reg(reg_a, result & 0xFF)

# @intent:responsibility 2つのレジスタを比較し、E/G/Lフラグのいずれか1つをFLにORします。
# @intent:rationale 既存のフラグはクリアしない（累積する）のが既定の挙動。clear_flags=Trueで比較前にFLをクリアします。
def compare(state: Ls8CpuState, reg_a: int, reg_b: int, clear_flags: bool = False) -> None:
    a = state.get_reg(reg_a)
    b = state.get_reg(reg_b)
    if clear_flags:
        state.fl = 0

    if a == b:
        state.fl |= E_FLAG
    elif a > b:
        state.fl |= G_FLAG
    else:
        state.fl |= L_FLAG
