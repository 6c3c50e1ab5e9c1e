# src/ls8emu/arch/ls8/state.py
"""
LS-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from ls8emu.core.state import CpuState
from ls8emu.core.errors import RegisterIndexError

# @intent:constant 汎用レジスタの本数と、SPとして予約されたレジスタ番号。
REGISTER_COUNT = 8
SP_REGISTER = 7

# @intent:constant 空のスタックの先頭アドレス（スタックは下位アドレスに向かって伸びる）。
STACK_TOP = 0xF4

# LS-8 フラグレジスタ (FL) ビットマスク
# @intent:constant FLレジスタ内の各フラグビットの位置を定義します。上位5ビットは未使用です。
E_FLAG = 0b00000001  # Equal
G_FLAG = 0b00000010  # Greater-than
L_FLAG = 0b00000100  # Less-than

def _initial_registers() -> List[int]:
    regs = [0] * REGISTER_COUNT
    regs[SP_REGISTER] = STACK_TOP
    return regs

# @intent:responsibility LS-8 CPUの全てのレジスタ（R0-R7, PC, IR, FL）とフラグの状態を保持します。
@dataclass
class Ls8CpuState(CpuState):
    """
    LS-8 CPUのレジスタ状態を保持するデータクラス。
    R7はスタックポインタ(SP)として予約されており、初期値は0xF4です。
    """
    reg: List[int] = field(default_factory=_initial_registers)  # R0-R7
    ir: int = 0x00  # Instruction Register
    fl: int = 0x00  # Flags

    # @intent:accessor レジスタ番号を検証してから値を読み書きします。
    # @intent:rationale 範囲外のレジスタ番号はデコードエラー（フォルト）として扱います。

    def get_reg(self, index: int) -> int:
        if not 0 <= index < REGISTER_COUNT:
            raise RegisterIndexError(index)
        return self.reg[index]

    def set_reg(self, index: int, value: int) -> None:
        if not 0 <= index < REGISTER_COUNT:
            raise RegisterIndexError(index)
        self.reg[index] = value & 0xFF

    @property
    def sp(self) -> int:
        return self.reg[SP_REGISTER]

    @sp.setter
    def sp(self, value: int) -> None:
        self.reg[SP_REGISTER] = value & 0xFF

    # @intent:accessor FLレジスタの各フラグビットにアクセスするためのプロパティを提供します。

    @property
    def flag_e(self) -> bool:
        return (self.fl & E_FLAG) != 0

    @flag_e.setter
    def flag_e(self, value: bool) -> None:
        if value: self.fl |= E_FLAG
        else: self.fl &= ~E_FLAG

    @property
    def flag_g(self) -> bool:
        return (self.fl & G_FLAG) != 0

    @flag_g.setter
    def flag_g(self, value: bool) -> None:
        if value: self.fl |= G_FLAG
        else: self.fl &= ~G_FLAG

    @property
    def flag_l(self) -> bool:
        return (self.fl & L_FLAG) != 0

    @flag_l.setter
    def flag_l(self, value: bool) -> None:
        if value: self.fl |= L_FLAG
        else: self.fl &= ~L_FLAG
