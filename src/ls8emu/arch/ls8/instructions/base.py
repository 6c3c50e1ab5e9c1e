# src/ls8emu/arch/ls8/instructions/base.py
"""
LS-8命令実装用の共通ユーティリティ。
"""
from dataclasses import dataclass
from typing import List

from ls8emu.transport.bus import Bus
from ls8emu.transport.console import Console
from ls8emu.arch.ls8.state import Ls8CpuState

# @intent:responsibility 命令ハンドラに明示的に渡される実行コンテキスト。
# @intent:rationale ハンドラはCPUオブジェクトに束縛されず、レジスタファイル・メモリ・出力先への参照をこの引数から受け取ります。
@dataclass
class ExecutionContext:
    state: Ls8CpuState
    bus: Bus
    console: Console
    clear_flags_on_compare: bool = False

# @intent:utility_function 表示用のオペランド文字列（"R0", "8" など）を生成するフォーマッタ群。
# デコーダが逆アセンブル表示用のオペランド文字列を作るために使用します。

def format_none(operand_a: int, operand_b: int) -> List[str]:
    return []

def format_reg(operand_a: int, operand_b: int) -> List[str]:
    return [f"R{operand_a}"]

def format_reg_reg(operand_a: int, operand_b: int) -> List[str]:
    return [f"R{operand_a}", f"R{operand_b}"]

def format_reg_imm(operand_a: int, operand_b: int) -> List[str]:
    return [f"R{operand_a}", f"{operand_b}"]
