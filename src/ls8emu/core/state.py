# ls8emu/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CPUの基本的な状態（レジスタ群）を保持するデータ構造を定義します。
"""
from dataclasses import dataclass

# @intent:responsibility CPUのレジスタ状態を保持します。アーキテクチャ固有のレジスタはこれを拡張します。
@dataclass
class CpuState:
    """
    CPUのレジスタ状態を保持するデータクラス。
    これは抽象的な基底状態であり、LS-8固有のレジスタファイルは Ls8CpuState で追加されます。
    """
    pc: int = 0x00  # Program Counter
    halted: bool = False
    # @intent:rationale SPはLS-8では汎用レジスタR7の別名であるため、基底クラスには持たせない。
