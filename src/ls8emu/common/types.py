"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import Dict, List, NamedTuple

# @intent:data_structure シンボル名（ラベル）とアドレスをマッピングする辞書の型エイリアス。
# Assembler, CPU, CLIなど複数のレイヤーで共通して使用されます。
SymbolMap = Dict[str, int]

# @intent:data_structure 単一のレジスタの表示定義。トレース出力が動的に列を生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (LS-8では常に8)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Special"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
