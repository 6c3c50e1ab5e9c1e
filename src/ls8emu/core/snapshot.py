# ls8emu/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1ステップ実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
トレース出力への情報提供と、デバッガの実行履歴に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from ls8emu.core.state import CpuState
from ls8emu.transport.bus import BusAccessType, BusAccess

# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "99"
    mnemonic: str # 例: "LDI"
    operands: List[str] = field(default_factory=list) # 例: ["R0", "8"]
    operand_bytes: List[int] = field(default_factory=list) # フェッチされた生のオペランドバイト
    cycle_count: int = 0
    length: int = 1 # 命令のバイト長（1 + オペランド数）

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、シンボル情報、フォルト）を記録するデータクラス。
    """
    cycle_count: int
    address: Optional[int] = None # 命令を実行したアドレス（実行前のPC）
    symbol_info: Optional[str] = None # 例: "loop: PRN R0"
    fault: Optional[str] = None # 例: "Division by zero: divisor register R1 = 0"

# @intent:responsibility ある一時点におけるCPUとバスの完全な状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUとバスの完全な状態を記録した不変のデータ構造。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
