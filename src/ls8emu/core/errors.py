# ls8emu/core/errors.py
"""
CPUフォルトの定義。

ここで定義される例外は全て実行を終了させる（リカバリ不能な）フォルトです。
命令ハンドラが送出し、AbstractCpu.step() が捕捉して診断メッセージの出力と停止を行います。
"""

# @intent:responsibility 全てのCPUフォルトの基底クラス。
class CpuFault(Exception):
    pass

# @intent:responsibility 分岐テーブルに存在しないオペコードがフェッチされたことを表します。
class UnknownOpcodeError(CpuFault):
    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unknown opcode {opcode:#010b} ({opcode:#04x})")

# @intent:responsibility ゼロ除算・ゼロ剰余を表します。
class ArithmeticFault(CpuFault):
    def __init__(self, operation: str, register: int, divisor: int = 0):
        self.operation = operation
        self.register = register
        self.divisor = divisor
        kind = "Division" if operation == "DIV" else "Modulo"
        super().__init__(f"{kind} by zero: divisor register R{register} = {divisor}")

# @intent:responsibility レジスタ番号として解釈されたオペランドが範囲外であることを表します。
class RegisterIndexError(CpuFault):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Invalid register index {index}")
