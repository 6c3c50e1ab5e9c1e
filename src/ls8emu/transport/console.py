# ls8emu/transport/console.py
"""
Transport Layer (コンソール出力)

PRN命令の出力先と、CPUフォルト等の診断メッセージの出力先を抽象化します。
CPUはこのインターフェースのみを知り、実際の出力先（標準出力、バッファ等）には依存しません。
"""
import sys
from abc import ABC, abstractmethod
from typing import List

# @intent:responsibility 行単位の出力シンクの抽象インターフェースを定義します。
class Console(ABC):
    """
    CPUから見た出力コラボレータ。
    """
    # @intent:responsibility PRN命令の値を1行として出力します。
    @abstractmethod
    def print_value(self, value: int) -> None:
        pass

    # @intent:responsibility 診断メッセージ（未知のオペコード、ゼロ除算など）を1行として出力します。
    @abstractmethod
    def report(self, message: str) -> None:
        pass

# @intent:responsibility 標準出力/標準エラー出力に書き出すコンソール。
class StdioConsole(Console):
    def print_value(self, value: int) -> None:
        print(value)

    def report(self, message: str) -> None:
        print(message, file=sys.stderr)

# @intent:responsibility 出力をメモリ上に記録するコンソール。テストや組み込み用途で使用します。
class BufferConsole(Console):
    """
    PRN出力と診断メッセージをそれぞれリストに蓄積します。
    """
    def __init__(self):
        self.values: List[int] = []
        self.messages: List[str] = []

    def print_value(self, value: int) -> None:
        self.values.append(value)

    def report(self, message: str) -> None:
        self.messages.append(message)

    # @intent:utility_function 出力済みの値を10進文字列の行リストとして返します。
    def lines(self) -> List[str]:
        return [str(v) for v in self.values]
