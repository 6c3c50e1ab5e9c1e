# ls8emu/transport/bus.py
"""
Transport Layer (メモリバス)

LS-8のメモリは0x00-0xFFのフラットな256バイト空間で、デバイスのマッピングはありません。
BusはこのRAMを唯一のメモリとして所有し、CPUからの読み書きを仲介して、
ステップ毎のアクセスを記録する責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

# @intent:constant LS-8のアドレス空間の大きさ（8ビットアドレス）。
ADDRESS_SPACE_SIZE = 0x100

class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 1回のメモリアクセス（アドレス、値、種別）を記録します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType

def _check_address(address: int) -> None:
    if not 0 <= address < ADDRESS_SPACE_SIZE:
        raise IndexError(f"Address {address:#04x} is outside the 8-bit address space.")

# @intent:responsibility LS-8のメインメモリ。256バイト固定で、0で初期化されます。
class RAM:
    def __init__(self):
        self._cells = bytearray(ADDRESS_SPACE_SIZE)

    def read(self, address: int) -> int:
        _check_address(address)
        return self._cells[address]

    # @intent:pre-condition dataは8ビット値であること。上位ビットの切り捨ては呼び出し側（ALU）の責務です。
    def write(self, address: int, data: int) -> None:
        _check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._cells[address] = data

    # @intent:utility_function 指定範囲のメモリ内容をコピーして返します（ダンプ表示用）。
    def dump(self, start: int = 0, length: int = ADDRESS_SPACE_SIZE) -> bytes:
        return bytes(self._cells[start:start + length])

# @intent:responsibility CPUとRAMの間に立ち、全ての読み書きをSnapshot用に記録します。
class Bus:
    """
    単一のRAMを所有するメモリバス。
    read/writeはアクセスログに記録され、peekは記録されません（逆アセンブラ等のインスペクタ用）。
    """
    def __init__(self, ram: Optional[RAM] = None):
        self._ram = ram if ram is not None else RAM()
        self._activity: List[BusAccess] = []

    @property
    def ram(self) -> RAM:
        return self._ram

    def read(self, address: int) -> int:
        data = self._ram.read(address)
        self._activity.append(BusAccess(address, data, BusAccessType.READ))
        return data

    def write(self, address: int, data: int) -> None:
        self._ram.write(address, data)
        self._activity.append(BusAccess(address, data, BusAccessType.WRITE))

    def peek(self, address: int) -> int:
        return self._ram.read(address)

    # @intent:responsibility 直前のステップ以降に記録されたアクセスを返し、ログを空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log, self._activity = self._activity, []
        return log
