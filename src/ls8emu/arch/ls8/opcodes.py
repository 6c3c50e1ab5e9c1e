# src/ls8emu/arch/ls8/opcodes.py
"""
LS-8 命令セットのオペコード定義。

オペコードの上位2ビットは後続するオペランドのバイト数(0-2)を表し、
ALU命令はビット5がセットされています。
"""
from typing import Dict

NOP  = 0b00000000
HLT  = 0b00000001
RET  = 0b00001001
PRN  = 0b01000011
CALL = 0b01001000
POP  = 0b01001100
PUSH = 0b01001101
JMP  = 0b01010000
JEQ  = 0b01010001
JNE  = 0b01010010
NOT  = 0b01110000
INC  = 0b01111000
DEC  = 0b01111001
LDI  = 0b10011001
CMP  = 0b10100000
ADD  = 0b10101000
SUB  = 0b10101001
MUL  = 0b10101010
DIV  = 0b10101011
MOD  = 0b10101100
OR   = 0b10110001
XOR  = 0b10110010
AND  = 0b10110011

# @intent:constant ALU命令を示すビット。
ALU_BIT = 0b00100000

# @intent:map オペコードからニーモニックへの対応表。
MNEMONICS: Dict[int, str] = {
    NOP: "NOP", HLT: "HLT", RET: "RET",
    PRN: "PRN", CALL: "CALL", POP: "POP", PUSH: "PUSH",
    JMP: "JMP", JEQ: "JEQ", JNE: "JNE",
    NOT: "NOT", INC: "INC", DEC: "DEC",
    LDI: "LDI", CMP: "CMP",
    ADD: "ADD", SUB: "SUB", MUL: "MUL", DIV: "DIV", MOD: "MOD",
    OR: "OR", XOR: "XOR", AND: "AND",
}

# @intent:map ニーモニックからオペコードへの逆引き表（アセンブラ用）。
OPCODES: Dict[str, int] = {name: code for code, name in MNEMONICS.items()}

# @intent:utility_function オペコードに符号化されたオペランド数を返します。
def operand_count(opcode: int) -> int:
    return (opcode >> 6) & 0b11

# @intent:utility_function 命令のバイト長（オペコード1バイト＋オペランド数）を返します。
def instruction_length(opcode: int) -> int:
    return 1 + operand_count(opcode)

def is_alu_opcode(opcode: int) -> bool:
    return (opcode & ALU_BIT) != 0
