# src/ls8emu/arch/ls8/__init__.py
"""
LS-8 Architecture Package
"""
from .cpu import Ls8Cpu
from .state import Ls8CpuState
