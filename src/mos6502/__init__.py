# -*- coding: utf-8 -*-
"""
A cycle counted interpreter core for the 6502.
"""
from .cpu import Processor, VECTORS
from .mmu import MMU, Bus, MemoryRangeError, ReadOnlyError
from .opcodes import OPCODES, AddressMode, Instruction, lookup
from .registers import Registers

__all__ = ['Processor', 'VECTORS', 'MMU', 'Bus', 'MemoryRangeError',
           'ReadOnlyError', 'OPCODES', 'AddressMode', 'Instruction',
           'lookup', 'Registers']
