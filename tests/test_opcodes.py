#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  test_opcodes.py
#
#  Copyright 2022 Sam Hill <sam@pariou>
#
'''
Checks the shape of the opcode table
'''
import pytest

from mos6502.cpu import Processor
from mos6502.opcodes import (OPCODES, OPERAND_BYTES, PAGE_CROSSING_NOPS,
                             AddressMode, Instruction, lookup)


def test_table_covers_every_byte():
    assert len(OPCODES) == 256
    assert all(isinstance(entry, Instruction) for entry in OPCODES)


def test_documented_instruction_count():
    '''
    151 documented opcodes, spread over 56 mnemonics
    '''
    documented = [entry for entry in OPCODES if entry.mnemonic != '???']
    assert len(documented) == 151
    assert len({entry.mnemonic for entry in documented}) == 56


def test_every_operation_is_implemented():
    for entry in OPCODES:
        assert callable(getattr(Processor, entry.operation))
        assert callable(getattr(Processor, entry.mode.name))


def test_undocumented_opcodes():
    '''
    Undocumented opcodes are either NOPs or the illegal instruction. Only
    the illegal ones are forced to take no operand bytes
    '''
    for entry in OPCODES:
        if entry.mnemonic == '???':
            assert entry.operation in ('NOP', 'XXX')
            if entry.operation == 'XXX':
                assert entry.mode is AddressMode.IMP


@pytest.mark.parametrize("opcodes, mode", [
    ((0x1a, 0x3a, 0x5a, 0x7a, 0xda, 0xfa), AddressMode.IMP),
    ((0x80, 0x82, 0x89, 0xc2, 0xe2), AddressMode.IMM),
    ((0x04, 0x44, 0x64), AddressMode.ZP0),
    ((0x14, 0x34, 0x54, 0x74, 0xd4, 0xf4), AddressMode.ZPX),
    ((0x0c,), AddressMode.ABS),
    ((0x1c, 0x3c, 0x5c, 0x7c, 0xdc, 0xfc, 0x9c), AddressMode.ABX),
])
def test_undocumented_nop_modes(opcodes, mode):
    for opcode in opcodes:
        assert lookup(opcode).operation == 'NOP'
        assert lookup(opcode).mode is mode


def test_base_cycles_positive():
    assert min(entry.cycles for entry in OPCODES) == 2
    assert max(entry.cycles for entry in OPCODES) == 8


@pytest.mark.parametrize("opcode, expected", [
    (0x00, ('BRK', AddressMode.IMP, 'BRK', 7)),
    (0x6c, ('JMP', AddressMode.IND, 'JMP', 5)),
    (0xb1, ('LDA', AddressMode.IZY, 'LDA', 5)),
    (0x96, ('STX', AddressMode.ZPY, 'STX', 4)),
    (0xbe, ('LDX', AddressMode.ABY, 'LDX', 4)),
    (0x9d, ('STA', AddressMode.ABX, 'STA', 5)),
    (0xea, ('NOP', AddressMode.IMP, 'NOP', 2)),
    (0xeb, ('???', AddressMode.IMP, 'XXX', 2)),
    (0x1c, ('???', AddressMode.ABX, 'NOP', 4)),
    (0x04, ('???', AddressMode.ZP0, 'NOP', 3)),
    (0x03, ('???', AddressMode.IMP, 'XXX', 8)),
])
def test_known_entries(opcode, expected):
    assert tuple(lookup(opcode)) == expected


def test_lookup_masks_to_byte():
    assert lookup(0x1a9) is OPCODES[0xa9]


def test_page_crossing_nops_are_nops():
    for opcode in PAGE_CROSSING_NOPS:
        assert OPCODES[opcode].operation == 'NOP'
        assert OPCODES[opcode].mode is AddressMode.ABX


def test_operand_widths_cover_all_modes():
    assert set(OPERAND_BYTES) == set(AddressMode)
