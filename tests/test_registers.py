#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  test_registers.py
#
#  Copyright 2022 Sam Hill <sam@pariou>
#
#  This program is free software; you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation; either version 2 of the License, or
#  (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program; if not, write to the Free Software
#  Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston,
#  MA 02110-1301, USA.
#
#
'''
Tests the register and status flag file
'''
import pytest

from mos6502.registers import FLAGS, RESET_STACK_POINTER, Registers


@pytest.fixture
def registers():
    return Registers(program_counter=0x8000)


def test_reset_state(registers):
    '''
    A reset leaves zeroed registers, the stack pointer at its reset value
    and only the unused bit set
    '''
    assert registers.a == 0
    assert registers.x == 0
    assert registers.y == 0
    assert registers.sp == RESET_STACK_POINTER == 0xfd
    assert registers.pc == 0x8000
    assert registers.p == FLAGS['U']


def test_reset_clears_flags(registers):
    registers.p = 0xff
    registers.a, registers.sp = 0x42, 0x10
    registers.reset(0x1234)
    assert registers.p == FLAGS['U']
    assert (registers.a, registers.sp, registers.pc) == (0, 0xfd, 0x1234)


@pytest.mark.parametrize("flag, bit", [('C', 0), ('Z', 1), ('I', 2), ('D', 3),
                                       ('B', 4), ('U', 5), ('V', 6), ('N', 7)])
def test_flag_bit_positions(registers, flag, bit):
    '''
    Each flag lives at its fixed bit of the status byte
    '''
    registers.p = 0
    registers.set_flag(flag)
    assert registers.p == 1 << bit
    assert registers.get_flag(flag)


@pytest.mark.parametrize("flag", list(FLAGS))
def test_set_flag_leaves_others(registers, flag):
    '''
    Setting or clearing one flag must not disturb any other bit
    '''
    registers.p = 0b10100101
    before = registers.p
    registers.set_flag(flag, not registers.get_flag(flag))
    assert registers.p ^ before == FLAGS[flag]


def test_clearflags(registers):
    '''
    Tests that all flags are clear by clear flag instruction, apart from the
    unused bit
    '''
    registers.p = 0xff
    registers.clear_flags()
    assert registers.p == 0b00100000


@pytest.mark.parametrize("value, expected", [(0, (True, False)),
                                             (0x80, (False, True)),
                                             (0xff, (False, True)),
                                             (24, (False, False)),
                                             (0x100, (True, False))])
def test_ZN(registers, value, expected):
    '''
    Tests that the zero and negative flag test works on the low 8 bits
    '''
    registers.ZN(value)
    assert registers.get_flag('Z') == expected[0]
    assert registers.get_flag('N') == expected[1]


def test_repr(registers):
    registers.a = 0x42
    assert repr(registers) == ('A: 0x42 X: 0x00 Y: 0x00 S: 0xfd PC: 0x8000 '
                               'Flags: 00100000')
