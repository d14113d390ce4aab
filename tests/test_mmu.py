#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  test_mmu.py
#
#  Copyright 2022 Sam Hill <sam@pariou>
#
'''
Creates a unit test suite for the MMU component of the computer.
'''
import logging

import pytest

from mos6502.mmu import MMU, MemoryRangeError, ReadOnlyError


@pytest.fixture
def example_memory():
    '''
    Simple memory configuration that has 16k of RAM.
    '''
    return MMU(((0, 0x4000, 'RAM', False),))


def test_address_length(example_memory):
    '''
    6502 uses 16-bit addresses, so every address from 0x0000 to 0xffff
    should be backed
    '''
    assert len(example_memory.memory) == 0x10000


def test_addblock(example_memory):
    '''
    Tests that valid new block can be added
    '''
    new_block = (0x5000, 0x1000, 'WriteOnly', True)
    example_memory.add_block(*new_block)
    assert example_memory.blocks[-1]['name'] == 'WriteOnly'


def test_addblock_logged(example_memory, caplog):
    '''
    Adding a block is reported at INFO level
    '''
    with caplog.at_level(logging.INFO, logger='mos6502.mmu'):
        example_memory.add_block(0x5000, 0x1000, 'Video', False)
    assert 'Video' in caplog.text


def test_addblock_data(example_memory):
    '''
    Tests that a valid new block can be added, along with its data
    '''
    new_block = (0x5000, 0x5, 'WriteWithData', True,
                 [0x42, 0x55, 0x11, 0xb5, 0xea])
    example_memory.add_block(*new_block)
    assert example_memory.memory[0x5000] == 0x42
    assert example_memory.memory[0x5004] == 0xea


def test_add_invalidblock(example_memory):
    '''
    Tests that block that will overwrite an existing block cannot
    be added
    '''
    new_block = (0x3500, 0x1000, 'WriteOnly', True)
    with pytest.raises(MemoryRangeError):
        example_memory.add_block(*new_block)


def test_add_block_same_start(example_memory):
    '''
    A block starting at the same address as an existing one overlaps it
    '''
    with pytest.raises(MemoryRangeError):
        example_memory.add_block(0x0000, 0x10, 'Shadow')


def test_add_adjacent_block(example_memory):
    '''
    Blocks that touch but do not overlap are fine
    '''
    example_memory.add_block(0x4000, 0x100, 'Next')
    assert len(example_memory.blocks) == 2


def test_add_block_past_end(example_memory):
    '''
    A block cannot run off the top of the address space
    '''
    with pytest.raises(MemoryRangeError):
        example_memory.add_block(0xff00, 0x200, 'TooBig')


def test_write_valid(example_memory):
    '''
    Checks that data can be written to memory
    '''
    newvalue = 0xea
    addr = 0x1000
    example_memory.write(addr, newvalue)
    assert example_memory.read(addr) == newvalue


def test_write_invalid(example_memory):
    '''
    Checks that data can't be written to read only memory
    '''
    new_block = (0x5000, 0x1000, 'WriteOnly', True)
    example_memory.add_block(*new_block)

    newvalue = 0xea
    addr = 0x5001

    with pytest.raises(ReadOnlyError):
        example_memory.write(addr, newvalue)


def test_load_ignores_read_only(example_memory):
    '''
    Loading an image is how ROM gets its contents, so it is allowed
    '''
    example_memory.add_block(0xf000, 0x1000, 'ROM', True)
    example_memory.load(0xfffc, (0x00, 0xf0))
    assert example_memory.read_word(0xfffc) == 0xf000


def test_load_past_end(example_memory):
    with pytest.raises(MemoryRangeError):
        example_memory.load(0xffff, (0x01, 0x02))


def test_read_word_wraps(example_memory):
    '''
    A word starting at the last address takes its high byte from 0x0000
    '''
    example_memory.load(0xffff, (0x34,))
    example_memory.write(0x0000, 0x12)
    assert example_memory.read_word(0xffff) == 0x1234
