# -*- coding: utf-8 -*-
"""
The bus the processor talks to, and a flat 64k memory that implements it.
"""
import array
import logging
from typing import Protocol, Sequence, Union


logger = logging.getLogger(__name__)

block_type = tuple[int, int, str, bool, Union[None, Sequence[int]]]


class Bus(Protocol):
    '''
    Anything the processor can read bytes from and write bytes to over a
    16 bit address space.
    '''
    def read(self, addr: int) -> int:
        ...

    def write(self, addr: int, value: int) -> None:
        ...


class MMU:
    '''
    Memory management unit that defines all the addresses that the 6502 can
    interact with, including ROM, RAM and peripheral I/O
    '''
    size = 0x10000

    def __init__(self, blocks: tuple[block_type, ...] = ()) -> None:
        '''
        Initialise the various blocks of virtual memory that the 6502 can
        address.
        '''
        # Every address is backed, initially with zero
        self.memory = array.array('B', bytes(self.size))

        # Mask to know whether an address is read only
        self._read_only = array.array('B', bytes(self.size))

        self.blocks = []

        for b in blocks:
            self.add_block(*b)

    def add_block(self, start_addr: int, length: int, name: str,
                  read_only: bool = False,
                  data: Union[None, Sequence[int]] = None) -> None:
        '''
        Add block of memory to MMU. Need various information to define memory
        block.
        Inputs:
            start_addr      -   Start address of memory block
            length          -   Number of bytes of memory block
            name            -   Human readable name of the block
            read_only       -   Boolean flag to say whether writes are allowed
            data            -   data to initialise datablock to.
        '''
        end = start_addr + length
        if start_addr < 0 or end > self.size:
            raise MemoryRangeError(
                f'Block {name!r} (0x{start_addr:04x}+0x{length:x}) does not '
                'fit in the address space')

        for block in self.blocks:
            block_end = block['start'] + block['length']
            if start_addr < block_end and end > block['start']:
                raise MemoryRangeError(
                    f'Block {name!r} overlaps block {block["name"]!r}')

        new_mem = {'start': start_addr, 'length': length,
                   'name': name, 'read-only': read_only}

        if read_only:
            for addr in range(start_addr, end):
                self._read_only[addr] = 1

        if data:
            self.load(start_addr, data[:length])

        self.blocks.append(new_mem)
        logger.info('Added %s block %r at 0x%04x-0x%04x',
                    'ROM' if read_only else 'RAM', name, start_addr,
                    max(end - 1, start_addr))

    def load(self, addr: int, data: Sequence[int]) -> None:
        '''
        Copy data into memory starting at addr, ignoring write protection.
        This is how ROM images and vectors get put in place.
        '''
        if addr < 0 or addr + len(data) > self.size:
            raise MemoryRangeError(
                f'{len(data)} bytes at 0x{addr:04x} run past the end of memory')
        for offset, value in enumerate(data):
            self.memory[addr + offset] = value & 0xff

    def read(self, addr: int) -> int:
        '''
        Reads byte of data from address addr
        '''
        return self.memory[addr]

    def read_word(self, addr: int) -> int:
        '''
        Reads a little endian word starting at addr
        '''
        return self.memory[addr] | (self.memory[(addr + 1) & 0xffff] << 8)

    def write(self, addr: int, value: int) -> None:
        '''
        Writes value of data to address.
        '''
        if self._read_only[addr]:
            raise ReadOnlyError(f'Address 0x{addr:04x} is read only')

        self.memory[addr] = value


class MemoryRangeError(ValueError):
    pass


class ReadOnlyError(TypeError):
    pass
