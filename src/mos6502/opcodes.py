# -*- coding: utf-8 -*-
"""
The 6502 instruction set as a fixed table of 256 descriptors, indexed by
opcode byte.

Every byte value decodes to something: documented instructions map to
their handler, the undocumented NOPs map to ``NOP`` and everything else
maps to the ``XXX`` illegal-instruction handler. The undocumented NOPs keep
the addressing mode the real chip decodes for them, so they step over
their operand bytes. The rest are treated as implied mode and consume no
operand bytes, but they still cost the number of cycles the real chip
spends on them.
"""
import enum
from collections import namedtuple


class AddressMode(enum.Enum):
    '''
    Strategies for locating the operand of an instruction
    '''
    IMP = 'Implied'
    IMM = 'Immediate'
    ZP0 = 'Zero page'
    ZPX = 'Zero page,X'
    ZPY = 'Zero page,Y'
    REL = 'Relative'
    ABS = 'Absolute'
    ABX = 'Absolute,X'
    ABY = 'Absolute,Y'
    IND = 'Indirect'
    IZX = 'Indirect,X'
    IZY = 'Indirect,Y'


# Number of bytes following the opcode that each mode consumes
OPERAND_BYTES = {
    AddressMode.IMP: 0,
    AddressMode.IMM: 1,
    AddressMode.ZP0: 1,
    AddressMode.ZPX: 1,
    AddressMode.ZPY: 1,
    AddressMode.REL: 1,
    AddressMode.IZX: 1,
    AddressMode.IZY: 1,
    AddressMode.ABS: 2,
    AddressMode.ABX: 2,
    AddressMode.ABY: 2,
    AddressMode.IND: 2,
}


# mnemonic - what gets shown to a human
# mode - AddressMode member
# operation - name of the handler method on the Processor
# cycles - base cycle count, before any page crossing or branch penalty
Instruction = namedtuple('Instruction', 'mnemonic mode operation cycles')


IMP = AddressMode.IMP
IMM = AddressMode.IMM
ZP0 = AddressMode.ZP0
ZPX = AddressMode.ZPX
ZPY = AddressMode.ZPY
REL = AddressMode.REL
ABS = AddressMode.ABS
ABX = AddressMode.ABX
ABY = AddressMode.ABY
IND = AddressMode.IND
IZX = AddressMode.IZX
IZY = AddressMode.IZY


# Documented instructions: opcode -> (mnemonic, mode, cycles). The
# mnemonic is also the name of the handler.
_DOCUMENTED = {# ADC - Add with carry
               0x69: ('ADC', IMM, 2),
               0x65: ('ADC', ZP0, 3),
               0x75: ('ADC', ZPX, 4),
               0x6d: ('ADC', ABS, 4),
               0x7d: ('ADC', ABX, 4),
               0x79: ('ADC', ABY, 4),
               0x61: ('ADC', IZX, 6),
               0x71: ('ADC', IZY, 5),
               # AND - And with accumulator
               0x29: ('AND', IMM, 2),
               0x25: ('AND', ZP0, 3),
               0x35: ('AND', ZPX, 4),
               0x2d: ('AND', ABS, 4),
               0x3d: ('AND', ABX, 4),
               0x39: ('AND', ABY, 4),
               0x21: ('AND', IZX, 6),
               0x31: ('AND', IZY, 5),
               # ASL - Arithmetic shift left
               0x0a: ('ASL', IMP, 2),
               0x06: ('ASL', ZP0, 5),
               0x16: ('ASL', ZPX, 6),
               0x0e: ('ASL', ABS, 6),
               0x1e: ('ASL', ABX, 7),
               # Bxx - Branching instructions
               0x10: ('BPL', REL, 2),
               0x30: ('BMI', REL, 2),
               0x50: ('BVC', REL, 2),
               0x70: ('BVS', REL, 2),
               0x90: ('BCC', REL, 2),
               0xb0: ('BCS', REL, 2),
               0xd0: ('BNE', REL, 2),
               0xf0: ('BEQ', REL, 2),
               # BIT - Bit test
               0x24: ('BIT', ZP0, 3),
               0x2c: ('BIT', ABS, 4),
               # BRK - Break
               0x00: ('BRK', IMP, 7),
               # CLx - Clear flag
               0x18: ('CLC', IMP, 2),
               0xd8: ('CLD', IMP, 2),
               0x58: ('CLI', IMP, 2),
               0xb8: ('CLV', IMP, 2),
               # CMP - Compare with accumulator
               0xc9: ('CMP', IMM, 2),
               0xc5: ('CMP', ZP0, 3),
               0xd5: ('CMP', ZPX, 4),
               0xcd: ('CMP', ABS, 4),
               0xdd: ('CMP', ABX, 4),
               0xd9: ('CMP', ABY, 4),
               0xc1: ('CMP', IZX, 6),
               0xd1: ('CMP', IZY, 5),
               # CPX - Compare with X register
               0xe0: ('CPX', IMM, 2),
               0xe4: ('CPX', ZP0, 3),
               0xec: ('CPX', ABS, 4),
               # CPY - Compare with Y register
               0xc0: ('CPY', IMM, 2),
               0xc4: ('CPY', ZP0, 3),
               0xcc: ('CPY', ABS, 4),
               # DEC - Decrement memory
               0xc6: ('DEC', ZP0, 5),
               0xd6: ('DEC', ZPX, 6),
               0xce: ('DEC', ABS, 6),
               0xde: ('DEC', ABX, 7),
               # DEX, DEY - Decrement index register
               0xca: ('DEX', IMP, 2),
               0x88: ('DEY', IMP, 2),
               # EOR - Exclusive OR with accumulator
               0x49: ('EOR', IMM, 2),
               0x45: ('EOR', ZP0, 3),
               0x55: ('EOR', ZPX, 4),
               0x4d: ('EOR', ABS, 4),
               0x5d: ('EOR', ABX, 4),
               0x59: ('EOR', ABY, 4),
               0x41: ('EOR', IZX, 6),
               0x51: ('EOR', IZY, 5),
               # INC - Increment memory
               0xe6: ('INC', ZP0, 5),
               0xf6: ('INC', ZPX, 6),
               0xee: ('INC', ABS, 6),
               0xfe: ('INC', ABX, 7),
               # INX, INY - Increment index register
               0xe8: ('INX', IMP, 2),
               0xc8: ('INY', IMP, 2),
               # JMP - Jump
               0x4c: ('JMP', ABS, 3),
               0x6c: ('JMP', IND, 5),
               # JSR - Jump to subroutine
               0x20: ('JSR', ABS, 6),
               # LDA - Load accumulator
               0xa9: ('LDA', IMM, 2),
               0xa5: ('LDA', ZP0, 3),
               0xb5: ('LDA', ZPX, 4),
               0xad: ('LDA', ABS, 4),
               0xbd: ('LDA', ABX, 4),
               0xb9: ('LDA', ABY, 4),
               0xa1: ('LDA', IZX, 6),
               0xb1: ('LDA', IZY, 5),
               # LDX - Load X register
               0xa2: ('LDX', IMM, 2),
               0xa6: ('LDX', ZP0, 3),
               0xb6: ('LDX', ZPY, 4),
               0xae: ('LDX', ABS, 4),
               0xbe: ('LDX', ABY, 4),
               # LDY - Load Y register
               0xa0: ('LDY', IMM, 2),
               0xa4: ('LDY', ZP0, 3),
               0xb4: ('LDY', ZPX, 4),
               0xac: ('LDY', ABS, 4),
               0xbc: ('LDY', ABX, 4),
               # LSR - Logical shift right
               0x4a: ('LSR', IMP, 2),
               0x46: ('LSR', ZP0, 5),
               0x56: ('LSR', ZPX, 6),
               0x4e: ('LSR', ABS, 6),
               0x5e: ('LSR', ABX, 7),
               # NOP - No operation
               0xea: ('NOP', IMP, 2),
               # ORA - OR with accumulator
               0x09: ('ORA', IMM, 2),
               0x05: ('ORA', ZP0, 3),
               0x15: ('ORA', ZPX, 4),
               0x0d: ('ORA', ABS, 4),
               0x1d: ('ORA', ABX, 4),
               0x19: ('ORA', ABY, 4),
               0x01: ('ORA', IZX, 6),
               0x11: ('ORA', IZY, 5),
               # PHx, PLx - Stack push and pull
               0x48: ('PHA', IMP, 3),
               0x08: ('PHP', IMP, 3),
               0x68: ('PLA', IMP, 4),
               0x28: ('PLP', IMP, 4),
               # ROL - Rotate left
               0x2a: ('ROL', IMP, 2),
               0x26: ('ROL', ZP0, 5),
               0x36: ('ROL', ZPX, 6),
               0x2e: ('ROL', ABS, 6),
               0x3e: ('ROL', ABX, 7),
               # ROR - Rotate right
               0x6a: ('ROR', IMP, 2),
               0x66: ('ROR', ZP0, 5),
               0x76: ('ROR', ZPX, 6),
               0x6e: ('ROR', ABS, 6),
               0x7e: ('ROR', ABX, 7),
               # RTI - Return from interrupt
               0x40: ('RTI', IMP, 6),
               # RTS - Return from subroutine
               0x60: ('RTS', IMP, 6),
               # SBC - Subtract with carry
               0xe9: ('SBC', IMM, 2),
               0xe5: ('SBC', ZP0, 3),
               0xf5: ('SBC', ZPX, 4),
               0xed: ('SBC', ABS, 4),
               0xfd: ('SBC', ABX, 4),
               0xf9: ('SBC', ABY, 4),
               0xe1: ('SBC', IZX, 6),
               0xf1: ('SBC', IZY, 5),
               # SEx - Set flag
               0x38: ('SEC', IMP, 2),
               0xf8: ('SED', IMP, 2),
               0x78: ('SEI', IMP, 2),
               # STA - Store accumulator
               0x85: ('STA', ZP0, 3),
               0x95: ('STA', ZPX, 4),
               0x8d: ('STA', ABS, 4),
               0x9d: ('STA', ABX, 5),
               0x99: ('STA', ABY, 5),
               0x81: ('STA', IZX, 6),
               0x91: ('STA', IZY, 6),
               # STX - Store X register
               0x86: ('STX', ZP0, 3),
               0x96: ('STX', ZPY, 4),
               0x8e: ('STX', ABS, 4),
               # STY - Store Y register
               0x84: ('STY', ZP0, 3),
               0x94: ('STY', ZPX, 4),
               0x8c: ('STY', ABS, 4),
               # Txx - Register transfers
               0xaa: ('TAX', IMP, 2),
               0x8a: ('TXA', IMP, 2),
               0xa8: ('TAY', IMP, 2),
               0x98: ('TYA', IMP, 2),
               0x9a: ('TXS', IMP, 2),
               0xba: ('TSX', IMP, 2),
               }

# Undocumented opcodes that behave as NOPs on the NMOS part -> (mode, cycles).
# The multi-byte ones still step over their operand.
_UNDOCUMENTED_NOPS = {0x1a: (IMP, 2), 0x3a: (IMP, 2), 0x5a: (IMP, 2),
                      0x7a: (IMP, 2), 0xda: (IMP, 2), 0xfa: (IMP, 2),
                      0x80: (IMM, 2), 0x82: (IMM, 2), 0x89: (IMM, 2),
                      0xc2: (IMM, 2), 0xe2: (IMM, 2),
                      0x04: (ZP0, 3), 0x44: (ZP0, 3), 0x64: (ZP0, 3),
                      0x14: (ZPX, 4), 0x34: (ZPX, 4), 0x54: (ZPX, 4),
                      0x74: (ZPX, 4), 0xd4: (ZPX, 4), 0xf4: (ZPX, 4),
                      0x0c: (ABS, 4),
                      0x1c: (ABX, 4), 0x3c: (ABX, 4), 0x5c: (ABX, 4),
                      0x7c: (ABX, 4), 0xdc: (ABX, 4), 0xfc: (ABX, 4),
                      0x9c: (ABX, 5),
                      }

# Remaining undocumented opcodes -> cycles. These are not modelled beyond
# their timing.
_ILLEGAL = {# xxx2 - the jam opcodes
            0x02: 2, 0x12: 2, 0x22: 2, 0x32: 2, 0x42: 2, 0x52: 2, 0x62: 2,
            0x72: 2, 0x92: 2, 0xb2: 2, 0xd2: 2, 0xf2: 2,
            # xxx3
            0x03: 8, 0x13: 8, 0x23: 8, 0x33: 8, 0x43: 8, 0x53: 8, 0x63: 8,
            0x73: 8, 0xc3: 8, 0xd3: 8, 0xe3: 8, 0xf3: 8,
            0x83: 6, 0x93: 6, 0xa3: 6, 0xb3: 5,
            # xxx7
            0x07: 5, 0x27: 5, 0x47: 5, 0x67: 5, 0xc7: 5, 0xe7: 5,
            0x17: 6, 0x37: 6, 0x57: 6, 0x77: 6, 0xd7: 6, 0xf7: 6,
            0x87: 3, 0xa7: 3, 0x97: 4, 0xb7: 4,
            # xxxB
            0x0b: 2, 0x2b: 2, 0x4b: 2, 0x6b: 2, 0x8b: 2, 0xab: 2, 0xcb: 2,
            0xeb: 2,
            0x1b: 7, 0x3b: 7, 0x5b: 7, 0x7b: 7, 0xdb: 7, 0xfb: 7,
            0x9b: 5, 0xbb: 4,
            # xxxE, xxxF
            0x9e: 5,
            0x0f: 6, 0x2f: 6, 0x4f: 6, 0x6f: 6, 0xcf: 6, 0xef: 6,
            0x1f: 7, 0x3f: 7, 0x5f: 7, 0x7f: 7, 0xdf: 7, 0xff: 7,
            0x8f: 4, 0xaf: 4, 0x9f: 5, 0xbf: 4,
            }

# Undocumented NOPs that take an extra cycle when their absolute,X operand
# would have crossed a page
PAGE_CROSSING_NOPS = frozenset((0x1c, 0x3c, 0x5c, 0x7c, 0xdc, 0xfc))


def _build_table():
    '''
    Assemble the 256 entry table from the documented, NOP and illegal
    groups. Every opcode byte must be claimed by exactly one group.
    '''
    table = [None] * 0x100
    for opcode, (mnemonic, mode, cycles) in _DOCUMENTED.items():
        table[opcode] = Instruction(mnemonic, mode, mnemonic, cycles)
    for opcode, (mode, cycles) in _UNDOCUMENTED_NOPS.items():
        table[opcode] = Instruction('???', mode, 'NOP', cycles)
    for opcode, cycles in _ILLEGAL.items():
        table[opcode] = Instruction('???', IMP, 'XXX', cycles)

    missing = [f'0x{op:02x}' for op, entry in enumerate(table) if entry is None]
    if missing:
        raise RuntimeError(f'Opcode table has no entry for {", ".join(missing)}')
    return tuple(table)


OPCODES = _build_table()


def lookup(opcode):
    '''
    Return the Instruction descriptor for an opcode byte
    '''
    return OPCODES[opcode & 0xff]
