# -*- coding: utf-8 -*-
"""
Register file of the 6502: three 8 bit working registers, the stack
pointer, the 16 bit program counter and the packed status byte.
"""

# Bit mask for each flag in the status register
FLAGS = {
    'N': 0x80,      # Negative
    'V': 0x40,      # Overflow
    'U': 0x20,      # Unused - pushed as 1 on interrupt entry
    'B': 0x10,      # Break
    'D': 0x08,      # Decimal mode
    'I': 0x04,      # IRQ disable
    'Z': 0x02,      # Zero
    'C': 0x01,      # Carry
}

# Stack pointer after a reset. The reset sequence performs three dummy
# pushes starting from 0x00.
RESET_STACK_POINTER = 0xfd


class Registers:
    '''
    An object for holding all the information about the 6502 CPU registers
    '''
    def __init__(self, program_counter=0):
        '''
        Initialise the registers by performing a reset.
        '''
        self.flagbyte = FLAGS
        self.reset(program_counter)

    def __repr__(self):
        '''
        Representation of object, showing content of all registers
        '''
        fmt = (f'A: 0x{self.a:02x} X: 0x{self.x:02x} Y: 0x{self.y:02x} '
               f'S: 0x{self.sp:02x} PC: 0x{self.pc:04x} Flags: {self.p:>08b}')
        return fmt

    def reset(self, program_counter=0):
        '''
        Zero the accumulator and index registers, park the stack pointer at
        its reset position and leave only the unused bit set in the status
        register.
        '''
        self.a = 0
        self.x = 0
        self.y = 0
        self.sp = RESET_STACK_POINTER
        self.pc = program_counter & 0xffff
        self.clear_flags()

    def get_flag(self, flag):
        '''
        Return a boolean that describes the state of the flag in the status
        register.
        '''
        return bool(self.p & self.flagbyte[flag])

    def set_flag(self, flag, value=True):
        '''
        Set particular flag to a value (either True or False). Only the bit
        belonging to the flag is touched.
        '''
        if value:
            self.p = self.p | self.flagbyte[flag]
        else:
            # 00001000 -> 11110111
            self.p = self.p & (0xff ^ self.flagbyte[flag])

    def ZN(self, value):
        '''
        Zero and Negative flag often get set together and have standard
        criteria. Function to conveniently set both together
        '''
        self.set_flag('Z', (value & 0xff) == 0)

        # Using twos-complement, number is negative if bit 7 is set
        self.set_flag('N', value & 0x80)

    def clear_flags(self):
        '''
        Clears all the flags in the process status register
        '''
        self.p = self.flagbyte['U']
