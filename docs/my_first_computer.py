# -*- coding: utf-8 -*-
"""
An initial programme to trial out the 6502 emulator. Multiplies 10 by 3 by
repeated addition and leaves the answer at $0002.
"""
import logging

from mos6502 import MMU, Processor

logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

programme = bytes([0xa2, 0x0a,          # LDX #10
                   0x8e, 0x00, 0x00,    # STX $0000
                   0xa2, 0x03,          # LDX #3
                   0x8e, 0x01, 0x00,    # STX $0001
                   0xac, 0x00, 0x00,    # LDY $0000
                   0xa9, 0x00,          # LDA #0
                   0x18,                # CLC
                   0x6d, 0x01, 0x00,    # loop: ADC $0001
                   0x88,                # DEY
                   0xd0, 0xfa,          # BNE loop
                   0x8d, 0x02, 0x00,    # STA $0002
                   0xea, 0xea, 0xea])   # NOP NOP NOP

mems = MMU(((0, 0x4000, 'RAM', False),
            (0x8000, len(programme), 'ROM', True, programme)))
mems.load(0xfffc, (0x00, 0x80))

computer = Processor(mems)
print(f'Booted from 0x{mems.read_word(0xfffc):04x}')

while computer.program_counter < 0x8000 + len(programme) - 3:
    computer.step()

print(computer)
print(f'10 * 3 = {mems.read(0x0002)}')
