# -*- coding: utf-8 -*-
"""
Cycle counted interpreter for the 6502.

The processor only ever advances when its owner calls ``tick``. An
instruction's whole effect is applied on the first tick of its execution
window; the remaining ticks just count down the cycles the real chip
would still be busy for.
"""
import logging

from .mmu import Bus
from .opcodes import OPCODES, AddressMode, PAGE_CROSSING_NOPS
from .registers import Registers


logger = logging.getLogger(__name__)

# Hard-coded addresses holding the little endian interrupt vectors
VECTORS = {'NMI':   0xfffa,
           'RESET': 0xfffc,
           'IRQ':   0xfffe,
           'BRK':   0xfffe}

# Fixed latency of the reset and interrupt entry sequences
RESET_CYCLES = 8
IRQ_CYCLES = 7
NMI_CYCLES = 8


class Processor:
    '''
    Processor of the 6502
    '''
    def __init__(self, bus: Bus, program_counter=None, stack_page=0x1):
        '''
        Initialise the 6502 against the bus it will run programs from. The
        processor powers up by performing a reset, taking the program
        counter from the reset vector at $FFFC.

        If program_counter is given it replaces the value read from the
        reset vector, which is handy when nothing has set the vectors up.
        '''
        if not 0 <= stack_page <= 0xff:
            raise ValueError(f'Stack page must be 0x00-0xff, not {stack_page!r}')

        self.bus = bus
        self.stack_page = stack_page
        self.r = Registers()

        # Total number of ticks since power up
        self.cycles = 0

        # Bind every opcode to its addressing mode and operation once. Each
        # entry is (Instruction, addressing mode method, operation method).
        self._ops = tuple((instruction,
                           getattr(self, instruction.mode.name),
                           getattr(self, instruction.operation))
                          for instruction in OPCODES)

        self.reset()
        if program_counter is not None:
            self.r.pc = program_counter & 0xffff

    def __repr__(self):
        return f'{self.r!r} Cycles: {self.cycles}'

    ######## Read only view of the registers ########
    @property
    def accumulator(self):
        return self.r.a

    @property
    def register_x(self):
        return self.r.x

    @property
    def register_y(self):
        return self.r.y

    @property
    def stack_pointer(self):
        return self.r.sp

    @property
    def program_counter(self):
        return self.r.pc

    @property
    def status(self):
        return self.r.p

    def get_flag(self, flag):
        '''
        Return the state of a named flag ('C', 'Z', 'I', 'D', 'B', 'U', 'V'
        or 'N')
        '''
        return self.r.get_flag(flag)

    ######## Bus access ########
    def read(self, addr):
        '''
        Read byte from bus at addr, wrapped into the 16 bit address space
        '''
        return self.bus.read(addr & 0xffff)

    def write(self, addr, value):
        '''
        Write byte to bus at addr, wrapped into the 16 bit address space
        '''
        self.bus.write(addr & 0xffff, value & 0xff)

    def read_byte(self):
        '''
        Read byte from address that program counter is currently set to
        '''
        value = self.read(self.r.pc)
        self.r.pc = (self.r.pc + 1) & 0xffff
        return value

    def read_word(self):
        '''
        Reads word from address that program counter is currently set to
        '''
        low_byte = self.read_byte()
        high_byte = self.read_byte()
        return (high_byte << 8) | low_byte

    def read_vector(self, interrupt):
        '''
        Gets the address stored at the pre-defined vector for interrupt
        '''
        vector = VECTORS[interrupt]
        low_byte = self.read(vector)
        high_byte = self.read(vector + 1)
        return (high_byte << 8) | low_byte

    ######## Stack ########
    def stack_push(self, value):
        '''
        Push value onto stack
        '''
        self.write(self.stack_page*0x100 + self.r.sp, value)
        self.r.sp = (self.r.sp - 1) & 0xff

    def stack_push_word(self, value):
        '''
        Push word onto stack, high byte first
        '''
        self.stack_push((value >> 8) & 0xff)
        self.stack_push(value & 0xff)

    def stack_pull(self):
        '''
        Pull value from stack
        '''
        self.r.sp = (self.r.sp + 1) & 0xff
        return self.read(self.stack_page*0x100 + self.r.sp)

    def stack_pull_word(self):
        '''
        Pull a word from the stack, low byte first
        '''
        low_byte = self.stack_pull()
        high_byte = self.stack_pull()
        return (high_byte << 8) | low_byte

    ######## Clock ########
    def complete(self):
        '''
        True when the current instruction has used up all of its cycles
        '''
        return self.remaining_cycles == 0

    def tick(self):
        '''
        Advance the processor by one clock cycle.

        On an instruction boundary any pending interrupt is serviced, or
        failing that the next instruction is fetched, decoded and executed.
        The cycle countdown is then decremented, but never below zero.
        '''
        if self.remaining_cycles == 0:
            if self._nmi_pending or self._irq_pending:
                self._service_interrupts()
            if self.remaining_cycles == 0:
                self._execute()

        if self.remaining_cycles > 0:
            self.remaining_cycles -= 1
        self.cycles += 1

    def step(self):
        '''
        Run the clock until one whole instruction (or interrupt entry) has
        been carried out, and return the number of cycles it took. Any
        cycles still owed by the previous instruction are run off first and
        not counted.
        '''
        while not self.complete():
            self.tick()

        start = self.cycles
        self.tick()
        while not self.complete():
            self.tick()
        return self.cycles - start

    def _execute(self):
        '''
        Fetch, decode and execute the instruction at the program counter
        '''
        pc = self.r.pc
        self.opcode = self.read_byte()
        instruction, address_mode, operation = self._ops[self.opcode]
        logger.debug('%04x  %02x  %s %s', pc, self.opcode,
                     instruction.mnemonic, instruction.mode.value)

        self.remaining_cycles = instruction.cycles

        # An extra cycle is only needed if both the addressing mode and the
        # operation say so
        additional_cycle1 = address_mode()
        additional_cycle2 = operation()
        self.remaining_cycles += additional_cycle1 & additional_cycle2

    ######## Reset and interrupts ########
    def reset(self):
        '''
        Put the processor into a known state and load the program counter
        from the reset vector. Takes 8 cycles.
        '''
        self.r.reset(self.read_vector('RESET'))

        self.fetched = 0
        self.addr_abs = 0
        self.addr_rel = 0
        self.opcode = 0
        self._irq_pending = False
        self._nmi_pending = False

        self.remaining_cycles = RESET_CYCLES
        logger.debug('Reset, pc=%04x', self.r.pc)

    def request_interrupt(self):
        '''
        Raise a maskable interrupt request. It is looked at on the next
        instruction boundary and ignored if interrupts are disabled then.
        '''
        self._irq_pending = True

    def request_nonmaskable_interrupt(self):
        '''
        Raise a non-maskable interrupt, serviced on the next instruction
        boundary regardless of the interrupt disable flag.
        '''
        self._nmi_pending = True

    def _service_interrupts(self):
        if self._nmi_pending:
            self._nmi_pending = False
            self._interrupt('NMI', NMI_CYCLES)
        elif self._irq_pending:
            self._irq_pending = False
            if self.r.get_flag('I'):
                logger.debug('IRQ ignored, interrupts disabled')
            else:
                self._interrupt('IRQ', IRQ_CYCLES)

    def _interrupt(self, interrupt, cycles):
        '''
        Interrupt entry shared by IRQ and NMI: save the program counter and
        status on the stack, then jump through the interrupt's vector.
        The pushed status has break clear and unused set, and carries the
        interrupt disable flag from before the interrupt so RTI restores it.
        Only the pushed copy keeps unused set.
        '''
        self.stack_push_word(self.r.pc)

        self.r.set_flag('B', False)
        self.r.set_flag('U')
        self.stack_push(self.r.p)
        self.r.set_flag('U', False)
        self.r.set_flag('I')

        self.r.pc = self.read_vector(interrupt)
        self.remaining_cycles = cycles
        logger.debug('%s, pc=%04x', interrupt, self.r.pc)

    ######## Addressing Modes ########
    # Each returns 1 if the instruction could need an extra cycle because
    # indexing crossed a page boundary, otherwise 0.
    @staticmethod
    def _page_crossed(addr1, addr2):
        return int((addr1 & 0xff00) != (addr2 & 0xff00))

    def IMP(self):
        '''
        Implied: no operand bytes. Operations that take an operand work on
        the accumulator.
        '''
        self.fetched = self.r.a
        return 0

    def IMM(self):
        '''
        Immediate: the operand is the byte following the opcode
        '''
        self.addr_abs = self.r.pc
        self.r.pc = (self.r.pc + 1) & 0xffff
        return 0

    def ZP0(self):
        '''
        Zero page: one byte address into page zero
        '''
        self.addr_abs = self.read_byte() & 0xff
        return 0

    def ZPX(self):
        '''
        Zero page address offset by the x register. Wraps around within
        page zero.
        '''
        self.addr_abs = (self.read_byte() + self.r.x) & 0xff
        return 0

    def ZPY(self):
        '''
        Zero page address offset by the y register
        '''
        self.addr_abs = (self.read_byte() + self.r.y) & 0xff
        return 0

    def REL(self):
        '''
        Relative: a signed one byte displacement, used only by branches
        '''
        offset = self.read_byte()
        if offset & 0x80:
            offset |= 0xff00
        self.addr_rel = offset
        return 0

    def ABS(self):
        '''
        Absolute: full 16 bit address
        '''
        self.addr_abs = self.read_word()
        return 0

    def ABX(self):
        '''
        Absolute address offset by the x register
        '''
        base = self.read_word()
        self.addr_abs = (base + self.r.x) & 0xffff
        return self._page_crossed(base, self.addr_abs)

    def ABY(self):
        '''
        Absolute address offset by the y register
        '''
        base = self.read_word()
        self.addr_abs = (base + self.r.y) & 0xffff
        return self._page_crossed(base, self.addr_abs)

    def IND(self):
        '''
        Indirect loading using value at given address. Only used by indirect
        JMP instruction. Also, doesn't carry, so if low byte is in xxFF
        position, the high byte will be read from xx00 rather than the
        start of the next page.
        '''
        pointer = self.read_word()
        if (pointer & 0xff) == 0xff:
            high_byte = self.read(pointer & 0xff00)
        else:
            high_byte = self.read(pointer + 1)

        self.addr_abs = (high_byte << 8) | self.read(pointer)
        return 0

    def IZX(self):
        '''
        Indirect loading using value in the x register to find address that
        should be read. A byte is read and added to the contents of the x
        register. This defines a zero-page memory address, which can be read
        to find the location of the data required.
        '''
        zero_page_addr = self.read_byte() + self.r.x
        low_byte = self.read(zero_page_addr & 0xff)
        high_byte = self.read((zero_page_addr + 1) & 0xff)
        self.addr_abs = (high_byte << 8) | low_byte
        return 0

    def IZY(self):
        '''
        Indirect loading using value in the y register. A byte is read to give
        the location in zero page memory to start reading an address. This
        address is added to the contents of the y register to give the final
        address.
        '''
        zero_page_addr = self.read_byte()
        low_byte = self.read(zero_page_addr)
        high_byte = self.read((zero_page_addr + 1) & 0xff)

        base = (high_byte << 8) | low_byte
        self.addr_abs = (base + self.r.y) & 0xffff
        return self._page_crossed(base, self.addr_abs)

    ######## Operation helpers ########
    def _mode(self):
        return self._ops[self.opcode][0].mode

    def fetch(self):
        '''
        Load the operand into self.fetched. For implied instructions the
        addressing mode has already put the accumulator there.
        '''
        if self._mode() is not AddressMode.IMP:
            self.fetched = self.read(self.addr_abs)
        return self.fetched

    def _write_back(self, value):
        '''
        Store result of a read-modify-write instruction in the accumulator or
        back at the operand address
        '''
        if self._mode() is AddressMode.IMP:
            self.r.a = value & 0xff
        else:
            self.write(self.addr_abs, value)

    def _add(self, value):
        '''
        Binary addition of value and the carry to the accumulator, shared by
        ADC and SBC
        '''
        a = self.r.a
        result = a + value + self.r.get_flag('C')

        self.r.set_flag('C', result > 0xff)
        self.r.set_flag('V', (~(a ^ value)) & (a ^ result) & 0x80)
        self.r.ZN(result & 0xff)
        self.r.a = result & 0xff

    def _compare(self, register):
        '''
        Compare register with the operand. Used for CMP, CPX, CPY operations.
        '''
        self.fetch()
        result = (register - self.fetched) & 0xff
        self.r.set_flag('C', register >= self.fetched)
        self.r.ZN(result)

    def _branch(self, flag, state):
        '''
        Branch if flag is in the given state. Taking the branch costs a
        cycle, and another if the target is on a different page.
        '''
        if self.r.get_flag(flag) is state:
            self.remaining_cycles += 1
            self.addr_abs = (self.r.pc + self.addr_rel) & 0xffff
            self.remaining_cycles += self._page_crossed(self.addr_abs, self.r.pc)
            self.r.pc = self.addr_abs
        return 0

    def _transfer(self, source, dest):
        '''
        Copy one register into another. Z and N follow the copied value
        unless the destination is the stack pointer.
        '''
        value = getattr(self.r, source)
        setattr(self.r, dest, value)
        if dest != 'sp':
            self.r.ZN(value)
        return 0

    ######## Operations ########
    # Each returns 1 if it takes the extra cycle offered by its addressing
    # mode, otherwise 0.
    def ADC(self):
        '''
        Add with carry. Decimal mode is not modelled; the D flag is ignored.
        '''
        self._add(self.fetch())
        return 1

    def SBC(self):
        '''
        Subtract with borrow. Adding the ones' complement of the operand plus
        the carry is the same as subtracting the operand and the borrow.
        '''
        self._add(self.fetch() ^ 0xff)
        return 1

    def AND(self):
        self.r.a = self.r.a & self.fetch()
        self.r.ZN(self.r.a)
        return 1

    def EOR(self):
        self.r.a = self.r.a ^ self.fetch()
        self.r.ZN(self.r.a)
        return 1

    def ORA(self):
        self.r.a = self.r.a | self.fetch()
        self.r.ZN(self.r.a)
        return 1

    def ASL(self):
        '''
        ASL shifts all bits left one position. 0 is shifted into bit 0 and
        the original bit 7 is shifted into the Carry.
        '''
        value = self.fetch() << 1
        self.r.set_flag('C', value > 0xff)
        self.r.ZN(value & 0xff)
        self._write_back(value)
        return 0

    def LSR(self):
        '''
        Shifts all bits right one position. 0 is shifted into bit 7 and the
        original bit 0 into the Carry.
        '''
        original = self.fetch()
        value = original >> 1
        self.r.set_flag('C', original & 0x01)
        self.r.ZN(value)
        self._write_back(value)
        return 0

    def ROL(self):
        '''
        Rotates left by 1 bit through the carry
        '''
        original = self.fetch()
        value = (original << 1) | self.r.get_flag('C')
        self.r.set_flag('C', original & 0x80)
        self.r.ZN(value & 0xff)
        self._write_back(value)
        return 0

    def ROR(self):
        '''
        Rotates right by 1 bit through the carry
        '''
        original = self.fetch()
        value = (self.r.get_flag('C') << 7) | (original >> 1)
        self.r.set_flag('C', original & 0x01)
        self.r.ZN(value)
        self._write_back(value)
        return 0

    def BCC(self):
        return self._branch('C', False)

    def BCS(self):
        return self._branch('C', True)

    def BEQ(self):
        return self._branch('Z', True)

    def BNE(self):
        return self._branch('Z', False)

    def BMI(self):
        return self._branch('N', True)

    def BPL(self):
        return self._branch('N', False)

    def BVC(self):
        return self._branch('V', False)

    def BVS(self):
        return self._branch('V', True)

    def BIT(self):
        '''
        Performs bit test with the operand. Doesn't modify any registers,
        but Z comes from A AND M, N and V are copied from bits 7 and 6 of M.
        '''
        value = self.fetch()
        self.r.set_flag('Z', (self.r.a & value) == 0)
        self.r.set_flag('N', value & 0x80)
        self.r.set_flag('V', value & 0x40)
        return 0

    def BRK(self):
        '''
        Force break (software interrupt rather than hardware interrupt). The
        byte after the BRK is skipped, so the return address is BRK + 2.
        '''
        self.r.pc = (self.r.pc + 1) & 0xffff
        self.stack_push_word(self.r.pc)

        # Only the pushed copy carries the break and unused bits
        self.stack_push(self.r.p | self.r.flagbyte['B'] | self.r.flagbyte['U'])
        self.r.set_flag('B', False)
        self.r.set_flag('U', False)
        self.r.set_flag('I')

        self.r.pc = self.read_vector('BRK')
        return 0

    def CLC(self):
        self.r.set_flag('C', False)
        return 0

    def CLD(self):
        self.r.set_flag('D', False)
        return 0

    def CLI(self):
        self.r.set_flag('I', False)
        return 0

    def CLV(self):
        self.r.set_flag('V', False)
        return 0

    def SEC(self):
        self.r.set_flag('C', True)
        return 0

    def SED(self):
        self.r.set_flag('D', True)
        return 0

    def SEI(self):
        self.r.set_flag('I', True)
        return 0

    def CMP(self):
        self._compare(self.r.a)
        return 1

    def CPX(self):
        self._compare(self.r.x)
        return 0

    def CPY(self):
        self._compare(self.r.y)
        return 0

    def DEC(self):
        '''
        Decrement value in memory by 1
        '''
        value = (self.fetch() - 1) & 0xff
        self.write(self.addr_abs, value)
        self.r.ZN(value)
        return 0

    def INC(self):
        '''
        Increment value in memory by 1
        '''
        value = (self.fetch() + 1) & 0xff
        self.write(self.addr_abs, value)
        self.r.ZN(value)
        return 0

    def DEX(self):
        self.r.x = (self.r.x - 1) & 0xff
        self.r.ZN(self.r.x)
        return 0

    def DEY(self):
        self.r.y = (self.r.y - 1) & 0xff
        self.r.ZN(self.r.y)
        return 0

    def INX(self):
        self.r.x = (self.r.x + 1) & 0xff
        self.r.ZN(self.r.x)
        return 0

    def INY(self):
        self.r.y = (self.r.y + 1) & 0xff
        self.r.ZN(self.r.y)
        return 0

    def JMP(self):
        self.r.pc = self.addr_abs
        return 0

    def JSR(self):
        '''
        Jump to subroutine. The address pushed is that of the last byte of
        the JSR, which RTS makes up for.
        '''
        self.stack_push_word((self.r.pc - 1) & 0xffff)
        self.r.pc = self.addr_abs
        return 0

    def RTS(self):
        '''
        Return from subroutine
        '''
        self.r.pc = (self.stack_pull_word() + 1) & 0xffff
        return 0

    def RTI(self):
        '''
        Return from interrupt routine
        '''
        self.r.p = self.stack_pull()
        self.r.set_flag('B', False)
        self.r.set_flag('U', False)
        self.r.pc = self.stack_pull_word()
        return 0

    def LDA(self):
        self.r.a = self.fetch()
        self.r.ZN(self.r.a)
        return 1

    def LDX(self):
        self.r.x = self.fetch()
        self.r.ZN(self.r.x)
        return 1

    def LDY(self):
        self.r.y = self.fetch()
        self.r.ZN(self.r.y)
        return 1

    def STA(self):
        self.write(self.addr_abs, self.r.a)
        return 0

    def STX(self):
        self.write(self.addr_abs, self.r.x)
        return 0

    def STY(self):
        self.write(self.addr_abs, self.r.y)
        return 0

    def PHA(self):
        self.stack_push(self.r.a)
        return 0

    def PHP(self):
        '''
        Push the status register with break and unused set, then clear both
        in the live register
        '''
        self.stack_push(self.r.p | self.r.flagbyte['B'] | self.r.flagbyte['U'])
        self.r.set_flag('B', False)
        self.r.set_flag('U', False)
        return 0

    def PLA(self):
        self.r.a = self.stack_pull()
        self.r.ZN(self.r.a)
        return 0

    def PLP(self):
        self.r.p = self.stack_pull()
        self.r.set_flag('U')
        return 0

    def TAX(self):
        return self._transfer('a', 'x')

    def TAY(self):
        return self._transfer('a', 'y')

    def TSX(self):
        return self._transfer('sp', 'x')

    def TXA(self):
        return self._transfer('x', 'a')

    def TXS(self):
        return self._transfer('x', 'sp')

    def TYA(self):
        return self._transfer('y', 'a')

    def NOP(self):
        '''
        No operation. Some of the undocumented NOPs pay for a page crossing
        like a read would.
        '''
        return int(self.opcode in PAGE_CROSSING_NOPS)

    def XXX(self):
        '''
        Illegal instruction - not modelled, only costs its cycles
        '''
        return 0
