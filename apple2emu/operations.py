"""Instruction semantics of the 6502.

Every operation takes the processor and the effective address produced by
the instruction's addressing mode. For branches the address is the signed
branch offset. Implied instructions ignore it.
"""

from __future__ import annotations

from .cpu import BRK_LOW_ADDR, Cpu


def _set_nz(cpu: Cpu, value: int) -> None:
    cpu.z = value == 0
    cpu.n = bool(value & 0x80)


def _signed_offset(addr: int) -> int:
    return ((addr & 0xFF) ^ 0x80) - 0x80


def _branch(cpu: Cpu, taken: bool, addr: int) -> None:
    if taken:
        cpu.pc = (cpu.pc + _signed_offset(addr)) & 0xFFFF


def _modify(cpu: Cpu, addr: int, change) -> None:
    value = change(cpu.read(addr)) & 0xFF
    cpu.write(addr, value)
    _set_nz(cpu, value)


# Load and store


def lda(cpu: Cpu, addr: int) -> None:
    """Load the accumulator."""
    cpu.a = cpu.read(addr)
    _set_nz(cpu, cpu.a)


def ldx(cpu: Cpu, addr: int) -> None:
    """Load the X register."""
    cpu.x = cpu.read(addr)
    _set_nz(cpu, cpu.x)


def ldy(cpu: Cpu, addr: int) -> None:
    """Load the Y register."""
    cpu.y = cpu.read(addr)
    _set_nz(cpu, cpu.y)


def sta(cpu: Cpu, addr: int) -> None:
    """Store the accumulator."""
    cpu.write(addr, cpu.a)


def stx(cpu: Cpu, addr: int) -> None:
    """Store the X register."""
    cpu.write(addr, cpu.x)


def sty(cpu: Cpu, addr: int) -> None:
    """Store the Y register."""
    cpu.write(addr, cpu.y)


# Increment and decrement


def inc(cpu: Cpu, addr: int) -> None:
    """Increment a memory byte."""
    _modify(cpu, addr, lambda value: value + 1)


def inx(cpu: Cpu, addr: int) -> None:
    """Increment X."""
    cpu.x = (cpu.x + 1) & 0xFF
    _set_nz(cpu, cpu.x)


def iny(cpu: Cpu, addr: int) -> None:
    """Increment Y."""
    cpu.y = (cpu.y + 1) & 0xFF
    _set_nz(cpu, cpu.y)


def dec(cpu: Cpu, addr: int) -> None:
    """Decrement a memory byte."""
    _modify(cpu, addr, lambda value: value - 1)


def dex(cpu: Cpu, addr: int) -> None:
    """Decrement X."""
    cpu.x = (cpu.x - 1) & 0xFF
    _set_nz(cpu, cpu.x)


def dey(cpu: Cpu, addr: int) -> None:
    """Decrement Y."""
    cpu.y = (cpu.y - 1) & 0xFF
    _set_nz(cpu, cpu.y)


# Stack


def pha(cpu: Cpu, addr: int) -> None:
    """Push the accumulator."""
    cpu.push(cpu.a)


def php(cpu: Cpu, addr: int) -> None:
    """Push the processor status."""
    cpu.push(cpu.status_byte())


def pla(cpu: Cpu, addr: int) -> None:
    """Pull the accumulator."""
    cpu.a = cpu.pull()
    _set_nz(cpu, cpu.a)


def plp(cpu: Cpu, addr: int) -> None:
    """Pull the processor status; the break flag is left alone."""
    cpu.set_status(cpu.pull())


# Branches


def bcc(cpu: Cpu, addr: int) -> None:
    """Branch if carry is clear."""
    _branch(cpu, not cpu.c, addr)


def bcs(cpu: Cpu, addr: int) -> None:
    """Branch if carry is set."""
    _branch(cpu, bool(cpu.c), addr)


def beq(cpu: Cpu, addr: int) -> None:
    """Branch if zero is set."""
    _branch(cpu, bool(cpu.z), addr)


def bne(cpu: Cpu, addr: int) -> None:
    """Branch if zero is clear."""
    _branch(cpu, not cpu.z, addr)


def bmi(cpu: Cpu, addr: int) -> None:
    """Branch if negative is set."""
    _branch(cpu, bool(cpu.n), addr)


def bpl(cpu: Cpu, addr: int) -> None:
    """Branch if negative is clear."""
    _branch(cpu, not cpu.n, addr)


def bvc(cpu: Cpu, addr: int) -> None:
    """Branch if overflow is clear."""
    _branch(cpu, not cpu.v, addr)


def bvs(cpu: Cpu, addr: int) -> None:
    """Branch if overflow is set."""
    _branch(cpu, bool(cpu.v), addr)


# Jumps and returns


def jmp(cpu: Cpu, addr: int) -> None:
    """Jump to an address."""
    cpu.pc = addr & 0xFFFF


def jsr(cpu: Cpu, addr: int) -> None:
    """Push the return address minus one and jump to a subroutine."""
    return_addr = (cpu.pc - 1) & 0xFFFF
    cpu.push(return_addr >> 8)
    cpu.push(return_addr & 0xFF)
    cpu.pc = addr & 0xFFFF


def rts(cpu: Cpu, addr: int) -> None:
    """Return from a subroutine."""
    lo = cpu.pull()
    hi = cpu.pull()
    cpu.pc = (((hi << 8) | lo) + 1) & 0xFFFF


def rti(cpu: Cpu, addr: int) -> None:
    """Return from an interrupt, restoring the status and the break flag."""
    cpu.set_status(cpu.pull(), restore_break=True)
    lo = cpu.pull()
    hi = cpu.pull()
    cpu.pc = (hi << 8) | lo


# Transfers


def tax(cpu: Cpu, addr: int) -> None:
    """Copy A to X."""
    cpu.x = cpu.a
    _set_nz(cpu, cpu.x)


def tay(cpu: Cpu, addr: int) -> None:
    """Copy A to Y."""
    cpu.y = cpu.a
    _set_nz(cpu, cpu.y)


def txa(cpu: Cpu, addr: int) -> None:
    """Copy X to A."""
    cpu.a = cpu.x
    _set_nz(cpu, cpu.a)


def tya(cpu: Cpu, addr: int) -> None:
    """Copy Y to A."""
    cpu.a = cpu.y
    _set_nz(cpu, cpu.a)


def tsx(cpu: Cpu, addr: int) -> None:
    """Copy the stack pointer to X."""
    cpu.x = cpu.sp
    _set_nz(cpu, cpu.x)


def txs(cpu: Cpu, addr: int) -> None:
    """Copy X to the stack pointer; flags are unchanged."""
    cpu.sp = cpu.x


# Arithmetic and logic


def adc(cpu: Cpu, addr: int) -> None:
    """Add with carry, with decimal adjustment when D is set."""
    value = cpu.read(addr)
    carry = int(bool(cpu.c))
    result = cpu.a + value + carry
    if cpu.d:
        if (cpu.a & 0x0F) + (value & 0x0F) + carry > 9:
            result += 6
        if result > 0x99:
            result += 0x60
    result &= 0xFFFF
    cpu.c = bool(result & 0x100)
    cpu.v = bool((cpu.a ^ result) & (value ^ result) & 0x80)
    cpu.a = result & 0xFF
    _set_nz(cpu, cpu.a)


def sbc(cpu: Cpu, addr: int) -> None:
    """Subtract with borrow, with decimal adjustment when D is set."""
    value = cpu.read(addr)
    borrow = 1 - int(bool(cpu.c))
    result = (cpu.a - value - borrow) & 0xFFFF
    cpu.c = result < 0x100
    cpu.v = bool((cpu.a ^ result) & (~value ^ result) & 0x80)
    if cpu.d:
        adjusted = result
        if (cpu.a & 0x0F) - (1 - int(cpu.c)) < (value & 0x0F):
            adjusted = (adjusted - 0x06) & 0xFFFF
        if adjusted > 0x99:
            adjusted = (adjusted - 0x60) & 0xFFFF
        result = adjusted
    cpu.a = result & 0xFF
    _set_nz(cpu, cpu.a)


def and_(cpu: Cpu, addr: int) -> None:
    """Bitwise AND into the accumulator."""
    cpu.a &= cpu.read(addr)
    _set_nz(cpu, cpu.a)


def eor(cpu: Cpu, addr: int) -> None:
    """Bitwise exclusive OR into the accumulator."""
    cpu.a ^= cpu.read(addr)
    _set_nz(cpu, cpu.a)


def ora(cpu: Cpu, addr: int) -> None:
    """Bitwise OR into the accumulator."""
    cpu.a |= cpu.read(addr)
    _set_nz(cpu, cpu.a)


def _compare(cpu: Cpu, register: int, addr: int) -> None:
    value = cpu.read(addr)
    cpu.c = register >= value
    _set_nz(cpu, (register - value) & 0xFF)


def cmp(cpu: Cpu, addr: int) -> None:
    """Compare the accumulator with memory."""
    _compare(cpu, cpu.a, addr)


def cpx(cpu: Cpu, addr: int) -> None:
    """Compare X with memory."""
    _compare(cpu, cpu.x, addr)


def cpy(cpu: Cpu, addr: int) -> None:
    """Compare Y with memory."""
    _compare(cpu, cpu.y, addr)


# Shifts and rotates


def _shift_left(cpu: Cpu, value: int, carry_in: int) -> int:
    cpu.c = bool(value & 0x80)
    result = ((value << 1) | carry_in) & 0xFF
    _set_nz(cpu, result)
    return result


def _shift_right(cpu: Cpu, value: int, carry_in: int) -> int:
    cpu.c = bool(value & 0x01)
    result = (value >> 1) | (carry_in << 7)
    _set_nz(cpu, result)
    return result


def asl_acc(cpu: Cpu, addr: int) -> None:
    """Shift the accumulator left."""
    cpu.a = _shift_left(cpu, cpu.a, 0)


def asl(cpu: Cpu, addr: int) -> None:
    """Shift a memory byte left."""
    cpu.write(addr, _shift_left(cpu, cpu.read(addr), 0))


def lsr_acc(cpu: Cpu, addr: int) -> None:
    """Shift the accumulator right."""
    cpu.a = _shift_right(cpu, cpu.a, 0)


def lsr(cpu: Cpu, addr: int) -> None:
    """Shift a memory byte right."""
    cpu.write(addr, _shift_right(cpu, cpu.read(addr), 0))


def rol_acc(cpu: Cpu, addr: int) -> None:
    """Rotate the accumulator left through carry."""
    cpu.a = _shift_left(cpu, cpu.a, int(bool(cpu.c)))


def rol(cpu: Cpu, addr: int) -> None:
    """Rotate a memory byte left through carry."""
    cpu.write(addr, _shift_left(cpu, cpu.read(addr), int(bool(cpu.c))))


def ror_acc(cpu: Cpu, addr: int) -> None:
    """Rotate the accumulator right through carry."""
    cpu.a = _shift_right(cpu, cpu.a, int(bool(cpu.c)))


def ror(cpu: Cpu, addr: int) -> None:
    """Rotate a memory byte right through carry."""
    cpu.write(addr, _shift_right(cpu, cpu.read(addr), int(bool(cpu.c))))


# Flag operations


def sec(cpu: Cpu, addr: int) -> None:
    """Set carry."""
    cpu.c = True


def sed(cpu: Cpu, addr: int) -> None:
    """Set decimal mode."""
    cpu.d = True


def sei(cpu: Cpu, addr: int) -> None:
    """Disable interrupts."""
    cpu.i = True


def clc(cpu: Cpu, addr: int) -> None:
    """Clear carry."""
    cpu.c = False


def cld(cpu: Cpu, addr: int) -> None:
    """Clear decimal mode."""
    cpu.d = False


def cli(cpu: Cpu, addr: int) -> None:
    """Enable interrupts."""
    cpu.i = False


def clv(cpu: Cpu, addr: int) -> None:
    """Clear overflow."""
    cpu.v = False


# Miscellaneous


def bit(cpu: Cpu, addr: int) -> None:
    """Test memory bits against the accumulator."""
    value = cpu.read(addr)
    cpu.z = (cpu.a & value) == 0
    cpu.n = bool(value & 0x80)
    cpu.v = bool(value & 0x40)


def brk(cpu: Cpu, addr: int) -> None:
    """Software interrupt: push PC + 1 and status, jump through the BRK vector."""
    cpu.i = True
    return_addr = (cpu.pc + 1) & 0xFFFF
    cpu.push(return_addr >> 8)
    cpu.push(return_addr & 0xFF)
    cpu.push(cpu.status_byte())
    cpu.pc = cpu.read(BRK_LOW_ADDR) | (cpu.read(BRK_LOW_ADDR + 1) << 8)


def nop(cpu: Cpu, addr: int) -> None:
    """No operation: behaves as a branch that is never taken."""
    _branch(cpu, False, addr)