"""The opcode table and the fetch-decode-execute step."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from . import operations as ops
from .addressing import AddressMode, resolve_address
from .cpu import Cpu

IMM = AddressMode.IMM
ZP = AddressMode.ZP
ZPX = AddressMode.ZPX
ZPY = AddressMode.ZPY
ABS = AddressMode.ABS
ABX = AddressMode.ABX
ABY = AddressMode.ABY
IND = AddressMode.IND
IDX = AddressMode.IDX
IDY = AddressMode.IDY
IMP = AddressMode.IMP
REL = AddressMode.REL


@dataclass(frozen=True)
class Opcode:
    """One entry of the opcode table."""

    mode: AddressMode
    cycles: int
    operation: Callable[[Cpu, int], None]

    @property
    def name(self) -> str:
        """Mnemonic of the instruction."""
        return self.operation.__name__.rstrip("_").upper()


_ALU_MODES = (
    (IMM, 2), (ZP, 3), (ZPX, 4), (ABS, 4), (ABX, 4), (ABY, 4), (IDX, 6), (IDY, 5),
)


def _alu(base: int):
    offsets = (0x09, 0x05, 0x15, 0x0D, 0x1D, 0x19, 0x01, 0x11)
    return tuple(
        (base + offset, mode, cycles)
        for offset, (mode, cycles) in zip(offsets, _ALU_MODES)
    )


def _shift(base: int):
    return (
        (base + 0x06, ZP, 5),
        (base + 0x16, ZPX, 6),
        (base + 0x0E, ABS, 6),
        (base + 0x1E, ABX, 7),
    )


_TABLE = {
    ops.lda: _alu(0xA0),
    ops.ldx: ((0xA2, IMM, 2), (0xA6, ZP, 3), (0xB6, ZPY, 4), (0xAE, ABS, 4), (0xBE, ABY, 4)),
    ops.ldy: ((0xA0, IMM, 2), (0xA4, ZP, 3), (0xB4, ZPX, 4), (0xAC, ABS, 4), (0xBC, ABX, 4)),
    ops.sta: (
        (0x85, ZP, 3), (0x95, ZPX, 4), (0x8D, ABS, 4), (0x9D, ABX, 5),
        (0x99, ABY, 5), (0x81, IDX, 6), (0x91, IDY, 6),
    ),
    ops.stx: ((0x86, ZP, 3), (0x96, ZPY, 4), (0x8E, ABS, 4)),
    ops.sty: ((0x84, ZP, 3), (0x94, ZPX, 4), (0x8C, ABS, 4)),
    ops.adc: _alu(0x60),
    ops.sbc: _alu(0xE0),
    ops.and_: _alu(0x20),
    ops.eor: _alu(0x40),
    ops.ora: _alu(0x00),
    ops.cmp: _alu(0xC0),
    ops.cpx: ((0xE0, IMM, 2), (0xE4, ZP, 3), (0xEC, ABS, 4)),
    ops.cpy: ((0xC0, IMM, 2), (0xC4, ZP, 3), (0xCC, ABS, 4)),
    ops.asl_acc: ((0x0A, IMP, 2),),
    ops.asl: _shift(0x00),
    ops.lsr_acc: ((0x4A, IMP, 2),),
    ops.lsr: _shift(0x40),
    ops.rol_acc: ((0x2A, IMP, 2),),
    ops.rol: _shift(0x20),
    ops.ror_acc: ((0x6A, IMP, 2),),
    ops.ror: _shift(0x60),
    ops.bcc: ((0x90, REL, 2),),
    ops.bcs: ((0xB0, REL, 2),),
    ops.beq: ((0xF0, REL, 2),),
    ops.bne: ((0xD0, REL, 2),),
    ops.bmi: ((0x30, REL, 2),),
    ops.bpl: ((0x10, REL, 2),),
    ops.bvc: ((0x50, REL, 2),),
    ops.bvs: ((0x70, REL, 2),),
    ops.jmp: ((0x4C, ABS, 3), (0x6C, IND, 5)),
    ops.jsr: ((0x20, ABS, 6),),
    ops.rts: ((0x60, IMP, 6),),
    ops.rti: ((0x40, IMP, 6),),
    ops.inc: ((0xE6, ZP, 5), (0xF6, ZPX, 6), (0xEE, ABS, 6), (0xFE, ABX, 7)),
    ops.inx: ((0xE8, IMP, 2),),
    ops.iny: ((0xC8, IMP, 2),),
    ops.dec: ((0xC6, ZP, 5), (0xD6, ZPX, 6), (0xCE, ABS, 6), (0xDE, ABX, 7)),
    ops.dex: ((0xCA, IMP, 2),),
    ops.dey: ((0x88, IMP, 2),),
    ops.bit: ((0x24, ZP, 3), (0x2C, ABS, 4)),
    ops.sec: ((0x38, IMP, 2),),
    ops.sed: ((0xF8, IMP, 2),),
    ops.sei: ((0x78, IMP, 2),),
    ops.clc: ((0x18, IMP, 2),),
    ops.cld: ((0xD8, IMP, 2),),
    ops.cli: ((0x58, IMP, 2),),
    ops.clv: ((0xB8, IMP, 2),),
    ops.pha: ((0x48, IMP, 3),),
    ops.php: ((0x08, IMP, 3),),
    ops.pla: ((0x68, IMP, 4),),
    ops.plp: ((0x28, IMP, 4),),
    ops.tax: ((0xAA, IMP, 2),),
    ops.tay: ((0xA8, IMP, 2),),
    ops.txa: ((0x8A, IMP, 2),),
    ops.tya: ((0x98, IMP, 2),),
    ops.tsx: ((0xBA, IMP, 2),),
    ops.txs: ((0x9A, IMP, 2),),
    ops.brk: ((0x00, IMP, 7),),
    ops.nop: ((0xEA, IMP, 2),),
}

OPCODES: Mapping[int, Opcode] = MappingProxyType(
    {
        byte: Opcode(mode, cycles, operation)
        for operation, entries in _TABLE.items()
        for byte, mode, cycles in entries
    }
)


def step(cpu: Cpu) -> int:
    """Execute one instruction and return the cycles it took.

    Raises ValueError for an opcode the table does not define.
    """
    opcode_pc = cpu.pc
    opcode_byte = cpu.read(cpu.pc)
    cpu.pc = (cpu.pc + 1) & 0xFFFF
    opcode = OPCODES.get(opcode_byte)
    if opcode is None:
        raise ValueError(f"illegal opcode {opcode_byte:02X} at {opcode_pc:04X}")
    addr = resolve_address(cpu, opcode.mode)
    opcode.operation(cpu, addr)
    cpu.global_cycles += opcode.cycles
    return opcode.cycles


def run_cycles(cpu: Cpu, count: int) -> int:
    """Execute ``count`` instructions and return the cycles they took."""
    return sum(step(cpu) for _ in range(count))