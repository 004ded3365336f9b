"""6502 addressing modes: how an instruction's operand address is found."""

from __future__ import annotations

import enum
from typing import Callable

from .cpu import Cpu


class AddressMode(enum.Enum):
    """Addressing modes of the 6502."""

    IMM = enum.auto()
    ZP = enum.auto()
    ZPX = enum.auto()
    ZPY = enum.auto()
    ABS = enum.auto()
    ABX = enum.auto()
    ABY = enum.auto()
    IND = enum.auto()
    IDX = enum.auto()
    IDY = enum.auto()
    IMP = enum.auto()
    REL = enum.auto()


def _fetch(cpu: Cpu) -> int:
    value = cpu.read(cpu.pc)
    cpu.pc = (cpu.pc + 1) & 0xFFFF
    return value


def _fetch_word(cpu: Cpu) -> int:
    lo = _fetch(cpu)
    hi = _fetch(cpu)
    return (hi << 8) | lo


def _immediate(cpu: Cpu) -> int:
    address = cpu.pc
    cpu.pc = (cpu.pc + 1) & 0xFFFF
    return address


def _indirect(cpu: Cpu) -> int:
    pointer = _fetch_word(cpu)
    lo = cpu.read(pointer)
    # The 6502 does not carry into the high byte when the pointer ends a page.
    if pointer & 0x00FF == 0x00FF:
        hi = cpu.read(pointer & 0xFF00)
    else:
        hi = cpu.read(pointer + 1)
    return (hi << 8) | lo


def _indexed_indirect(cpu: Cpu) -> int:
    zp = _fetch(cpu)
    lo = cpu.read((zp + cpu.x) & 0xFF)
    hi = cpu.read((zp + cpu.x + 1) & 0xFF)
    return (hi << 8) | lo


def _indirect_indexed(cpu: Cpu) -> int:
    zp = _fetch(cpu)
    lo = cpu.read(zp)
    hi = cpu.read((zp + 1) & 0xFF)
    return (((hi << 8) | lo) + cpu.y) & 0xFFFF


def _relative(cpu: Cpu) -> int:
    offset = _fetch(cpu)
    return offset - 0x100 if offset & 0x80 else offset


_RESOLVERS: dict[AddressMode, Callable[[Cpu], int]] = {
    AddressMode.IMM: _immediate,
    AddressMode.ZP: _fetch,
    AddressMode.ZPX: lambda cpu: (_fetch(cpu) + cpu.x) & 0xFF,
    AddressMode.ZPY: lambda cpu: (_fetch(cpu) + cpu.y) & 0xFF,
    AddressMode.ABS: _fetch_word,
    AddressMode.ABX: lambda cpu: (_fetch_word(cpu) + cpu.x) & 0xFFFF,
    AddressMode.ABY: lambda cpu: (_fetch_word(cpu) + cpu.y) & 0xFFFF,
    AddressMode.IND: _indirect,
    AddressMode.IDX: _indexed_indirect,
    AddressMode.IDY: _indirect_indexed,
    AddressMode.IMP: lambda cpu: 0,
    AddressMode.REL: _relative,
}


def resolve_address(cpu: Cpu, mode: AddressMode) -> int:
    """Consume the operand bytes at PC and return the effective address.

    For relative mode the result is the signed branch offset (-128..127).
    """
    return _RESOLVERS[mode](cpu)