"""6502 processor state and the Apple II memory map."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from .disk import Disk

MEMORY_SIZE = 0x10000
CYCLES_PER_FRAME = 17030

NMI_LOW_ADDR = 0xFFFA
RESET_LOW_ADDR = 0xFFFC
BRK_LOW_ADDR = 0xFFFE

CARRY_FLAG = 0x01
ZERO_FLAG = 0x02
INTERRUPT_FLAG = 0x04
DECIMAL_FLAG = 0x08
BREAK_FLAG = 0x10
UNUSED_BIT = 0x20
OVERFLOW_FLAG = 0x40
NEGATIVE_FLAG = 0x80

STACK_BASE = 0x0100
IO_START = 0xC000
IO_END = 0xC0FF
ROM_START = 0xD000
TEXT_PAGE_START = 0x0400
TEXT_PAGE_SIZE = 0x0400

KEYBOARD_DATA = 0xC000
DISK_DATA = 0xC0EC

DEFAULT_ROM_PATH = Path("roms") / "Apple2_Plus.Rom"

# Soft switches shared by reads and writes in the I/O page.
_SWITCHES: dict[int, dict[str, bool]] = {
    0xC010: {"key_ready": False},
    0xC050: {"text_mode": False},
    0xC051: {"text_mode": True},
    0xC052: {"mixed_mode": False},
    0xC053: {"mixed_mode": True},
    0xC054: {},
    0xC055: {},
    0xC056: {"low_res": True, "high_res": False},
    0xC057: {"low_res": False, "high_res": True},
}


class RomLoadError(Exception):
    """Raised when a program or ROM image cannot be placed in memory."""


class Cpu:
    """Registers, flags, memory and machine state of the emulated computer."""

    def __init__(self) -> None:
        self.memory = bytearray(MEMORY_SIZE)
        self.memory[TEXT_PAGE_START:TEXT_PAGE_START + TEXT_PAGE_SIZE] = (
            b"\xA0" * TEXT_PAGE_SIZE
        )

        self.a = 0
        self.x = 0
        self.y = 0
        self.sp = 0xFF
        self.pc = 0

        self.n = False
        self.v = False
        self.b = True
        self.d = False
        self.i = True
        self.z = True
        self.c = False

        self.brk_loc = 0
        self.reset_loc = 0
        self.nmi_loc = 0

        self.text_mode = True
        self.low_res = False
        self.high_res = False
        self.mixed_mode = False

        self.drive1 = Disk()
        self.drive2 = Disk()

        self.key_value = 0
        self.key_ready = False
        self.running = True
        self.global_cycles = 0

    def _apply_switch(self, address: int) -> None:
        for name, value in _SWITCHES.get(address, {}).items():
            setattr(self, name, value)

    def read(self, address: int) -> int:
        """Read a byte, honouring the I/O page."""
        address &= 0xFFFF
        if IO_START <= address <= IO_END:
            if address == KEYBOARD_DATA:
                return self.key_value | NEGATIVE_FLAG if self.key_ready else 0
            if address == DISK_DATA:
                return self.drive1.read_register()
            self._apply_switch(address)
            return 0
        return self.memory[address]

    def write(self, address: int, value: int) -> None:
        """Write a byte; the I/O page triggers switches and ROM is read-only."""
        address &= 0xFFFF
        if IO_START <= address <= IO_END:
            self._apply_switch(address)
            return
        if address >= ROM_START:
            return
        self.memory[address] = value & 0xFF

    def load_program(self, path: str | PathLike[str], address: int) -> int:
        """Copy a file into memory at ``address`` and return its length."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise RomLoadError(f"could not read {path}") from exc
        if not data:
            raise RomLoadError(f"nothing was loaded from {path}")
        end = address + len(data)
        if address < 0 or end > MEMORY_SIZE:
            raise RomLoadError(f"{path} does not fit in memory at {address:04X}")
        self.memory[address:end] = data
        return len(data)

    def _word(self, low_address: int) -> int:
        return self.memory[low_address] | (self.memory[low_address + 1] << 8)

    def init_software(self, rom_path: str | PathLike[str] = DEFAULT_ROM_PATH) -> None:
        """Load the system ROM, read its vectors and jump to the reset vector."""
        self.load_program(rom_path, ROM_START)
        self.nmi_loc = self._word(NMI_LOW_ADDR)
        self.reset_loc = self._word(RESET_LOW_ADDR)
        self.brk_loc = self._word(BRK_LOW_ADDR)
        self.pc = self.reset_loc

    def status_byte(self) -> int:
        """Processor status as pushed on the stack (break and bit 5 set)."""
        value = BREAK_FLAG | UNUSED_BIT
        if self.c:
            value |= CARRY_FLAG
        if self.z:
            value |= ZERO_FLAG
        if self.i:
            value |= INTERRUPT_FLAG
        if self.d:
            value |= DECIMAL_FLAG
        if self.v:
            value |= OVERFLOW_FLAG
        if self.n:
            value |= NEGATIVE_FLAG
        return value

    def set_status(self, value: int, restore_break: bool = False) -> None:
        """Set the flags from a status byte."""
        self.c = bool(value & CARRY_FLAG)
        self.z = bool(value & ZERO_FLAG)
        self.i = bool(value & INTERRUPT_FLAG)
        self.d = bool(value & DECIMAL_FLAG)
        self.v = bool(value & OVERFLOW_FLAG)
        self.n = bool(value & NEGATIVE_FLAG)
        if restore_break:
            self.b = bool(value & BREAK_FLAG)

    def push(self, value: int) -> None:
        """Push a byte onto the stack page."""
        self.write(STACK_BASE | self.sp, value)
        self.sp = (self.sp - 1) & 0xFF

    def pull(self) -> int:
        """Pull a byte from the stack page."""
        self.sp = (self.sp + 1) & 0xFF
        return self.read(STACK_BASE | self.sp)

    def trace_line(self) -> str:
        """One line describing the registers, for execution traces."""
        return (
            f"A: {self.a:02X}, X: {self.x:02X}, Y: {self.y:02X}, "
            f"PC: {self.pc:04X}, SP: {self.sp:02X}, SR: {self.status_byte():02X}"
        )