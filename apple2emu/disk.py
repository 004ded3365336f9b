"""Disk II drive state and disk image loading."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from os import PathLike

TRACKS = 35
SECTORS = 16
BYTES = 256
DISK_SIZE = TRACKS * SECTORS * BYTES


class DiskFormat(enum.IntEnum):
    """Kind of disk image, taken from the file extension."""

    DSK = 0
    NIB = 1
    WOZ = 2


class DiskError(Exception):
    """Raised when a disk image cannot be loaded."""


_EXTENSIONS = {
    "dsk": DiskFormat.DSK,
    "nib": DiskFormat.NIB,
    "woz": DiskFormat.WOZ,
}


@dataclass
class Disk:
    """One floppy drive with its raw sector data and head position."""

    data: bytearray = field(default_factory=lambda: bytearray(DISK_SIZE))
    current_track: int = 0
    current_sector: int = 0
    current_byte: int = 0
    format: DiskFormat = DiskFormat.DSK
    loaded: bool = False
    write_mode: bool = False

    def read_register(self) -> int:
        """Read the drive data register, advancing the head by one byte."""
        value = 0
        self.current_byte = (self.current_byte + 1) & 0xFF
        if self.current_byte == BYTES - 1:
            self.current_byte = 0
            self.current_sector = (self.current_sector + 1) % SECTORS
        return value


def load_disk(path: str | PathLike[str]) -> Disk:
    """Load a disk image of exactly one full disk's worth of sector data."""
    path_text = str(path)
    _, dot, ext = path_text.rpartition(".")
    disk_format = _EXTENSIONS.get(ext.lower(), DiskFormat.DSK) if dot else DiskFormat.DSK

    try:
        with open(path_text, "rb") as handle:
            data = handle.read(DISK_SIZE)
    except OSError as exc:
        raise DiskError(f"could not open disk image {path_text}") from exc

    if len(data) != DISK_SIZE:
        raise DiskError(
            f"disk image wrong size (got {len(data)}, expected {DISK_SIZE})"
        )

    return Disk(data=bytearray(data), format=disk_format, loaded=True)