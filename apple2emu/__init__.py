"""Apple II Plus emulator: 6502 CPU, memory-mapped I/O, video rendering and a pygame front end."""

__version__ = "0.1.0"

__all__ = [
    "addressing",
    "app",
    "cpu",
    "disk",
    "keyboard",
    "opcodes",
    "operations",
    "video",
]