"""Translation of host key presses into Apple II keyboard codes.

Keys are named as the display library names them: "a", "0", "return",
"backspace", "space", ".", "delete" and so on.
"""

from __future__ import annotations

import string

from .cpu import Cpu

_SHIFTED_DIGITS = ")!@#$%^&*("

_SINGLE_KEYS: dict[str, tuple[str, str]] = {
    "return": ("\r", "\r"),
    "backspace": ("\b", "\b"),
    "space": (" ", " "),
    ".": (".", ">"),
    ",": (",", "<"),
    "/": ("/", "?"),
    ";": (";", ":"),
    "-": ("-", "_"),
    "=": ("=", "+"),
    "'": ("'", '"'),
}


def translate_key(key: str, shift: bool = False, ctrl: bool = False) -> int | None:
    """Return the 7-bit Apple II code for a key, or None if it has none."""
    key = key.lower()
    code = 0
    if len(key) == 1 and key in string.ascii_lowercase:
        offset = ord(key) - ord("a")
        code = offset + 1 if ctrl else offset + ord("A")
    elif len(key) == 1 and key in string.digits:
        digit = int(key)
        code = ord(_SHIFTED_DIGITS[digit]) if shift else ord(key)
    elif key in _SINGLE_KEYS:
        plain, shifted = _SINGLE_KEYS[key]
        code = ord(shifted if shift else plain)
    return code & 0x7F if code else None


def handle_key(cpu: Cpu, key: str, shift: bool = False, ctrl: bool = False) -> int | None:
    """Apply a key press to the machine and return the code it latched.

    Ctrl+Delete resets the machine to its reset vector and text mode.
    """
    if ctrl and key.lower() == "delete":
        cpu.pc = cpu.reset_loc
        cpu.text_mode = True
        cpu.low_res = False
        cpu.high_res = False
        cpu.mixed_mode = False
        cpu.key_ready = False

    code = translate_key(key, shift, ctrl)
    if code is not None:
        cpu.key_value = code
        cpu.key_ready = True
    return code