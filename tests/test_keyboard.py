import pytest

from apple2emu.cpu import Cpu
from apple2emu.keyboard import handle_key, translate_key


@pytest.mark.parametrize(
    "key, shift, ctrl, expected",
    [
        ("a", False, False, ord("A")),
        ("z", True, False, ord("Z")),
        ("a", False, True, 1),
        ("c", False, True, 3),
        ("5", False, False, ord("5")),
        ("1", True, False, ord("!")),
        ("0", True, False, ord(")")),
        ("return", False, False, ord("\r")),
        ("backspace", False, False, ord("\b")),
        ("space", False, False, ord(" ")),
        (".", True, False, ord(">")),
        (",", False, False, ord(",")),
        ("'", True, False, ord('"')),
        ("-", True, False, ord("_")),
    ],
)
def test_translate_key(key, shift, ctrl, expected):
    assert translate_key(key, shift, ctrl) == expected


@pytest.mark.parametrize("key", ["f1", "left shift", "delete", "escape"])
def test_keys_without_code(key):
    assert translate_key(key) is None


def test_handle_key_latches_keyboard():
    cpu = Cpu()
    assert handle_key(cpu, "q") == ord("Q")
    assert cpu.key_ready is True
    assert cpu.read(0xC000) == ord("Q") | 0x80
    cpu.read(0xC010)
    assert cpu.read(0xC000) == 0


def test_ctrl_delete_resets_machine():
    cpu = Cpu()
    cpu.reset_loc = 0xFA62
    cpu.pc = 0x1234
    cpu.text_mode = False
    cpu.high_res = True
    cpu.mixed_mode = True
    cpu.key_ready = True
    assert handle_key(cpu, "delete", ctrl=True) is None
    assert cpu.pc == 0xFA62
    assert cpu.text_mode is True
    assert cpu.high_res is False
    assert cpu.mixed_mode is False
    assert cpu.key_ready is False


def test_delete_without_ctrl_leaves_pc():
    cpu = Cpu()
    cpu.pc = 0x1234
    assert handle_key(cpu, "delete") is None
    assert cpu.pc == 0x1234