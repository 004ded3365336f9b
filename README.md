# apple2emu

An Apple II Plus emulator. It runs a 6502 processor core against 64 KiB of
memory, maps the keyboard latch and the video soft switches into the I/O page
(`$C000`–`$C0FF`), treats `$D000` and above as read-only ROM, and draws the
40-column text screen, the low-resolution colour screen and the
high-resolution screen (in monochrome green) in a 560 × 384 window.

## Installing

```
pip install .
```

pygame is installed as a dependency and provides the window, the keyboard
and the frame timing.

## Running

The emulator needs an Apple II Plus system ROM image, which is loaded at
`$D000`; the reset, NMI and BRK vectors are read from the top of memory and
execution starts at the reset vector. No ROM is shipped with the package.
By default it is read from `roms/Apple2_Plus.Rom` relative to the current
directory.

```
apple2emu
apple2emu --rom path/to/Apple2_Plus.Rom
apple2emu --frames 600
```

Options:

- `--rom PATH` — the system ROM image (default `roms/Apple2_Plus.Rom`).
- `--frames N` — stop after `N` frames; `0` (the default) runs until the
  window is closed. Negative values are rejected.

Each frame executes 17030 instructions, polls the keyboard, redraws the
screen and waits 16 ms. The flashing-character cursor toggles every 300 ms.

If the ROM cannot be read, or the file is empty or does not fit in memory,
an error is printed and the emulator stops. If the CPU meets an opcode that
it does not implement, the error is printed and the command exits with
status 1.

### Keys

- Letters are sent as upper case; with Ctrl held they become control codes
  (Ctrl+A is 1, and so on).
- Digits, and with Shift the characters `)!@#$%^&*(`.
- `. , / ; - = '` and, with Shift, `> < ? : _ + "`.
- Return, Backspace and Space.
- Ctrl+Delete resets: the program counter goes back to the reset vector, the
  video switches return to full-screen text mode and the keyboard latch is
  cleared.

## Using it as a library

The pieces can be driven without a window:

- `apple2emu.cpu.Cpu` holds registers, flags, memory, drive and soft-switch
  state. `Cpu.read` and `Cpu.write` go through the I/O page and ignore
  writes to ROM; `Cpu.load_program(path, address)` copies a file into memory
  and returns its length, raising `RomLoadError` on failure;
  `Cpu.init_software(rom_path)` loads the system ROM and jumps to the reset
  vector. `Cpu.push`, `Cpu.pull`, `Cpu.status_byte`, `Cpu.set_status` and
  `Cpu.trace_line` are also available.
- `apple2emu.addressing.resolve_address(cpu, mode)` consumes the operand
  bytes for an `AddressMode` and returns the effective address (or the
  signed offset, for branches).
- `apple2emu.operations` has one function per instruction (`lda`, `adc`,
  `and_`, `brk`, ...), each taking the CPU and an effective address.
- `apple2emu.opcodes.OPCODES` maps opcode bytes to `Opcode` entries (mode,
  cycle count, operation). `apple2emu.opcodes.step(cpu)` executes one
  instruction and returns its cycle count, raising `ValueError` for an
  undefined opcode; `run_cycles(cpu, count)` executes `count` instructions
  and returns the total cycles.
- `apple2emu.video.Screen` renders into an RGB frame buffer
  (`Screen.framebuffer`): `render(cpu)` draws the current video mode,
  `render_text`, `render_lowres` and `render_hires` draw one mode, and
  `pixel(x, y)` returns the colour of one pixel.
- `apple2emu.keyboard.translate_key(key, shift, ctrl)` gives the Apple II
  code for a key name, and `handle_key(cpu, key, shift, ctrl)` latches it
  into the CPU (and handles Ctrl+Delete).
- `apple2emu.disk.load_disk(path)` reads a 143360-byte (35 tracks × 16
  sectors × 256 bytes) image into a `Disk`, taking its `DiskFormat` from the
  file extension and raising `DiskError` if it cannot be read or has the
  wrong size.

```python
from apple2emu.cpu import Cpu
from apple2emu.opcodes import step

cpu = Cpu()
cpu.memory[0x0300:0x0303] = bytes([0xA9, 0x42, 0xEA])  # LDA #$42; NOP
cpu.pc = 0x0300
step(cpu)
assert cpu.a == 0x42
```

## What it does not do

- Disks are not emulated. A `Disk` holds an image's data, but its data
  register always reads 0 and only advances the head position; the command
  never attaches a disk, and nothing is ever written back to an image.
- Only the documented 6502 opcodes in `OPCODES` are implemented.
- There is no sound, no 80-column text, no second display page (the page
  switches are accepted and ignored) and no colour high-resolution output.

## Tests

```
pip install .[test]
pytest
```