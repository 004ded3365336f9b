"""Rendering of the text, low-resolution and high-resolution screens.

The screen is an RGB frame buffer of 560 x 384 pixels: every Apple II
pixel is drawn as a block of screen pixels, as the display window shows it.
"""

from __future__ import annotations

from .cpu import Cpu

WIDTH = 560
HEIGHT = 384
SCALE = 2

CHAR_WIDTH = 7
CHAR_HEIGHT = 8
STD_COL = 40
EXT_COL = 80
TXT_ROW = 24

LOW_RES_HEIGHT = 48
LOW_RES_WIDTH = 40
LOW_RES_BLOCK_WIDTH = 14
LOW_RES_BLOCK_HEIGHT = 8

HGR_WIDTH_MONO = 280
HGR_WIDTH_COLOR = 140
HGR_HEIGHT = 192
HGR_BASE = 0x2000
HGR_BYTES_PER_LINE = 40
HGR_BITS_PER_BYTE = 7

MIXED_TEXT_ROWS = 4
MIXED_HGR_LINES = 32

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
GREEN: Color = (0, 255, 0)

ROW_ADDRESSES = (
    0x0400, 0x0480, 0x0500, 0x0580,
    0x0600, 0x0680, 0x0700, 0x0780,
    0x0428, 0x04A8, 0x0528, 0x05A8,
    0x0628, 0x06A8, 0x0728, 0x07A8,
    0x0450, 0x04D0, 0x0550, 0x05D0,
    0x0650, 0x06D0, 0x0750, 0x07D0,
)

LORES_COLORS: tuple[Color, ...] = (
    (0, 0, 0),        # black
    (227, 30, 96),    # magenta
    (96, 78, 189),    # dark blue
    (255, 68, 253),   # purple
    (0, 163, 96),     # dark green
    (156, 156, 156),  # gray 1
    (20, 207, 253),   # medium blue
    (208, 195, 255),  # light blue
    (96, 114, 3),     # brown
    (255, 106, 60),   # orange
    (156, 156, 156),  # gray 2
    (255, 160, 163),  # pink
    (20, 245, 60),    # green
    (208, 221, 141),  # yellow
    (114, 255, 208),  # aqua
    (255, 255, 255),  # white
)

HIRES_COLORS: tuple[Color, ...] = (
    (0, 0, 0),
    (255, 255, 255),
    (20, 245, 60),
    (148, 12, 125),
    (255, 106, 60),
    (20, 207, 253),
)

# Character generator: 64 glyphs of 8 rows, bit 0 is the leftmost pixel.
FONT: tuple[tuple[int, ...], ...] = (
    (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00),
    (0x08, 0x08, 0x08, 0x08, 0x08, 0x00, 0x08, 0x00),
    (0x14, 0x14, 0x14, 0x00, 0x00, 0x00, 0x00, 0x00),
    (0x14, 0x14, 0x3E, 0x14, 0x3E, 0x14, 0x14, 0x00),
    (0x08, 0x3C, 0x0A, 0x1C, 0x28, 0x1E, 0x08, 0x00),
    (0x06, 0x26, 0x10, 0x08, 0x04, 0x32, 0x30, 0x00),
    (0x04, 0x0A, 0x0A, 0x04, 0x2A, 0x12, 0x2C, 0x00),
    (0x08, 0x08, 0x08, 0x00, 0x00, 0x00, 0x00, 0x00),
    (0x08, 0x04, 0x02, 0x02, 0x02, 0x04, 0x08, 0x00),
    (0x08, 0x10, 0x20, 0x20, 0x20, 0x10, 0x08, 0x00),
    (0x00, 0x08, 0x2A, 0x1C, 0x2A, 0x08, 0x00, 0x00),
    (0x00, 0x08, 0x08, 0x3E, 0x08, 0x08, 0x00, 0x00),
    (0x00, 0x00, 0x00, 0x00, 0x08, 0x08, 0x04, 0x00),
    (0x00, 0x00, 0x00, 0x3E, 0x00, 0x00, 0x00, 0x00),
    (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x08, 0x00),
    (0x00, 0x20, 0x10, 0x08, 0x04, 0x02, 0x00, 0x00),
    (0x1C, 0x22, 0x32, 0x2A, 0x26, 0x22, 0x1C, 0x00),
    (0x08, 0x0C, 0x08, 0x08, 0x08, 0x08, 0x1C, 0x00),
    (0x1C, 0x22, 0x20, 0x18, 0x04, 0x02, 0x3E, 0x00),
    (0x1C, 0x22, 0x20, 0x18, 0x20, 0x22, 0x1C, 0x00),
    (0x10, 0x18, 0x14, 0x12, 0x3E, 0x10, 0x10, 0x00),
    (0x3E, 0x02, 0x1E, 0x20, 0x20, 0x22, 0x1C, 0x00),
    (0x18, 0x04, 0x02, 0x1E, 0x22, 0x22, 0x1C, 0x00),
    (0x3E, 0x20, 0x10, 0x08, 0x04, 0x04, 0x04, 0x00),
    (0x1C, 0x22, 0x22, 0x1C, 0x22, 0x22, 0x1C, 0x00),
    (0x1C, 0x22, 0x22, 0x3C, 0x20, 0x10, 0x0C, 0x00),
    (0x00, 0x00, 0x08, 0x00, 0x08, 0x00, 0x00, 0x00),
    (0x00, 0x00, 0x08, 0x00, 0x08, 0x08, 0x04, 0x00),
    (0x10, 0x08, 0x04, 0x02, 0x04, 0x08, 0x10, 0x00),
    (0x00, 0x00, 0x3E, 0x00, 0x3E, 0x00, 0x00, 0x00),
    (0x02, 0x04, 0x08, 0x10, 0x08, 0x04, 0x02, 0x00),
    (0x1C, 0x22, 0x20, 0x10, 0x08, 0x00, 0x08, 0x00),
    (0x1C, 0x22, 0x20, 0x2C, 0x2A, 0x2A, 0x1C, 0x00),
    (0x08, 0x14, 0x22, 0x22, 0x3E, 0x22, 0x22, 0x00),
    (0x1E, 0x22, 0x22, 0x1E, 0x22, 0x22, 0x1E, 0x00),
    (0x1C, 0x22, 0x02, 0x02, 0x02, 0x22, 0x1C, 0x00),
    (0x0E, 0x12, 0x22, 0x22, 0x22, 0x12, 0x0E, 0x00),
    (0x3E, 0x02, 0x02, 0x1E, 0x02, 0x02, 0x3E, 0x00),
    (0x3E, 0x02, 0x02, 0x1E, 0x02, 0x02, 0x02, 0x00),
    (0x1C, 0x22, 0x02, 0x32, 0x22, 0x22, 0x1C, 0x00),
    (0x22, 0x22, 0x22, 0x3E, 0x22, 0x22, 0x22, 0x00),
    (0x1C, 0x08, 0x08, 0x08, 0x08, 0x08, 0x1C, 0x00),
    (0x20, 0x20, 0x20, 0x20, 0x20, 0x22, 0x1C, 0x00),
    (0x22, 0x12, 0x0A, 0x06, 0x0A, 0x12, 0x22, 0x00),
    (0x02, 0x02, 0x02, 0x02, 0x02, 0x02, 0x3E, 0x00),
    (0x22, 0x36, 0x2A, 0x2A, 0x22, 0x22, 0x22, 0x00),
    (0x22, 0x22, 0x26, 0x2A, 0x32, 0x22, 0x22, 0x00),
    (0x1C, 0x22, 0x22, 0x22, 0x22, 0x22, 0x1C, 0x00),
    (0x1E, 0x22, 0x22, 0x1E, 0x02, 0x02, 0x02, 0x00),
    (0x1C, 0x22, 0x22, 0x22, 0x2A, 0x12, 0x2C, 0x00),
    (0x1E, 0x22, 0x22, 0x1E, 0x0A, 0x12, 0x22, 0x00),
    (0x1C, 0x22, 0x02, 0x1C, 0x20, 0x22, 0x1C, 0x00),
    (0x3E, 0x08, 0x08, 0x08, 0x08, 0x08, 0x08, 0x00),
    (0x22, 0x22, 0x22, 0x22, 0x22, 0x22, 0x1C, 0x00),
    (0x22, 0x22, 0x22, 0x22, 0x22, 0x14, 0x08, 0x00),
    (0x22, 0x22, 0x22, 0x2A, 0x2A, 0x36, 0x22, 0x00),
    (0x22, 0x22, 0x14, 0x08, 0x14, 0x22, 0x22, 0x00),
    (0x22, 0x22, 0x14, 0x08, 0x08, 0x08, 0x08, 0x00),
    (0x3E, 0x20, 0x10, 0x08, 0x04, 0x02, 0x3E, 0x00),
    (0x1C, 0x04, 0x04, 0x04, 0x04, 0x04, 0x1C, 0x00),
    (0x00, 0x02, 0x04, 0x08, 0x10, 0x20, 0x00, 0x00),
    (0x1C, 0x10, 0x10, 0x10, 0x10, 0x10, 0x1C, 0x00),
    (0x08, 0x14, 0x22, 0x00, 0x00, 0x00, 0x00, 0x00),
    (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x3E, 0x00),
)


def _is_inverse(video_byte: int, cursor_visible: bool) -> bool:
    top = video_byte & 0xC0
    if top == 0x00:
        return True
    if top == 0x40:
        return not cursor_visible
    return False


def _glyph_index(video_byte: int) -> int:
    index = video_byte & 0x3F
    return index - 0x20 if index >= 0x20 else index + 0x20


def _hires_line_address(line: int) -> int:
    group, rest = divmod(line, 64)
    block, row = divmod(rest, 8)
    return HGR_BASE + group * 0x28 + block * 0x80 + row * 0x400


class Screen:
    """An RGB frame buffer that the video modes are drawn into."""

    def __init__(self) -> None:
        self.width = WIDTH
        self.height = HEIGHT
        self.framebuffer = bytearray(WIDTH * HEIGHT * 3)
        self.cursor_visible = True
        self.txt_rows = TXT_ROW
        self.txt_cols = STD_COL
        self.low_width = LOW_RES_WIDTH
        self.low_height = LOW_RES_HEIGHT
        self.high_width = HGR_WIDTH_MONO
        self.high_height = HGR_HEIGHT

    def clear(self, color: Color = BLACK) -> None:
        """Fill the whole frame buffer with one colour."""
        self.framebuffer[:] = bytes(color) * (self.width * self.height)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """Fill a rectangle, clipped to the frame buffer."""
        left, right = max(x, 0), min(x + w, self.width)
        top, bottom = max(y, 0), min(y + h, self.height)
        if left >= right or top >= bottom:
            return
        span = bytes(color) * (right - left)
        for row in range(top, bottom):
            start = (row * self.width + left) * 3
            self.framebuffer[start:start + len(span)] = span

    def pixel(self, x: int, y: int) -> Color:
        """Colour of one frame-buffer pixel."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the screen")
        start = (y * self.width + x) * 3
        r, g, b = self.framebuffer[start:start + 3]
        return (r, g, b)

    def render_text(self, cpu: Cpu, start_row: int = 0) -> None:
        """Draw the text page from ``start_row`` to the bottom of the screen."""
        for row in range(start_row, self.txt_rows):
            base = ROW_ADDRESSES[row]
            y = row * CHAR_HEIGHT
            for col in range(self.txt_cols):
                video_byte = cpu.read(base + col)
                inverse = _is_inverse(video_byte, self.cursor_visible)
                glyph = FONT[_glyph_index(video_byte)]
                x = col * CHAR_WIDTH
                for py, glyph_row in enumerate(glyph):
                    for px in range(CHAR_WIDTH):
                        lit = bool((glyph_row >> px) & 1) != inverse
                        self.fill_rect(
                            (x + px) * SCALE, (y + py) * SCALE, SCALE, SCALE,
                            GREEN if lit else BLACK,
                        )

    def render_lowres(self, cpu: Cpu, num_rows: int) -> None:
        """Draw ``num_rows`` text rows of low-resolution blocks."""
        for row in range(num_rows):
            base = ROW_ADDRESSES[row]
            top_y = row * 2 * LOW_RES_BLOCK_HEIGHT
            for col in range(self.low_width):
                value = cpu.read(base + col)
                x = col * LOW_RES_BLOCK_WIDTH
                self.fill_rect(
                    x, top_y, LOW_RES_BLOCK_WIDTH, LOW_RES_BLOCK_HEIGHT,
                    LORES_COLORS[value & 0x0F],
                )
                self.fill_rect(
                    x, top_y + LOW_RES_BLOCK_HEIGHT,
                    LOW_RES_BLOCK_WIDTH, LOW_RES_BLOCK_HEIGHT,
                    LORES_COLORS[(value >> 4) & 0x0F],
                )

    def render_hires(self, cpu: Cpu, num_rows: int) -> None:
        """Draw ``num_rows`` scan lines of the high-resolution page in mono."""
        for line in range(num_rows):
            base = _hires_line_address(line)
            screen_x = 0
            for offset in range(HGR_BYTES_PER_LINE):
                value = cpu.read(base + offset)
                for bit in range(HGR_BITS_PER_BYTE):
                    color = GREEN if (value >> bit) & 1 else BLACK
                    self.fill_rect(
                        screen_x * SCALE, line * SCALE, SCALE, SCALE, color
                    )
                    screen_x += 1

    def render(self, cpu: Cpu) -> None:
        """Clear the screen and draw whatever video mode the machine is in."""
        self.clear()
        mixed_start = self.txt_rows - MIXED_TEXT_ROWS
        if cpu.text_mode:
            self.render_text(cpu, 0)
        elif cpu.low_res:
            if cpu.mixed_mode:
                self.render_lowres(cpu, mixed_start)
                self.render_text(cpu, mixed_start)
            else:
                self.render_lowres(cpu, self.txt_rows)
        elif cpu.high_res:
            if cpu.mixed_mode:
                self.render_hires(cpu, self.high_height - MIXED_HGR_LINES)
                self.render_text(cpu, mixed_start)
            else:
                self.render_hires(cpu, self.high_height)