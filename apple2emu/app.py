"""The emulator's window and main loop."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .cpu import CYCLES_PER_FRAME, DEFAULT_ROM_PATH, Cpu, RomLoadError
from .keyboard import handle_key
from .opcodes import run_cycles
from .video import HEIGHT, WIDTH, Screen

WINDOW_TITLE = "Apple2-EMU"
CURSOR_FLASH_MS = 300
FRAME_DELAY_MS = 16


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line."""
    parser = argparse.ArgumentParser(prog="apple2emu", description="Apple II emulator")
    parser.add_argument(
        "--rom", type=Path, default=DEFAULT_ROM_PATH,
        help="system ROM image loaded at $D000",
    )
    parser.add_argument(
        "--frames", type=int, default=0,
        help="stop after this many frames (0 runs until the window is closed)",
    )
    args = parser.parse_args(argv)
    if args.frames < 0:
        parser.error("--frames must not be negative")
    return args


def _poll_events(pygame, cpu: Cpu) -> None:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            cpu.running = False
        elif event.type == pygame.KEYDOWN:
            handle_key(
                cpu,
                pygame.key.name(event.key),
                shift=bool(event.mod & pygame.KMOD_SHIFT),
                ctrl=bool(event.mod & pygame.KMOD_CTRL),
            )


def main(argv: list[str] | None = None) -> int:
    """Run the emulator; return the process exit status."""
    args = parse_args(argv)

    import pygame

    try:
        pygame.init()
        window = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
    except pygame.error as exc:
        print(f"could not initialise the display: {exc}", file=sys.stderr)
        pygame.quit()
        return 1

    cpu = Cpu()
    screen = Screen()
    status = 0

    try:
        try:
            cpu.init_software(args.rom)
        except RomLoadError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            print("There was an error loading the Apple II Rom", file=sys.stderr)
            cpu.running = False

        last_flash = pygame.time.get_ticks()
        frames = 0
        while cpu.running:
            try:
                run_cycles(cpu, CYCLES_PER_FRAME)
            except ValueError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                status = 1
                break

            _poll_events(pygame, cpu)

            now = pygame.time.get_ticks()
            if now - last_flash >= CURSOR_FLASH_MS:
                screen.cursor_visible = not screen.cursor_visible
                last_flash = now

            screen.render(cpu)
            image = pygame.image.frombuffer(
                screen.framebuffer, (screen.width, screen.height), "RGB"
            )
            window.blit(image, (0, 0))
            pygame.display.flip()
            pygame.time.delay(FRAME_DELAY_MS)

            frames += 1
            if args.frames and frames >= args.frames:
                break
    finally:
        pygame.quit()

    return status


if __name__ == "__main__":
    sys.exit(main())