# pygame frontend for the interpreter in chip8.py
#
# the host owns the window, the keyboard and the wall clock:
# every frame it runs a burst of cycles, merges the key state,
# ticks the timers at 60Hz and renders the framebuffer when dirty


import argparse
import sys
import time

import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_1, K_2, K_3, K_4,
    K_q, K_w, K_e, K_r,
    K_a, K_s, K_d, K_f,
    K_z, K_x, K_c, K_v,
)

from chip8 import (
    Chip8, LoadError, read_rom, log, INFO,
    SCREEN_WIDTH, SCREEN_HEIGHT,
)


# ******************** STATIC SECTION
# canonical COSMAC VIP layout mapped on the left side of a QWERTY keyboard
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_MAPPINGS = {
    K_1: 0x1, K_2: 0x2, K_3: 0x3, K_4: 0xC,
    K_q: 0x4, K_w: 0x5, K_e: 0x6, K_r: 0xD,
    K_a: 0x7, K_s: 0x8, K_d: 0x9, K_f: 0xE,
    K_z: 0xA, K_x: 0x0, K_c: 0xB, K_v: 0xF,
}

CYCLES_PER_FRAME = 64
FPS = 60
TIMER_INTERVAL = 1 / 60     # seconds between two delay/sound timer ticks
SCALE = 15
BLUE = pygame.Color(80,69,155,255)
LIGHT_BLUE = pygame.Color(136,126,203,255)


# ******************** UTILITIES SECTION
def get_args(argv=None):
    parser = argparse.ArgumentParser(description="CHIP-8 interpreter")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("-c", "--cycles", type=int, default=CYCLES_PER_FRAME, help="instructions executed per frame")
    parser.add_argument("-s", "--scale", type=int, default=SCALE, help="size in window pixels of a CHIP-8 pixel")
    parser.add_argument("--fps", type=int, default=FPS, help="frames per second the host loop is capped at")
    args = parser.parse_args(argv)
    if args.cycles < 1:
        parser.error("--cycles must be at least 1")
    return args

def pressed_keys(key_state):
    """translate a pygame key state snapshot into the set of CHIP-8 keys being held"""
    return {chip_key for pg_key, chip_key in KEY_MAPPINGS.items() if key_state[pg_key]}


# ******************** I/O SECTION
class Screen:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE):
        self.w, self.h, self.scale = w, h, s
        self.background = bg_color
        self.foreground = fg_color
        self.surface = pygame.display.set_mode(
            (w * self.scale, h * self.scale),
        )
        self.surface.fill(self.background)

    def render(self, display):
        """repaint the whole framebuffer, the display only tells that something changed, not what"""
        self.surface.fill(self.background)
        for y in range(display.h):
            for x in range(display.w):
                if display[x, y]:
                    pygame.draw.rect(
                        self.surface,
                        self.foreground,
                        (x * self.scale, y * self.scale, self.scale, self.scale)
                    )
        pygame.display.flip()


# ******************** HOST LOOP SECTION
class Host:
    """everything the frame loop mutates, so that no state lives in module globals"""
    def __init__(self, chip, screen, cycles_per_frame=CYCLES_PER_FRAME, clock=None, now=time.perf_counter):
        self.chip = chip
        self.screen = screen
        self.cycles_per_frame = cycles_per_frame
        self.clock = clock
        self.now = now
        self.last_tick = now()
        self.running = True

    def due_ticks(self, now):
        """return how many whole timer intervals elapsed since the last tick and move the deadline accordingly"""
        ticks = int((now - self.last_tick) // TIMER_INTERVAL)
        if ticks > 0:
            self.last_tick += ticks * TIMER_INTERVAL
        return ticks

    def handle_events(self, events):
        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

    def run_frame(self, key_state):
        """one loop iteration: cycles burst, key merge, timers, render"""
        for _ in range(self.cycles_per_frame):
            if not self.chip.cycle():
                break
        self.chip.keypad.update(pressed_keys(key_state))
        for _ in range(self.due_ticks(self.now())):
            self.chip.timers.tick()
        if self.chip.display.dirty:
            self.screen.render(self.chip.display)
            self.chip.display.consume_dirty()


# ******************** ENTRY POINT SECTION
def main(argv=None):
    args = get_args(argv)
    try:
        rom = read_rom(args.file)
    except LoadError as le:
        sys.exit(f"[ERROR]: {le}")
    chip = Chip8()
    chip.load(rom)
    # pygame initialization
    pygame.init()
    try:
        pygame.display.set_caption(os.path.basename(args.file))
        host = Host(chip, Screen(s=args.scale), args.cycles, pygame.time.Clock())
        log(INFO, f"running {args.file} at {args.cycles} cycles per frame, {args.fps} fps")
        # emulation loop
        while host.running:
            host.clock.tick(args.fps)
            host.handle_events(pygame.event.get())
            host.run_frame(pygame.key.get_pressed())
            if chip.halted:
                sys.exit(f"********** THE EMULATOR HALTED ({chip.fault.value}) WITH THE FOLLOWING STATE\n{chip}")
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
