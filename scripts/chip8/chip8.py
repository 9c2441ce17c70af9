# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# COWGOD'S TECHNICAL REFERENCE
# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908
#
# TEST SUITE
# https://github.com/Timendus/chip8-test-suite
#
# this module is the interpreter core only, it never touches a window or the keyboard:
# see chip8_host.py for the pygame frontend that drives it


import enum
import os
import random
import sys
from collections import namedtuple
from functools import wraps


# ******************** STATIC SECTION
C8_FONTS = [0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
            0x20, 0x60, 0x20, 0x20, 0x70,  # 1
            0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
            0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
            0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
            0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
            0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
            0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
            0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
            0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
            0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
            0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
            0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
            0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
            0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
            0xF0, 0x80, 0xF0, 0x80, 0x80]  # F

MEMORY_SIZE = 4096
FONT_START_ADDRESS = 0x050
FONT_BYTES_PER_CHAR = 5
ROM_START_ADDRESS = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - ROM_START_ADDRESS
ADDRESS_LIMIT = 0xFFF                   # pc values and jump targets from here on are out of bounds
LAST_INSTRUCTION_ADDRESS = 0xFFE
STACK_SIZE = 16
KEYS_COUNT = 16
MAX_OVERFLOW_RETRIES = 4
SCREEN_HEIGHT = 32
SCREEN_WIDTH = 64
DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False

INFO = "INFO"
ERROR = "ERROR"


class Fault(enum.Enum):
    """reasons for which the interpreter can stop executing a program"""
    PC_OVERFLOW = "program counter overflow"
    INVALID_JUMP_TARGET = "jump target out of bounds"
    STACK_UNDERFLOW = "return with an empty stack"
    STACK_OVERFLOW = "call with a full stack"


# ********** ROM LOADING ERRORS
class LoadError(Exception):
    """the ROM could not be loaded, the VM must not be started"""

class RomNotFoundError(LoadError):
    pass

class EmptyRomError(LoadError):
    pass

class RomTooLargeError(LoadError):
    pass

class RomIOError(LoadError):
    pass


# ******************** UTILITIES SECTION
def log(level, msg):
    """print a prefixed message on stderr, INFO messages only show up when DEBUG is on"""
    if level == INFO and not DEBUG:
        return
    print(f"[{level}]: {msg}", file=sys.stderr)

def asm(msg):
    """decorator to print out the ASM of the instruction being executed"""
    def decorator(fn):
        @wraps(fn)
        def wrapper_fn(self, ins):
            if DEBUG:
                # the operand fields of the decoded instruction are available in the message
                asm_line = msg.format(**ins._asdict())
                print(f"mem_addr: 0x{self.pc:04x}    opcode: 0x{ins.opcode:04x}    instruction: {asm_line}", file=sys.stderr)
            return fn(self, ins)
        return wrapper_fn
    return decorator

def check_rom_size(rom, name="ROM"):
    if len(rom) == 0:
        raise EmptyRomError(f"{name} is empty")
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLargeError(f"{name} is too large ({len(rom)} bytes, at most {MAX_ROM_SIZE} fit in memory)")

def read_rom(path):
    """read a ROM file from disk, raise a LoadError subclass if it can't be used"""
    try:
        with open(path, mode='rb') as f:
            rom = f.read()
    except FileNotFoundError as fnfe:
        raise RomNotFoundError(f"ROM `{path}` not found") from fnfe
    except OSError as oe:
        raise RomIOError(f"Failed to read ROM `{path}`: {oe}") from oe
    check_rom_size(rom, f"ROM `{path}`")
    return rom


# ******************** DECODING SECTION
# every opcode is decoded once into one of these, the mnemonic being the tag
Instruction = namedtuple("Instruction", ["mnemonic", "opcode", "x", "y", "n", "nn", "nnn"])

# WATCH OUT: masks order is important!!!
# as the lookup stops as soon as it finds a match
OPCODE_MASKS = {
    0xFFFF: {0x00E0: "CLS", 0x00EE: "RET"},
    0xF0FF: {
        0xE09E: "SKP", 0xE0A1: "SKNP",
        0xF007: "LD_VX_DT", 0xF00A: "LD_VX_K", 0xF015: "LD_DT_VX", 0xF018: "LD_ST_VX",
        0xF01E: "ADD_I_VX", 0xF029: "LD_F_VX", 0xF033: "LD_B_VX", 0xF055: "LD_MEM_VX", 0xF065: "LD_VX_MEM",
    },
    0xF00F: {
        0x8000: "LD_VX_VY", 0x8001: "OR", 0x8002: "AND", 0x8003: "XOR", 0x8004: "ADD_VX_VY",
        0x8005: "SUB", 0x8006: "SHR", 0x8007: "SUBN", 0x800E: "SHL",
    },
    0xF000: {
        0x1000: "JP", 0x2000: "CALL", 0x3000: "SE_VX_NN", 0x4000: "SNE_VX_NN", 0x5000: "SE_VX_VY",
        0x6000: "LD_VX_NN", 0x7000: "ADD_VX_NN", 0x9000: "SNE_VX_VY", 0xA000: "LD_I",
        0xB000: "JP_V0", 0xC000: "RND", 0xD000: "DRW",
    },
}

def decode(opcode):
    """split an opcode into its operand fields and tag it with its mnemonic"""
    mnemonic = "SYS" if opcode & 0xF000 == 0 else "UNKNOWN"
    for mask, ops in OPCODE_MASKS.items():
        if (opcode & mask) in ops:
            mnemonic = ops[opcode & mask]
            break
    return Instruction(
        mnemonic=mnemonic,
        opcode=opcode,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )


# ******************** I/O SECTION
class Display:
    """64x32 monochrome framebuffer, the host renders it whenever dirty is set"""
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.pixels = bytearray(w * h)
        self.dirty = True       # nothing has been rendered yet

    def __getitem__(self, xy):
        """return 1 if pixel is ON, return 0 if pixel is OFF"""
        x, y = xy
        return self.pixels[y * self.w + x]

    def clear(self):
        self.pixels[:] = bytes(len(self.pixels))
        self.dirty = True

    def xor_pixel(self, x, y):
        """
        flip the pixel at (x, y), coordinates wrap around the screen edges
        return True when a lit pixel got turned off (collision)
        """
        pos = (y % self.h) * self.w + (x % self.w)
        collision = self.pixels[pos] == 1
        self.pixels[pos] ^= 1
        return collision

    def consume_dirty(self):
        """return the dirty flag and reset it, to be called by the host after rendering"""
        was_dirty, self.dirty = self.dirty, False
        return was_dirty

class Keypad:
    """
    tracks the 16 CHIP-8 keys as fed by the host
    held is level-triggered (SKP/SKNP), pending+handled is edge-triggered (LD Vx, K)
    """
    def __init__(self):
        self.held = [False] * KEYS_COUNT
        self.pending = [False] * KEYS_COUNT
        self.handled = [False] * KEYS_COUNT

    def __getitem__(self, key):
        return self.held[key & 0xF]

    def update(self, pressed):
        """merge the set of currently pressed keys reported by the host"""
        for key in range(KEYS_COUNT):
            down = key in pressed
            if down and not self.held[key]:
                self.pending[key] = True
                self.handled[key] = False
            self.held[key] = down

    def take_pending(self):
        """return the first freshly pressed key not consumed yet (marking it handled), None otherwise"""
        for key in range(KEYS_COUNT):
            if self.pending[key] and not self.handled[key]:
                self.handled[key] = True
                return key
        return None

class Timers:
    """delay and sound timers, the host ticks them at 60Hz no matter how many cycles ran"""
    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1


# ******************** MEMORY SECTION
# ********** WRAPS A LIST TO REPRESENT A STACK WITH A LIMITED SIZE OF 16 ADDRESSES
class Stack:
    def __init__(self):
        self.addr_list = [0] * STACK_SIZE
        self.size = 0       # also the index of the next free slot

    def __len__(self):
        return self.size

    def __str__(self):
        return str([f"0x{addr:04x}" for addr in self.addr_list[:self.size]])

    def append(self, address):
        if self.size >= STACK_SIZE:
            raise IndexError("The CHIP-8 stack can contain at most 16 addresses. Limit exceeded")
        self.addr_list[self.size] = address
        self.size += 1

    def pop(self):
        if self.size == 0:
            raise IndexError("The CHIP-8 stack is empty, there's nowhere to return to")
        self.size -= 1
        return self.addr_list[self.size]

# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    def __init__(self):
        self.inner = bytearray(MEMORY_SIZE)
        self.inner[FONT_START_ADDRESS:FONT_START_ADDRESS+len(C8_FONTS)] = bytes(C8_FONTS)

    def __setitem__(self, key, value):
        self.inner[key] = value

    def __getitem__(self, index):
        return self.inner[index]

    def load_rom(self, rom):
        """copy the ROM bytes right where programs are expected to start"""
        self.inner[ROM_START_ADDRESS:ROM_START_ADDRESS+len(rom)] = rom


# ******************** CPU SECTION
class Chip8:
    def __init__(self, rng=None):
        self.mem = Memory()
        self.stack = Stack()
        self.v_regs = [0] * 16
        self.pc = ROM_START_ADDRESS
        self.idx = 0    # specify where the sprites reside in memory
        self.timers = Timers()
        self.keypad = Keypad()
        self.display = Display()
        self.rng = rng if rng is not None else random.Random()
        self.halted = False
        self.fault = None
        self.overflow_retries = 0
        self.awaiting_key = None    # index of the register LD Vx, K is waiting to fill
        self.instructions = {
            "SYS": self._no_op,
            "UNKNOWN": self._no_op,
            "CLS": self._clear_screen,
            "RET": self._return,
            "JP": self._jump,
            "CALL": self._call_addr,
            "SE_VX_NN": self._skip_if_eq,
            "SNE_VX_NN": self._skip_if_not_eq,
            "SE_VX_VY": self._skip_if_eq_regs,
            "LD_VX_NN": self._set_vk,
            "ADD_VX_NN": self._add_to_vk,
            "LD_VX_VY": self._set_vx_to_vy,
            "OR": self._set_vx_or_vy,
            "AND": self._set_vx_and_vy,
            "XOR": self._set_vx_xor_vy,
            "ADD_VX_VY": self._add_vx_vy,
            "SUB": self._sub_vx_vy,
            "SHR": self._shr,
            "SUBN": self._subn_vx_vy,
            "SHL": self._shl,
            "SNE_VX_VY": self._skip_if_not_eq_regs,
            "LD_I": self._set_idx,
            "JP_V0": self._jump_plus,
            "RND": self._random_byte_and,
            "DRW": self._to_screen,
            "SKP": self._skip_if_pressed,
            "SKNP": self._skip_if_not_pressed,
            "LD_VX_DT": self._set_vx_dt,
            "LD_VX_K": self._wait_keypress,
            "LD_DT_VX": self._set_dt_vx,
            "LD_ST_VX": self._set_st,
            "ADD_I_VX": self._add_to_idx,
            "LD_F_VX": self._select_char,
            "LD_B_VX": self._bcd_repr,
            "LD_MEM_VX": self._store_vregs,
            "LD_VX_MEM": self._load_vregs,
        }

    def __str__(self):
        registers = f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.idx:04x} | VARIABLE_REGISTERS:{self.v_regs}"
        stack = f"STACK:{self.stack} | SP:{self.sp}"
        timers = f"DT:{self.timers.delay} | ST:{self.timers.sound}"
        flags = f"HALTED:{self.halted} | FAULT:{self.fault} | OVERFLOW_RETRIES:{self.overflow_retries} | AWAITING_KEY:{self.awaiting_key is not None}"
        return f"{registers}\n{stack}\n{timers}\n{flags}"

    @property
    def sp(self):
        return self.stack.size

    def load(self, rom):
        """write a ROM image into memory, nothing is touched if the image doesn't fit"""
        check_rom_size(rom)
        self.mem.load_rom(rom)
        log(INFO, f"ROM loaded successfully ({len(rom)} bytes)")

    def cycle(self):
        """
        emulate one machine cycle (fetch opcode, decode opcode, execute opcode)
        return False once the VM is halted, the host is expected to stop calling it
        """
        if self.halted:
            return False
        if self.awaiting_key is not None:
            # LD Vx, K already ran, keep polling without fetching it again
            self._poll_keypress()
            return True
        # fetch (each instruction is two bytes long)
        if self.pc + 1 >= MEMORY_SIZE:
            self._halt(Fault.PC_OVERFLOW, f"cannot fetch an instruction at 0x{self.pc:04x}")
            return False
        opcode = self.mem[self.pc] << 8 | self.mem[self.pc + 1]
        # decode + execute
        instruction = decode(opcode)
        self.instructions[instruction.mnemonic](instruction)
        return not self.halted

    # ********** CONTROL FLOW HELPERS
    def _halt(self, fault, reason):
        log(ERROR, f"{fault.value} ({reason}), halting")
        self.halted = True
        self.fault = fault

    def _advance(self, step, fallback):
        if self.pc + step < ADDRESS_LIMIT:
            self.pc += step
            return
        log(ERROR, f"Program counter overflow at 0x{self.pc:04x} (+{step}), resetting to 0x{fallback:04x}")
        if self.overflow_retries >= MAX_OVERFLOW_RETRIES:
            self._halt(Fault.PC_OVERFLOW, f"gave up after {self.overflow_retries} retries")
            return
        self.overflow_retries += 1
        self.pc = fallback

    def _goto_next_instruction(self):
        self._advance(0x2, ROM_START_ADDRESS)

    def _skip_next_instruction(self):
        self._advance(0x4, LAST_INSTRUCTION_ADDRESS)

    def _skip_if(self, condition):
        if condition:
            self._skip_next_instruction()
        else:
            self._goto_next_instruction()

    def _jump_to(self, address):
        if address >= ADDRESS_LIMIT:
            self._halt(Fault.INVALID_JUMP_TARGET, f"jump to 0x{address:04x}")
            return
        self.pc = address

    def _poll_keypress(self):
        key = self.keypad.take_pending()
        if key is None:
            return      # stay on the same instruction until a key is pressed
        self.v_regs[self.awaiting_key] = key
        self.awaiting_key = None
        self._goto_next_instruction()

    # ********** INSTRUCTIONS
    @asm("SYS 0x{nnn:03x}")
    def _no_op(self, ins):
        """machine code routines and unknown opcodes are ignored"""
        self._goto_next_instruction()

    @asm("CLS")
    def _clear_screen(self, ins):
        self.display.clear()
        self._goto_next_instruction()

    @asm("RET")
    def _return(self, ins):
        """return from a subroutine"""
        try:
            self.pc = self.stack.pop()
        except IndexError as ie:
            self._halt(Fault.STACK_UNDERFLOW, str(ie))
            return
        # the stack holds the address of the CALL itself
        self._goto_next_instruction()

    @asm("JP 0x{nnn:03x}")
    def _jump(self, ins):
        self._jump_to(ins.nnn)

    @asm("CALL 0x{nnn:03x}")
    def _call_addr(self, ins):
        try:
            self.stack.append(self.pc)
        except IndexError as ie:
            self._halt(Fault.STACK_OVERFLOW, str(ie))
            return
        self._jump_to(ins.nnn)

    @asm("SE V{x:X}, 0x{nn:02x}")
    def _skip_if_eq(self, ins):
        self._skip_if(self.v_regs[ins.x] == ins.nn)

    @asm("SNE V{x:X}, 0x{nn:02x}")
    def _skip_if_not_eq(self, ins):
        self._skip_if(self.v_regs[ins.x] != ins.nn)

    @asm("SE V{x:X}, V{y:X}")
    def _skip_if_eq_regs(self, ins):
        self._skip_if(self.v_regs[ins.x] == self.v_regs[ins.y])

    @asm("SNE V{x:X}, V{y:X}")
    def _skip_if_not_eq_regs(self, ins):
        self._skip_if(self.v_regs[ins.x] != self.v_regs[ins.y])

    @asm("LD V{x:X}, 0x{nn:02x}")
    def _set_vk(self, ins):
        """set the value of one of the 16 variable registers, Vx"""
        self.v_regs[ins.x] = ins.nn
        self._goto_next_instruction()

    @asm("ADD V{x:X}, 0x{nn:02x}")
    def _add_to_vk(self, ins):
        """add to the value already present in one of the variable registers, VF is left alone"""
        self.v_regs[ins.x] = (self.v_regs[ins.x] + ins.nn) & 0xFF
        self._goto_next_instruction()

    @asm("LD V{x:X}, V{y:X}")
    def _set_vx_to_vy(self, ins):
        self.v_regs[ins.x] = self.v_regs[ins.y]
        self._goto_next_instruction()

    @asm("OR V{x:X}, V{y:X}")
    def _set_vx_or_vy(self, ins):
        self.v_regs[ins.x] |= self.v_regs[ins.y]
        self._goto_next_instruction()

    @asm("AND V{x:X}, V{y:X}")
    def _set_vx_and_vy(self, ins):
        self.v_regs[ins.x] &= self.v_regs[ins.y]
        self._goto_next_instruction()

    @asm("XOR V{x:X}, V{y:X}")
    def _set_vx_xor_vy(self, ins):
        self.v_regs[ins.x] ^= self.v_regs[ins.y]
        self._goto_next_instruction()

    @asm("ADD V{x:X}, V{y:X}")
    def _add_vx_vy(self, ins):
        """set the value of Vx to Vx + Vy, VF = carry"""
        total = self.v_regs[ins.x] + self.v_regs[ins.y]
        self.v_regs[0xF] = 1 if total > 255 else 0
        self.v_regs[ins.x] = total & 0xFF     # keep only the lowest 8 bits from the result and store them in Vx
        self._goto_next_instruction()

    @asm("SUB V{x:X}, V{y:X}")
    def _sub_vx_vy(self, ins):
        """set the value of Vx to Vx - Vy, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[0xF] = 1 if vx > vy else 0
        self.v_regs[ins.x] = (vx - vy) & 0xFF
        self._goto_next_instruction()

    @asm("SHR V{x:X}")
    def _shr(self, ins):
        """set Vx equal to Vx SHR 1, VF = the bit shifted out"""
        lsb = self.v_regs[ins.x] & 0x1
        self.v_regs[0xF] = lsb
        self.v_regs[ins.x] >>= 1
        self._goto_next_instruction()

    @asm("SUBN V{x:X}, V{y:X}")
    def _subn_vx_vy(self, ins):
        """set the value of Vx to Vy - Vx, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[0xF] = 1 if vy > vx else 0
        self.v_regs[ins.x] = (vy - vx) & 0xFF
        self._goto_next_instruction()

    @asm("SHL V{x:X}")
    def _shl(self, ins):
        """set Vx equal to Vx SHL 1, VF = the bit shifted out"""
        msb = (self.v_regs[ins.x] & 0x80) >> 7
        self.v_regs[0xF] = msb
        self.v_regs[ins.x] = (self.v_regs[ins.x] << 1) & 0xFF   # multiply by 2 and keep only the lowest 8 bits
        self._goto_next_instruction()

    @asm("LD I, 0x{nnn:03x}")
    def _set_idx(self, ins):
        self.idx = ins.nnn
        self._goto_next_instruction()

    @asm("JP V0, 0x{nnn:03x}")
    def _jump_plus(self, ins):
        self._jump_to(ins.nnn + self.v_regs[0x0])

    @asm("RND V{x:X}, 0x{nn:02x}")
    def _random_byte_and(self, ins):
        self.v_regs[ins.x] = self.rng.randint(0, 255) & ins.nn
        self._goto_next_instruction()

    @asm("DRW V{x:X}, V{y:X}, {n}")
    def _to_screen(self, ins):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[0xF] = 0
        # step through each sprite byte, one screen row each
        for row in range(ins.n):
            if self.idx + row >= MEMORY_SIZE:
                break
            sprite_byte = self.mem[self.idx + row]
            for col in range(8):
                if not sprite_byte & (0x80 >> col):
                    continue
                # sprites are XORed onto the existing screen and if this
                # causes any pixel to be erased then VF=1, otherwise VF=0
                if self.display.xor_pixel(x + col, y + row):
                    self.v_regs[0xF] = 1
        self.display.dirty = True
        self._goto_next_instruction()

    @asm("SKP V{x:X}")
    def _skip_if_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is held"""
        self._skip_if(self.keypad[self.v_regs[ins.x]])

    @asm("SKNP V{x:X}")
    def _skip_if_not_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is NOT held"""
        self._skip_if(not self.keypad[self.v_regs[ins.x]])

    @asm("LD V{x:X}, DT")
    def _set_vx_dt(self, ins):
        self.v_regs[ins.x] = self.timers.delay
        self._goto_next_instruction()

    @asm("LD V{x:X}, K")
    def _wait_keypress(self, ins):
        """wait for a fresh key press and store its value in Vx"""
        self.awaiting_key = ins.x
        self._poll_keypress()

    @asm("LD DT, V{x:X}")
    def _set_dt_vx(self, ins):
        self.timers.delay = self.v_regs[ins.x]
        self._goto_next_instruction()

    @asm("LD ST, V{x:X}")
    def _set_st(self, ins):
        self.timers.sound = self.v_regs[ins.x]
        self._goto_next_instruction()

    @asm("ADD I, V{x:X}")
    def _add_to_idx(self, ins):
        self.idx = (self.idx + self.v_regs[ins.x]) & 0xFFFF
        self._goto_next_instruction()

    @asm("LD F, V{x:X}")
    def _select_char(self, ins):
        """set I to location of sprite for digit Vx"""
        digit = self.v_regs[ins.x] & 0x0F
        self.idx = FONT_START_ADDRESS + digit * FONT_BYTES_PER_CHAR
        self._goto_next_instruction()

    @asm("LD B, V{x:X}")
    def _bcd_repr(self, ins):
        """store the hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        value = self.v_regs[ins.x]
        if self.idx + 2 < MEMORY_SIZE:
            self.mem[self.idx] = value // 100
            self.mem[self.idx + 1] = (value // 10) % 10
            self.mem[self.idx + 2] = value % 10
        self._goto_next_instruction()

    @asm("LD [I], V{x:X}")
    def _store_vregs(self, ins):
        """store registers V0 through Vx (included) in memory starting at location I"""
        for reg in range(ins.x + 1):
            if self.idx + reg >= MEMORY_SIZE:
                break
            self.mem[self.idx + reg] = self.v_regs[reg]
        self._goto_next_instruction()

    @asm("LD V{x:X}, [I]")
    def _load_vregs(self, ins):
        """read registers V0 through Vx (included) from memory starting at location I"""
        for reg in range(ins.x + 1):
            if self.idx + reg >= MEMORY_SIZE:
                break
            self.v_regs[reg] = self.mem[self.idx + reg]
        self._goto_next_instruction()
