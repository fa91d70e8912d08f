"""Picture processing unit: CPU-visible registers, VRAM addressing and timing."""

from __future__ import annotations

from typing import Any

from yumenes.ppu_bus import PPUBus

_REGISTERS_SPACE_SIZE = 8

_PPUCTRL = 0
_PPUMASK = 1
_PPUSTATUS = 2
_OAMADDR = 3
_OAMDATA = 4
_PPUSCROLL = 5
_PPUADDR = 6
_PPUDATA = 7

_SCANLINE_WIDTH = 341
_FRAME_HEIGHT = 262

_VRAM_INCREMENT_ENABLED = 0x20
_VRAM_INCREMENT_DISABLED = 0x01
_VRAM_INCREMENT_FLAG = 0b0000_0100
_VBLANK_FLAG = 0b1000_0000

_FINE_BITS_MASK = 0b0000_0111
_FIRST_ADDRESS_WRITE_MASK = 0b0011_1111
_NAMETABLE_BITS_MASK = 0b0000_0011

_PALETTES_SPACE_START = 0x3F00
_LOWER_BYTE_MASK = 0x00FF
_UPPER_BYTE_MASK = 0xFF00


class LoopyRegister:
    """A 16-bit VRAM address register split into scrolling fields.

    Layout, from the least significant bit: coarse X (5 bits), coarse Y
    (5 bits), nametable select (2 bits), fine Y (3 bits).
    """

    _FIELDS = {
        "coarse_x": (0, 0b1_1111),
        "coarse_y": (5, 0b1_1111),
        "nametable": (10, 0b11),
        "fine_y": (12, 0b111),
    }

    def __init__(self, word: int = 0) -> None:
        self._word = word & 0xFFFF

    @property
    def word(self) -> int:
        return self._word

    @word.setter
    def word(self, value: int) -> None:
        self._word = value & 0xFFFF

    def _get(self, name: str) -> int:
        shift, mask = self._FIELDS[name]
        return (self._word >> shift) & mask

    def _set(self, name: str, value: int) -> None:
        shift, mask = self._FIELDS[name]
        self._word = (self._word & ~(mask << shift) & 0xFFFF) | ((value & mask) << shift)

    @property
    def coarse_x(self) -> int:
        return self._get("coarse_x")

    @coarse_x.setter
    def coarse_x(self, value: int) -> None:
        self._set("coarse_x", value)

    @property
    def coarse_y(self) -> int:
        return self._get("coarse_y")

    @coarse_y.setter
    def coarse_y(self, value: int) -> None:
        self._set("coarse_y", value)

    @property
    def nametable(self) -> int:
        return self._get("nametable")

    @nametable.setter
    def nametable(self, value: int) -> None:
        self._set("nametable", value)

    @property
    def fine_y(self) -> int:
        return self._get("fine_y")

    @fine_y.setter
    def fine_y(self, value: int) -> None:
        self._set("fine_y", value)

    def __repr__(self) -> str:
        return f"LoopyRegister(word=0x{self._word:04X})"


class PPU:
    """The PPU as seen by the CPU: eight mirrored registers and a memory bus."""

    def __init__(self) -> None:
        self.bus = PPUBus()

        self.ctrl = 0x00
        self.mask = 0x00
        self.status = 0x00
        self.oam_address = 0x00
        self.oam_data = 0x00
        self.scroll = LoopyRegister()
        self.vram_address = LoopyRegister()
        self.fine_x = 0
        self.data = 0x00
        self.read_buffer = 0x00
        self.write_latch = False

        self.force_nmi_in_cpu = False
        self.screen_open = True

        self.current_cycle = 0
        self.current_scanline = 0

    def connect_bus_with_cartridge(self, cartridge: Any) -> None:
        """Attach a cartridge to the PPU memory bus."""
        self.bus.insert_cartridge(cartridge)

    def perform_cycle(self, debug_mode: bool = False) -> None:
        """Advance one dot, wrapping at the end of each scanline and frame."""
        if debug_mode:
            print(self.debug_info())

        self.current_cycle += 1
        if self.current_cycle == _SCANLINE_WIDTH:
            self.current_cycle = 0
            self.current_scanline += 1
            if self.current_scanline == _FRAME_HEIGHT:
                self.current_scanline = 0

    def debug_info(self) -> str:
        """Return a one-line summary of timing and register state."""
        return (
            f"[DEBUG PPU] LINE: {self.current_scanline:<4}"
            f" | CYCLE: {self.current_cycle:<4}"
            f" | PPUCTRL: 0x{self.ctrl:02X}"
            f" | PPUMASK: 0x{self.mask:02X}"
            f" | PPUSTATUS: 0x{self.status:02X}"
            f" | OAMADDR: 0x{self.oam_address:02X}"
            f" | OAMDATA: 0x{self.oam_data:02X}"
            f" | PPUSCROLL: 0x{self.scroll.word:04X}"
            f" | PPUADDR: 0x{self.vram_address.word:04X}"
            f" | PPUDATA: 0x{self.data:02X}"
        )

    def close_screen(self) -> None:
        """Mark the output screen as closed."""
        self.screen_open = False

    def write_to_bus(self, address: int, data: int) -> None:
        self.bus.write(address, data)

    def read_from_bus(self, address: int) -> int:
        return self.bus.read(address)

    def write_register(self, address: int, data: int) -> None:
        """Handle a CPU write to one of the eight (mirrored) PPU registers."""
        data &= 0xFF
        register = address % _REGISTERS_SPACE_SIZE
        if register == _PPUCTRL:
            self.scroll.nametable = data & _NAMETABLE_BITS_MASK
            self.ctrl = data
        elif register == _PPUMASK:
            self.mask = data
        elif register == _OAMADDR:
            self.oam_address = data
        elif register == _OAMDATA:
            self.oam_data = data
        elif register == _PPUSCROLL:
            self._write_scroll(data)
        elif register == _PPUADDR:
            self._write_address(data)
        elif register == _PPUDATA:
            self.write_to_bus(self.vram_address.word, data)
            self._increment_vram_address()

    def read_register(self, address: int) -> int:
        """Handle a CPU read from one of the eight (mirrored) PPU registers."""
        register = address % _REGISTERS_SPACE_SIZE
        if register == _PPUSTATUS:
            return self._read_status()
        if register == _OAMDATA:
            return self.oam_data
        if register == _PPUDATA:
            return self._read_data()
        return 0x00

    def _increment_vram_address(self) -> None:
        step = _VRAM_INCREMENT_ENABLED if self.ctrl & _VRAM_INCREMENT_FLAG else _VRAM_INCREMENT_DISABLED
        self.vram_address.word += step

    def _write_scroll(self, data: int) -> None:
        if not self.write_latch:
            self.scroll.coarse_x = data >> 3
            self.fine_x = data & _FINE_BITS_MASK
            self.write_latch = True
        else:
            self.scroll.coarse_y = data >> 3
            self.scroll.fine_y = data & _FINE_BITS_MASK
            self.write_latch = False

    def _write_address(self, data: int) -> None:
        if not self.write_latch:
            high = (data & _FIRST_ADDRESS_WRITE_MASK) << 8
            self.scroll.word = (self.scroll.word & _LOWER_BYTE_MASK) | high
            self.write_latch = True
        else:
            self.scroll.word = (self.scroll.word & _UPPER_BYTE_MASK) | data
            self.vram_address.word = self.scroll.word
            self.write_latch = False

    def _read_status(self) -> int:
        current = self.status
        self.status &= ~_VBLANK_FLAG & 0xFF
        self.write_latch = False
        return current

    def _read_data(self) -> int:
        address = self.vram_address.word
        self.data = self.read_buffer
        self.read_buffer = self.read_from_bus(address)
        self._increment_vram_address()
        if address >= _PALETTES_SPACE_START:
            return self.read_buffer
        return self.data