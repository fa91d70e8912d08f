"""Memory bus of the picture processing unit: pattern tables, nametables, palettes."""

from __future__ import annotations

from enum import Enum
from typing import Any

_NAMETABLES_SPACE_START = 0x2000
_PALETTES_SPACE_START = 0x3F00

_SECOND_NAMETABLE_OFFSET = 0x0400
_THIRD_NAMETABLE_OFFSET = 0x0800

_CURRENT_NAMETABLE_MASK = 0x0FFF
_PALETTE_SIZE = 0x0020
_PALETTE_MIRROR_OFFSET = 0x0010
_SINGLE_SCREEN_SIZE = 0x0400
_VERTICAL_MIRRORING_SIZE = 0x0800

_VRAM_SIZE = 0x4000

_MIRRORED_PALETTE_ENTRIES = frozenset(
    _PALETTE_MIRROR_OFFSET + offset for offset in (0x00, 0x04, 0x08, 0x0C)
)
_BACKGROUND_ALIASES = frozenset((0x04, 0x08, 0x0C))


class MirroringType(Enum):
    """Nametable mirroring arrangement declared by a cartridge."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    SINGLE_SCREEN = "single_screen"
    FOUR_SCREEN = "four_screen"


class PPUBus:
    """Routes PPU memory accesses to the cartridge, video RAM or palette RAM.

    A cartridge is any object with a ``mirroring_mode`` attribute and a
    ``mapper`` offering ``map_chr_rom_read(address)``.
    """

    def __init__(self) -> None:
        self.vram = bytearray(_VRAM_SIZE)
        self.palettes_ram = bytearray(_PALETTE_SIZE)
        self.mirroring_mode = MirroringType.HORIZONTAL
        self._cartridge: Any = None

    def insert_cartridge(self, cartridge: Any) -> None:
        """Attach a cartridge and adopt its mirroring mode."""
        self._cartridge = cartridge
        self.mirroring_mode = MirroringType(cartridge.mirroring_mode)

    def write(self, address: int, data: int) -> None:
        """Write a byte; writes to the pattern tables are ignored."""
        data &= 0xFF
        if address < _NAMETABLES_SPACE_START:
            return
        if address < _PALETTES_SPACE_START:
            self.vram[self.normalize_vram_address(address)] = data
        else:
            self.palettes_ram[self.normalize_palettes_address(address)] = data

    def read(self, address: int) -> int:
        """Read a byte from the device mapped at ``address``."""
        if address < _NAMETABLES_SPACE_START:
            if self._cartridge is None:
                raise RuntimeError("no cartridge inserted")
            return self._cartridge.mapper.map_chr_rom_read(address)
        if address < _PALETTES_SPACE_START:
            return self.vram[self.normalize_vram_address(address)]
        return self.palettes_ram[self.normalize_palettes_address(address, True)]

    def normalize_vram_address(self, address: int) -> int:
        """Map a nametable address onto video RAM according to the mirroring mode."""
        mode = self.mirroring_mode
        if mode is MirroringType.HORIZONTAL:
            normalized = address % _SINGLE_SCREEN_SIZE
            if (address & _CURRENT_NAMETABLE_MASK) >= _THIRD_NAMETABLE_OFFSET:
                normalized += _SECOND_NAMETABLE_OFFSET
            return normalized
        if mode is MirroringType.VERTICAL:
            return address % _VERTICAL_MIRRORING_SIZE
        if mode is MirroringType.SINGLE_SCREEN:
            return address % _SINGLE_SCREEN_SIZE
        return address

    def normalize_palettes_address(self, address: int, is_reading: bool = False) -> int:
        """Map a palette address onto palette RAM, applying the hardware mirrors."""
        normalized = address % _PALETTE_SIZE
        if normalized in _MIRRORED_PALETTE_ENTRIES:
            normalized -= _PALETTE_MIRROR_OFFSET
        if is_reading and normalized in _BACKGROUND_ALIASES:
            normalized = 0x0000
        return normalized