from types import SimpleNamespace

import pytest

from yumenes.ppu_bus import MirroringType, PPUBus


class _Mapper:
    def __init__(self):
        self.reads = []

    def map_chr_rom_read(self, address):
        self.reads.append(address)
        return address & 0xFF


def _bus(mode):
    bus = PPUBus()
    bus.insert_cartridge(SimpleNamespace(mirroring_mode=mode, mapper=_Mapper()))
    return bus


def test_insert_cartridge_adopts_mirroring():
    bus = _bus(MirroringType.VERTICAL)
    assert bus.mirroring_mode is MirroringType.VERTICAL


def test_pattern_table_read_goes_to_mapper():
    bus = _bus(MirroringType.HORIZONTAL)
    assert bus.read(0x0300) == 0x0300 & 0xFF
    assert bus._cartridge.mapper.reads == [0x0300]


def test_pattern_table_read_without_cartridge_raises():
    with pytest.raises(RuntimeError):
        PPUBus().read(0x0000)


def test_pattern_table_write_is_ignored():
    bus = _bus(MirroringType.HORIZONTAL)
    bus.write(0x0123, 0x55)
    assert bus.read(0x0123) == 0x23
    assert bus.read(0x2123) == 0x00
    assert bus.read(0x3F03) == 0x00
    assert sum(bus.vram) == 0
    assert sum(bus.palettes_ram) == 0


@pytest.mark.parametrize("mode", list(MirroringType))
def test_vram_round_trip(mode):
    bus = _bus(mode)
    bus.write(0x2123, 0xAB)
    assert bus.read(0x2123) == 0xAB


def test_horizontal_mirroring_pairs():
    bus = _bus(MirroringType.HORIZONTAL)
    assert bus.normalize_vram_address(0x2400) == bus.normalize_vram_address(0x2000)
    assert bus.normalize_vram_address(0x2C10) == bus.normalize_vram_address(0x2810)
    assert bus.normalize_vram_address(0x2800) != bus.normalize_vram_address(0x2000)


def test_vertical_mirroring_pairs():
    bus = _bus(MirroringType.VERTICAL)
    assert bus.normalize_vram_address(0x2800) == bus.normalize_vram_address(0x2000)
    assert bus.normalize_vram_address(0x2C10) == bus.normalize_vram_address(0x2410)
    assert bus.normalize_vram_address(0x2400) != bus.normalize_vram_address(0x2000)


def test_single_screen_mirroring_all_alias():
    bus = _bus(MirroringType.SINGLE_SCREEN)
    bus.write(0x2C05, 0x42)
    for base in (0x2000, 0x2400, 0x2800, 0x2C00):
        assert bus.read(base + 0x05) == 0x42


def test_four_screen_keeps_address():
    bus = _bus(MirroringType.FOUR_SCREEN)
    assert bus.normalize_vram_address(0x2C05) == 0x2C05
    bus.write(0x2000, 0x11)
    bus.write(0x2C00, 0x22)
    assert bus.read(0x2000) == 0x11
    assert bus.read(0x2C00) == 0x22


def test_palette_round_trip_and_range_mirror():
    bus = _bus(MirroringType.HORIZONTAL)
    bus.write(0x3F01, 0x2A)
    assert bus.read(0x3F01) == 0x2A
    assert bus.read(0x3F21) == 0x2A


def test_sprite_background_entries_mirror_background():
    bus = _bus(MirroringType.HORIZONTAL)
    bus.write(0x3F10, 0x0F)
    assert bus.read(0x3F00) == 0x0F
    assert bus.normalize_palettes_address(0x3F14) == bus.normalize_palettes_address(0x3F04)


def test_background_aliases_read_universal_color():
    bus = _bus(MirroringType.HORIZONTAL)
    bus.write(0x3F00, 0x30)
    bus.write(0x3F04, 0x16)
    assert bus.palettes_ram[bus.normalize_palettes_address(0x3F04)] == 0x16
    assert bus.read(0x3F04) == 0x30
    assert bus.normalize_palettes_address(0x3F08, True) == 0


def test_write_masks_to_byte():
    bus = _bus(MirroringType.HORIZONTAL)
    bus.write(0x2001, 0x1FF)
    assert bus.read(0x2001) == 0xFF