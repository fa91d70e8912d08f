# yumenes

The memory-mapped core of a NES emulator, in plain Python with no runtime
dependencies.

## What is in it

- `yumenes.controller`: the standard pad. `Button` lists the eight buttons
  in hardware order, `button_bit(button)` gives the bit each one holds in
  the controller state byte (A is `0x80`, Right is `0x01`), and
  `key_for(button)` gives the name of the keyboard key it is bound to
  (A → `"L"`, B → `"K"`, Select → `"H"`, Start → `"J"`, and W/S/A/D for the
  directions). Both raise `ValueError` for anything that is not a `Button`.
- `yumenes.ppu_bus`: `PPUBus`, the PPU address space. Reads below `0x2000`
  go to the cartridge's CHR ROM; writes there are ignored. Nametable
  addresses are folded onto video RAM according to the cartridge's
  `MirroringType` (horizontal, vertical, single screen or four screen), and
  palette addresses are folded onto 32 bytes of palette RAM, with
  `0x10/0x14/0x18/0x1C` mirroring their background entries and reads of
  `0x04/0x08/0x0C` returning the universal background colour.
- `yumenes.ppu`: `PPU`, the register file seen by the CPU (PPUCTRL,
  PPUMASK, PPUSTATUS, OAMADDR, OAMDATA, PPUSCROLL, PPUADDR and PPUDATA,
  mirrored every 8 bytes), with the shared write latch, the buffered
  PPUDATA read, the VRAM address increment of 1 or 32, and a
  scanline/cycle counter that runs through 341 cycles × 262 lines.
  `debug_info()` returns a one-line summary of that state, and
  `perform_cycle(debug_mode=True)` prints it before each step.
  `LoopyRegister` models the packed scroll/address register with its
  `coarse_x`, `coarse_y`, `nametable` and `fine_y` fields.
- `yumenes.cpu_bus`: `CPUBus`, the CPU address space. It holds 2 KiB of
  work RAM mirrored up to `0x1FFF` and routes accesses to the PPU
  registers (`0x2000`–`0x3FFF`), the controller port at `0x4016`, the
  cartridge's PRG RAM (`0x6000`–`0x7FFF`) and PRG ROM (`0x8000` and up).
  Writes to PRG ROM are dropped; other APU and I/O addresses read as zero.
  `read_ppu_nmi_flag()` and `clear_ppu_nmi_flag()` expose the PPU's NMI
  request.

## Installing

```
pip install .
```

Install with the `test` extra to run the test suite:

```
pip install .[test]
pytest
```

## Using it

```python
from yumenes.ppu import PPU
from yumenes.cpu_bus import CPUBus

ppu = PPU()
bus = CPUBus(ppu)

bus.write(0x0001, 0x42)
assert bus.read(0x0801) == 0x42      # work RAM mirrors every 2 KiB

bus.write(0x2006, 0x3F)              # PPUADDR, high byte
bus.write(0x2006, 0x00)              # PPUADDR, low byte
bus.write(0x2007, 0x0F)              # PPUDATA: palette entry 0
assert ppu.bus.palettes_ram[0] == 0x0F
```

## Connecting a cartridge and a controller

The package has no cartridge or controller implementation of its own; the
buses work with any objects of the right shape.

- A cartridge needs a `mirroring_mode` (a `MirroringType` or its string
  value) and a `mapper` with `map_chr_rom_read(address)`,
  `map_prg_ram_read(address)`, `map_prg_ram_write(address, data)` and
  `map_prg_rom_read(address)`. Attach it with
  `PPU.connect_bus_with_cartridge` and `CPUBus.insert_cartridge`.
- A controller needs `handle_state_write(data)`, returning a bool, and
  `handle_state_read()`. Attach it with `CPUBus.connect_controller`. When
  `handle_state_write` returns false, the bus calls `PPU.close_screen()`,
  which sets `ppu.screen_open` to `False`.

Touching cartridge or controller addresses before anything is attached
raises `RuntimeError`.

## What it does not do

There is no CPU core, no iNES file loader, no pixel rendering, no window
or keyboard input, and no command to run a game. The PPU keeps time and
answers register accesses, but does not draw frames or raise NMIs by
itself.