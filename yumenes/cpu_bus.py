"""Memory bus of the CPU: internal RAM, PPU registers, controller and cartridge."""

from __future__ import annotations

from typing import Any

from yumenes.ppu import PPU

_CPU_RAM_SIZE = 2048

_CPU_RAM_UPPER_BOUND = 0x1FFF
_PPU_REGISTERS_SPACE_START = 0x2000
_APU_AND_IO_SPACE_START = 0x4000
_CONTROLLER_ADDRESS = 0x4016
_PRG_RAM_SPACE_START = 0x6000
_PRG_ROM_SPACE_START = 0x8000


class CPUBus:
    """Routes CPU memory accesses to the device mapped at each address.

    A controller is any object with ``handle_state_write(data) -> bool`` and
    ``handle_state_read() -> int``. A cartridge is any object whose ``mapper``
    offers ``map_prg_ram_write``, ``map_prg_ram_read`` and ``map_prg_rom_read``.
    The remaining APU and I/O addresses are not mapped: writes are dropped and
    reads give zero.
    """

    def __init__(self, ppu: PPU) -> None:
        self.ppu = ppu
        self.cpu_ram = bytearray(_CPU_RAM_SIZE)
        self._cartridge: Any = None
        self._controller: Any = None

    def insert_cartridge(self, cartridge: Any) -> None:
        self._cartridge = cartridge

    def connect_controller(self, controller: Any) -> None:
        self._controller = controller

    def clear_memory(self) -> None:
        """Zero the internal RAM."""
        self.cpu_ram[:] = bytes(_CPU_RAM_SIZE)

    def write(self, address: int, data: int) -> None:
        """Write a byte to the device mapped at ``address``."""
        address &= 0xFFFF
        data &= 0xFF
        if _PPU_REGISTERS_SPACE_START <= address < _APU_AND_IO_SPACE_START:
            self.ppu.write_register(address, data)
        elif address == _CONTROLLER_ADDRESS:
            if not self._require_controller().handle_state_write(data):
                self.ppu.close_screen()
        elif _PRG_RAM_SPACE_START <= address < _PRG_ROM_SPACE_START:
            self._require_cartridge().mapper.map_prg_ram_write(address, data)
        elif address >= _PRG_ROM_SPACE_START:
            return
        elif address <= _CPU_RAM_UPPER_BOUND:
            self.cpu_ram[address % _CPU_RAM_SIZE] = data

    def read(self, address: int) -> int:
        """Read a byte from the device mapped at ``address``."""
        address &= 0xFFFF
        if _PPU_REGISTERS_SPACE_START <= address < _APU_AND_IO_SPACE_START:
            return self.ppu.read_register(address)
        if address == _CONTROLLER_ADDRESS:
            return self._require_controller().handle_state_read()
        if _PRG_RAM_SPACE_START <= address < _PRG_ROM_SPACE_START:
            return self._require_cartridge().mapper.map_prg_ram_read(address)
        if address >= _PRG_ROM_SPACE_START:
            return self._require_cartridge().mapper.map_prg_rom_read(address)
        if address <= _CPU_RAM_UPPER_BOUND:
            return self.cpu_ram[address % _CPU_RAM_SIZE]
        return 0x00

    def read_ppu_nmi_flag(self) -> bool:
        return self.ppu.force_nmi_in_cpu

    def clear_ppu_nmi_flag(self) -> None:
        self.ppu.force_nmi_in_cpu = False

    def _require_cartridge(self) -> Any:
        if self._cartridge is None:
            raise RuntimeError("no cartridge inserted")
        return self._cartridge

    def _require_controller(self) -> Any:
        if self._controller is None:
            raise RuntimeError("no controller connected")
        return self._controller