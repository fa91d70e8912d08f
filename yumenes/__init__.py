"""Memory-mapped core of a NES emulator: controller buttons, the PPU registers and the CPU and PPU buses."""

__version__ = "0.1.0"
__all__ = ["controller", "ppu_bus", "ppu", "cpu_bus"]