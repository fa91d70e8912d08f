"""Standard controller buttons, their keyboard bindings and their state bits."""

from __future__ import annotations

from enum import Enum


class Button(Enum):
    """Buttons of a standard controller, in the order the hardware reports them."""

    A = 0
    B = 1
    SELECT = 2
    START = 3
    UP = 4
    DOWN = 5
    LEFT = 6
    RIGHT = 7


_KEY_BINDS: dict[Button, str] = {
    Button.A: "L",
    Button.B: "K",
    Button.SELECT: "H",
    Button.START: "J",
    Button.UP: "W",
    Button.DOWN: "S",
    Button.LEFT: "A",
    Button.RIGHT: "D",
}

_BUTTON_BITS: dict[Button, int] = {
    Button.A: 0b1000_0000,
    Button.B: 0b0100_0000,
    Button.SELECT: 0b0010_0000,
    Button.START: 0b0001_0000,
    Button.UP: 0b0000_1000,
    Button.DOWN: 0b0000_0100,
    Button.LEFT: 0b0000_0010,
    Button.RIGHT: 0b0000_0001,
}


def button_bit(button: Button) -> int:
    """Return the bit that represents ``button`` in the controller state byte."""
    try:
        return _BUTTON_BITS[button]
    except KeyError:
        raise ValueError(f"unknown button: {button!r}") from None


def key_for(button: Button) -> str:
    """Return the name of the keyboard key bound to ``button``."""
    try:
        return _KEY_BINDS[button]
    except KeyError:
        raise ValueError(f"unknown button: {button!r}") from None