# ui/palette.py
from __future__ import annotations

import threading
from dataclasses import dataclass

DEFAULT_COLOURS = ("blue", "magenta", "cyan", "white")


@dataclass(frozen=True)
class Palette:
    """Fixed, ordered set of display colours cycled across concurrent Jobs."""
    colours: tuple[str, ...] = DEFAULT_COLOURS

    def __post_init__(self) -> None:
        if not self.colours:
            raise ValueError("Palette needs at least one colour")

    def colour_for(self, index: int) -> str:
        return self.colours[index % len(self.colours)]


class ColourAllocator:
    """
    Hands out palette colours in rotation.

    The nth call to next() returns palette.colour_for(n), whichever thread
    makes it.
    """

    def __init__(self, palette: Palette | None = None):
        self.palette = palette or Palette()
        self._index = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            colour = self.palette.colour_for(self._index)
            self._index = (self._index + 1) % len(self.palette.colours)
        return colour
