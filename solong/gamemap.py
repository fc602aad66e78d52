"""Loading and checking so_long ``.ber`` maps."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

__all__ = [
    "COLLECTIBLE",
    "EXIT",
    "FLOOR",
    "PLAYER",
    "TILES",
    "WALL",
    "GameMap",
    "MapError",
    "has_ber_extension",
]

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
TILES = frozenset({WALL, FLOOR, PLAYER, EXIT, COLLECTIBLE})


class MapError(ValueError):
    """Raised when a map cannot be read or breaks the map rules."""


def has_ber_extension(path) -> bool:
    """Return True when the path name ends in ``.ber``."""
    return str(path).endswith(".ber")


class GameMap:
    """A rectangular grid of tiles, addressed as (x, y) with y growing down."""

    def __init__(self, rows):
        self._rows = [list(row) for row in rows]
        if not self._rows:
            raise MapError("Error")
        self.width = len(self._rows[0])
        self.height = len(self._rows)
        if any(len(row) != self.width for row in self._rows):
            raise MapError("Error")

    @classmethod
    def from_text(cls, text) -> GameMap:
        """Build a map from its text; one trailing newline is ignored."""
        if text.endswith("\n"):
            text = text[:-1]
        return cls(text.split("\n"))

    @classmethod
    def load(cls, path) -> GameMap:
        """Read a map file from disk."""
        try:
            text = Path(path).read_text(encoding="latin-1")
        except OSError as exc:
            raise MapError("Error") from exc
        return cls.from_text(text)

    def __str__(self) -> str:
        return "\n".join("".join(row) for row in self._rows)

    def __repr__(self) -> str:
        return f"GameMap({self.width}x{self.height})"

    def _cells(self) -> Iterator[tuple[int, int, str]]:
        for y, row in enumerate(self._rows):
            for x, tile in enumerate(row):
                yield x, y, tile

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} map")

    def tile(self, x, y) -> str:
        """Return the tile at (x, y)."""
        self._check_bounds(x, y)
        return self._rows[y][x]

    def set_tile(self, x, y, tile) -> None:
        """Replace the tile at (x, y)."""
        self._check_bounds(x, y)
        self._rows[y][x] = tile

    def count(self, tile) -> int:
        """Return how many cells hold ``tile``."""
        return sum(row.count(tile) for row in self._rows)

    def find(self, tile) -> tuple[int, int] | None:
        """Return the (x, y) of the first cell holding ``tile``, or None."""
        return next(((x, y) for x, y, t in self._cells() if t == tile), None)

    def validate(self) -> GameMap:
        """Check the map rules and return the map; raise MapError on failure.

        The map needs at least one exit and one collectible, exactly one
        player, walls on every border and only known tiles.
        """
        if self.count(EXIT) <= 0:
            raise MapError("Error")
        if self.count(COLLECTIBLE) <= 0:
            raise MapError("Error")
        if self.count(PLAYER) != 1:
            raise MapError("Error")
        for row in self._rows[:-1]:
            if row[0] != WALL or row[-1] != WALL:
                raise MapError("Error")
        if any(tile != WALL for tile in self._rows[0]):
            raise MapError("Error")
        if any(tile != WALL for tile in self._rows[-1]):
            raise MapError("Error")
        if any(tile not in TILES for _, _, tile in self._cells()):
            raise MapError("Error")
        return self