"""Game state: player movement, collectibles and the coin animation."""

from __future__ import annotations

from enum import Enum, IntEnum

from solong.gamemap import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap, MapError

__all__ = [
    "ANIMATION_PERIOD",
    "PIXEL",
    "TITLE",
    "Animation",
    "Direction",
    "Game",
    "GameQuit",
    "Key",
]

PIXEL = 64
TITLE = "so_long"
ANIMATION_PERIOD = 6969 // 6


class Key(IntEnum):
    """Keysyms the game reacts to."""

    W = 119
    A = 97
    S = 115
    D = 100
    ESC = 65307


class Direction(Enum):
    """Player facing; the values match the sprite selection codes."""

    RIGHT = 1
    UP = 2
    DOWN = 3
    LEFT = 4

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def sprite_name(self) -> str:
        return self.name.lower()


_DELTAS = {
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

_KEY_DIRECTIONS = {
    Key.W: Direction.UP,
    Key.A: Direction.LEFT,
    Key.S: Direction.DOWN,
    Key.D: Direction.RIGHT,
}


class GameQuit(Exception):
    """Raised when the game ends, by escape or by reaching the exit."""


class Animation:
    """Cycles through frames, switching after ``period`` calls to advance."""

    def __init__(self, frames, period=ANIMATION_PERIOD):
        self.frames = tuple(frames)
        if not self.frames:
            raise ValueError("an animation needs at least one frame")
        if period < 0:
            raise ValueError(f"period must not be negative, got {period}")
        self.period = period
        self._index = 0
        self._ticks = 0

    @property
    def frame(self):
        return self.frames[self._index]

    def advance(self):
        """Count one tick and return the frame to show."""
        if self._ticks == self.period:
            self._index = (self._index + 1) % len(self.frames)
            self._ticks = 1
        else:
            self._ticks += 1
        return self.frame


class Game:
    """The state of one game on a map."""

    def __init__(self, game_map: GameMap):
        start = game_map.find(PLAYER)
        if start is None:
            raise MapError("Error")
        self.map = game_map
        self.player = start
        self.moves = 0
        self.coins = game_map.count(COLLECTIBLE)
        self.facing = Direction.LEFT

    def handle_key(self, keycode) -> None:
        """React to a key press, then pick up any collectible underfoot."""
        if keycode == Key.ESC:
            raise GameQuit("escape pressed")
        try:
            direction = _KEY_DIRECTIONS.get(Key(keycode))
        except ValueError:
            direction = None
        if direction is not None:
            self.move(direction)
        self.collect()
        print(f"move {self.moves}")

    def move(self, direction) -> bool:
        """Step one tile unless a wall is in the way; return whether it moved."""
        dx, dy = direction.delta
        x, y = self.player[0] + dx, self.player[1] + dy
        if self.map.tile(x, y) == WALL:
            return False
        self.player = (x, y)
        self.moves += 1
        self.facing = direction
        return True

    def collect(self) -> bool:
        """Pick up a collectible on the player's tile; return whether one was taken."""
        x, y = self.player
        if self.map.tile(x, y) != COLLECTIBLE:
            return False
        self.map.set_tile(x, y, FLOOR)
        self.coins -= 1
        return True

    def update(self) -> None:
        """Per-frame check: standing on the exit with every coin ends the game."""
        if self.coins == 0 and self.map.tile(*self.player) == EXIT:
            raise GameQuit("level complete")