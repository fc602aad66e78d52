"""The so_long game: sprites, drawing the map and the command entry point."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from solong.display import Display
from solong.events import EventMask, EventType
from solong.game import PIXEL, TITLE, Animation, Direction, Game, GameQuit
from solong.gamemap import (
    COLLECTIBLE,
    EXIT,
    FLOOR,
    PLAYER,
    WALL,
    GameMap,
    MapError,
    has_ber_extension,
)
from solong.xpm import XpmError, read_xpm

__all__ = [
    "SPRITE_DIR",
    "TEXT_COLOR",
    "Renderer",
    "Sprites",
    "main",
    "run",
]

TEXT_COLOR = 0x00FFFFFF
SPRITE_DIR = Path("sprite")

_SPRITE_FILES = {
    "wall": "duvar.xpm",
    "floor": "background.xpm",
    "exit": "exit.xpm",
    "coin1": "coin.xpm",
    "coin2": "coin2.xpm",
    "right": "right.xpm",
    "left": "left.xpm",
    "up": "up.xpm",
    "down": "down.xpm",
}


@dataclass(frozen=True)
class Sprites:
    """The images the game draws."""

    wall: Any
    floor: Any
    exit: Any
    coin1: Any
    coin2: Any
    right: Any
    left: Any
    up: Any
    down: Any

    def player(self, direction: Direction) -> Any:
        """Return the player image for the given facing."""
        return getattr(self, direction.sprite_name)

    @classmethod
    def load(cls, directory=SPRITE_DIR) -> Sprites:
        """Read every sprite from XPM files in ``directory``."""
        base = Path(directory)
        return cls(**{field: read_xpm(base / name) for field, name in _SPRITE_FILES.items()})


class Renderer:
    """Draws a game onto a window, one tile of PIXEL size per map cell."""

    def __init__(self, window, sprites):
        self.window = window
        self.sprites = sprites
        self.coin_animation = Animation((sprites.coin1, sprites.coin2))

    def _tile_image(self, tile: str) -> Any:
        if tile == WALL:
            return self.sprites.wall
        if tile in (FLOOR, PLAYER):
            return self.sprites.floor
        if tile == EXIT:
            return self.sprites.exit
        if tile == COLLECTIBLE:
            return self.coin_animation.frame
        return None

    def _cells(self, game: Game):
        for y in range(game.map.height):
            for x in range(game.map.width):
                yield x, y, game.map.tile(x, y)

    def draw_map(self, game) -> None:
        """Draw the whole map once; raise MapError on an unknown tile."""
        for x, y, tile in self._cells(game):
            if tile == PLAYER:
                image = self.sprites.player(game.facing)
            elif tile == COLLECTIBLE:
                image = self.sprites.coin1
            else:
                image = self._tile_image(tile)
            if image is None:
                raise MapError("Error")
            self.window.put_image(image, x * PIXEL, y * PIXEL)

    def render(self, game) -> None:
        """Draw one frame: tiles, the counter strip, the player, then the counters.

        Raises GameQuit when the player stands on the exit with every coin taken.
        """
        for x, y, tile in self._cells(game):
            image = self._tile_image(tile)
            if image is not None:
                self.window.put_image(image, x * PIXEL, y * PIXEL)
            self.coin_animation.advance()
        for x in range(game.map.width // 2):
            self.window.put_image(self.sprites.wall, x * PIXEL, 0)
        px, py = game.player
        self.window.put_image(self.sprites.player(game.facing), px * PIXEL, py * PIXEL)
        game.update()
        self.write_counters(game)

    def write_counters(self, game) -> None:
        """Write the move count and the coins still to collect."""
        y = PIXEL // 2
        self.window.string_put(PIXEL // 3, y, TEXT_COLOR, "MOVE: ")
        self.window.string_put(PIXEL, y, TEXT_COLOR, str(game.moves))
        self.window.string_put(int(PIXEL * 2 / 1.5), y, TEXT_COLOR, "COIN: ")
        self.window.string_put(PIXEL * 2, y, TEXT_COLOR, str(game.coins))


def _on_key(key, game: Game) -> None:
    game.handle_key(key)


def _on_close(_param) -> None:
    raise GameQuit("window closed")


def run(path, sprite_dir=SPRITE_DIR) -> Game:
    """Play the map at ``path`` until the player quits or finishes.

    Raises MapError for a bad file name or map, and the errors of XPM
    reading for missing or broken sprites. Returns the final game state.
    """
    if not has_ber_extension(path):
        raise MapError("Error")
    game_map = GameMap.load(path).validate()
    game = Game(game_map)
    sprites = Sprites.load(sprite_dir)
    with Display() as display:
        window = display.new_window(game_map.width * PIXEL, game_map.height * PIXEL, TITLE)
        renderer = Renderer(window, sprites)
        renderer.draw_map(game)
        window.hook(EventType.KEY_PRESS, EventMask.KEY_PRESS, _on_key, game)
        display.loop_hook(renderer.render, game)
        window.hook(EventType.DESTROY_NOTIFY, EventMask.NONE, _on_close, None)
        try:
            display.loop()
        except GameQuit:
            pass
    return game


def main(argv=None) -> int:
    """Command entry point: ``solong MAP.ber``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Error")
        return 1
    try:
        run(args[0])
    except (MapError, XpmError, OSError):
        print("Error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())