# solong

A small top-down game. You walk the player around a walled map, pick up every
coin and then reach the exit. The package also holds the parts the game is
built from:

- `solong.colors`: the X11 colour-name table.
- `solong.image`: an in-memory image type.
- `solong.xpm`: an XPM image reader.
- `solong.events`: a hook table for window events.
- `solong.display`: a thin window layer on top of pygame.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
solong maps/level1.ber
```

The map file name must end in `.ber`. A map is plain text with one row per line. It uses these tiles:

| tile | meaning      |
|------|--------------|
| `1`  | wall         |
| `0`  | floor        |
| `P`  | player start |
| `C`  | coin         |
| `E`  | exit         |

A valid map meets all of these rules:

- It is a rectangle.
- Its border is made only of walls.
- It has exactly one player.
- It has at least one coin and at least one exit.
- It uses no tile other than those listed above.

If the file name is wrong, the map breaks a rule, or a sprite is missing or unreadable, the command prints `Error` and exits with status 1. It does the same when no map is given.

Controls:

- `W`, `A`, `S` and `D` move the player.
- A wall blocks a step.
- `Esc` quits, and so does closing the window.

On every key press the move count is printed to standard output. The window also shows the move count and the number of coins still to collect. The game ends when you stand on the exit after taking every coin.

### Sprites

Sprites are read as XPM files from a `sprite` directory in the current working directory. These files are needed:

- `right.xpm`, `left.xpm`, `up.xpm`, `down.xpm`
- `background.xpm`
- `duvar.xpm` (the wall)
- `exit.xpm`
- `coin.xpm`, `coin2.xpm`

The two coin images alternate as an animation. From Python, `solong.app.run(path, sprite_dir)` takes another sprite directory.

## What is not included

The package ships no sprite images and no maps. You have to supply both before the game can be played.

## Using the parts

### Maps and game state

```python
from solong.gamemap import GameMap
from solong.game import Game, Direction

game_map = GameMap.from_text("11111\n1PCE1\n11111").validate()

game = Game(game_map)
game.move(Direction.RIGHT)   # True: the step was taken
game.collect()               # True: the coin was picked up
print(game.moves, game.coins)  # 1 0
```

Breaking a map rule raises `solong.gamemap.MapError`. When the game ends, `Game.handle_key` and `Game.update` raise `solong.game.GameQuit`.

### XPM images and colours

```python
from solong.xpm import read_xpm

image = read_xpm("sprite/coin.xpm")
print(image.width, image.height, hex(image.get_pixel(0, 0)))
```

`parse_xpm` builds an image from already-split XPM lines. Malformed data raises `XpmError`.

```python
from solong.colors import lookup_color

assert lookup_color("DodgerBlue") == 0x1E90FF
```

### Windows

```python
from solong.display import Display

with Display() as display:
    window = display.new_window(200, 100, "demo")
    window.string_put(10, 50, 0xFFFFFF, "hello")
    window.key_hook(lambda key, param: display.loop_end())
    display.loop()
```

`Display.loop` runs until one of these happens:

- Every window has been destroyed.
- `loop_end` is called.
- A hook raises.