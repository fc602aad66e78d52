import pytest

from solong.game import (
    ANIMATION_PERIOD,
    Animation,
    Direction,
    Game,
    GameQuit,
    Key,
)
from solong.gamemap import GameMap, MapError

VALID = "1111111\n1P0C0E1\n1111111"


def make_game(text=VALID):
    return Game(GameMap.from_text(text))


def test_initial_state():
    game = make_game()
    assert game.player == (1, 1)
    assert game.moves == 0
    assert game.coins == 1
    assert game.facing is Direction.LEFT


def test_raw_keysyms_drive_the_game():
    game = make_game()
    game.handle_key(ord("d"))
    assert game.player == (2, 1)
    assert game.facing is Direction.RIGHT
    game.handle_key(ord("a"))
    assert game.player == (1, 1)
    assert game.moves == 2
    with pytest.raises(GameQuit):
        game.handle_key(65307)


def test_move_right():
    game = make_game()
    game.handle_key(Key.D)
    assert game.player == (2, 1)
    assert game.moves == 1
    assert game.facing is Direction.RIGHT


def test_wall_blocks_move():
    game = make_game()
    game.handle_key(Key.W)
    game.handle_key(Key.A)
    assert game.player == (1, 1)
    assert game.moves == 0
    assert game.facing is Direction.LEFT


def test_move_returns_whether_moved():
    game = make_game()
    assert game.move(Direction.UP) is False
    assert game.move(Direction.RIGHT) is True
    assert game.player == (2, 1)


def test_collect_coin():
    game = make_game()
    game.handle_key(Key.D)
    game.handle_key(Key.D)
    assert game.player == (3, 1)
    assert game.coins == 0
    assert game.map.tile(3, 1) == "0"
    assert game.collect() is False


def test_unknown_key_does_nothing(capsys):
    game = make_game()
    game.handle_key(42)
    assert game.player == (1, 1)
    assert capsys.readouterr().out == "move 0\n"


def test_move_count_printed(capsys):
    game = make_game()
    game.handle_key(Key.D)
    game.handle_key(Key.D)
    assert capsys.readouterr().out == "move 1\nmove 2\n"


def test_escape_quits():
    game = make_game()
    with pytest.raises(GameQuit):
        game.handle_key(Key.ESC)


def test_reaching_exit_with_all_coins_ends_game():
    game = make_game()
    for _ in range(4):
        game.handle_key(Key.D)
    assert game.player == (5, 1)
    assert game.coins == 0
    with pytest.raises(GameQuit):
        game.update()


def test_exit_without_coins_keeps_playing():
    game = make_game("11111111\n1P0E0C01\n11111111")
    game.handle_key(Key.D)
    game.handle_key(Key.D)
    game.update()
    assert game.player == (3, 1)
    assert game.coins == 1


def test_map_without_player_rejected():
    with pytest.raises(MapError):
        make_game("11111\n10CE1\n11111")


def test_opposite_moves_return_to_start():
    game = make_game("11111\n10001\n10P01\n10CE1\n11111")
    assert game.move(Direction.UP) is True
    assert game.move(Direction.DOWN) is True
    assert game.move(Direction.RIGHT) is True
    assert game.move(Direction.LEFT) is True
    assert game.player == (2, 2)
    assert game.moves == 4
    assert game.facing is Direction.LEFT
    assert game.facing.sprite_name == "left"


def test_animation_cycle():
    anim = Animation(["a", "b"], period=2)
    assert [anim.advance() for _ in range(5)] == ["a", "a", "b", "b", "a"]


def test_animation_default_period():
    anim = Animation(["a", "b"])
    assert anim.period == ANIMATION_PERIOD
    seen = [anim.advance() for _ in range(ANIMATION_PERIOD + 1)]
    assert seen[-2] == "a"
    assert seen[-1] == "b"


def test_animation_needs_frames():
    with pytest.raises(ValueError):
        Animation([])