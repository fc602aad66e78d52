import pytest

from solong.app import TEXT_COLOR, Renderer, Sprites, main
from solong.game import PIXEL, Direction, Game, GameQuit
from solong.gamemap import COLLECTIBLE, EXIT, GameMap, MapError

MAP_TEXT = "11111\n1P0C1\n1E001\n11111\n"


class FakeWindow:
    def __init__(self):
        self.images = []
        self.texts = []

    def put_image(self, image, x, y):
        self.images.append((image, x, y))

    def string_put(self, x, y, color, text):
        self.texts.append((x, y, color, text))


def make_sprites():
    names = ["wall", "floor", "exit", "coin1", "coin2", "right", "left", "up", "down"]
    return Sprites(**{name: f"img-{name}" for name in names})


@pytest.fixture
def setup():
    game = Game(GameMap.from_text(MAP_TEXT).validate())
    window = FakeWindow()
    sprites = make_sprites()
    return game, window, sprites, Renderer(window, sprites)


def test_draw_map_places_one_image_per_tile(setup):
    game, window, sprites, renderer = setup
    renderer.draw_map(game)
    assert len(window.images) == game.map.width * game.map.height
    positions = {(x, y) for _, x, y in window.images}
    expected = {
        (x * PIXEL, y * PIXEL)
        for x in range(game.map.width)
        for y in range(game.map.height)
    }
    assert positions == expected
    assert (sprites.left, PIXEL, PIXEL) in window.images
    assert (sprites.coin1, 3 * PIXEL, PIXEL) in window.images
    assert (sprites.exit, PIXEL, 2 * PIXEL) in window.images


def test_draw_map_rejects_unknown_tile():
    game = Game(GameMap.from_text("1111\n1PX1\n1111"))
    renderer = Renderer(FakeWindow(), make_sprites())
    with pytest.raises(MapError):
        renderer.draw_map(game)


def test_render_draws_tiles_strip_then_player(setup):
    game, window, sprites, renderer = setup
    game.move(Direction.RIGHT)
    renderer.render(game)
    cells = game.map.width * game.map.height
    strip = window.images[cells:cells + game.map.width // 2]
    assert strip == [(sprites.wall, x * PIXEL, 0) for x in range(game.map.width // 2)]
    px, py = game.player
    assert window.images[-1] == (sprites.right, px * PIXEL, py * PIXEL)
    assert len(window.images) == cells + game.map.width // 2 + 1


def test_render_draws_floor_under_player_start(setup):
    game, window, sprites, renderer = setup
    renderer.render(game)
    assert (sprites.floor, PIXEL, PIXEL) in window.images[:20]


def test_write_counters_texts(setup):
    game, window, _, renderer = setup
    renderer.write_counters(game)
    assert [t[3] for t in window.texts] == ["MOVE: ", "0", "COIN: ", "1"]
    assert all(t[2] == TEXT_COLOR for t in window.texts)
    assert {t[1] for t in window.texts} == {PIXEL // 2}


def test_render_shows_updated_counters_after_collecting(setup):
    game, window, _, renderer = setup
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    assert game.collect()
    renderer.render(game)
    texts = [t[3] for t in window.texts]
    assert texts[1] == str(game.moves)
    assert texts[3] == str(game.coins)
    assert game.coins == 0


def test_render_quits_on_exit_with_no_coins(setup):
    game, _, _, renderer = setup
    game.player = game.map.find(EXIT)
    game.coins = 0
    with pytest.raises(GameQuit):
        renderer.render(game)


def test_render_keeps_going_on_exit_with_coins_left(setup):
    game, window, _, renderer = setup
    game.player = game.map.find(EXIT)
    renderer.render(game)
    assert [t[3] for t in window.texts][3] == str(game.coins)


def test_coin_animation_switches_frames(setup):
    game, window, sprites, renderer = setup
    coin_pos = game.map.find(COLLECTIBLE)
    target = (coin_pos[0] * PIXEL, coin_pos[1] * PIXEL)
    seen = []
    for _ in range(200):
        window.images.clear()
        renderer.render(game)
        seen.extend(img for img, x, y in window.images if (x, y) == target)
        if sprites.coin2 in seen:
            break
    assert sprites.coin2 in seen
    first_switch = seen.index(sprites.coin2)
    assert first_switch > 0
    assert set(seen[:first_switch]) == {sprites.coin1}


def _write_xpm(path, color):
    path.write_text(
        'static char *img[] = {\n"1 1 1 1",\n"a c #' + color + '",\n"a"\n};\n',
        encoding="latin-1",
    )


def test_sprites_load_reads_every_file(tmp_path):
    colors = {
        "duvar.xpm": "110000",
        "background.xpm": "220000",
        "exit.xpm": "330000",
        "coin.xpm": "440000",
        "coin2.xpm": "550000",
        "right.xpm": "660000",
        "left.xpm": "770000",
        "up.xpm": "880000",
        "down.xpm": "990000",
    }
    for name, color in colors.items():
        _write_xpm(tmp_path / name, color)
    sprites = Sprites.load(tmp_path)
    assert sprites.wall.get_pixel(0, 0) == int(colors["duvar.xpm"], 16)
    assert sprites.coin2.get_pixel(0, 0) == int(colors["coin2.xpm"], 16)
    assert sprites.player(Direction.UP) is sprites.up
    assert sprites.player(Direction.DOWN).get_pixel(0, 0) == int(colors["down.xpm"], 16)


def test_sprites_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Sprites.load(tmp_path)


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "Error\n"


def test_main_rejects_wrong_extension(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text(MAP_TEXT)
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == "Error\n"


def test_main_rejects_invalid_map(tmp_path, capsys):
    path = tmp_path / "map.ber"
    path.write_text("11111\n1P0C1\n11111\n")
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == "Error\n"


def test_main_missing_map_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 1
    assert capsys.readouterr().out == "Error\n"


def test_main_missing_sprites(tmp_path, capsys, monkeypatch):
    path = tmp_path / "map.ber"
    path.write_text(MAP_TEXT)
    monkeypatch.chdir(tmp_path)
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == "Error\n"