import pytest

from solong.gamemap import GameMap, MapError, has_ber_extension

VALID = "1111111\n1P0C0E1\n1111111"


def test_from_text_dimensions_and_counts():
    gm = GameMap.from_text(VALID)
    assert gm.width == 7
    assert gm.height == 3
    assert gm.count("C") == 1
    assert gm.count("1") == 16


def test_find_positions():
    gm = GameMap.from_text(VALID)
    assert gm.find("P") == (1, 1)
    assert gm.find("E") == (5, 1)
    assert gm.find("X") is None


def test_validate_returns_map():
    gm = GameMap.from_text(VALID)
    assert gm.validate() is gm


def test_trailing_newline_ignored():
    gm = GameMap.from_text(VALID + "\n")
    assert gm.height == 3
    assert str(gm) == VALID


def test_str_round_trip():
    assert str(GameMap.from_text(VALID)) == VALID


@pytest.mark.parametrize(
    "text",
    [
        "1111111\n1P0C001\n1111111",  # no exit
        "1111111\n1P000E1\n1111111",  # no collectible
        "1111111\n1PPC0E1\n1111111",  # two players
        "1111111\n100C0E1\n1111111",  # no player
        "1111111\n0P0C0E1\n1111111",  # left wall gap
        "1111111\n1P0C0E0\n1111111",  # right wall gap
        "1110111\n1P0C0E1\n1111111",  # top wall gap
        "1111111\n1P0C0E1\n1111101",  # bottom wall gap
        "1111111\n1P0CXE1\n1111111",  # unknown tile
    ],
)
def test_validate_rejects(text):
    with pytest.raises(MapError):
        GameMap.from_text(text).validate()


def test_non_rectangular_rejected():
    with pytest.raises(MapError):
        GameMap.from_text("1111111\n1P0CE1\n1111111")


def test_tile_and_set_tile():
    gm = GameMap.from_text(VALID)
    assert gm.tile(3, 1) == "C"
    gm.set_tile(3, 1, "0")
    assert gm.tile(3, 1) == "0"
    assert gm.count("C") == 0


def test_tile_out_of_range():
    gm = GameMap.from_text(VALID)
    with pytest.raises(IndexError):
        gm.tile(7, 0)
    with pytest.raises(IndexError):
        gm.set_tile(0, -1, "1")


def test_load_from_file(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text(VALID)
    gm = GameMap.load(path)
    assert str(gm) == VALID
    assert gm.find("P") == (1, 1)


def test_load_missing_file(tmp_path):
    with pytest.raises(MapError):
        GameMap.load(tmp_path / "absent.ber")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("maps/level.ber", True),
        (".ber", True),
        ("level.ber", False),
        ("level.ber.txt", False),
        ("level.BER", False),
    ],
)
def test_has_ber_extension(path, expected):
    assert has_ber_extension(path) is expected