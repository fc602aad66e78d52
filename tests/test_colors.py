import pytest

from solong.colors import COLOR_TABLE, lookup_color, text_to_rgb


def test_lookup_plain_name():
    assert lookup_color("snow") == 0xFFFAFA
    assert lookup_color("red") == 0xFF0000


def test_lookup_ignores_case():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == 0xF8F8FF


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_none_is_transparent_marker():
    assert lookup_color("none") == -1
    assert text_to_rgb("None", None) == -1


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        lookup_color("no such colour")


@pytest.mark.parametrize("level", range(0, 101))
def test_gray_and_grey_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_every_table_name_resolves_to_first_entry():
    seen = {}
    for name, value in COLOR_TABLE:
        seen.setdefault(name.lower(), value)
    for name, value in seen.items():
        assert lookup_color(name) == value
        assert text_to_rgb(name, None) == value


def test_hex_text():
    assert text_to_rgb("#ff0000", None) == 0xFF0000
    assert text_to_rgb("#FFFAFA", None) == lookup_color("snow")


def test_hex_ignores_extra_word():
    assert text_to_rgb("#00ff00", "ignored") == 0xFF00


def test_hex_without_digits_is_zero():
    assert text_to_rgb("#", None) == 0
    assert text_to_rgb("#zz", None) == 0


def test_hex_stops_at_first_non_digit():
    assert text_to_rgb("#ffg", None) == text_to_rgb("#ff", None)


def test_two_words_are_joined():
    assert text_to_rgb("light", "blue") == lookup_color("light blue")
    assert text_to_rgb("navy", "blue") == 0x80


def test_unknown_text_is_zero():
    assert text_to_rgb("nosuchcolour", None) == 0
    assert text_to_rgb("red", "nonsense") == 0


def test_text_case_insensitive():
    assert text_to_rgb("DARK", "Red") == lookup_color("dark red")


def test_long_joined_name_is_truncated_and_unknown():
    assert text_to_rgb("x" * 60, "y" * 60) == 0


def test_colors_fit_in_24_bits():
    names = {name for name, _ in COLOR_TABLE if name != "none"}
    for name in names:
        value = lookup_color(name)
        assert 0 <= value <= 0xFFFFFF
        assert text_to_rgb(name, None) == value