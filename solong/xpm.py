"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from solong.colors import text_to_rgb
from solong.image import Image

__all__ = [
    "TRANSPARENT",
    "XpmError",
    "color_code",
    "parse_xpm",
    "quoted_strings",
    "read_xpm",
    "split_words",
    "strip_comments",
]

# Pixel value written where the palette says "None".
TRANSPARENT = 0xFF000000

_WORD_SEPARATOR = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


def split_words(text) -> list[str]:
    """Split on spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATOR.split(text) if word]


def _blank_comments(text: str, opener: str, closer: str) -> str:
    chars = list(text)
    quoted = False
    pos = 0
    size = len(text)
    while pos < size:
        if text[pos] == '"':
            quoted = not quoted
        elif not quoted and text.startswith(opener, pos):
            end = text.find(closer, pos + len(opener))
            stop = size if end == -1 else end + len(closer)
            chars[pos:stop] = " " * (stop - pos)
            pos = stop
            continue
        pos += 1
    return "".join(chars)


def strip_comments(text) -> str:
    """Blank out /* */ and // comments that lie outside double quotes.

    Comments are replaced by spaces so the text keeps its length.
    """
    text = _blank_comments(text, "/*", "*/")
    return _blank_comments(text, "//", "\n")


def quoted_strings(text) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def color_code(chars) -> int:
    """Pack the characters of a pixel code into one integer key."""
    result = 0
    for ch in chars:
        result = (result << 8) + ord(ch)
    return result


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what} line") from None


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM lines: header, colour lines, then pixel rows."""
    it = iter(lines)
    words = split_words(_next_line(it, "header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colour count and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(words[:4])}")

    # Short codes keep the last definition, longer ones the first.
    keep_first = cpp > 2
    palette: dict[int, int] = {}
    for _ in range(ncolors):
        line = _next_line(it, "colour")
        if len(line) < cpp:
            raise XpmError(f"colour line too short: {line!r}")
        words = split_words(line[cpp:])
        try:
            key = words.index("c")
        except ValueError:
            raise XpmError(f"colour line has no 'c' entry: {line!r}") from None
        if key + 1 >= len(words):
            raise XpmError(f"colour line has no colour after 'c': {line!r}")
        extra = words[key + 2] if key + 2 < len(words) else None
        rgb = text_to_rgb(words[key + 1], extra)
        code = color_code(line[:cpp])
        if keep_first:
            palette.setdefault(code, rgb)
        else:
            palette[code] = rgb

    image = Image(width, height)
    for y in range(height):
        line = _next_line(it, "pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is shorter than {width} pixels")
        codes = (line[start:start + cpp] for start in range(0, width * cpp, cpp))
        for x, code in enumerate(codes):
            color = palette.get(color_code(code), 0)
            if color == -1:
                color = TRANSPARENT
            image.set_pixel(x, y, color)
    return image


def read_xpm(path) -> Image:
    """Read an XPM file from disk and return its image."""
    text = Path(path).read_text(encoding="latin-1")
    return parse_xpm(quoted_strings(strip_comments(text)))