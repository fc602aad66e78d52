"""In-memory pixel images and colour conversion for non-truecolour visuals."""

from __future__ import annotations

from collections.abc import Iterator

__all__ = [
    "LSB_FIRST",
    "MSB_FIRST",
    "Image",
    "channel_shifts",
    "good_color",
]

LSB_FIRST = 0
MSB_FIRST = 1

_BITMAP_PAD = 32
_SUPPORTED_BPP = (8, 16, 24, 32)


class Image:
    """A ZPixmap-style image: rows of packed pixels, each row padded to 32 bits.

    ``byte_order`` is LSB_FIRST (0) or MSB_FIRST (1) and decides how the bytes
    of one pixel are laid out in ``data``.
    """

    def __init__(self, width, height, bits_per_pixel=32, byte_order=LSB_FIRST):
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if bits_per_pixel not in _SUPPORTED_BPP:
            raise ValueError(f"unsupported bits per pixel: {bits_per_pixel}")
        if byte_order not in (LSB_FIRST, MSB_FIRST):
            raise ValueError(f"byte order must be 0 or 1, got {byte_order}")
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.byte_order = byte_order
        padded_bits = (width * bits_per_pixel + _BITMAP_PAD - 1) // _BITMAP_PAD * _BITMAP_PAD
        self.size_line = padded_bits // 8
        self.data = bytearray(self.size_line * height)

    def __repr__(self) -> str:
        return (
            f"Image({self.width}x{self.height}, bpp={self.bits_per_pixel}, "
            f"byte_order={self.byte_order})"
        )

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def _order(self) -> str:
        return "big" if self.byte_order == MSB_FIRST else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * self.bytes_per_pixel

    def set_pixel(self, x, y, color) -> None:
        """Store ``color`` at (x, y), keeping only the bits a pixel can hold."""
        opp = self.bytes_per_pixel
        start = self._offset(x, y)
        value = color & ((1 << (8 * opp)) - 1)
        self.data[start:start + opp] = value.to_bytes(opp, self._order)

    def get_pixel(self, x, y) -> int:
        """Return the unsigned pixel value stored at (x, y)."""
        opp = self.bytes_per_pixel
        start = self._offset(x, y)
        return int.from_bytes(self.data[start:start + opp], self._order)

    def rows(self) -> Iterator[tuple[int, ...]]:
        """Yield each row, top to bottom, as a tuple of pixel values."""
        opp = self.bytes_per_pixel
        order = self._order
        for y in range(self.height):
            start = y * self.size_line
            row = bytes(self.data[start:start + self.width * opp])
            yield tuple(
                int.from_bytes(row[i:i + opp], order) for i in range(0, len(row), opp)
            )


def channel_shifts(red_mask, green_mask, blue_mask) -> tuple[int, ...]:
    """Return (shift, width) for red, green and blue masks as a flat 6-tuple."""
    shifts: list[int] = []
    for mask in (red_mask, green_mask, blue_mask):
        if mask <= 0:
            raise ValueError(f"colour mask must be a positive bit field, got {mask:#x}")
        low = (mask & -mask).bit_length() - 1
        mask >>= low
        width = 0
        while mask & 1:
            mask >>= 1
            width += 1
        shifts.extend((low, width))
    return tuple(shifts)


def good_color(color, depth, shifts) -> int:
    """Convert 0xRRGGBB to a pixel value for a visual of the given depth.

    At depth 24 or more the colour is returned unchanged; below that each
    channel is narrowed and placed according to ``shifts`` from channel_shifts.
    """
    if depth >= 24:
        return color
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_shift)
        + ((green >> (16 - green_bits)) << green_shift)
        + ((blue >> (16 - blue_bits)) << blue_shift)
    )