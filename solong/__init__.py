"""A tile-based collect-and-escape game, with its XPM, image, event and window layers."""

__version__ = "0.1.0"