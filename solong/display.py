"""A small windowing layer: windows, drawing, event hooks and the main loop."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import Any

import pygame

from solong.events import EventType, HookTable
from solong.image import Image, channel_shifts, good_color

__all__ = [
    "DisplayError",
    "Display",
    "Window",
    "keysym",
]

_FONT_SIZE = 16
_WAIT_MS = 100
_TRUECOLOR_DEPTH = 24

_SPECIAL_KEYSYMS = {
    pygame.K_BACKSPACE: 0xFF08,
    pygame.K_TAB: 0xFF09,
    pygame.K_RETURN: 0xFF0D,
    pygame.K_PAUSE: 0xFF13,
    pygame.K_ESCAPE: 0xFF1B,
    pygame.K_DELETE: 0xFFFF,
    pygame.K_HOME: 0xFF50,
    pygame.K_LEFT: 0xFF51,
    pygame.K_UP: 0xFF52,
    pygame.K_RIGHT: 0xFF53,
    pygame.K_DOWN: 0xFF54,
    pygame.K_PAGEUP: 0xFF55,
    pygame.K_PAGEDOWN: 0xFF56,
    pygame.K_END: 0xFF57,
    pygame.K_INSERT: 0xFF63,
    pygame.K_LSHIFT: 0xFFE1,
    pygame.K_RSHIFT: 0xFFE2,
    pygame.K_LCTRL: 0xFFE3,
    pygame.K_RCTRL: 0xFFE4,
    pygame.K_CAPSLOCK: 0xFFE5,
    pygame.K_LALT: 0xFFE9,
    pygame.K_RALT: 0xFFEA,
    pygame.K_F1: 0xFFBE,
    pygame.K_F2: 0xFFBF,
    pygame.K_F3: 0xFFC0,
    pygame.K_F4: 0xFFC1,
    pygame.K_F5: 0xFFC2,
    pygame.K_F6: 0xFFC3,
    pygame.K_F7: 0xFFC4,
    pygame.K_F8: 0xFFC5,
    pygame.K_F9: 0xFFC6,
    pygame.K_F10: 0xFFC7,
    pygame.K_F11: 0xFFC8,
    pygame.K_F12: 0xFFC9,
}


class DisplayError(RuntimeError):
    """Raised when the display cannot be opened or a window is used after it is gone."""


def keysym(key) -> int:
    """Translate a pygame key code into the matching X keysym.

    Printable ASCII keys keep their code; known special keys are mapped;
    anything else is returned unchanged.
    """
    key = int(key)
    if 32 <= key <= 126:
        return key
    return _SPECIAL_KEYSYMS.get(key, key)


def _rgb(value: int) -> tuple[int, int, int]:
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


class Window:
    """A drawable window with its own hooks. Create it with Display.new_window."""

    def __init__(self, display: Display, width: int, height: int, title: str):
        self.display = display
        self.width = width
        self.height = height
        self.title = title
        self.surface = pygame.Surface((width, height))
        self.surface.fill((0, 0, 0))
        self.hooks = HookTable()
        self.cursor_visible = True
        self._mouse = (0, 0)
        self._destroyed = False

    def __repr__(self) -> str:
        state = " destroyed" if self._destroyed else ""
        return f"Window({self.width}x{self.height}, {self.title!r}{state})"

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def is_active(self) -> bool:
        return self.display.active_window is self

    def _check_alive(self) -> None:
        if self._destroyed:
            raise DisplayError(f"window {self.title!r} has been destroyed")

    def hook(self, event, mask, func, param=None) -> None:
        """Bind ``func`` to any event code with the given selection mask."""
        self._check_alive()
        self.hooks.set(event, mask, func, param)

    def key_hook(self, func, param=None) -> None:
        """Bind a key handler, called with (keysym, param) on key release."""
        self._check_alive()
        self.hooks.set_key(func, param)

    def mouse_hook(self, func, param=None) -> None:
        """Bind a mouse handler, called with (button, x, y, param) on button press."""
        self._check_alive()
        self.hooks.set_mouse(func, param)

    def expose_hook(self, func, param=None) -> None:
        """Bind a handler called with (param) when the window is exposed."""
        self._check_alive()
        self.hooks.set_expose(func, param)

    def clear(self) -> None:
        """Fill the window with black."""
        self._check_alive()
        self.surface.fill((0, 0, 0))

    def pixel_put(self, x, y, color) -> None:
        """Set one pixel to 0xRRGGBB; points outside the window are ignored."""
        self._check_alive()
        if 0 <= x < self.width and 0 <= y < self.height:
            self.surface.set_at((x, y), _rgb(self.display.color_value(color)))

    def string_put(self, x, y, color, text) -> pygame.Rect:
        """Draw ``text`` with its baseline at y; return the rectangle drawn."""
        self._check_alive()
        font = self.display.font
        rendered = font.render(text, False, _rgb(self.display.color_value(color)))
        return self.surface.blit(rendered, (x, y - font.get_ascent()))

    def put_image(self, image: Image, x, y) -> None:
        """Copy an image to the window with its top-left corner at (x, y)."""
        self._check_alive()
        self.surface.blit(self.display.image_surface(image), (x, y))

    def get_pixel(self, x, y) -> int:
        """Return the 0xRRGGBB colour of the pixel at (x, y)."""
        self._check_alive()
        color = self.surface.get_at((x, y))
        return (color.r << 16) | (color.g << 8) | color.b

    def mouse_position(self) -> tuple[int, int]:
        """Return the last known pointer position relative to this window."""
        self._check_alive()
        return self._mouse

    def mouse_move(self, x, y) -> None:
        """Move the pointer to (x, y) inside this window."""
        self._check_alive()
        self._mouse = (x, y)
        if self.is_active:
            try:
                pygame.mouse.set_pos((x, y))
            except pygame.error:
                pass

    def _set_cursor(self, visible: bool) -> None:
        self._check_alive()
        self.cursor_visible = visible
        if self.is_active:
            try:
                pygame.mouse.set_visible(visible)
            except pygame.error:
                pass

    def mouse_hide(self) -> None:
        """Hide the pointer while it is over this window."""
        self._set_cursor(False)

    def mouse_show(self) -> None:
        """Show the pointer again."""
        self._set_cursor(True)


class Display:
    """The connection to the screen: owns windows and runs the event loop.

    The most recently created window that still exists is the one shown and
    the one that receives input. Drawing appears on screen at the next pump.
    """

    def __init__(self):
        try:
            pygame.display.init()
            pygame.font.init()
        except pygame.error as exc:
            raise DisplayError(f"cannot open display: {exc}") from exc
        self.windows: list[Window] = []
        self.depth = _TRUECOLOR_DEPTH
        self.shifts = channel_shifts(0xFF0000, 0x00FF00, 0x0000FF)
        self._loop_hook: Callable[..., Any] | None = None
        self._loop_param: Any = None
        self._end_loop = False
        self._closed = False
        self._screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._image_cache: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise DisplayError("display is closed")

    @property
    def active_window(self) -> Window | None:
        return self.windows[0] if self.windows else None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, _FONT_SIZE)
        return self._font

    def image_surface(self, image: Image) -> pygame.Surface:
        """Return a surface holding the image's pixels (the top byte is dropped)."""
        snapshot = bytes(image.data)
        cached = self._image_cache.get(image)
        if cached is not None and cached[0] == snapshot:
            return cached[1]
        buffer = bytearray()
        for row in image.rows():
            for pixel in row:
                buffer.extend(_rgb(pixel))
        surface = pygame.image.frombuffer(
            bytes(buffer), (image.width, image.height), "RGB"
        ).copy()
        self._image_cache[image] = (snapshot, surface)
        return surface

    def _show(self, window: Window) -> None:
        self._screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        try:
            pygame.mouse.set_visible(window.cursor_visible)
        except pygame.error:
            pass

    def _present(self) -> None:
        window = self.active_window
        if window is None or self._screen is None:
            return
        self._screen.blit(window.surface, (0, 0))
        pygame.display.flip()

    def new_window(self, width, height, title) -> Window:
        """Open a window of the given size and make it the active one."""
        self._check_open()
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        window = Window(self, width, height, title)
        self.windows.insert(0, window)
        self._show(window)
        return window

    def destroy_window(self, window) -> None:
        """Close a window; the next most recent one becomes active."""
        if window not in self.windows:
            raise ValueError(f"{window!r} does not belong to this display")
        self.windows.remove(window)
        window._destroyed = True
        window.hooks.clear()
        if self.windows:
            self._show(self.windows[0])

    def loop_hook(self, func, param=None) -> None:
        """Set the function called with (param) once per loop iteration."""
        if func is not None and not callable(func):
            raise TypeError(f"loop hook must be callable, got {func!r}")
        self._loop_hook = func
        self._loop_param = param

    def _dispatch(self, event) -> bool:
        window = self.active_window
        if window is None:
            return False
        hooks = window.hooks
        kind = event.type
        if kind == pygame.KEYDOWN:
            hooks.dispatch(EventType.KEY_PRESS, keysym(event.key))
        elif kind == pygame.KEYUP:
            hooks.dispatch(EventType.KEY_RELEASE, keysym(event.key))
        elif kind == pygame.MOUSEBUTTONDOWN:
            x, y = event.pos
            hooks.dispatch(EventType.BUTTON_PRESS, event.button, x, y)
        elif kind == pygame.MOUSEBUTTONUP:
            x, y = event.pos
            hooks.dispatch(EventType.BUTTON_RELEASE, event.button, x, y)
        elif kind == pygame.MOUSEMOTION:
            x, y = event.pos
            window._mouse = (x, y)
            hooks.dispatch(EventType.MOTION_NOTIFY, x, y)
        elif kind == pygame.QUIT:
            hooks.dispatch(EventType.DESTROY_NOTIFY)
        elif kind == pygame.VIDEOEXPOSE:
            hooks.dispatch(EventType.EXPOSE, 0)
        else:
            return False
        return True

    def pump(self) -> int:
        """Dispatch pending events, refresh the screen and run the loop hook once.

        Returns the number of events handed to window hooks.
        """
        self._check_open()
        handled = 0
        for event in pygame.event.get():
            if self._end_loop:
                break
            if self._dispatch(event):
                handled += 1
        self._present()
        if self._loop_hook is not None:
            self._loop_hook(self._loop_param)
        return handled

    def loop(self) -> None:
        """Run until every window is gone or loop_end is called.

        Without a loop hook the loop sleeps until events arrive.
        Exceptions raised by hooks end the loop and propagate.
        """
        self._check_open()
        while self.windows and not self._end_loop:
            if self._loop_hook is None:
                first = pygame.event.wait(_WAIT_MS)
                if first.type != pygame.NOEVENT:
                    self._dispatch(first)
            self.pump()

    def loop_end(self) -> None:
        """Make the running loop return after its current iteration."""
        self._end_loop = True

    def flush_events(self) -> int:
        """Discard every pending event and return how many there were."""
        self._check_open()
        return len(pygame.event.get())

    def screen_size(self) -> tuple[int, int]:
        """Return the size of the screen in pixels."""
        self._check_open()
        sizes = pygame.display.get_desktop_sizes()
        if sizes:
            return tuple(sizes[0])
        info = pygame.display.Info()
        if info.current_w <= 0 or info.current_h <= 0:
            raise DisplayError("screen size is not available")
        return info.current_w, info.current_h

    def color_value(self, color) -> int:
        """Convert 0xRRGGBB into a pixel value for this display's visual."""
        return good_color(color, self.depth, self.shifts)

    def close(self) -> None:
        """Destroy every window and release the display."""
        if self._closed:
            return
        for window in list(self.windows):
            self.destroy_window(window)
        self._font = None
        self._screen = None
        pygame.display.quit()
        self._closed = True