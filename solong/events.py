"""Per-window event hooks and the dispatch of events to them."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any

__all__ = [
    "MAX_EVENT",
    "EventMask",
    "EventType",
    "Hook",
    "HookTable",
]


class EventType(IntEnum):
    """Window system event codes."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


# One slot per event code below this bound.
MAX_EVENT = 36


class EventMask(IntFlag):
    """Event selection bits."""

    NONE = 0
    KEY_PRESS = 1 << 0
    KEY_RELEASE = 1 << 1
    BUTTON_PRESS = 1 << 2
    BUTTON_RELEASE = 1 << 3
    ENTER_WINDOW = 1 << 4
    LEAVE_WINDOW = 1 << 5
    POINTER_MOTION = 1 << 6
    POINTER_MOTION_HINT = 1 << 7
    BUTTON1_MOTION = 1 << 8
    BUTTON2_MOTION = 1 << 9
    BUTTON3_MOTION = 1 << 10
    BUTTON4_MOTION = 1 << 11
    BUTTON5_MOTION = 1 << 12
    BUTTON_MOTION = 1 << 13
    KEYMAP_STATE = 1 << 14
    EXPOSURE = 1 << 15
    VISIBILITY_CHANGE = 1 << 16
    STRUCTURE_NOTIFY = 1 << 17
    RESIZE_REDIRECT = 1 << 18
    SUBSTRUCTURE_NOTIFY = 1 << 19
    SUBSTRUCTURE_REDIRECT = 1 << 20
    FOCUS_CHANGE = 1 << 21
    PROPERTY_CHANGE = 1 << 22
    COLORMAP_CHANGE = 1 << 23
    OWNER_GRAB_BUTTON = 1 << 24


@dataclass(frozen=True)
class Hook:
    """A callback bound to one event, with its selection mask and user parameter."""

    mask: int = 0
    func: Callable[..., Any] | None = None
    param: Any = None

    @property
    def is_set(self) -> bool:
        return self.func is not None


_EMPTY = Hook()

# How many event arguments each kind of handler passes before the parameter.
_ARITY = {
    EventType.KEY_PRESS: 1,
    EventType.KEY_RELEASE: 1,
    EventType.BUTTON_PRESS: 3,
    EventType.BUTTON_RELEASE: 3,
    EventType.MOTION_NOTIFY: 2,
}

# Codes below the first real event carry no handler.
_UNDEFINED = frozenset({0, 1})


def _check_event(event: int) -> int:
    code = int(event)
    if not 0 <= code < MAX_EVENT:
        raise ValueError(f"event code must be in 0..{MAX_EVENT - 1}, got {code}")
    return code


class HookTable:
    """The hooks of one window, one slot per event code."""

    def __init__(self):
        self._hooks: list[Hook] = [_EMPTY] * MAX_EVENT

    def __repr__(self) -> str:
        active = [code for code, hook in enumerate(self._hooks) if hook.is_set]
        return f"HookTable(active={active})"

    def __iter__(self) -> Iterator[tuple[int, Hook]]:
        """Yield (event code, hook) for every slot that holds a callback."""
        return ((code, hook) for code, hook in enumerate(self._hooks) if hook.is_set)

    def set(self, event, mask, func, param=None) -> None:
        """Bind ``func`` to ``event`` with the given selection mask."""
        code = _check_event(event)
        if func is not None and not callable(func):
            raise TypeError(f"hook must be callable, got {func!r}")
        self._hooks[code] = Hook(int(mask), func, param)

    def set_key(self, func, param=None) -> None:
        """Bind a key handler; it fires on key release."""
        self.set(EventType.KEY_RELEASE, EventMask.KEY_RELEASE, func, param)

    def set_mouse(self, func, param=None) -> None:
        """Bind a mouse handler; it fires on button press."""
        self.set(EventType.BUTTON_PRESS, EventMask.BUTTON_PRESS, func, param)

    def set_expose(self, func, param=None) -> None:
        """Bind an expose handler."""
        self.set(EventType.EXPOSE, EventMask.EXPOSURE, func, param)

    def get(self, event) -> Hook:
        """Return the hook bound to ``event`` (an unset Hook when none is)."""
        return self._hooks[_check_event(event)]

    def event_mask(self) -> int:
        """Return the union of the masks of every slot."""
        mask = 0
        for hook in self._hooks:
            mask |= hook.mask
        return mask

    def dispatch(self, event, *args):
        """Call the hook for ``event`` with the event's arguments and its parameter.

        Key events take the keysym; button events take button, x and y; motion
        takes x and y; expose takes the count of expose events still to come
        and only fires when it is zero; other events take no arguments.
        Returns what the hook returns, or None when nothing is called.
        """
        code = int(event)
        if not 0 <= code < MAX_EVENT or code in _UNDEFINED:
            return None
        hook = self._hooks[code]
        if not hook.is_set:
            return None
        arity = _ARITY.get(code)
        if arity is not None:
            if len(args) != arity:
                raise TypeError(
                    f"event {code} takes {arity} argument(s), got {len(args)}"
                )
            return hook.func(*args, hook.param)
        if code == EventType.EXPOSE:
            if len(args) > 1:
                raise TypeError(f"expose takes at most 1 argument, got {len(args)}")
            count = args[0] if args else 0
            if count:
                return None
        return hook.func(hook.param)

    def clear(self) -> None:
        """Remove every hook."""
        self._hooks = [_EMPTY] * MAX_EVENT