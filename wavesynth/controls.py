"""Debounced push buttons and quadrature rotary encoders.

Both are fed pin levels by the caller, so they work with any input source.
"""

from __future__ import annotations

from enum import IntEnum

BTN_DEBOUNCE_MILLIS = 50


class BtnEvent(IntEnum):
    NONE = 0
    PRESS = 1
    RELEASE = 2


class Button:
    """A button that reports a press only after it has been held past the debounce time."""

    def __init__(self) -> None:
        self._last_down_ms = -1000
        self._pressed = False
        self._last_reading = False
        self._event = BtnEvent.NONE

    def update(self, reading: bool, now_ms: int) -> None:
        """Take the current level (True while held down) at time ``now_ms``."""
        self._event = BtnEvent.NONE
        if reading:
            if not self._last_reading:
                self._last_down_ms = now_ms
            elif now_ms - self._last_down_ms > BTN_DEBOUNCE_MILLIS and not self._pressed:
                self._pressed = True
                self._event = BtnEvent.PRESS
        else:
            if self._pressed:
                self._event = BtnEvent.RELEASE
            self._pressed = False
        self._last_reading = reading

    def pressed(self) -> bool:
        return self._pressed

    def event(self) -> BtnEvent:
        """The event produced by the last update."""
        return self._event


class EncoderEvent(IntEnum):
    LEFT = -1
    NONE = 0
    RIGHT = 1


class Encoder:
    """A rotary encoder read on every edge of its clock line."""

    def __init__(self) -> None:
        self._last_clk = False
        self._event = EncoderEvent.NONE

    def begin(self, clk: bool) -> None:
        """Record the resting level of the clock line."""
        self._last_clk = bool(clk)

    def update(self, clk: bool, dt: bool) -> None:
        """Take the current clock and data levels."""
        clk = bool(clk)
        self._event = EncoderEvent.NONE
        if clk != self._last_clk:
            is_left = bool(dt) if clk else not dt
            self._event = EncoderEvent.LEFT if is_left else EncoderEvent.RIGHT
        self._last_clk = clk

    def event(self) -> EncoderEvent:
        """The event produced by the last update."""
        return self._event