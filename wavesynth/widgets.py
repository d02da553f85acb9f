"""A monochrome canvas and the small widgets drawn on it."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, NamedTuple, Sequence

from .events import InputEvent, InputId

SCREEN_WIDTH = 128
SCREEN_HEIGHT = 64
_CHAR_ADVANCE = 6
_TRACK_WIDTH = 4
_TRACK_HEIGHT = 19
_TEXT_OFFSET = 7
_VALUE_ROW_OFFSET = 12


class TextItem(NamedTuple):
    x: int
    y: int
    text: str


class Canvas:
    """A 1-bit framebuffer.

    Shapes are drawn into pixels; text is kept as positioned strings, since
    no font is bundled. ``to_bytes`` gives the paged layout of an SSD1306.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0 or height % 8:
            raise ValueError(f"bad canvas size {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)
        self.texts: list[TextItem] = []
        self._cursor = (0, 0)

    @property
    def cursor(self) -> tuple[int, int]:
        return self._cursor

    def clear(self) -> None:
        self._pixels = bytearray(self.width * self.height)
        self.texts.clear()
        self._cursor = (0, 0)

    def set_cursor(self, x: int, y: int) -> None:
        self._cursor = (int(x), int(y))

    def write(self, text: str) -> None:
        """Place ``text`` at the cursor and move the cursor past it."""
        x, y = self._cursor
        self.texts.append(TextItem(x, y, text))
        self._cursor = (x + len(text) * _CHAR_ADVANCE, y)

    def text_at(self, x: int, y: int) -> str | None:
        """The last text placed at ``(x, y)``, if any."""
        for item in reversed(self.texts):
            if (item.x, item.y) == (x, y):
                return item.text
        return None

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_pixel(self, x: int, y: int, on: bool = True) -> None:
        if self._in_bounds(x, y):
            self._pixels[y * self.width + x] = 1 if on else 0

    def pixel(self, x: int, y: int) -> bool:
        return self._in_bounds(x, y) and bool(self._pixels[y * self.width + x])

    def draw_fast_hline(self, x: int, y: int, w: int, on: bool = True) -> None:
        for px in range(x, x + w):
            self.set_pixel(px, y, on)

    def draw_fast_vline(self, x: int, y: int, h: int, on: bool = True) -> None:
        for py in range(y, y + h):
            self.set_pixel(x, py, on)

    def fill_rect(self, x: int, y: int, w: int, h: int, on: bool = True) -> None:
        for py in range(y, y + h):
            self.draw_fast_hline(x, py, w, on)

    def draw_rect(self, x: int, y: int, w: int, h: int, on: bool = True) -> None:
        if w <= 0 or h <= 0:
            return
        self.draw_fast_hline(x, y, w, on)
        self.draw_fast_hline(x, y + h - 1, w, on)
        self.draw_fast_vline(x, y, h, on)
        self.draw_fast_vline(x + w - 1, y, h, on)

    def to_bytes(self) -> bytes:
        """Pixels packed in pages of 8 rows, bit 0 at the top of each page."""
        out = bytearray(self.width * self.height // 8)
        for y in range(self.height):
            row = self._pixels[y * self.width:(y + 1) * self.width]
            for x, on in enumerate(row):
                if on:
                    out[x + (y // 8) * self.width] |= 1 << (y & 7)
        return bytes(out)


class Widget:
    """Something drawn at a position that may react to input events."""

    def __init__(self, key: str, x: int = 0, y: int = 0) -> None:
        self.key = key
        self.x = x
        self.y = y

    def render(self, gfx: Canvas) -> None:
        """Draw the widget; the base widget draws nothing."""

    def process_event(self, event: InputEvent) -> None:
        """React to an input event; the base widget ignores it."""


def _draw_track(gfx: Canvas, x: int, y: int, thumb_y: int, thumb_h: int) -> None:
    gfx.draw_rect(x, y, _TRACK_WIDTH, _TRACK_HEIGHT)
    gfx.fill_rect(x + 1, y + thumb_y, 2, thumb_h)


class Switch(Widget):
    """An on/off toggle: turning right switches it on, left switches it off."""

    def __init__(
        self,
        key: str,
        x: int = 0,
        y: int = 0,
        callback: Callable[[bool], None] | None = None,
    ) -> None:
        super().__init__(key, x, y)
        self.value = False
        self.callback = callback

    def nudge(self, direction: int) -> None:
        if direction == 0:
            return
        new_value = direction > 0
        if new_value != self.value:
            self.value = new_value
            if self.callback is not None:
                self.callback(self.value)

    def render(self, gfx: Canvas) -> None:
        x_text = self.x + _TEXT_OFFSET
        gfx.set_cursor(x_text, self.y)
        gfx.write(self.key)
        gfx.set_cursor(x_text, self.y + _VALUE_ROW_OFFSET)
        gfx.write("ON" if self.value else "OFF")
        _draw_track(gfx, self.x, self.y, 0 if self.value else 10, 9)

    def process_event(self, event: InputEvent) -> None:
        self.nudge(event.value)


@dataclass(frozen=True)
class SelectorConfig:
    """The choices of a selector: labels, raw values and a divisor for floats."""

    labels: Sequence[str]
    values: Sequence[int]
    norm_factor: int = 1
    default_index: int = 0

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("a selector needs at least one value")
        if len(self.labels) != len(self.values):
            raise ValueError("labels and values differ in length")
        if not 0 <= self.default_index < len(self.values):
            raise ValueError(f"default index out of range: {self.default_index}")
        if self.norm_factor == 0:
            raise ValueError("norm factor must not be zero")

    @property
    def count(self) -> int:
        return len(self.values)


class Selector(Widget):
    """Steps through a fixed list of values, clamped at both ends."""

    def __init__(
        self,
        key: str,
        config: SelectorConfig,
        x: int = 0,
        y: int = 0,
        callback: Callable[[int], None] | None = None,
    ) -> None:
        super().__init__(key, x, y)
        self.config = config
        self.index = config.default_index
        self.callback = callback

    def nudge(self, direction: int) -> None:
        if direction == 0:
            return
        new_index = min(max(self.index + direction, 0), self.config.count - 1)
        if new_index != self.index:
            self.index = new_index
            if self.callback is not None:
                self.callback(self.config.values[self.index])

    def process_event(self, event: InputEvent) -> None:
        self.nudge(event.value)

    def render(self, gfx: Canvas) -> None:
        x_text = self.x + _TEXT_OFFSET
        gfx.set_cursor(x_text, self.y)
        gfx.write(self.key)
        gfx.set_cursor(x_text, self.y + _VALUE_ROW_OFFSET)
        gfx.write(self.config.labels[self.index])

        last = self.config.count - 1
        perc = 1.0 - self.index / last if last else 0.0
        thumb_y = math.floor(perc * 14 + 0.5)
        _draw_track(gfx, self.x, self.y, thumb_y, 4)

    def value(self) -> int:
        return self.config.values[self.index]

    def value_as_float(self) -> float:
        return self.config.values[self.index] / self.config.norm_factor


class WidgetGroup:
    """An ordered set of widgets, each listening to one input id and shift state."""

    MAX_CHILDREN = 64

    def __init__(self) -> None:
        self._entries: list[tuple[Widget, InputId, bool]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Widget]:
        return (widget for widget, _, _ in self._entries)

    def add(self, child: Widget, mask: InputId = InputId.NONE, shift: bool = False) -> None:
        if len(self._entries) >= self.MAX_CHILDREN:
            raise OverflowError("widget group is full")
        self._entries.append((child, InputId(mask), bool(shift)))

    def process_event(self, event: InputEvent) -> None:
        for widget, mask, shift in self._entries:
            if event.id == mask and bool(event.shifted) == shift:
                widget.process_event(event)

    def render(self, gfx: Canvas) -> None:
        for widget in self:
            widget.render(gfx)

    def get(self, index: int) -> Widget | None:
        if 0 <= index < len(self._entries):
            return self._entries[index][0]
        return None