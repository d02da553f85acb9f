"""Remote control link: screen mirroring in RLE blocks and input commands.

The transport (a BLE GATT server in the device) is left to the caller: block
updates are handed to a notify callback, and command writes are passed in
through :meth:`RemoteScreen.on_command`.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable

from .compress import rle_compress
from .events import InputEvent, input_id_from_uint8

logger = logging.getLogger(__name__)

DEVICE_NAME = "ESP-Synth"

SERVER_UUID = "6ceba000-76de-441e-89bc-0de0079db615"
COMMAND_UUID = "6ceba001-76de-441e-89bc-0de0079db615"
BLOCK_UUIDS = (
    "6ceba021-76de-441e-89bc-0de0079db615",
    "6ceba022-76de-441e-89bc-0de0079db615",
    "6ceba023-76de-441e-89bc-0de0079db615",
    "6ceba024-76de-441e-89bc-0de0079db615",
)

SCREEN_BUFFER_SIZE = 128 * 64 // 8
SCREEN_BLOCK_NUM = 4
SCREEN_BLOCK_SIZE = 128 * 2

InputCallback = Callable[[InputEvent], None]
NotifyCallback = Callable[[int, bytes], None]


class RemoteEvent(IntEnum):
    NONE = 0x00
    INPUT = 0x01


def parse_command(data: bytes) -> InputEvent | None:
    """Decode a command write; return the input event it carries, if any."""
    if len(data) != 4 or data[0] != RemoteEvent.INPUT:
        return None
    raw_value = data[2]
    value = raw_value - 0x100 if raw_value & 0x80 else raw_value
    return InputEvent(input_id_from_uint8(data[1]), value, data[3] > 0)


class RemoteScreen:
    """Mirrors the screen buffer as four RLE-compressed blocks."""

    def __init__(self, notify: NotifyCallback | None = None) -> None:
        self._notify = notify
        self._input_callback: InputCallback | None = None
        self._screen = bytes(SCREEN_BUFFER_SIZE)
        self._blocks: list[bytes] = []
        self._align_blocks(notify=False)

    def set_input_callback(self, callback: InputCallback | None) -> None:
        self._input_callback = callback

    def on_command(self, data: bytes) -> InputEvent | None:
        """Handle a write to the command characteristic."""
        event = parse_command(bytes(data))
        if event is not None:
            logger.debug(
                "id: %d, val: %d, shift: %d", event.id, event.value, event.shifted
            )
            if self._input_callback is not None:
                self._input_callback(event)
        return event

    def send_screen(self, data: bytes) -> bool:
        """Publish a new screen buffer; return True when it differed from the last one."""
        data = bytes(data)
        if len(data) != SCREEN_BUFFER_SIZE:
            raise ValueError(
                f"screen buffer must be {SCREEN_BUFFER_SIZE} bytes, got {len(data)}"
            )
        if data == self._screen:
            return False
        self._screen = data
        self._align_blocks(notify=True)
        return True

    def blocks(self) -> list[bytes]:
        """The current compressed value of each block."""
        return list(self._blocks)

    def _align_blocks(self, notify: bool) -> None:
        self._blocks = [
            rle_compress(self._screen[i * SCREEN_BLOCK_SIZE:(i + 1) * SCREEN_BLOCK_SIZE])
            for i in range(SCREEN_BLOCK_NUM)
        ]
        if notify and self._notify is not None:
            for index, block in enumerate(self._blocks):
                self._notify(index, block)