"""Input events from buttons, encoders and the remote."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class InputId(IntEnum):
    NONE = 0x00
    BTN_LX = 0x01
    BTN_RX = 0x02
    BTN_SHIFT = 0x03
    ENCODER0 = 0x10
    ENCODER1 = 0x11
    ENCODER2 = 0x12


def input_id_from_uint8(value: int) -> InputId:
    """Map a wire byte to an input id; unknown values give ``InputId.NONE``."""
    try:
        return InputId(value)
    except ValueError:
        return InputId.NONE


@dataclass(frozen=True)
class InputEvent:
    id: InputId = InputId.NONE
    value: int = 0
    shifted: bool = False