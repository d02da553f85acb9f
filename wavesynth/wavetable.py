"""Single-cycle waveforms over a phase in [0, 1)."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Callable

WaveFn = Callable[[float], float]


class WaveIndex(IntEnum):
    SILENCE = 0
    SIN = 1
    TRI = 2
    TRI_SAW = 3
    SAW = 4
    SAW_REV = 5
    SQUARE = 6
    RECT_WIDE = 7
    RECT_NARROW = 8


def _phase(x: float) -> float:
    return math.modf(x)[0]


def wave_silence(x: float) -> float:
    return 0.0


def wave_sin(x: float) -> float:
    return math.sin(_phase(x) * 2.0 * math.pi)


def wave_saw(x: float) -> float:
    phase = _phase(x)
    return 2.0 * (phase if phase <= 0.5 else phase - 1.0)


def wave_tri_saw(x: float) -> float:
    phase = _phase(x)
    if phase < 0.5:
        return 4.0 * phase - 1.0
    return -4.0 * (phase - 0.5) + 1.0


def wave_saw_rev(x: float) -> float:
    return -wave_saw(x)


def wave_tri(x: float) -> float:
    return 4.0 * abs(_phase(x) - 0.5) - 1.0


def _rect(duty: float) -> WaveFn:
    def wave(x: float) -> float:
        return 1.0 if _phase(x) <= duty else -1.0

    return wave


def wave_square(x: float) -> float:
    return _rect(0.5)(x)


def wave_rect_wide(x: float) -> float:
    return _rect(0.25)(x)


def wave_rect_narrow(x: float) -> float:
    return _rect(0.1)(x)


_WAVES: dict[WaveIndex, WaveFn] = {
    WaveIndex.SILENCE: wave_silence,
    WaveIndex.SIN: wave_sin,
    WaveIndex.TRI: wave_tri,
    WaveIndex.TRI_SAW: wave_tri_saw,
    WaveIndex.SAW: wave_saw,
    WaveIndex.SAW_REV: wave_saw_rev,
    WaveIndex.SQUARE: wave_square,
    WaveIndex.RECT_WIDE: wave_rect_wide,
    WaveIndex.RECT_NARROW: wave_rect_narrow,
}


def get_wave(index: int) -> WaveFn:
    """Return the waveform for ``index``; raise ValueError if there is none."""
    return _WAVES[WaveIndex(index)]