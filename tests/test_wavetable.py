import pytest
from hypothesis import given, strategies as st

from wavesynth.wavetable import (
    WaveIndex,
    get_wave,
    wave_rect_narrow,
    wave_rect_wide,
    wave_saw,
    wave_saw_rev,
    wave_silence,
    wave_sin,
    wave_square,
    wave_tri,
)

phases = st.floats(min_value=0.0, max_value=0.999, allow_nan=False)


def test_every_index_has_a_wave():
    assert get_wave(WaveIndex.RECT_NARROW) is wave_rect_narrow
    assert get_wave(WaveIndex.RECT_NARROW + 0) is wave_rect_narrow
    assert [get_wave(index) for index in WaveIndex][-1] is wave_rect_narrow


def test_get_wave_maps_indices():
    assert get_wave(WaveIndex.SIN) is wave_sin
    assert get_wave(0) is wave_silence
    assert get_wave(WaveIndex.SAW_REV) is wave_saw_rev


def test_get_wave_rejects_unknown():
    with pytest.raises(ValueError):
        get_wave(len(WaveIndex))


def test_square_halves():
    assert wave_square(0.25) == 1.0
    assert wave_square(0.75) == -1.0


def test_rect_duty_cycles():
    assert wave_rect_wide(0.2) == 1.0
    assert wave_rect_wide(0.3) == -1.0
    assert wave_rect_narrow(0.05) == 1.0
    assert wave_rect_narrow(0.2) == -1.0


def test_tri_extremes():
    assert wave_tri(0.0) == pytest.approx(1.0)
    assert wave_tri(0.5) == pytest.approx(-1.0)


def test_sin_quarter_phase():
    assert wave_sin(0.25) == pytest.approx(1.0)
    assert wave_sin(0.0) == pytest.approx(0.0)


@given(phases, st.sampled_from(list(WaveIndex)))
def test_all_waves_bounded(x, index):
    value = get_wave(index)(x)
    assert -1.0 - 1e-9 <= value <= 1.0 + 1e-9


@given(phases)
def test_saw_rev_is_inverted_saw(x):
    assert wave_saw_rev(x) == -wave_saw(x)


@given(phases)
def test_continuous_waves_are_periodic(x):
    assert wave_sin(x + 3.0) == pytest.approx(wave_sin(x), abs=1e-9)
    assert wave_tri(x + 3.0) == pytest.approx(wave_tri(x), abs=1e-9)