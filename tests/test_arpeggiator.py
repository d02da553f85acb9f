from hypothesis import given, strategies as st

from wavesynth.arpeggiator import ArpeggiatorConfig, ArpeggiatorState
from wavesynth.midi import MidiNote


def test_default_period():
    assert ArpeggiatorConfig().period_ms() == 500


@given(st.sampled_from([80, 100, 120, 130, 150]), st.sampled_from([1, 2, 4, 8]))
def test_period_shrinks_with_division(tempo, division):
    base = ArpeggiatorConfig(tempo_bpm=tempo).period_ms()
    divided = ArpeggiatorConfig(tempo_bpm=tempo, time_division=division).period_ms()
    assert divided <= base
    assert abs(divided * division - base) <= division


def test_first_step_starts_immediately():
    state = ArpeggiatorState()
    assert not state.is_active()
    assert state.step(ArpeggiatorConfig(), 1000) is True
    assert state.note_index == 0
    assert state.active_time == 1000
    assert state.is_active()


def test_steps_follow_period():
    config = ArpeggiatorConfig()
    period = config.period_ms()
    state = ArpeggiatorState()
    state.step(config, 1000)
    assert state.step(config, 1000 + period - 1) is False
    assert state.note_index == 0
    assert state.step(config, 1000 + period) is True
    assert state.note_index == 1
    assert state.active_time == 1000 + period


def test_clear_resets():
    state = ArpeggiatorState()
    state.step(ArpeggiatorConfig(), 5000)
    state.arp_note = MidiNote(60)
    state.clear()
    assert state.active_time == -1
    assert state.note_index == 0
    assert state.arp_note == MidiNote.NONE