import pytest

from wavesynth.audio_math import volume_to_gain
from wavesynth.controls import BtnEvent
from wavesynth.events import InputEvent, InputId
from wavesynth.ui import (
    COL1,
    ROW1,
    TAB_COUNT,
    TAB_NAMES,
    Tab,
    Table2x3Layout,
    UiController,
)
from wavesynth.wavetable import WaveIndex
from wavesynth.widgets import Canvas, Switch


def press(input_id):
    return InputEvent(id=input_id, value=BtnEvent.PRESS)


def turn(encoder, direction, shifted=False):
    return InputEvent(id=encoder, value=direction, shifted=shifted)


@pytest.fixture
def controller():
    return UiController(Canvas())


def test_initial_state(controller):
    assert controller.tab_index == Tab.OSC1
    osc1 = controller.config.osc1
    assert osc1.enabled is True
    assert controller.config.osc2.enabled is False
    assert osc1.wave_index == WaveIndex.TRI
    assert osc1.freq_mult == pytest.approx(1.0)
    assert osc1.gain_mult == pytest.approx(volume_to_gain(0.5))


def test_right_button_cycles(controller):
    controller.process_event(press(InputId.BTN_RX))
    assert controller.tab_index == Tab.OSC2
    for _ in range(TAB_COUNT - 1):
        controller.process_event(press(InputId.BTN_RX))
    assert controller.tab_index == Tab.OSC1


def test_left_button_wraps(controller):
    controller.process_event(press(InputId.BTN_LX))
    assert controller.tab_index == Tab.ARP
    controller.process_event(press(InputId.BTN_LX))
    assert controller.tab_index == Tab.FILTER


def test_release_does_not_change_tab(controller):
    controller.process_event(InputEvent(id=InputId.BTN_RX, value=BtnEvent.RELEASE))
    assert controller.tab_index == Tab.OSC1


def test_shift_layer(controller):
    controller.process_event(press(InputId.BTN_SHIFT))
    assert controller.layer_shift_on is True
    controller.process_event(InputEvent(id=InputId.BTN_SHIFT, value=BtnEvent.RELEASE))
    assert controller.layer_shift_on is False


def test_arp_tab_edits_config(controller):
    controller.process_event(press(InputId.BTN_LX))
    controller.process_event(turn(InputId.ENCODER0, 1))
    controller.process_event(turn(InputId.ENCODER1, 1))
    controller.process_event(turn(InputId.ENCODER2, 1))
    arp = controller.config.arpeggiator
    assert arp.enabled is True
    assert arp.time_division == 2
    assert arp.tempo_bpm == pytest.approx(130)


def test_shifted_encoder_disables_oscillator(controller):
    controller.process_event(turn(InputId.ENCODER2, -1, shifted=True))
    assert controller.config.osc1.enabled is False


def test_lower_range_is_an_octave_down(controller):
    controller.process_event(turn(InputId.ENCODER0, -1))
    assert controller.config.osc1.freq_mult * 2 == pytest.approx(1.0)
    controller.process_event(turn(InputId.ENCODER0, 1))
    assert controller.config.osc1.freq_mult == pytest.approx(1.0)


def test_envelope_tab(controller):
    for _ in range(3):
        controller.process_event(press(InputId.BTN_RX))
    assert controller.tab_index == Tab.ENVELOPE
    controller.process_event(turn(InputId.ENCODER1, 1))
    env = controller.config.envelope
    assert env.decay_secs == pytest.approx(2.0)
    assert env.release_secs == pytest.approx(env.decay_secs * 2)
    assert controller.config.boost.gain_mult == pytest.approx(volume_to_gain(1.0))


def test_filter_tab(controller):
    controller.process_event(press(InputId.BTN_LX))
    controller.process_event(press(InputId.BTN_LX))
    controller.process_event(turn(InputId.ENCODER0, 1))
    lowpass = controller.config.lowpass
    assert lowpass.cutoff_hz == pytest.approx(12000)
    assert lowpass.emphasis_perc == pytest.approx(0.3)
    assert lowpass.contour_dhz == pytest.approx(0.0)
    envelope = lowpass.cutoff_envelope
    assert envelope.release_secs == pytest.approx(envelope.decay_secs / 2)


def test_layout_positions_and_routing():
    layout = Table2x3Layout()
    left, upper = Switch("a"), Switch("b")
    layout.first_row(left, None, None)
    layout.second_row(None, None, upper)
    assert (left.x, left.y) == (COL1, ROW1)

    layout.process_event(press(InputId.BTN_LX))
    assert left.value is False
    layout.process_event(turn(InputId.ENCODER0, 1))
    assert left.value is True
    layout.process_event(turn(InputId.ENCODER2, 1, shifted=True))
    assert upper.value is True


def test_render_header_and_indicator(controller):
    assert controller.render() is True
    canvas = controller.gfx
    header = [item for item in canvas.texts if item.y == 0]
    assert [item.text for item in header] == list(TAB_NAMES)
    assert header[0].x == 1
    assert [item.x for item in header] == sorted(item.x for item in header)

    active = header[Tab.OSC1]
    assert canvas.pixel(active.x, 11)
    assert not canvas.pixel(header[Tab.ARP].x, 11)
    assert canvas.pixel(0, 45)
    assert not canvas.pixel(0, 17)
    assert "octv" in [item.text for item in canvas.texts]


def test_render_shift_indicator(controller):
    controller.process_event(press(InputId.BTN_SHIFT))
    controller.render()
    assert controller.gfx.pixel(0, 17)
    assert not controller.gfx.pixel(0, 45)