from wavesynth.controls import (
    BTN_DEBOUNCE_MILLIS,
    BtnEvent,
    Button,
    Encoder,
    EncoderEvent,
)


def test_button_starts_idle():
    btn = Button()
    assert not btn.pressed()
    assert btn.event() is BtnEvent.NONE


def test_short_press_is_ignored():
    btn = Button()
    btn.update(True, 1000)
    btn.update(True, 1000 + BTN_DEBOUNCE_MILLIS)
    assert not btn.pressed()
    assert btn.event() is BtnEvent.NONE
    btn.update(False, 1000 + BTN_DEBOUNCE_MILLIS + 1)
    assert btn.event() is BtnEvent.NONE


def test_held_press_reports_once_then_release():
    btn = Button()
    btn.update(True, 1000)
    btn.update(True, 1000 + BTN_DEBOUNCE_MILLIS + 1)
    assert btn.pressed()
    assert btn.event() is BtnEvent.PRESS

    btn.update(True, 1000 + BTN_DEBOUNCE_MILLIS + 20)
    assert btn.pressed()
    assert btn.event() is BtnEvent.NONE

    btn.update(False, 1000 + BTN_DEBOUNCE_MILLIS + 30)
    assert not btn.pressed()
    assert btn.event() is BtnEvent.RELEASE

    btn.update(False, 1000 + BTN_DEBOUNCE_MILLIS + 40)
    assert btn.event() is BtnEvent.NONE


def test_bounce_restarts_debounce_timer():
    btn = Button()
    btn.update(True, 0)
    btn.update(False, 30)
    btn.update(True, 40)
    btn.update(True, 40 + BTN_DEBOUNCE_MILLIS)
    assert btn.event() is BtnEvent.NONE
    btn.update(True, 41 + BTN_DEBOUNCE_MILLIS)
    assert btn.event() is BtnEvent.PRESS


def test_encoder_without_edge_reports_nothing():
    enc = Encoder()
    enc.begin(True)
    enc.update(True, False)
    assert enc.event() is EncoderEvent.NONE


def test_encoder_rising_edge_direction():
    enc = Encoder()
    enc.begin(False)
    enc.update(True, True)
    assert enc.event() is EncoderEvent.LEFT

    enc.begin(False)
    enc.update(True, False)
    assert enc.event() is EncoderEvent.RIGHT


def test_encoder_falling_edge_direction():
    enc = Encoder()
    enc.begin(True)
    enc.update(False, False)
    assert enc.event() is EncoderEvent.LEFT

    enc.begin(True)
    enc.update(False, True)
    assert enc.event() is EncoderEvent.RIGHT


def test_encoder_event_clears_on_next_update():
    enc = Encoder()
    enc.begin(False)
    enc.update(True, True)
    enc.update(True, True)
    assert enc.event() is EncoderEvent.NONE


def test_encoder_event_values_give_nudge_direction():
    enc = Encoder()
    enc.begin(False)
    enc.update(True, True)
    assert int(enc.event()) == -1

    enc.begin(False)
    enc.update(True, False)
    assert int(enc.event()) == 1