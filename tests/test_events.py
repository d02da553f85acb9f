import pytest

from wavesynth.events import InputEvent, InputId, input_id_from_uint8


@pytest.mark.parametrize(
    "value, expected",
    [
        (0x00, InputId.NONE),
        (0x01, InputId.BTN_LX),
        (0x02, InputId.BTN_RX),
        (0x03, InputId.BTN_SHIFT),
        (0x10, InputId.ENCODER0),
        (0x11, InputId.ENCODER1),
        (0x12, InputId.ENCODER2),
    ],
)
def test_known_ids_map(value, expected):
    assert input_id_from_uint8(value) is expected


@pytest.mark.parametrize("value", [0x04, 0x0F, 0x13, 0xFF, 200])
def test_unknown_ids_fall_back_to_none(value):
    assert input_id_from_uint8(value) is InputId.NONE


def test_ids_round_trip_through_their_byte():
    for input_id in InputId:
        assert input_id_from_uint8(int(input_id)) is input_id


def test_default_event_is_empty():
    event = InputEvent()
    assert event.id is InputId.NONE
    assert event.value == 0
    assert event.shifted is False