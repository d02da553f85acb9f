import pytest
from hypothesis import given, strategies as st

from wavesynth.compress import bit_rle_compress, rle_compress, rle_decompress


def test_rle_pairs():
    assert rle_compress(b"\x00\x00\x00\x05") == bytes([0, 3, 5, 1])


def test_rle_empty():
    assert rle_compress(b"") == b""
    assert bit_rle_compress(b"") == b""


def test_rle_caps_runs():
    encoded = rle_compress(bytes(300))
    assert encoded[1] == 255
    assert all(count <= 255 for count in encoded[1::2])
    assert rle_decompress(encoded) == bytes(300)


@given(st.binary(max_size=2048))
def test_rle_round_trip(data):
    assert rle_decompress(rle_compress(data)) == data


def test_rle_decompress_rejects_odd_length():
    with pytest.raises(ValueError):
        rle_decompress(b"\x01\x02\x03")


def test_bit_rle_all_ones_byte():
    assert bit_rle_compress(b"\xff") == bytes([1, 8])


@given(st.binary(min_size=1, max_size=512))
def test_bit_rle_counts_every_bit(data):
    encoded = bit_rle_compress(data)
    assert encoded[0] == data[0] >> 7
    assert sum(encoded[1:]) == 8 * len(data)
    assert all(count <= 255 for count in encoded[1:])


def test_bit_rle_long_run_continues():
    encoded = bit_rle_compress(bytes(64))
    assert encoded[0] == 0
    assert encoded[1] == 255
    assert sum(encoded[1:]) == 8 * 64