"""Run-length encodings used to ship the screen buffer."""

from __future__ import annotations

from itertools import groupby

_MAX_RUN = 255


def rle_compress(data: bytes) -> bytes:
    """Encode as (value, count) byte pairs, runs capped at 255."""
    out = bytearray()
    for value, group in groupby(data):
        remaining = sum(1 for _ in group)
        while remaining:
            run = min(remaining, _MAX_RUN)
            out += bytes([value, run])
            remaining -= run
    return bytes(out)


def rle_decompress(data: bytes) -> bytes:
    """Invert :func:`rle_compress`."""
    if len(data) % 2:
        raise ValueError("RLE data must hold whole (value, count) pairs")
    return b"".join(bytes([value]) * count for value, count in zip(data[::2], data[1::2]))


def bit_rle_compress(data: bytes) -> bytes:
    """Encode bits MSB first: the starting bit, then run lengths.

    A run of 255 does not switch the bit; the following count continues it.
    """
    if not data:
        return b""
    current = (data[0] >> 7) & 1
    out = bytearray([current])
    run = 0
    for byte in data:
        for shift in range(7, -1, -1):
            bit = (byte >> shift) & 1
            if bit == current:
                run += 1
                if run == _MAX_RUN:
                    out.append(run)
                    run = 0
            else:
                out.append(run)
                current = bit
                run = 1
    if run:
        out.append(run)
    return bytes(out)