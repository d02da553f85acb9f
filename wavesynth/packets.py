"""Byte-stuffed, CRC-16 protected packets on a serial line.

A frame holds a header byte, a type byte, the payload and a little-endian
CRC-16/X-25 over everything before it. Frames end with 0x7E; 0x7D escapes
0x7D (as 0x54) and 0x7E (as 0x53).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

FRAME_BYTE = 0x7E
ESCAPE_BYTE = 0x7D
_UNESCAPE = {0x54: ESCAPE_BYTE, 0x53: FRAME_BYTE}
_ESCAPE = {value: key for key, value in _UNESCAPE.items()}


def crc16_add(crc: int, byte: int) -> int:
    """Fold one byte into a reflected CRC-16 (polynomial 0x8408)."""
    crc ^= byte
    for _ in range(8):
        crc = (crc >> 1) ^ 0x8408 if crc & 1 else crc >> 1
    return crc & 0xFFFF


def crc16(data: bytes) -> int:
    """CRC-16/X-25 of ``data``."""
    crc = 0xFFFF
    for byte in data:
        crc = crc16_add(crc, byte)
    return ~crc & 0xFFFF


@dataclass(frozen=True)
class Packet:
    packet_type: int
    payload: bytes


class PacketDecoder:
    """Reassembles packets from a byte stream."""

    MAX_PAYLOAD_LEN = 128
    MAX_PACKET_LEN = MAX_PAYLOAD_LEN + 2 + 2

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._escaping = False
        self._missed_packets = 0

    @property
    def missed_packets(self) -> int:
        """Number of frames dropped for a bad CRC."""
        return self._missed_packets

    def decode(self, byte: int) -> Packet | None:
        """Take one byte; return a packet when it completes one."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"not a byte: {byte}")

        if byte == FRAME_BYTE:
            packet = None
            length = len(self._buffer)
            if 4 <= length <= self.MAX_PACKET_LEN:
                if self._verify():
                    packet = Packet(self._buffer[1], bytes(self._buffer[2:-2]))
                else:
                    self._missed_packets += 1
                    logger.error(
                        "packet failed CRC check (total: %d)", self._missed_packets
                    )
            self.reset()
            return packet

        if byte == ESCAPE_BYTE:
            self._escaping = True
            return None

        if len(self._buffer) >= self.MAX_PACKET_LEN:
            return None

        if self._escaping:
            if byte in _UNESCAPE:
                self._buffer.append(_UNESCAPE[byte])
            else:
                logger.error("wrong byte after escape: %02X", byte)
            self._escaping = False
        else:
            self._buffer.append(byte)
        return None

    def feed(self, data: Iterable[int]) -> list[Packet]:
        """Decode every byte of ``data`` and return the completed packets."""
        return [packet for byte in data if (packet := self.decode(byte)) is not None]

    def reset(self) -> None:
        self._buffer.clear()
        self._escaping = False

    def _verify(self) -> bool:
        expected = self._buffer[-2] | (self._buffer[-1] << 8)
        return crc16(bytes(self._buffer[:-2])) == expected


def encode_packet(packet_type: int, payload: bytes) -> bytes:
    """Frame a packet for the decoder. The leading header byte is sent as zero."""
    if not 0 <= packet_type <= 0xFF:
        raise ValueError(f"packet type out of range: {packet_type}")
    if len(payload) > PacketDecoder.MAX_PAYLOAD_LEN:
        raise ValueError(f"payload too long: {len(payload)}")
    body = bytes([0x00, packet_type]) + bytes(payload)
    body += crc16(body).to_bytes(2, "little")
    out = bytearray([FRAME_BYTE])
    for byte in body:
        if byte in _ESCAPE:
            out += bytes([ESCAPE_BYTE, _ESCAPE[byte]])
        else:
            out.append(byte)
    out.append(FRAME_BYTE)
    return bytes(out)