"""Wires the serial MIDI input, synth, control surface and remote together."""

from __future__ import annotations

import copy
import logging
import queue
import struct
from enum import IntEnum
from typing import Callable, Iterable

from .events import InputEvent
from .midi import MidiEvent
from .packets import PacketDecoder
from .remote import NotifyCallback, RemoteScreen
from .synth import SYNTH_CHUNK_SIZE, Synth
from .ui import UiController
from .widgets import Canvas

logger = logging.getLogger(__name__)

MIDI_EVENTS_QUEUE_SIZE = 128
INPUT_EVENTS_QUEUE_SIZE = 64
FRAME_MAX = 0x7FFF // 2
_REMOTE_INPUT_TIMEOUT_SECS = 0.2
_FRAME = struct.Struct("<hh")


class PacketType(IntEnum):
    MIDI = 0xA0
    LOG = 0xF0


def _to_int16(value: float) -> int:
    return max(-0x8000, min(0x7FFF, int(value)))


def samples_to_frames(samples: Iterable[float]) -> bytes:
    """Pack mono samples as little-endian 16-bit stereo frames at half scale."""
    out = bytearray()
    for sample in samples:
        level = _to_int16(sample * FRAME_MAX)
        out += _FRAME.pack(level, level)
    return bytes(out)


def _default_log(text: str) -> None:
    logger.info("UART LOG: %s", text)


class SynthApp:
    """The synthesizer with its event queues, display and remote mirror."""

    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        notify: NotifyCallback | None = None,
        on_log: Callable[[str], None] | None = None,
    ) -> None:
        self._midi_events: queue.Queue[MidiEvent] = queue.Queue(MIDI_EVENTS_QUEUE_SIZE)
        self._input_events: queue.Queue[InputEvent] = queue.Queue(INPUT_EVENTS_QUEUE_SIZE)
        self._decoder = PacketDecoder()
        self._on_log = on_log or _default_log

        self.synth = Synth(clock)
        self.canvas = Canvas()
        self.controller = UiController(self.canvas)
        self.synth.update_config(self.controller.config)

        self.remote = RemoteScreen(notify)
        self.remote.set_input_callback(self._on_remote_input)

    def receive_uart(self, data: bytes) -> None:
        """Feed bytes from the serial line; queue MIDI events and pass on log text."""
        for packet in self._decoder.feed(data):
            if packet.packet_type == PacketType.MIDI:
                try:
                    event = MidiEvent.from_bytes(packet.payload)
                except ValueError as exc:
                    logger.warning("bad MIDI packet: %s", exc)
                    continue
                try:
                    self._midi_events.put_nowait(event)
                except queue.Full:
                    logger.warning("MIDI queue full, event dropped")
            elif packet.packet_type == PacketType.LOG:
                text = packet.payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")
                self._on_log(text)

    def render_audio_chunk(self) -> bytes:
        """Apply queued MIDI events and render one chunk of stereo frames."""
        while True:
            try:
                event = self._midi_events.get_nowait()
            except queue.Empty:
                break
            self.synth.process_midi_event(event)
        return samples_to_frames(self.synth.process_block(SYNTH_CHUNK_SIZE))

    def post_input(self, event: InputEvent) -> bool:
        """Queue an input event; return False when the queue is full."""
        try:
            self._input_events.put_nowait(event)
        except queue.Full:
            return False
        return True

    def _on_remote_input(self, event: InputEvent) -> None:
        try:
            self._input_events.put(event, timeout=_REMOTE_INPUT_TIMEOUT_SECS)
        except queue.Full:
            logger.warning("input queue full, remote event dropped")

    def display_tick(self) -> bytes:
        """Apply queued inputs, push config changes, redraw and mirror the screen."""
        old_config = copy.deepcopy(self.controller.config)
        while True:
            try:
                event = self._input_events.get_nowait()
            except queue.Empty:
                break
            self.controller.process_event(event)

        if self.controller.config != old_config:
            self.synth.update_config(self.controller.config)

        self.canvas.clear()
        self.controller.render()
        frame = self.canvas.to_bytes()
        self.remote.send_screen(frame)
        return frame