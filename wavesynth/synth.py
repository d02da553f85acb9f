"""Monophonic synth voice: oscillators, envelope, boost, filters and arpeggio."""

from __future__ import annotations

import copy
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from .arpeggiator import ArpeggiatorConfig, ArpeggiatorState
from .audio_math import saturate_hard
from .midi import MidiEvent, MidiEventType, MidiNote, NoteTracker
from .wavetable import get_wave

SYNTH_CHUNK_SIZE = 128
SYNTH_SR = 44100
LOWPASS_CUTOFF_TIMING_SECS = 0.1


def _hz_to_wc(hz: float) -> float:
    return hz * 2.0 * math.pi / SYNTH_SR


# ------- OSCILLATOR --------


@dataclass
class OscillatorConfig:
    enabled: bool = False
    wave_index: int = 0
    freq_mult: float = 1.0
    gain_mult: float = 1.0

    def set_freq_mult(self, base_mult: float, detune_cents: int) -> None:
        """Set the frequency multiplier from a base ratio and a detune in cents."""
        self.freq_mult = base_mult * 2.0 ** (detune_cents / 1200.0)


@dataclass
class OscState:
    phase: float = 0.0

    def step(self, dt: float, config: OscillatorConfig) -> float:
        """Advance the phase by ``dt`` cycles and return the next sample."""
        if not config.enabled:
            return 0.0
        self.phase = math.modf(self.phase + dt * config.freq_mult)[0]
        return get_wave(config.wave_index)(self.phase) * config.gain_mult


# ------- ENVELOPE --------


@dataclass
class EnvelopeConfig:
    attack_secs: float = 1.0
    decay_secs: float = 1.0
    sustain_gain: float = 0.5
    release_secs: float = 1.0


class EnvelopeSection(Enum):
    OFF = "off"
    ATTACK = "attack"
    DECAY = "decay"
    SUSTAIN = "sustain"
    RELEASE = "release"


@dataclass
class EnvelopeState:
    section: EnvelopeSection = EnvelopeSection.OFF
    value: float = 0.0
    attack_rate: float = 0.0
    decay_rate: float = 0.0
    sustain_gain: float = 0.0
    release_rate: float = 0.0

    def trigger_on(self) -> None:
        self.section = EnvelopeSection.ATTACK

    def trigger_off(self) -> None:
        self.section = EnvelopeSection.RELEASE

    def set_rates(self, config: EnvelopeConfig) -> None:
        """Turn the envelope times into per-sample increments."""
        self.attack_rate = 1.0 / (config.attack_secs * SYNTH_SR)
        self.decay_rate = 1.0 / (config.decay_secs * SYNTH_SR)
        self.sustain_gain = config.sustain_gain
        self.release_rate = 1.0 / (config.release_secs * SYNTH_SR)

    def step(self) -> None:
        """Advance the envelope by one sample."""
        section = self.section
        if section is EnvelopeSection.OFF:
            self.value = 0.0
        elif section is EnvelopeSection.ATTACK:
            self.value += self.attack_rate
            if self.value >= 1.0:
                self.value = 1.0
                self.section = EnvelopeSection.DECAY
        elif section is EnvelopeSection.DECAY:
            self.value -= self.decay_rate
            if self.value <= self.sustain_gain:
                self.value = self.sustain_gain
                self.section = EnvelopeSection.SUSTAIN
        elif section is EnvelopeSection.SUSTAIN:
            self.value = self.sustain_gain
        elif section is EnvelopeSection.RELEASE:
            self.value -= self.release_rate
            if self.value <= 0.0:
                self.value = 0.0
                self.section = EnvelopeSection.OFF


# ------- BOOST --------


@dataclass
class BoostConfig:
    boost_mult: float = 1.0
    gain_mult: float = 1.0


# ------- FILTER --------


@dataclass
class LowPassConfig:
    cutoff_hz: float = 2000.0
    emphasis_perc: float = 0.1
    contour_dhz: float = 0.0
    cutoff_envelope: EnvelopeConfig = field(default_factory=EnvelopeConfig)


@dataclass
class LowPassState:
    """Four-pole ladder low-pass with a cutoff that glides to its target."""

    p0: float = 0.0
    p1: float = 0.0
    p2: float = 0.0
    p3: float = 0.0
    p32: float = 0.0
    p33: float = 0.0
    p34: float = 0.0
    current_wc: float = 0.0

    def process_block(self, samples: Iterable[float], config: LowPassConfig) -> list[float]:
        """Filter ``samples`` and return the filtered block."""
        k = config.emphasis_perc * 4.0
        base_wc = _hz_to_wc(config.cutoff_hz)
        glide = 1.0 / (LOWPASS_CUTOFF_TIMING_SECS * SYNTH_SR)
        tanh = saturate_hard

        result = []
        for sample in samples:
            self.current_wc += (base_wc - self.current_wc) * glide
            wc = self.current_wc

            out = (
                self.p3 * 0.360891
                + self.p32 * 0.417290
                + self.p33 * 0.177896
                + self.p34 * 0.0439725
            )
            self.p34, self.p33, self.p32 = self.p33, self.p32, self.p3

            self.p0 += (tanh(sample - k * out) - tanh(self.p0)) * wc
            self.p1 += (tanh(self.p0) - tanh(self.p1)) * wc
            self.p2 += (tanh(self.p1) - tanh(self.p2)) * wc
            self.p3 += (tanh(self.p2) - tanh(self.p3)) * wc

            result.append(out)
        return result


class TPTLowPass:
    """One-pole topology-preserving-transform low-pass."""

    def __init__(self) -> None:
        self._state = 0.0

    def process_block(self, samples: Iterable[float], config: LowPassConfig) -> list[float]:
        """Filter ``samples`` and return the filtered block."""
        wc = 2.0 * math.pi * config.cutoff_hz
        g = math.tan(0.5 * wc / SYNTH_SR)
        resonance = min(max(config.emphasis_perc, 0.0), 1.0)

        result = []
        for sample in samples:
            v = (sample - resonance * self._state - self._state) / (1.0 + g)
            lp = v + self._state
            self._state = lp + v
            result.append(lp)
        return result

    def reset(self) -> None:
        self._state = 0.0


# ------- VOICE --------


@dataclass
class VoiceState:
    enabled: bool = False
    note: MidiNote = MidiNote.NONE
    osc1: OscState = field(default_factory=OscState)
    osc2: OscState = field(default_factory=OscState)
    osc3: OscState = field(default_factory=OscState)
    envelope: EnvelopeState = field(default_factory=EnvelopeState)


# ------- SYNTH --------


@dataclass
class SynthConfig:
    arpeggiator: ArpeggiatorConfig = field(default_factory=ArpeggiatorConfig)
    osc1: OscillatorConfig = field(default_factory=OscillatorConfig)
    osc2: OscillatorConfig = field(default_factory=OscillatorConfig)
    osc3: OscillatorConfig = field(default_factory=OscillatorConfig)
    envelope: EnvelopeConfig = field(default_factory=EnvelopeConfig)
    boost: BoostConfig = field(default_factory=BoostConfig)
    lowpass: LowPassConfig = field(default_factory=LowPassConfig)


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Synth:
    """Renders audio blocks from held MIDI notes and the current config.

    A new config handed to :meth:`update_config` takes effect at the start of
    the next block; only the latest one is kept.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or _monotonic_ms
        self._tracker = NoteTracker()
        self._arp = ArpeggiatorState()
        self.voice = VoiceState()
        self.lowpass = TPTLowPass()
        self.config = SynthConfig()
        self._pending: SynthConfig | None = None

    def update_config(self, new_config: SynthConfig) -> None:
        self._pending = copy.deepcopy(new_config)

    def process_midi_event(self, event: MidiEvent) -> None:
        kind = event.event_type()
        if kind is MidiEventType.NOTE_ON:
            self._tracker.push(event.note())
        elif kind is MidiEventType.NOTE_OFF:
            self._tracker.pop(event.note())

    def process_block(self, length: int) -> list[float]:
        """Render ``length`` samples in [-1, 1] for normal settings."""
        if length < 0:
            raise ValueError(f"block length must not be negative: {length}")
        if self._pending is not None:
            self.config, self._pending = self._pending, None

        config = self.config
        voice = self.voice
        last_note = self._tracker.most_recent()

        if last_note == MidiNote.NONE:
            if voice.enabled:
                voice.enabled = False
                voice.envelope.trigger_off()
            self._arp.clear()
        else:
            note_to_play = last_note
            if config.arpeggiator.enabled:
                if self._arp.step(config.arpeggiator, self._clock()):
                    self._arp.arp_note = self._tracker.right_of(self._arp.arp_note)
                note_to_play = self._arp.arp_note
            if voice.note != note_to_play or not voice.enabled:
                voice.enabled = True
                voice.note = note_to_play
                voice.envelope.trigger_on()

        envelope = voice.envelope
        envelope.set_rates(config.envelope)
        dt = voice.note.frequency() / SYNTH_SR
        boost = config.boost

        block = []
        for _ in range(length):
            mix = (
                voice.osc1.step(dt, config.osc1)
                + voice.osc2.step(dt, config.osc2)
                + voice.osc3.step(dt, config.osc3)
            )
            envelope.step()
            sample = saturate_hard(mix * envelope.value * boost.boost_mult) * boost.gain_mult
            block.append(saturate_hard(sample))
        return block