"""Arpeggiator timing."""

from __future__ import annotations

from dataclasses import dataclass, field

from .midi import MidiNote


@dataclass
class ArpeggiatorConfig:
    enabled: bool = False
    tempo_bpm: float = 120.0
    time_division: int = 1

    def period_ms(self) -> int:
        """Milliseconds between arpeggio steps."""
        return int(60000.0 / self.tempo_bpm / self.time_division)


@dataclass
class ArpeggiatorState:
    active_time: int = -1
    note_index: int = 0
    arp_note: MidiNote = field(default_factory=lambda: MidiNote.NONE)

    def is_active(self) -> bool:
        return self.active_time > 1

    def clear(self) -> None:
        self.active_time = -1
        self.note_index = 0
        self.arp_note = MidiNote.NONE

    def step(self, config: ArpeggiatorConfig, now_ms: int) -> bool:
        """Advance to ``now_ms``; return True when a new step begins."""
        if self.active_time < 0:
            self.active_time = now_ms
            self.note_index = 0
            return True
        if now_ms >= self.active_time + config.period_ms():
            self.active_time = now_ms
            self.note_index += 1
            return True
        return False