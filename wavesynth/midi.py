"""MIDI notes, USB-MIDI event packets and a tracker of held notes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Iterator

MAX_TRACKED_NOTES = 5


class MidiEventType(IntEnum):
    """Kind of a MIDI event, as far as the synth cares."""

    EMPTY = 0
    NOTE_ON = 1
    NOTE_OFF = 2
    OTHER = 3


@dataclass(frozen=True, order=True)
class MidiNote:
    """A MIDI note number; index 255 stands for "no note"."""

    note_index: int = 69

    NONE: ClassVar["MidiNote"]

    def __post_init__(self) -> None:
        if not 0 <= self.note_index <= 0xFF:
            raise ValueError(f"note index out of range: {self.note_index}")

    def frequency(self) -> float:
        """Frequency in Hz, with A4 (note 69) at 440 Hz."""
        return 440.0 * 2.0 ** ((self.note_index - 69) / 12.0)


MidiNote.NONE = MidiNote(255)


@dataclass(frozen=True)
class MidiEvent:
    """A four byte USB-MIDI event packet."""

    header: int = 0
    status: int = 0
    data1: int = 0
    data2: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiEvent":
        """Build an event from the first four bytes of ``data``."""
        if len(data) < 4:
            raise ValueError(f"a MIDI event needs 4 bytes, got {len(data)}")
        header, status, data1, data2 = data[:4]
        return cls(header, status, data1, data2)

    def channel(self) -> int:
        return self.status & 0x0F

    def event_type(self) -> MidiEventType:
        cin = self.header & 0x0F
        if cin == 0x9 and self.data2 != 0:
            return MidiEventType.NOTE_ON
        if cin == 0x8 or (cin == 0x9 and self.data2 == 0):
            return MidiEventType.NOTE_OFF
        return MidiEventType.OTHER

    def note(self) -> MidiNote:
        return MidiNote(self.data1)

    def velocity(self) -> int:
        return self.data2


class NoteTracker:
    """Held notes, most recent first, at most ``MAX_TRACKED_NOTES`` of them."""

    def __init__(self) -> None:
        self._notes: list[MidiNote] = []

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note: object) -> bool:
        return note in self._notes

    def __iter__(self) -> Iterator[MidiNote]:
        return iter(self._notes)

    def most_recent(self) -> MidiNote:
        return self._notes[0] if self._notes else MidiNote.NONE

    def get_at(self, index: int) -> MidiNote:
        if 0 <= index < len(self._notes):
            return self._notes[index]
        return MidiNote.NONE

    def smallest(self) -> MidiNote:
        return min(self._notes, default=MidiNote.NONE)

    def right_of(self, note: MidiNote) -> MidiNote:
        """The next held note above ``note``, wrapping to the lowest one."""
        if note == MidiNote.NONE:
            return self.smallest()
        if not self._notes:
            return MidiNote.NONE
        if len(self._notes) == 1:
            return self.most_recent()
        above = [n for n in self._notes if note < n < MidiNote.NONE]
        return min(above, default=self.smallest())

    def push(self, note: MidiNote) -> None:
        if note == MidiNote.NONE or note in self._notes:
            return
        self._notes.insert(0, note)
        del self._notes[MAX_TRACKED_NOTES:]

    def pop(self, note: MidiNote) -> None:
        if note == MidiNote.NONE:
            return
        if note in self._notes:
            self._notes.remove(note)