"""Monophonic wavetable synth engine with arpeggiator, serial packet framing, screen RLE and a widget control surface."""

__version__ = "0.1.0"