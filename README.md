# wavesynth

A compact monophonic synthesizer engine in pure Python, with no runtime
dependencies: three wavetable oscillators, an ADSR envelope, a saturating
boost stage, an arpeggiator, and the pieces around them — MIDI note tracking,
a byte-stuffed CRC-16 serial packet format, run-length screen compression,
button and rotary-encoder logic, and a tabbed widget UI that edits the synth
configuration.

## Installing

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Playing notes

```python
from wavesynth.midi import MidiEvent
from wavesynth.synth import Synth, SynthConfig
from wavesynth.wavetable import WaveIndex

synth = Synth()
config = SynthConfig()
config.osc1.enabled = True
config.osc1.wave_index = WaveIndex.SAW
synth.update_config(config)

# USB-MIDI event: header (code index 0x9 = note on), status, note, velocity
synth.process_midi_event(MidiEvent.from_bytes(bytes([0x09, 0x90, 60, 100])))
block = synth.process_block(128)   # list of 128 float samples
```

A config passed to `Synth.update_config` is copied and takes effect at the
start of the next block. `Synth` accepts an optional `clock` callable
returning milliseconds; it drives the arpeggiator (monotonic time by default).

`NoteTracker` (in `wavesynth.midi`) keeps up to five held notes, most recent
first. The most recent note plays; with `config.arpeggiator.enabled` the held
notes are stepped through from low to high, wrapping around, once every
`ArpeggiatorConfig.period_ms()` milliseconds. `MidiNote.NONE` (index 255)
stands for "no note"; `MidiNote.frequency()` tunes A4 (69) to 440 Hz.

`wavesynth.synth` also has two filters, `LowPassState` (a four-pole ladder
whose cutoff glides to its target) and `TPTLowPass` (one pole). Each takes a
block of samples and a `LowPassConfig` and returns the filtered block;
`Synth.process_block` does not apply them.

## Waveforms

`wavesynth.wavetable` provides `wave_silence`, `wave_sin`, `wave_tri`,
`wave_tri_saw`, `wave_saw`, `wave_saw_rev`, `wave_square`, `wave_rect_wide`
and `wave_rect_narrow`, each taking a phase in cycles (only the fractional
part counts). `get_wave(WaveIndex.SAW)` looks one up by index and raises
`ValueError` for an unknown index. `wavesynth.audio_math` holds
`saturate_soft`, `saturate_hard` and `volume_to_gain` (a cubic curve).

## Serial packets

Frames end with `0x7E`; `0x7D` escapes `0x7D` and `0x7E`. A frame holds a
header byte, a type byte, the payload (up to 128 bytes) and a little-endian
CRC-16/X-25 over everything before it (`crc16`, `crc16_add`).

```python
from wavesynth.packets import PacketDecoder, encode_packet

frame = encode_packet(0xA0, bytes([0x09, 0x90, 60, 100]))
decoder = PacketDecoder()
packets = decoder.feed(frame)       # list of Packet(packet_type, payload)
```

`PacketDecoder.decode` takes one byte at a time and returns a `Packet` when a
frame completes; frames with a bad CRC are dropped and counted in
`missed_packets`.

## Screen compression and the remote mirror

`wavesynth.compress.rle_compress` turns bytes into `(value, count)` pairs with
runs capped at 255; `rle_decompress` reverses it. `bit_rle_compress` writes
the starting bit followed by bit run lengths.

`wavesynth.remote.RemoteScreen` splits a 1024-byte (128×64, 1 bit per pixel)
screen buffer into four 256-byte blocks and keeps each one RLE-compressed
(`blocks()`). `send_screen` returns `False` when the buffer is unchanged;
otherwise it recomputes the blocks and calls the `notify(index, block)`
callback given to the constructor for each. `on_command` decodes a 4-byte
input command (`parse_command`) into an `InputEvent` and hands it to the
callback set with `set_input_callback`. The service and characteristic UUIDs
are given as `SERVER_UUID`, `COMMAND_UUID` and `BLOCK_UUIDS`.

## Controls and UI

`wavesynth.controls.Button.update(reading, now_ms)` reports a `PRESS` once the
button has been held for more than 50 ms and a `RELEASE` when it lets go.
`Encoder.begin(clk)` records the clock line's resting level;
`Encoder.update(clk, dt)` reports `LEFT` or `RIGHT` on every clock edge.

`wavesynth.ui.UiController` takes a `wavesynth.widgets.Canvas` and owns a
`SynthConfig`. Its `process_event` takes `InputEvent`s (`wavesynth.events`):
the left and right buttons move between the six tabs (arpeggiator, three
oscillators, envelope, filter), the shift button toggles the layer marker,
and encoder events go to the widget in the matching column of the active tab,
on the upper layer when the event is shifted. `render()` draws the header,
layer marks and active tab.

`Canvas` is a 1-bit framebuffer: rectangles and lines are drawn as pixels,
while text is kept as positioned strings (`texts`, `text_at`) since no font is
bundled. `to_bytes()` packs the pixels in the paged layout of an SSD1306
(pages of eight rows, bit 0 at the top).

## Putting it together

`wavesynth.app.SynthApp` connects the pieces: `receive_uart(data)` decodes
serial packets, queueing MIDI packets (type `0xA0`) and passing log packets
(type `0xF0`) to `on_log`; `post_input(event)` queues a control event;
`display_tick()` applies queued input, pushes a changed config to the synth,
redraws, mirrors the screen to the remote and returns the screen bytes;
`render_audio_chunk()` applies queued MIDI events and returns 128 frames of
little-endian 16-bit stereo audio at half scale (see `samples_to_frames`).

## What it does not do

The package produces samples and screen bytes but does not talk to devices:
there is no audio output, serial port access, Bluetooth server, physical
display or pin reading. Text on the `Canvas` is not rasterised. There is no
command-line program; drive `SynthApp` (or the parts) from your own code.