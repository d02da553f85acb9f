"""The tabbed control surface that edits a synth config."""

from __future__ import annotations

from enum import IntEnum

from .arpeggiator import ArpeggiatorConfig
from .audio_math import volume_to_gain
from .controls import BtnEvent
from .events import InputEvent, InputId
from .synth import BoostConfig, EnvelopeConfig, LowPassConfig, OscillatorConfig, SynthConfig
from .wavetable import WaveIndex
from .widgets import Canvas, Selector, SelectorConfig, Switch, Widget, WidgetGroup


class Tab(IntEnum):
    ARP = 0
    OSC1 = 1
    OSC2 = 2
    OSC3 = 3
    ENVELOPE = 4
    FILTER = 5


TAB_NAMES = ("arp", "o1", "o2", "o3", "env", "flt")
TAB_COUNT = len(Tab)

DIVISION_CONFIG = SelectorConfig(("1", "1/2", "1/4", "1/8"), (1, 2, 4, 8), 1, 0)
TEMPO_CONFIG = SelectorConfig(("80", "100", "120", "130", "150"), (80, 100, 120, 130, 150), 1, 2)
GAIN_CONFIG = SelectorConfig(
    ("0.0", "0.1", "0.2", "0.3", "0.4", "0.5", "0.6", "0.7", "0.8", "0.9", "1.0"),
    (0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100),
    100,
    5,
)
SHAPE_CONFIG = SelectorConfig(
    ("tri", "t_s", "saw", "squ", "re1", "re2"),
    (
        WaveIndex.TRI,
        WaveIndex.TRI_SAW,
        WaveIndex.SAW,
        WaveIndex.SQUARE,
        WaveIndex.RECT_WIDE,
        WaveIndex.RECT_NARROW,
    ),
    1,
    0,
)
DETUNE_CONFIG = SelectorConfig(
    ("-20", "-16", "-12", "-10", "-7", "-5", "-3", "0"),
    (-20, -16, -12, -10, -7, -5, -3, 0),
    100,
    7,
)
RANGE_CONFIG = SelectorConfig(("32'", "16'", "8'", "4'", "2'"), (32, 16, 8, 4, 2), 8, 2)
TIME_CONFIG = SelectorConfig(
    (
        "0.1s", "0.2s", "0.3s", "0.4s", "0.5s", "0.6s", "0.7s", "0.8s", "0.9s", "1s",
        "2s", "3s", "4s", "5s", "8s", "10s", "15s", "30s", "60s",
    ),
    (
        100, 200, 300, 400, 500, 600, 700, 800, 900, 1000,
        2000, 3000, 4000, 5000, 8000, 10000, 15000, 30000, 60000,
    ),
    1000,
    9,
)
BOOST_CONFIG = SelectorConfig(("+0", "+1", "+2"), (10, 15, 20), 10, 0)
CONTOUR_CONFIG = SelectorConfig(
    ("none", "+100", "+500", "+1k", "+2k", "+3k", "+4k"),
    (0, 100, 500, 1000, 2000, 3000, 4000),
    1,
    0,
)
CUTOFF_CONFIG = SelectorConfig(
    (
        "1kHz", "2kHz", "3kHz", "4kHz", "5kHz", "6kHz", "7kHz",
        "8kHz", "9kHz", "10kHz", "12kHz", "15kHz", "18kHz",
    ),
    (1000, 2000, 3000, 4000, 5000, 6000, 7000, 8000, 9000, 10000, 12000, 15000, 18000),
    1,
    9,
)

COL1 = 6
COL2 = 128 // 2 - 16
COL3 = 128 - 36
ROW2 = 16
ROW1 = 44
_COLUMNS = (COL1, COL2, COL3)


class Table2x3Layout:
    """Three columns of widgets on two layers; shift selects the upper layer."""

    def __init__(self) -> None:
        self.table: list[list[Widget | None]] = [[None] * 3 for _ in range(2)]

    def _set_row(self, row: int, y: int, cells: tuple[Widget | None, ...]) -> None:
        self.table[row] = list(cells)
        for widget, x in zip(cells, _COLUMNS):
            if widget is not None:
                widget.x, widget.y = x, y

    def first_row(self, c1: Widget | None, c2: Widget | None, c3: Widget | None) -> None:
        self._set_row(0, ROW1, (c1, c2, c3))

    def second_row(self, c1: Widget | None, c2: Widget | None, c3: Widget | None) -> None:
        self._set_row(1, ROW2, (c1, c2, c3))

    def render(self, gfx: Canvas) -> None:
        for row in self.table:
            for widget in row:
                if widget is not None:
                    widget.render(gfx)

    def process_event(self, event: InputEvent) -> None:
        """Route an encoder event to the widget in its column and layer."""
        row = 1 if event.shifted else 0
        col = int(event.id) - int(InputId.ENCODER0)
        if not 0 <= col < 3:
            return
        widget = self.table[row][col]
        if widget is not None:
            widget.process_event(event)


class ArpTab(Widget):
    def __init__(self, key: str, config: ArpeggiatorConfig) -> None:
        super().__init__(key)
        self.config = config
        self.layout = Table2x3Layout()
        self.en = Switch("en")
        self.division = Selector("div", DIVISION_CONFIG)
        self.tempo = Selector("bpm", TEMPO_CONFIG)
        self.layout.first_row(self.en, self.division, self.tempo)

    def render(self, gfx: Canvas) -> None:
        self.layout.render(gfx)

    def process_event(self, event: InputEvent) -> None:
        self.layout.process_event(event)
        self.update_configs()

    def update_configs(self) -> None:
        self.config.enabled = self.en.value
        self.config.time_division = self.division.value()
        self.config.tempo_bpm = float(self.tempo.value())


class OscTab(Widget):
    def __init__(self, key: str, config: OscillatorConfig) -> None:
        super().__init__(key)
        self.config = config
        self.layout = Table2x3Layout()
        self.range = Selector("octv", RANGE_CONFIG)
        self.detune = Selector("tune", DETUNE_CONFIG)
        self.shape = Selector("shp", SHAPE_CONFIG)
        self.gain = Selector("gain", GAIN_CONFIG)
        self.en = Switch("en")
        self.layout.first_row(self.range, self.detune, self.shape)
        self.layout.second_row(None, self.gain, self.en)

    def render(self, gfx: Canvas) -> None:
        self.layout.render(gfx)

    def process_event(self, event: InputEvent) -> None:
        self.layout.process_event(event)
        self.update_configs()

    def update_configs(self) -> None:
        self.config.set_freq_mult(1.0 / self.range.value_as_float(), self.detune.value())
        self.config.wave_index = self.shape.value()
        self.config.gain_mult = volume_to_gain(self.gain.value_as_float())
        self.config.enabled = self.en.value


class EnvTab(Widget):
    def __init__(self, key: str, env_cfg: EnvelopeConfig, boost_cfg: BoostConfig) -> None:
        super().__init__(key)
        self.env_cfg = env_cfg
        self.boost_cfg = boost_cfg
        self.layout = Table2x3Layout()
        self.attack = Selector("att", TIME_CONFIG)
        self.decay = Selector("dec", TIME_CONFIG)
        self.sustain = Selector("sus", GAIN_CONFIG)
        self.boost_en = Selector("bst", BOOST_CONFIG)
        self.gain = Selector("gain", GAIN_CONFIG)
        self.layout.first_row(self.attack, self.decay, self.sustain)
        self.layout.second_row(None, self.boost_en, self.gain)
        self.gain.index = GAIN_CONFIG.count - 1

    def render(self, gfx: Canvas) -> None:
        self.layout.render(gfx)

    def process_event(self, event: InputEvent) -> None:
        self.layout.process_event(event)
        self.update_configs()

    def update_configs(self) -> None:
        self.env_cfg.attack_secs = self.attack.value_as_float()
        self.env_cfg.decay_secs = self.decay.value_as_float()
        self.env_cfg.sustain_gain = self.sustain.value_as_float()
        self.env_cfg.release_secs = self.decay.value_as_float() * 2
        self.boost_cfg.boost_mult = self.boost_en.value_as_float()
        self.boost_cfg.gain_mult = volume_to_gain(self.gain.value_as_float())


class FltTab(Widget):
    def __init__(self, key: str, config: LowPassConfig) -> None:
        super().__init__(key)
        self.config = config
        self.layout = Table2x3Layout()
        self.attack = Selector("att", TIME_CONFIG)
        self.decay = Selector("dec", TIME_CONFIG)
        self.sustain = Selector("sus", GAIN_CONFIG)
        self.cutoff = Selector("cut", CUTOFF_CONFIG)
        self.resonance = Selector("res", GAIN_CONFIG)
        self.contour = Selector("cou", CONTOUR_CONFIG)
        self.layout.first_row(self.cutoff, self.resonance, self.contour)
        self.layout.second_row(self.attack, self.decay, self.sustain)
        self.resonance.index = 3

    def render(self, gfx: Canvas) -> None:
        self.layout.render(gfx)

    def process_event(self, event: InputEvent) -> None:
        self.layout.process_event(event)
        self.update_configs()

    def update_configs(self) -> None:
        envelope = self.config.cutoff_envelope
        envelope.attack_secs = self.attack.value_as_float()
        envelope.decay_secs = self.decay.value_as_float()
        envelope.sustain_gain = self.sustain.value_as_float()
        envelope.release_secs = self.decay.value_as_float() / 2
        self.config.cutoff_hz = self.cutoff.value_as_float()
        self.config.emphasis_perc = self.resonance.value_as_float()
        self.config.contour_dhz = self.contour.value_as_float()


class UiController:
    """Holds the synth config and edits it through tabs of widgets."""

    def __init__(self, gfx: Canvas) -> None:
        self.gfx = gfx
        self.config = SynthConfig()
        self.tab_index = Tab.OSC1
        self.layer_shift_on = False

        self.arp_tab = ArpTab("arp", self.config.arpeggiator)
        self.osc1_tab = OscTab("o1", self.config.osc1)
        self.osc2_tab = OscTab("o2", self.config.osc2)
        self.osc3_tab = OscTab("o3", self.config.osc3)
        self.env_tab = EnvTab("env", self.config.envelope, self.config.boost)
        self.flt_tab = FltTab("flt", self.config.lowpass)

        self.tabs = WidgetGroup()
        for tab in (
            self.arp_tab,
            self.osc1_tab,
            self.osc2_tab,
            self.osc3_tab,
            self.env_tab,
            self.flt_tab,
        ):
            self.tabs.add(tab)

        self.osc1_tab.en.nudge(1)
        self.osc1_tab.update_configs()

    @property
    def active_tab(self) -> Widget | None:
        return self.tabs.get(self.tab_index)

    def process_event(self, event: InputEvent) -> None:
        if event.id == InputId.BTN_LX:
            if event.value == BtnEvent.PRESS:
                self.tab_index = Tab((self.tab_index + TAB_COUNT - 1) % TAB_COUNT)
        elif event.id == InputId.BTN_RX:
            if event.value == BtnEvent.PRESS:
                self.tab_index = Tab((self.tab_index + 1) % TAB_COUNT)
        elif event.id == InputId.BTN_SHIFT:
            if event.value == BtnEvent.PRESS:
                self.layer_shift_on = True
            elif event.value == BtnEvent.RELEASE:
                self.layer_shift_on = False
        else:
            tab = self.active_tab
            if tab is not None:
                tab.process_event(event)

    def render(self) -> bool:
        """Draw the header, layer marks and active tab; True when the frame should be shown."""
        gfx = self.gfx
        x = 1
        for index, name in enumerate(TAB_NAMES):
            spacing = len(name) * 9
            gfx.set_cursor(x, 0)
            gfx.write(name)
            if index == self.tab_index:
                gfx.draw_fast_hline(x, 11, int(spacing * 0.8))
                gfx.draw_fast_hline(x, 12, int(spacing * 0.8))
            x += spacing

        y0 = 18 - 1 if self.layer_shift_on else 46 - 1
        w, h = 1, 3
        for i in range(4):
            yi = y0 + i * (h + 2)
            gfx.fill_rect(0, yi, w, h)
            gfx.fill_rect(128 - w - 1, yi, w, h)

        tab = self.active_tab
        if tab is not None:
            tab.render(gfx)
        return True