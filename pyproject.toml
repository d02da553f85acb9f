[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wavesynth"
version = "0.1.0"
description = "Monophonic wavetable synth engine with arpeggiator, envelope, serial packet framing, screen RLE and a widget control surface"
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "midi", "audio", "wavetable", "arpeggiator", "envelope", "rle", "crc16"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["wavesynth"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
