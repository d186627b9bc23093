"""Shared test fixtures."""

import pytest

from config import SkipConfig
from skipper.host import PlayerHost


class FakeHost(PlayerHost):
    """In-memory player that records every speed write and OSD message."""

    def __init__(self):
        self.position = 0.0
        self.sub_delay = 0.0
        self.speed = 1.0
        self.external_subtitle = None
        self.subtitle_file = None
        self.speed_writes = []
        self.messages = []

    def get_position(self):
        return self.position

    def get_sub_delay(self):
        return self.sub_delay

    def get_speed(self):
        return self.speed

    def set_speed(self, speed):
        self.speed = speed
        self.speed_writes.append(speed)

    def get_external_subtitle(self):
        return self.external_subtitle

    def get_subtitle_file(self):
        return self.subtitle_file

    def show_message(self, text):
        self.messages.append(text)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def skip_config() -> SkipConfig:
    return SkipConfig(
        silence_speed_multiplier=6,
        speed_max=6,
        min_silence_duration=2,
        margin_before=0.5,
    )


SAMPLE_SRT = """\
1
00:00:10,000 --> 00:00:12,000
Hello there.

2
00:00:20,500 --> 00:00:23,250
General Kenobi.

3
00:01:05,000 --> 00:01:07,000
You are a bold one.
"""

SAMPLE_ASS = """\
[Script Info]
Title: Sample
ScriptType: v4.00+

[V4+ Styles]
Format: Name, Fontname, Fontsize
Style: Default,Arial,20

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:10.00,0:00:12.00,Default,,0,0,0,,Hello there.
Comment: 0,0:00:15.00,0:00:16.00,Default,,0,0,0,,not dialogue
Dialogue: 0,0:00:20.50,0:00:23.25,Default,,0,0,0,,General Kenobi, you are a bold one.
"""


@pytest.fixture
def srt_file(tmp_path):
    path = tmp_path / "movie.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def ass_file(tmp_path):
    path = tmp_path / "movie.ass"
    path.write_text(SAMPLE_ASS, encoding="utf-8")
    return path
