"""
Timestamp parsing for SubRip and Advanced SubStation Alpha subtitles.

Both parsers are pure and return None instead of raising, so they can be
run over arbitrary lines during best-effort scanning.
"""

import re
from typing import Optional

_SRT_TIME = re.compile(r"(\d+):(\d{2}):(\d{2})[,.](\d+)")
_ASS_TIME = re.compile(r"(\d+):(\d{2}):(\d{2}(?:\.\d+)?)")


def parse_srt_timestamp(text: str) -> Optional[float]:
    """
    Parse an SRT timestamp (``H:MM:SS,mmm`` or ``H:MM:SS.mmm``) into seconds.

    The fraction is read as a whole number of milliseconds.
    """
    match = _SRT_TIME.fullmatch(text.strip())
    if not match:
        return None
    h, m, s, ms = match.groups()
    return int(h) * 3600 + int(m) * 60 + int(s) + int(ms) / 1000


def parse_ass_timestamp(text: str) -> Optional[float]:
    """Parse an ASS timestamp (``H:MM:SS.cc``) into seconds."""
    match = _ASS_TIME.fullmatch(text.strip())
    if not match:
        return None
    h, m, s = match.groups()
    return int(h) * 3600 + int(m) * 60 + float(s)


def format_time(seconds: Optional[float]) -> str:
    """Format seconds as H:MM:SS, or M:SS below one hour."""
    if seconds is None or seconds < 0:
        return "0:00"
    h, rem = divmod(int(seconds), 3600)
    m, s = divmod(rem, 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"
