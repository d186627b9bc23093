"""
Subtitle Interval Loader — turns an external subtitle file into dialogue intervals.

Supports SubRip (.srt) and Advanced SubStation Alpha (.ass). Lines that do
not parse are skipped; only a file with no usable timing at all is treated
as a failed load.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional
from urllib.parse import unquote

from .errors import NoTimingsError, SubtitleReadError, UnsupportedFormatError
from .timestamps import parse_ass_timestamp, parse_srt_timestamp

logger = logging.getLogger(__name__)

_SRT_CUE_LINE = re.compile(r"([\d:,.]+)\s*-->\s*([\d:,.]+)")
_WINDOWS_DRIVE = re.compile(r"^/[A-Za-z]:")


class SubtitleFormat(Enum):
    SRT = ".srt"
    ASS = ".ass"


@dataclass(frozen=True)
class DialogueInterval:
    """A span of time during which a subtitle line is on screen."""
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def contains(self, position: float) -> bool:
        return self.start <= position <= self.end

    def __repr__(self):
        return f"Dialogue({self.start:.2f}–{self.end:.2f}s)"


class SubtitleSet:
    """
    Immutable sequence of dialogue intervals sorted ascending by start.

    A new set is built on every load; an existing set is never modified.
    """

    def __init__(self, intervals: Iterable[DialogueInterval] = ()):
        self._intervals = tuple(sorted(intervals, key=lambda iv: iv.start))

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[DialogueInterval]:
        return iter(self._intervals)

    def __getitem__(self, i: int) -> DialogueInterval:
        return self._intervals[i]

    def __eq__(self, other):
        if not isinstance(other, SubtitleSet):
            return NotImplemented
        return self._intervals == other._intervals

    def __repr__(self):
        return f"SubtitleSet({len(self)} intervals)"


@dataclass
class LoadResult:
    path: str
    format: SubtitleFormat
    subtitle_set: SubtitleSet

    @property
    def count(self) -> int:
        return len(self.subtitle_set)


# ── Path handling ───────────────────────────────────────────────


def clean_path(path: str) -> str:
    """
    Normalise a subtitle path reported by the player.

    Strips a ``file://`` scheme, turns ``/C:/...`` into ``C:/...`` and
    decodes percent escapes (``%20`` -> space).
    """
    if path.startswith("file://"):
        path = path[len("file://"):]
        if _WINDOWS_DRIVE.match(path):
            path = path[1:]
    return unquote(path)


def detect_format(path: str) -> SubtitleFormat:
    """Pick the subtitle format from the file extension."""
    suffix = Path(path).suffix.lower()
    for fmt in SubtitleFormat:
        if suffix == fmt.value:
            return fmt
    raise UnsupportedFormatError(
        f"Unsupported subtitle format '{suffix or path}' (only .srt and .ass)",
        path=path,
    )


def read_subtitle_text(path: str) -> str:
    """Read the whole subtitle file. Blocking, no timeout."""
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise SubtitleReadError(f"Could not read subtitle file {path}: {e}", path=path) from e
    return raw.decode("utf-8-sig", errors="replace")


# ── Parsing ─────────────────────────────────────────────────────


def _parse_srt_line(line: str) -> Optional[DialogueInterval]:
    match = _SRT_CUE_LINE.search(line)
    if not match:
        return None
    start = parse_srt_timestamp(match.group(1))
    end = parse_srt_timestamp(match.group(2))
    if start is None or end is None or end < start:
        return None
    return DialogueInterval(start, end)


def _parse_ass_dialogue(line: str) -> Optional[DialogueInterval]:
    # Dialogue: Layer,Start,End,Style,Name,MarginL,MarginR,MarginV,Effect,Text
    fields = line.split(",", 3)
    if len(fields) < 3:
        return None
    start = parse_ass_timestamp(fields[1])
    end = parse_ass_timestamp(fields[2])
    if start is None or end is None or end < start:
        return None
    return DialogueInterval(start, end)


def _scan_srt(lines: List[str]) -> Iterator[Optional[DialogueInterval]]:
    for line in lines:
        yield _parse_srt_line(line)


def _scan_ass(lines: List[str]) -> Iterator[Optional[DialogueInterval]]:
    in_events = False
    for line in lines:
        stripped = line.lstrip()
        if stripped.lower().startswith("[events]"):
            in_events = True
        elif in_events and stripped.startswith("Dialogue:"):
            yield _parse_ass_dialogue(stripped)


def parse_intervals(text: str, fmt: SubtitleFormat) -> SubtitleSet:
    """Extract every parseable dialogue interval from subtitle text."""
    lines = text.splitlines()
    scan = _scan_srt if fmt is SubtitleFormat.SRT else _scan_ass
    intervals = [iv for iv in scan(lines) if iv is not None]
    return SubtitleSet(intervals)


def load_subtitle_file(path: str) -> LoadResult:
    """
    Load dialogue intervals from an external subtitle file.

    Args:
        path: Path as reported by the player (may be a file:// URI).

    Returns:
        LoadResult with a non-empty SubtitleSet.

    Raises:
        UnsupportedFormatError: extension is not .srt/.ass (file is not read).
        SubtitleReadError: the file could not be read.
        NoTimingsError: the file contains no parseable timing line.
    """
    clean = clean_path(path)
    fmt = detect_format(clean)

    logger.info(f"Reading subtitle file: {clean}")
    text = read_subtitle_text(clean)
    subtitle_set = parse_intervals(text, fmt)

    if not subtitle_set:
        raise NoTimingsError(f"No subtitle timings found in {clean}", path=clean)

    logger.debug(
        f"Parsed {len(subtitle_set)} {fmt.name} intervals "
        f"({subtitle_set[0].start:.2f}s – {subtitle_set[-1].end:.2f}s)"
    )
    return LoadResult(path=clean, format=fmt, subtitle_set=subtitle_set)
