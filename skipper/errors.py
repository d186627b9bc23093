"""
Subtitle load failures.

Each error carries the status message shown to the user when it ends a
load attempt. None of them are fatal: the session catches them and stays
dormant until the next toggle or reload.
"""

from typing import Optional

from .messages import Message


class SubtitleLoadError(Exception):
    """Base class for every reason a subtitle file could not be used."""
    message = Message.READ_ERROR

    def __init__(self, detail: str, path: Optional[str] = None):
        super().__init__(detail)
        self.path = path


class NoSubtitleError(SubtitleLoadError):
    """The player reports no external subtitle file."""
    message = Message.NO_EXTERNAL_SUBS


class SubtitleReadError(SubtitleLoadError):
    """The path resolved but the file contents could not be read."""
    message = Message.READ_ERROR


class UnsupportedFormatError(SubtitleLoadError):
    """The file extension is neither .srt nor .ass."""
    message = Message.UNSUPPORTED_FORMAT


class NoTimingsError(SubtitleLoadError):
    """The file was read but no dialogue interval could be parsed."""
    message = Message.NO_TIMINGS
