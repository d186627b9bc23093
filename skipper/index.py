"""
Interval Index — "which dialogue line comes next?" lookups, run every tick.
"""

import logging
from typing import Optional

from .loader import DialogueInterval, SubtitleSet

logger = logging.getLogger(__name__)


def find_next(subtitle_set: SubtitleSet, position: float) -> Optional[DialogueInterval]:
    """Return the first interval whose end is at or after ``position``."""
    for interval in subtitle_set:
        if interval.end >= position:
            return interval
    return None


class IntervalIndex:
    """
    find_next() with a forward-only cursor.

    Playback position only grows between seeks, and every interval skipped
    for an earlier position ended before it, so the scan can resume where
    the previous answer was found. A backward seek restarts from the top.
    """

    def __init__(self, subtitle_set: SubtitleSet):
        self.subtitle_set = subtitle_set
        self._cursor = 0
        self._last_position = float("-inf")

    def __len__(self) -> int:
        return len(self.subtitle_set)

    def find_next(self, position: float) -> Optional[DialogueInterval]:
        if position < self._last_position:
            logger.debug(f"Seek back to {position:.2f}s, resetting index cursor")
            self._cursor = 0
        self._last_position = position

        for i in range(self._cursor, len(self.subtitle_set)):
            interval = self.subtitle_set[i]
            if interval.end >= position:
                self._cursor = i
                return interval

        self._cursor = len(self.subtitle_set)
        return None
