"""
On-screen status messages.

The "compact" display style shows the short strings below; "off" hides
every message. Log output is unaffected by the display style.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Message(Enum):
    LOADED = "Skip-Silence: Loaded {count} segments"
    NO_EXTERNAL_SUBS = "Skip-Silence: No external subs found"
    READ_ERROR = "Skip-Silence: Error reading subtitle file"
    UNSUPPORTED_FORMAT = "Skip-Silence: Unsupported subtitle format"
    NO_TIMINGS = "Skip-Silence: No subtitle timings found"
    SKIP_ON = "Skip-Silence: ON"
    SKIP_OFF = "Skip-Silence: OFF"
    SKIPPING = "⏩ Skipping silence"
    NORMAL = "▶ Normal speed"
    RELOADED = "Skip-Silence: Subtitles reloaded"


class StatusDisplay:
    """Sends status messages to the player's OSD according to the display style."""

    def __init__(self, host, style: str = "compact"):
        self.host = host
        self.style = style

    @property
    def enabled(self) -> bool:
        return self.style != "off"

    def show(self, message: Message, **values) -> None:
        if not self.enabled:
            return
        text = message.value.format(**values)
        logger.debug(f"OSD: {text}")
        self.host.show_message(text)
