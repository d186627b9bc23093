"""
Player host — the properties the skipper reads from and writes to the player.

PlayerHost is the seam between the skipping logic and a concrete player.
MpvHost maps it onto mpv properties over the JSON IPC connection.
"""

from typing import Optional

from .mpv_ipc import MpvIpcClient


class PlayerHost:
    """Interface of the media player as seen by the session."""

    def get_position(self) -> Optional[float]:
        raise NotImplementedError

    def get_sub_delay(self) -> Optional[float]:
        raise NotImplementedError

    def get_speed(self) -> Optional[float]:
        raise NotImplementedError

    def set_speed(self, speed: float) -> None:
        raise NotImplementedError

    def get_external_subtitle(self) -> Optional[str]:
        """Filename of the currently selected external subtitle track."""
        raise NotImplementedError

    def get_subtitle_file(self) -> Optional[str]:
        """Subtitle file given to the player on the command line."""
        raise NotImplementedError

    def show_message(self, text: str) -> None:
        raise NotImplementedError


def _as_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class MpvHost(PlayerHost):
    """PlayerHost backed by an mpv IPC connection."""

    def __init__(self, client: MpvIpcClient, osd_duration_ms: int = 1500):
        self.client = client
        self.osd_duration_ms = osd_duration_ms

    def get_position(self) -> Optional[float]:
        return _as_float(self.client.get_property("playback-time"))

    def get_sub_delay(self) -> Optional[float]:
        return _as_float(self.client.get_property("sub-delay"))

    def get_speed(self) -> Optional[float]:
        return _as_float(self.client.get_property("speed"))

    def set_speed(self, speed: float) -> None:
        self.client.set_property("speed", speed)

    def get_external_subtitle(self) -> Optional[str]:
        return self.client.get_property("current-tracks/sub/external-filename") or None

    def get_subtitle_file(self) -> Optional[str]:
        value = self.client.get_property("sub-files")
        if isinstance(value, list):
            value = value[0] if value else None
        return value or None

    def show_message(self, text: str) -> None:
        self.client.command("show-text", text, self.osd_duration_ms)
