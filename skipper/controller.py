"""
Playback Speed Controller — Normal/Silent state machine.

Writes the player speed only on a state transition, so a user's manual
speed change during normal playback is left alone and becomes the new
baseline for the next silence excursion.
"""

import time
import logging
from enum import Enum
from typing import Callable, Optional

from .messages import Message, StatusDisplay
from .timestamps import format_time

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    NORMAL = "normal"
    SILENT = "silent"


class SpeedController:
    """
    Tracks whether playback is in a silence excursion and drives the speed.

    Usage:
        controller = SpeedController(host, config.skip, display)
        controller.reset()              # on activation
        controller.update(should_skip)  # every tick
        controller.restore()            # on deactivation
    """

    def __init__(
        self,
        host,
        config,
        display: StatusDisplay,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.host = host
        self.config = config
        self.display = display
        self._clock = clock

        self.state = PlaybackState.NORMAL
        self.baseline_speed = 1.0
        self.target_speed: Optional[float] = None
        self.silence_started_at: Optional[float] = None

        # Diagnostics only
        self.excursions = 0
        self.time_saved = 0.0

    @property
    def silent(self) -> bool:
        return self.state is PlaybackState.SILENT

    def reset(self):
        """Start from Normal with the host's current speed as baseline."""
        speed = self.host.get_speed()
        self.baseline_speed = speed if speed is not None else 1.0
        self.state = PlaybackState.NORMAL
        self.target_speed = None
        self.silence_started_at = None
        logger.debug(f"Controller reset, baseline speed {self.baseline_speed}")

    def update(self, should_be_silent: bool) -> bool:
        """
        Apply one decision. Returns True if a transition happened.
        """
        if should_be_silent and not self.silent:
            return self._enter_silence()
        if not should_be_silent and self.silent:
            self._exit_silence()
            return True
        return False

    def restore(self):
        """Leave a silence excursion immediately, whatever the decision is."""
        if self.silent:
            self._exit_silence(show=False)

    def _enter_silence(self) -> bool:
        speed = self.host.get_speed()
        if speed is None:
            logger.debug("Speed unavailable, skipping transition")
            return False

        self.baseline_speed = speed
        target = min(speed * self.config.silence_speed_multiplier, self.config.speed_max)
        self.host.set_speed(target)
        self.target_speed = target
        self.state = PlaybackState.SILENT
        self.silence_started_at = self._clock()
        self.excursions += 1

        logger.debug(f"Entering silence: speed {speed} -> {target}")
        self.display.show(Message.SKIPPING)
        return True

    def _exit_silence(self, show: bool = True):
        self.host.set_speed(self.baseline_speed)
        self.state = PlaybackState.NORMAL
        self._account_excursion()

        logger.debug(f"Leaving silence: speed -> {self.baseline_speed}")
        if show:
            self.display.show(Message.NORMAL)

    def _account_excursion(self):
        if self.silence_started_at is None or not self.target_speed or self.baseline_speed <= 0:
            return
        elapsed = max(0.0, self._clock() - self.silence_started_at)
        saved = elapsed * (self.target_speed / self.baseline_speed - 1)
        self.time_saved += saved
        logger.debug(
            f"Silence lasted {elapsed:.1f}s at {self.target_speed}x, "
            f"saved {saved:.1f}s (total {format_time(self.time_saved)})"
        )
        self.silence_started_at = None
        self.target_speed = None
