"""
Skip Session — the runtime state and the three entry points the player calls:
toggle, reload and the periodic tick.

All calls arrive on one thread, one at a time, so the session holds no locks.
"""

import logging
from typing import Optional

from .controller import SpeedController
from .decision import decide
from .errors import NoSubtitleError, SubtitleLoadError, SubtitleReadError
from .index import IntervalIndex
from .loader import SubtitleSet, load_subtitle_file
from .messages import Message, StatusDisplay

logger = logging.getLogger(__name__)


class SkipSession:
    """
    Silence skipping for one player.

    Usage:
        session = SkipSession(host, config.skip)
        session.toggle()   # hotkey
        session.tick()     # every check_interval seconds
    """

    def __init__(self, host, config, controller: Optional[SpeedController] = None):
        self.host = host
        self.config = config
        self.display = StatusDisplay(host, config.display_style)
        self.controller = controller or SpeedController(host, config, self.display)

        self.active = False
        self.loaded = False
        self.source_path: Optional[str] = None
        self.subtitle_set = SubtitleSet()
        self.index = IntervalIndex(self.subtitle_set)

    @property
    def silent(self) -> bool:
        return self.controller.silent

    # ── User actions ────────────────────────────────────────────

    def load_subs(self) -> bool:
        """
        (Re)load dialogue intervals from the player's external subtitle file.

        Returns True on success. Every failure is reported on screen and in
        the log, and leaves the session unloaded.
        """
        self.loaded = False
        self.subtitle_set = SubtitleSet()
        self.index = IntervalIndex(self.subtitle_set)

        try:
            path = self._subtitle_path()
            self.source_path = path
            result = load_subtitle_file(path)
        except SubtitleLoadError as e:
            self._report_load_failure(e)
            if self.controller.silent:
                self.controller.restore()
            return False

        self.source_path = result.path
        self.subtitle_set = result.subtitle_set
        self.index = IntervalIndex(self.subtitle_set)
        self.loaded = True

        logger.info(f"Successfully loaded {result.count} subtitle segments")
        self.display.show(Message.LOADED, count=result.count)
        return True

    def toggle(self) -> bool:
        """Switch skipping on or off. Returns the new active state."""
        if self.active:
            self.active = False
            self.controller.restore()
            self.display.show(Message.SKIP_OFF)
            logger.info(
                f"Silence skipping disabled "
                f"({self.controller.excursions} excursions, "
                f"~{self.controller.time_saved:.0f}s saved)"
            )
        elif self.load_subs():
            self.active = True
            self.controller.reset()
            self.display.show(Message.SKIP_ON)
            logger.info("Silence skipping enabled")
        return self.active

    def reload(self) -> bool:
        """Reload the subtitle file without changing the active state."""
        if self.load_subs():
            self.display.show(Message.RELOADED)
            return True
        return False

    # ── Sampling ────────────────────────────────────────────────

    def tick(self) -> None:
        """One sampling step: decide and let the controller act on it."""
        if not (self.active and self.loaded):
            return

        position = self.host.get_position()
        if position is None:
            return
        delay = self.host.get_sub_delay() or 0.0
        position += delay

        next_interval = self.index.find_next(position)
        should_be_silent = decide(position, next_interval, self.config)
        self.controller.update(should_be_silent)

    # ── Internals ───────────────────────────────────────────────

    def _subtitle_path(self) -> str:
        path = self.host.get_external_subtitle()
        if not path:
            path = self.host.get_subtitle_file()
        if not path:
            raise NoSubtitleError("No external subtitle file detected")
        return path

    def _report_load_failure(self, error: SubtitleLoadError):
        if isinstance(error, SubtitleReadError):
            logger.error(f"{error} - check the path and file permissions")
        else:
            logger.warning(str(error))
        self.display.show(error.message)
