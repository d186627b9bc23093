"""
Skip Runner — single-threaded scheduler for one mpv connection.

Waits for IPC events no longer than the next tick is due, so hotkey
actions and sampling ticks run one after another on the same thread and
never overlap.
"""

import time
import logging
from typing import Callable, Dict

from .mpv_ipc import MpvCommandError, MpvConnectionClosed, MpvIpcClient
from .session import SkipSession

logger = logging.getLogger(__name__)

TOGGLE_MESSAGE = "skip-silence-toggle"
RELOAD_MESSAGE = "skip-silence-reload"


class SkipRunner:
    """
    Drives a SkipSession from mpv events and a fixed-period timer.

    Usage:
        runner = SkipRunner(client, session, config)
        runner.run()    # returns when mpv quits
    """

    def __init__(
        self,
        client: MpvIpcClient,
        session: SkipSession,
        config,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.session = session
        self.check_interval = config.skip.check_interval
        self.start_enabled = config.skip.start_enabled
        self.keys = config.keys
        self._clock = clock
        self._running = False
        self._next_tick = 0.0
        self._seen_file = False

    def register_keys(self):
        """Bind the hotkeys in mpv to script messages we listen for."""
        bindings = [
            (self.keys.toggle, TOGGLE_MESSAGE),
            (self.keys.reload, RELOAD_MESSAGE),
        ]
        for key, message in bindings:
            try:
                self.client.command("keybind", key, f"script-message {message}")
                logger.info(f"Bound {key} -> {message}")
            except MpvCommandError as e:
                logger.warning(
                    f"Could not bind {key} ({e.error}); add "
                    f"'{key} script-message {message}' to input.conf instead"
                )

    def run(self):
        """Process events and ticks until mpv shuts down."""
        self.register_keys()
        # The first file may have finished loading before we connected.
        # playback-time only exists once it has; path is set earlier.
        if self.client.get_property("playback-time") is not None:
            self._handle_file_loaded()
        self._running = True
        self._next_tick = self._clock()

        try:
            while self._running:
                timeout = max(0.0, self._next_tick - self._clock())
                for event in self.client.poll_events(timeout):
                    self.handle_event(event)
                    if not self._running:
                        break
                self.tick_if_due()
        except MpvConnectionClosed as e:
            logger.info(f"Player connection closed: {e}")
        finally:
            self._running = False

    def stop(self):
        self._running = False

    def tick_if_due(self) -> bool:
        now = self._clock()
        if now < self._next_tick:
            return False
        self.session.tick()
        self._next_tick += self.check_interval
        if self._next_tick <= now:
            # Fell behind (e.g. a blocking subtitle read); don't burst.
            self._next_tick = now + self.check_interval
        return True

    def handle_event(self, event: Dict):
        name = event.get("event")
        if name == "client-message":
            self._handle_client_message(event.get("args") or [])
        elif name == "file-loaded":
            self._handle_file_loaded()
        elif name == "shutdown":
            logger.info("mpv is shutting down")
            self.stop()
        else:
            logger.debug(f"Ignoring mpv event: {name}")

    def _handle_client_message(self, args):
        if not args:
            return
        if args[0] == TOGGLE_MESSAGE:
            self.session.toggle()
        elif args[0] == RELOAD_MESSAGE:
            self.session.reload()

    def _handle_file_loaded(self):
        if self.session.active:
            self._seen_file = True
            logger.info("New file loaded, reloading subtitles")
            self.session.reload()
        elif self.start_enabled and not self._seen_file:
            logger.info("start_enabled is set, enabling silence skipping")
            # Retry on the next file-loaded if the subtitles were not ready.
            self._seen_file = bool(self.session.toggle())
        else:
            self._seen_file = True
