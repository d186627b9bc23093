"""
mpv JSON IPC client.

Talks to mpv's ``--input-ipc-server`` UNIX socket: one JSON object per line,
replies matched by ``request_id``. Events that arrive while a reply is
awaited are queued and handed out by poll_events(), so commands and events
can share one thread.
"""

import json
import time
import select
import socket
import logging
from collections import deque
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

PROPERTY_UNAVAILABLE = "property unavailable"


class MpvIpcError(RuntimeError):
    pass


class MpvConnectionClosed(MpvIpcError):
    """The player closed the IPC socket (usually: mpv quit)."""
    pass


class MpvCommandError(MpvIpcError):
    """mpv answered a command with an error status."""

    def __init__(self, command, error: str):
        super().__init__(f"mpv command {command!r} failed: {error}")
        self.command = command
        self.error = error


class MpvIpcClient:
    """
    Synchronous client for one mpv IPC connection.

    Usage:
        client = MpvIpcClient.connect("/tmp/mpv.sock")
        speed = client.get_property("speed")
        client.set_property("speed", 2.0)
        for event in client.poll_events(timeout=0.1):
            ...
    """

    def __init__(self, sock: socket.socket, reply_timeout: float = 5.0):
        self._sock = sock
        self._buffer = b""
        self._events: deque = deque()
        self._pending: deque = deque()
        self._next_request_id = 1
        self.reply_timeout = reply_timeout

    @classmethod
    def connect(cls, path: str, timeout: float = 10.0) -> "MpvIpcClient":
        """
        Connect to an mpv IPC socket, retrying until mpv has created it.

        Raises:
            MpvIpcError: if the socket did not accept a connection in time.
        """
        deadline = time.monotonic() + timeout
        last_error = None
        while True:
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.connect(path)
            except OSError as e:
                sock.close()
                last_error = e
                if time.monotonic() >= deadline:
                    raise MpvIpcError(
                        f"Could not connect to mpv IPC socket {path}: {last_error}"
                    ) from e
                time.sleep(0.1)
                continue
            logger.info(f"Connected to mpv IPC socket: {path}")
            return cls(sock)

    def close(self):
        try:
            self._sock.close()
        except OSError as e:
            logger.debug(f"Error closing IPC socket: {e}")

    # ── Commands ────────────────────────────────────────────────

    def command(self, *args) -> Any:
        """Run an mpv input command and return its ``data`` field."""
        return self._request(list(args))

    def get_property(self, name: str) -> Any:
        """Return a property value, or None if mpv reports it unavailable."""
        try:
            return self._request(["get_property", name])
        except MpvCommandError as e:
            if e.error == PROPERTY_UNAVAILABLE:
                return None
            raise

    def set_property(self, name: str, value) -> None:
        self._request(["set_property", name, value])

    def _request(self, command: List) -> Any:
        request_id = self._next_request_id
        self._next_request_id += 1
        payload = json.dumps({"command": command, "request_id": request_id}) + "\n"
        try:
            self._sock.sendall(payload.encode("utf-8"))
        except OSError as e:
            raise MpvConnectionClosed(f"IPC write failed: {e}") from e

        deadline = time.monotonic() + self.reply_timeout
        while True:
            if not self._pending:
                self._read_messages(max(0.0, deadline - time.monotonic()))
            # Take one message at a time; anything after our reply stays queued.
            while self._pending:
                message = self._pending.popleft()
                if "event" in message:
                    self._events.append(message)
                elif message.get("request_id") == request_id:
                    error = message.get("error", "success")
                    if error != "success":
                        raise MpvCommandError(command, error)
                    return message.get("data")
                else:
                    logger.debug(f"Dropping unmatched IPC reply: {message}")
            if time.monotonic() >= deadline:
                raise MpvIpcError(f"Timed out waiting for reply to {command!r}")

    # ── Events ──────────────────────────────────────────────────

    def poll_events(self, timeout: float = 0.0) -> List[Dict]:
        """
        Return queued events, waiting up to ``timeout`` seconds for new ones.
        """
        if not self._events and not self._pending:
            self._read_messages(timeout)
        while self._pending:
            message = self._pending.popleft()
            if "event" in message:
                self._events.append(message)
            else:
                logger.debug(f"Dropping unmatched IPC reply: {message}")
        events = list(self._events)
        self._events.clear()
        return events

    # ── Wire ────────────────────────────────────────────────────

    def _read_messages(self, timeout: float) -> None:
        """
        Read whatever arrives within ``timeout`` and queue every complete
        line as a decoded message in ``_pending``.
        """
        if b"\n" not in self._buffer:
            ready, _, _ = select.select([self._sock], [], [], timeout)
            if ready:
                try:
                    chunk = self._sock.recv(65536)
                except OSError as e:
                    raise MpvConnectionClosed(f"IPC read failed: {e}") from e
                if not chunk:
                    raise MpvConnectionClosed("mpv closed the IPC connection")
                self._buffer += chunk

        while b"\n" in self._buffer:
            line, self._buffer = self._buffer.split(b"\n", 1)
            if not line.strip():
                continue
            try:
                self._pending.append(json.loads(line.decode("utf-8", errors="replace")))
            except json.JSONDecodeError:
                logger.warning(f"Ignoring malformed IPC line: {line[:200]!r}")
