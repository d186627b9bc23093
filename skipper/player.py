"""
mpv launcher — starts mpv with a JSON IPC server the skipper can attach to.
"""

import os
import subprocess
import shutil
import logging
import sys
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def find_mpv(executable: str = "mpv") -> Optional[str]:
    """Find the mpv executable, either as given or on PATH."""
    if Path(executable).is_file():
        return str(executable)
    found = shutil.which(executable)
    if found:
        return found

    # Common install locations not always on PATH
    if sys.platform == "darwin":
        for p in ["/opt/homebrew/bin/mpv", "/usr/local/bin/mpv",
                  "/Applications/mpv.app/Contents/MacOS/mpv"]:
            if Path(p).exists():
                return p
    elif sys.platform.startswith("linux"):
        for p in ["/usr/bin/mpv", "/snap/bin/mpv"]:
            if Path(p).exists():
                return p

    return None


def default_ipc_path() -> str:
    """Per-process socket path in the temp directory."""
    return str(Path(tempfile.gettempdir()) / f"skip-silence-{os.getpid()}.sock")


def launch_mpv(
    video_path: Path,
    ipc_path: str,
    sub_file: Optional[Path] = None,
    executable: str = "mpv",
) -> subprocess.Popen:
    """
    Launch mpv on ``video_path`` with an IPC server at ``ipc_path``.

    Raises:
        FileNotFoundError: if the video, the subtitle file or mpv is missing.
    """
    video_path = Path(video_path).resolve()
    if not video_path.exists():
        raise FileNotFoundError(f"Video file not found: {video_path}")

    mpv_exe = find_mpv(executable)
    if not mpv_exe:
        raise FileNotFoundError(f"mpv not found (looked for '{executable}')")

    cmd = [
        mpv_exe,
        str(video_path),
        f"--input-ipc-server={ipc_path}",
    ]
    if sub_file:
        sub_file = Path(sub_file).resolve()
        if not sub_file.exists():
            raise FileNotFoundError(f"Subtitle file not found: {sub_file}")
        cmd.append(f"--sub-file={sub_file}")

    logger.info(f"Launching mpv: {' '.join(cmd)}")
    return subprocess.Popen(cmd)


def stop_player(process: Optional[subprocess.Popen]):
    """Gracefully stop a player process we started."""
    if process and process.poll() is None:
        try:
            process.terminate()
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()
