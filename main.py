"""
Subtitle Silence Skipper — CLI Entry Point

Usage:
    python main.py video.mkv
    python main.py video.mkv --sub-file video.en.srt --enable
    python main.py --attach /tmp/mpvsocket
"""

import sys
import argparse
import logging
from pathlib import Path

from config import load_config
from skipper.host import MpvHost
from skipper.mpv_ipc import MpvIpcClient, MpvIpcError
from skipper.player import default_ipc_path, launch_mpv, stop_player
from skipper.runner import SkipRunner
from skipper.session import SkipSession


def setup_logging(level: str = "INFO", log_file: str = None):
    """Configure logging for the application."""
    log_format = (
        "%(asctime)s | %(levelname)-7s | %(name)-20s | %(message)s"
    )
    date_format = "%H:%M:%S"

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        datefmt=date_format,
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Subtitle Silence Skipper — speed up mpv playback wherever "
                    "the external subtitles show no dialogue.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py movie.mkv                       # Launch mpv, press F2 to start
  python main.py movie.mkv --sub-file movie.srt  # Use a specific subtitle file
  python main.py movie.mkv --enable              # Start skipping right away
  python main.py --attach /tmp/mpvsocket         # Control an mpv started with
                                                 #   --input-ipc-server=/tmp/mpvsocket
        """
    )

    parser.add_argument(
        "video",
        type=Path,
        nargs="?",
        help="Video file to open in mpv"
    )
    parser.add_argument(
        "-s", "--sub-file",
        type=Path,
        default=None,
        help="External subtitle file (.srt or .ass) to load with the video"
    )
    parser.add_argument(
        "--attach",
        metavar="SOCKET",
        default=None,
        help="Attach to a running mpv via its IPC socket instead of launching one"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to custom config.yaml file"
    )
    parser.add_argument(
        "--enable",
        action="store_true",
        help="Enable silence skipping as soon as the video is loaded"
    )
    parser.add_argument(
        "--speed-multiplier",
        type=float,
        default=None,
        help="Speed multiplier during silence (default: from config.yaml, usually 6)"
    )
    parser.add_argument(
        "--speed-max",
        type=float,
        default=None,
        help="Maximum playback speed (default: from config.yaml, usually 6)"
    )
    parser.add_argument(
        "--mpv",
        default=None,
        help="mpv executable to launch (default: 'mpv' on PATH)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors"
    )
    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.video and not args.attach:
        parser.print_help()
        sys.exit(1)

    # ── Load config ──
    try:
        config = load_config(args.config)
        config.update_from_args(args)
    except ValueError as e:
        print(f"Error: invalid configuration: {e}")
        sys.exit(1)

    # ── Setup logging ──
    log_level = "DEBUG" if args.verbose else ("WARNING" if args.quiet else config.log_level)
    setup_logging(level=log_level, log_file=config.logging.file)

    process = None
    client = None
    try:
        if args.attach:
            ipc_path = args.attach
        else:
            ipc_path = config.player.ipc_socket or default_ipc_path()
            process = launch_mpv(
                args.video, ipc_path,
                sub_file=args.sub_file,
                executable=config.player.executable,
            )

        client = MpvIpcClient.connect(ipc_path, timeout=config.player.connect_timeout)
        host = MpvHost(client, osd_duration_ms=config.player.osd_duration_ms)
        session = SkipSession(host, config.skip)
        runner = SkipRunner(client, session, config)

        if not args.quiet:
            print(f"  Skip-Silence attached to mpv ({ipc_path})")
            print(f"  {config.keys.toggle}: toggle skipping | "
                  f"{config.keys.reload}: reload subtitles")

        runner.run()

    except KeyboardInterrupt:
        print("\n\n  [WARN] Interrupted by user.")
        sys.exit(130)
    except FileNotFoundError as e:
        print(f"\n  [ERROR] File error: {e}")
        sys.exit(1)
    except MpvIpcError as e:
        print(f"\n  [ERROR] mpv IPC error: {e}")
        sys.exit(1)
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"\n  [ERROR] Unexpected error: {e}")
        sys.exit(1)
    finally:
        if client:
            client.close()
        if process and process.poll() is None:
            stop_player(process)


if __name__ == "__main__":
    main()
