"""
Configuration loader for the Subtitle Silence Skipper.
Loads from config.yaml and allows CLI argument overrides.
"""

import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

DISPLAY_STYLES = ("compact", "off")


@dataclass
class SkipConfig:
    silence_speed_multiplier: float = 6.0
    speed_max: float = 6.0
    min_silence_duration: float = 2.0
    margin_before: float = 0.5
    margin_after: float = 0.5  # reserved, not used by the decision policy
    check_interval: float = 0.1
    display_style: str = "compact"
    start_enabled: bool = False
    debug_logging: bool = False

    def validate(self):
        """Raise ValueError on out-of-range options."""
        if self.silence_speed_multiplier < 1:
            raise ValueError(
                f"silence_speed_multiplier must be >= 1, got {self.silence_speed_multiplier}"
            )
        if self.speed_max <= 0:
            raise ValueError(f"speed_max must be > 0, got {self.speed_max}")
        if self.check_interval <= 0:
            raise ValueError(f"check_interval must be > 0, got {self.check_interval}")
        for name in ("min_silence_duration", "margin_before", "margin_after"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.display_style not in DISPLAY_STYLES:
            raise ValueError(
                f"display_style must be one of {DISPLAY_STYLES}, got {self.display_style!r}"
            )


@dataclass
class KeysConfig:
    toggle: str = "F2"
    reload: str = "F5"


@dataclass
class PlayerConfig:
    executable: str = "mpv"
    ipc_socket: Optional[str] = None  # None = generated path in the temp dir
    osd_duration_ms: int = 1500
    connect_timeout: float = 10.0


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""
    skip: SkipConfig = field(default_factory=SkipConfig)
    keys: KeysConfig = field(default_factory=KeysConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.skip.debug_logging else self.logging.level

    def update_from_args(self, args):
        """Override config values from CLI arguments."""
        if getattr(args, "enable", False):
            self.skip.start_enabled = True
        if getattr(args, "speed_multiplier", None):
            self.skip.silence_speed_multiplier = args.speed_multiplier
        if getattr(args, "speed_max", None):
            self.skip.speed_max = args.speed_max
        if getattr(args, "mpv", None):
            self.player.executable = args.mpv
        self.skip.validate()


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    unknown = set(data) - field_names
    if unknown:
        logger.warning(f"Ignoring unknown {cls.__name__} keys: {sorted(unknown)}")
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from a YAML file.
    Falls back to defaults if file is missing.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning(f"Config file not found at {path}, using defaults.")
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig(
        skip=_dict_to_dataclass(SkipConfig, raw.get("skip")),
        keys=_dict_to_dataclass(KeysConfig, raw.get("keys")),
        player=_dict_to_dataclass(PlayerConfig, raw.get("player")),
        logging=_dict_to_dataclass(LoggingConfig, raw.get("logging")),
    )
    config.skip.validate()

    logger.info(f"Configuration loaded from {path}")
    return config
