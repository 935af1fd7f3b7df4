"""
Configuration loader for Shadowing Practice.
Loads from config.yaml and allows CLI argument overrides.
"""

import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

SOURCE_MODES = ("page", "tool")


@dataclass
class SourceConfig:
    mode: str = "tool"              # "page" = scrape watch page, "tool" = yt-dlp
    language: str = "en"
    subtitles_dir: str = "subtitles"
    user_agent: Optional[str] = None  # None = built-in browser UA
    request_timeout: float = 15.0
    tool_path: str = "yt-dlp"
    tool_timeout: float = 30.0
    temp_dir: Optional[str] = None  # None = system temp


@dataclass
class CacheConfig:
    enabled: bool = False  # write remote results back to subtitles_dir


@dataclass
class PlaybackConfig:
    poll_interval: float = 0.1
    repeat_mark_span: float = 10.0


@dataclass
class ASRConfig:
    model: str = "base.en"
    compute_type: str = "int8"
    beam_size: int = 3
    threads: int = 0  # 0 = auto-detect CPU cores
    language: Optional[str] = "en"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""
    source: SourceConfig = field(default_factory=SourceConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    asr: ASRConfig = field(default_factory=ASRConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def source_mode(self) -> str:
        return self.source.mode

    def update_from_args(self, args):
        """Override config values from CLI arguments."""
        if hasattr(args, "mode") and args.mode:
            self.source.mode = args.mode
        if hasattr(args, "subtitles_dir") and args.subtitles_dir:
            self.source.subtitles_dir = str(args.subtitles_dir)
        if hasattr(args, "cache") and args.cache:
            self.cache.enabled = True
        if hasattr(args, "model") and args.model:
            self.asr.model = args.model


def _dict_to_dataclass(cls, data: dict):
    """Recursively convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from a YAML file.
    Falls back to defaults if file is missing.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning(f"Config file not found at {path}, using defaults.")
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig(
        source=_dict_to_dataclass(SourceConfig, raw.get("source")),
        cache=_dict_to_dataclass(CacheConfig, raw.get("cache")),
        playback=_dict_to_dataclass(PlaybackConfig, raw.get("playback")),
        asr=_dict_to_dataclass(ASRConfig, raw.get("asr")),
        logging=_dict_to_dataclass(LoggingConfig, raw.get("logging")),
    )

    if config.source.mode not in SOURCE_MODES:
        logger.warning(
            f"Unknown source mode '{config.source.mode}', falling back to 'tool'."
        )
        config.source.mode = "tool"

    logger.info(f"Configuration loaded from {path}")
    return config
