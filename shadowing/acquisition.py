"""
Subtitle Acquisition — Picks the first source that has subtitles.

Order:
  1. Local .srt file (authoritative and cheapest)
  2. Remote source for the deployment mode:
       "page" → PageScraperSource
       "tool" → YtDlpSource

Only one remote source is active per configuration. The result is
always a list; an empty list means "no subtitles", never an error.
"""

import logging
import time
from typing import List, Optional

from .caption_source import CaptionSource, LocalFileSource
from .errors import InvalidVideoIdError
from .models import Subtitle
from .page_scraper import PageScraperSource
from .srt_writer import SRTWriter
from .video_id import validate_video_id
from .ytdlp_source import YtDlpSource

logger = logging.getLogger(__name__)


def build_remote_source(config) -> CaptionSource:
    """Create the remote source selected by config.source.mode."""
    source_cfg = config.source
    if source_cfg.mode == "page":
        return PageScraperSource(
            language=source_cfg.language,
            timeout=source_cfg.request_timeout,
            user_agent=source_cfg.user_agent,
        )
    return YtDlpSource(
        language=source_cfg.language,
        timeout=source_cfg.tool_timeout,
        tool_path=source_cfg.tool_path,
        temp_dir=source_cfg.temp_dir,
    )


class SubtitleAcquirer:
    """
    Runs the local → remote fallback chain.

    Usage:
        config = load_config()
        acquirer = SubtitleAcquirer(config)
        subtitles = acquirer.acquire("dQw4w9WgXcQ")
    """

    def __init__(self, config, local: Optional[CaptionSource] = None,
                 remote: Optional[CaptionSource] = None):
        self.config = config
        self.local = local or LocalFileSource(config.source.subtitles_dir)
        self.remote = remote or build_remote_source(config)
        self.writer = SRTWriter()
        self.cache_enabled = getattr(config.cache, "enabled", False)

    def acquire(self, video_id: str) -> List[Subtitle]:
        """
        Get subtitles for a video.

        Returns:
            Subtitles from the first source that has any, else [].
        """
        try:
            validate_video_id(video_id)
        except InvalidVideoIdError as e:
            logger.warning(f"Rejected request: {e}")
            return []

        start_time = time.monotonic()

        subtitles = self._try(self.local, video_id)
        if subtitles:
            logger.info(
                f"Using local subtitles for {video_id} ({len(subtitles)} entries)"
            )
            return subtitles

        subtitles = self._try(self.remote, video_id)
        elapsed = time.monotonic() - start_time

        if not subtitles:
            logger.info(f"No subtitles available for {video_id} ({elapsed:.1f}s)")
            return []

        logger.info(
            f"Fetched {len(subtitles)} subtitles for {video_id} "
            f"via {self.remote.name} ({elapsed:.1f}s)"
        )
        if self.cache_enabled:
            self._save_local(video_id, subtitles)
        return subtitles

    @staticmethod
    def _try(source: CaptionSource, video_id: str) -> List[Subtitle]:
        try:
            return source.fetch(video_id)
        except Exception as e:
            # Last line of defence: acquisition never raises
            logger.exception(f"[{source.name}] unexpected error for {video_id}: {e}")
            return []

    def _save_local(self, video_id: str, subtitles: List[Subtitle]):
        """Write remote results where LocalFileSource will find them."""
        path_for = getattr(self.local, "path_for", None)
        if path_for is None:
            return
        try:
            self.writer.write(subtitles, path_for(video_id))
        except OSError as e:
            logger.warning(f"Could not cache subtitles for {video_id}: {e}")


def acquire_subtitles(video_id: str, config=None) -> List[Subtitle]:
    """One-shot acquisition with the given (or default) configuration."""
    if config is None:
        from config import load_config
        config = load_config()
    return SubtitleAcquirer(config).acquire(video_id)
