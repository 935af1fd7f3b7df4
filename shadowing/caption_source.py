"""
Caption Sources — Common interface for every way of obtaining subtitles.

A source turns a video id into a list of Subtitle objects. Upstream
problems (network, missing files, tool failures, bad payloads) never
escape fetch(): they are logged and reported as an empty list. Only an
invalid video id is raised, since that is a caller error rather than an
unavailable source.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

import requests

from .errors import CaptionTimeout, ParseFailure, SourceUnavailable
from .models import Subtitle
from .srt_parser import parse_srt
from .video_id import validate_video_id

logger = logging.getLogger(__name__)


class CaptionSource(ABC):
    """Base class for caption sources."""

    name = "source"

    def fetch(self, video_id: str) -> List[Subtitle]:
        """
        Fetch and parse subtitles for a video.

        Returns:
            Parsed subtitles, or [] if the source has none.

        Raises:
            InvalidVideoIdError: If video_id is malformed.
        """
        validate_video_id(video_id)
        try:
            subtitles = self._fetch_subtitles(video_id)
        except CaptionTimeout as e:
            logger.warning(f"[{self.name}] {video_id}: timed out ({e})")
            return []
        except SourceUnavailable as e:
            logger.info(f"[{self.name}] {video_id}: no subtitles ({e})")
            return []
        except ParseFailure as e:
            logger.error(f"[{self.name}] {video_id}: unparseable payload ({e})")
            return []
        except (requests.RequestException, subprocess.SubprocessError, OSError) as e:
            logger.warning(f"[{self.name}] {video_id}: transport error ({e})")
            return []

        logger.info(f"[{self.name}] {video_id}: {len(subtitles)} subtitles")
        return subtitles

    @abstractmethod
    def _fetch_subtitles(self, video_id: str) -> List[Subtitle]:
        """
        Source-specific fetch. May raise SourceUnavailable, ParseFailure,
        CaptionTimeout or transport exceptions; fetch() handles them.
        """


class LocalFileSource(CaptionSource):
    """Reads pre-supplied subtitles from <subtitles_dir>/<video_id>.srt."""

    name = "local"

    def __init__(self, subtitles_dir="subtitles"):
        self.subtitles_dir = Path(subtitles_dir)

    def path_for(self, video_id: str) -> Path:
        return self.subtitles_dir / f"{video_id}.srt"

    def _fetch_subtitles(self, video_id: str) -> List[Subtitle]:
        path = self.path_for(video_id)
        try:
            content = path.read_text(encoding="utf-8-sig")
        except FileNotFoundError:
            raise SourceUnavailable(f"{path} not found")
        except UnicodeDecodeError as e:
            raise ParseFailure(f"{path} is not UTF-8: {e}") from e
        return parse_srt(content)
