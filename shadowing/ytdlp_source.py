"""
yt-dlp Source — Captions extracted by the external yt-dlp tool.

Runs yt-dlp with --skip-download to write manual or auto-generated
WebVTT captions to a unique temp path, then parses whichever of the
expected output files appeared. The temp files are always removed.

The video id is validated before the command line is built. It is the
only caller-supplied value that reaches the process.
"""

import logging
import subprocess
import tempfile
import uuid
from pathlib import Path
from typing import List, Optional

from .caption_source import CaptionSource
from .errors import CaptionTimeout, ParseFailure, SourceUnavailable
from .models import Subtitle
from .video_id import validate_video_id
from .vtt_parser import parse_vtt

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class YtDlpSource(CaptionSource):
    """Fetches captions by invoking yt-dlp as a subprocess."""

    name = "yt-dlp"

    def __init__(self, language: str = "en", timeout: float = 30.0,
                 tool_path: str = "yt-dlp", temp_dir: Optional[str] = None):
        self.language = language
        self.timeout = timeout
        self.tool_path = tool_path
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())

    def candidate_suffixes(self) -> List[str]:
        """Output files yt-dlp may produce, in preference order."""
        return [f".{self.language}.vtt", f".{self.language}-orig.vtt"]

    def build_command(self, video_id: str, output_base: Path) -> List[str]:
        validate_video_id(video_id)
        return [
            self.tool_path,
            "--skip-download",
            "--write-sub",
            "--write-auto-sub",
            "--sub-lang", f"{self.language},{self.language}-orig",
            "--sub-format", "vtt",
            "--no-playlist",
            "--quiet", "--no-warnings",
            "-o", str(output_base),
            WATCH_URL.format(video_id=video_id),
        ]

    def _fetch_subtitles(self, video_id: str) -> List[Subtitle]:
        output_base = self.temp_dir / f"shadowing_{video_id}_{uuid.uuid4().hex[:8]}"
        candidates = [
            Path(f"{output_base}{suffix}") for suffix in self.candidate_suffixes()
        ]
        cmd = self.build_command(video_id, output_base)

        try:
            self._run(cmd)
            found = next((p for p in candidates if p.exists()), None)
            if found is None:
                raise SourceUnavailable("yt-dlp wrote no caption file")

            logger.debug(f"Reading captions: {found.name}")
            try:
                content = found.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise ParseFailure(f"{found.name} is not UTF-8: {e}") from e
            return parse_vtt(content)
        finally:
            self._cleanup(candidates)

    def _run(self, cmd: List[str]) -> None:
        """Run yt-dlp. A non-zero exit is logged, not raised."""
        logger.debug(f"yt-dlp command: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise CaptionTimeout(f"yt-dlp exceeded {self.timeout:.0f}s") from e
        except FileNotFoundError as e:
            raise SourceUnavailable(f"yt-dlp not found at '{self.tool_path}'") from e

        if result.returncode != 0:
            logger.debug(
                f"yt-dlp exited with {result.returncode}: "
                f"{(result.stderr or '').strip()[:300]}"
            )

    @staticmethod
    def _cleanup(paths: List[Path]):
        """Remove any caption files left behind."""
        for path in paths:
            try:
                path.unlink()
                logger.debug(f"Cleaned up temp captions: {path}")
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove temp file {path}: {e}")
