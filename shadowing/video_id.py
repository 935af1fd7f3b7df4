"""
Video identifier validation.

A YouTube video id is exactly 11 characters from [A-Za-z0-9_-]. The id is
interpolated into URLs and into the yt-dlp command line, so every entry
point validates it before doing any I/O.
"""

import re
from typing import Optional

from .errors import InvalidVideoIdError

VIDEO_ID_RE = re.compile(r"[A-Za-z0-9_-]{11}")

_URL_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/embed/)([A-Za-z0-9_-]{11})"),
    re.compile(r"^([A-Za-z0-9_-]{11})\Z"),
]


def is_valid_video_id(video_id) -> bool:
    return isinstance(video_id, str) and VIDEO_ID_RE.fullmatch(video_id) is not None


def validate_video_id(video_id) -> str:
    """Return the id unchanged, or raise InvalidVideoIdError."""
    if not is_valid_video_id(video_id):
        raise InvalidVideoIdError(video_id)
    return video_id


def extract_video_id(url_or_id: str) -> Optional[str]:
    """
    Pull the video id out of a watch / short / embed URL or a bare id.

    Returns:
        The 11-character id, or None if nothing matches.
    """
    candidate = (url_or_id or "").strip()
    for pattern in _URL_PATTERNS:
        match = pattern.search(candidate)
        if match:
            return match.group(1)
    return None
