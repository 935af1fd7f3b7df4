"""
Page Scraper — Caption tracks from the public YouTube watch page.

Steps:
  1. GET https://www.youtube.com/watch?v=<id> with a browser User-Agent
  2. Isolate the "captionTracks" JSON array embedded in the page
  3. Pick a track (exact language match, else the first listed)
  4. GET <baseUrl>&fmt=json3 and parse the event list

Locating the array inside the HTML is substring work and breaks whenever
YouTube changes its markup. It is kept in extract_caption_tracks() so a
structured replacement only needs to swap that function.
"""

import json
import logging
import re
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .caption_source import CaptionSource
from .errors import ParseFailure, SourceUnavailable
from .json3_parser import parse_json3
from .models import CaptionTrack, Subtitle

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

_TRACKS_KEY = re.compile(r'"captionTracks":\s*\[')


def new_session(user_agent: str = DEFAULT_USER_AGENT, retries: int = 2) -> requests.Session:
    """HTTP session with a browser User-Agent and a small retry budget."""
    session = requests.Session()
    retry = Retry(
        total=retries, backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.mount("http://", HTTPAdapter(max_retries=retry))
    session.headers.update({
        "User-Agent": user_agent,
        "Accept-Language": "en-US,en;q=0.8",
    })
    return session


def _find_array_end(text: str, start: int) -> Optional[int]:
    """Index just past the ']' closing the array that opens at text[start]."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def _unescape(raw: str) -> str:
    return (
        raw.replace("\\u0026", "&")
        .replace("&amp;", "&")
        .replace('\\"', '"')
        .replace("&quot;", '"')
    )


def extract_caption_tracks(html: str) -> Optional[List[CaptionTrack]]:
    """
    Pull the caption track manifest out of watch page HTML.

    Returns:
        The listed tracks (possibly empty), or None if the page carries
        no caption manifest at all.

    Raises:
        ParseFailure: If a manifest is present but cannot be decoded.
    """
    match = _TRACKS_KEY.search(html)
    if not match:
        return None

    start = match.end() - 1
    end = _find_array_end(html, start)
    if end is None:
        raise ParseFailure("captionTracks array is not terminated")
    raw = html[start:end]

    try:
        entries = json.loads(raw)
    except ValueError:
        try:
            entries = json.loads(_unescape(raw))
        except ValueError as e:
            raise ParseFailure(f"captionTracks is not valid JSON: {e}") from e

    tracks = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("baseUrl"):
            continue
        tracks.append(CaptionTrack(
            base_url=_unescape(entry["baseUrl"]),
            language_code=entry.get("languageCode", ""),
            kind=entry.get("kind", ""),
        ))
    return tracks


def select_track(tracks: List[CaptionTrack], language: str = "en") -> Optional[CaptionTrack]:
    """Exact language match wins, otherwise the first track in manifest order."""
    for track in tracks:
        if track.language_code == language:
            return track
    return tracks[0] if tracks else None


def json3_url(track: CaptionTrack) -> str:
    separator = "&" if "?" in track.base_url else "?"
    return f"{track.base_url}{separator}fmt=json3"


class PageScraperSource(CaptionSource):
    """Fetches captions by scraping the watch page's track manifest."""

    name = "page"

    def __init__(self, language: str = "en", timeout: float = 15.0,
                 session: Optional[requests.Session] = None,
                 user_agent: Optional[str] = None):
        self.language = language
        self.timeout = timeout
        self.session = session or new_session(user_agent or DEFAULT_USER_AGENT)

    def _fetch_subtitles(self, video_id: str) -> List[Subtitle]:
        page_url = WATCH_URL.format(video_id=video_id)
        logger.debug(f"Fetching watch page: {page_url}")
        response = self.session.get(page_url, timeout=self.timeout)
        response.raise_for_status()

        tracks = extract_caption_tracks(response.text)
        if tracks is None:
            raise SourceUnavailable("page has no caption manifest")

        track = select_track(tracks, self.language)
        if track is None:
            raise SourceUnavailable("caption manifest lists no tracks")

        logger.info(
            f"Selected caption track: lang={track.language_code} "
            f"kind={track.kind or 'manual'} ({len(tracks)} available)"
        )

        payload_response = self.session.get(json3_url(track), timeout=self.timeout)
        payload_response.raise_for_status()
        try:
            payload = payload_response.json()
        except ValueError as e:
            raise ParseFailure(f"caption payload is not JSON: {e}") from e

        return parse_json3(payload)
