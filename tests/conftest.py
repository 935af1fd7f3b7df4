"""
Shared fixtures and fakes.
"""

import pytest
from config import AppConfig
from shadowing.caption_source import CaptionSource
from shadowing.models import Subtitle


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, text="", json_data=None, status_code=200):
        self.text = text
        self._json = json_data
        self.status_code = status_code

    def raise_for_status(self):
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeSession:
    """Returns canned responses by URL prefix and records requests."""

    def __init__(self, routes):
        self.routes = routes
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        for prefix, response in self.routes.items():
            if url.startswith(prefix):
                if isinstance(response, Exception):
                    raise response
                return response
        return FakeResponse(status_code=404)


class CountingSource(CaptionSource):
    """Source returning fixed subtitles and counting calls."""

    def __init__(self, name, subtitles=None, error=None):
        self.name = name
        self.subtitles = subtitles or []
        self.error = error
        self.calls = 0

    def _fetch_subtitles(self, video_id):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.subtitles)


@pytest.fixture
def config(tmp_path):
    cfg = AppConfig()
    cfg.source.subtitles_dir = str(tmp_path / "subtitles")
    cfg.source.temp_dir = str(tmp_path)
    return cfg


@pytest.fixture
def sample_subtitles():
    return [
        Subtitle(1, 0.0, 2.0, "Hello everyone"),
        Subtitle(2, 2.0, 5.0, "welcome to the show"),
        Subtitle(3, 6.0, 8.5, "the quick fox"),
    ]
