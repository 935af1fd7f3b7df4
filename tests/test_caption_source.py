"""
Tests for the shared source contract and LocalFileSource.
"""

import subprocess

import pytest
import requests
from conftest import CountingSource
from shadowing.caption_source import LocalFileSource
from shadowing.errors import CaptionTimeout, InvalidVideoIdError, ParseFailure, SourceUnavailable

VIDEO_ID = "dQw4w9WgXcQ"


class TestFetchContract:

    @pytest.mark.parametrize("error", [
        SourceUnavailable("gone"),
        CaptionTimeout("slow"),
        ParseFailure("junk"),
        requests.ConnectionError("offline"),
        subprocess.SubprocessError("bad exit"),
        OSError("disk"),
    ])
    def test_expected_failures_are_empty(self, error):
        source = CountingSource("test", error=error)
        assert source.fetch(VIDEO_ID) == []
        assert source.calls == 1

    def test_invalid_id_raises_before_fetch(self):
        source = CountingSource("test")
        with pytest.raises(InvalidVideoIdError) as exc:
            source.fetch("short")
        assert exc.value.video_id == "short"
        assert source.calls == 0


class TestLocalFileSource:

    def test_path(self, tmp_path):
        assert LocalFileSource(tmp_path).path_for(VIDEO_ID) == tmp_path / f"{VIDEO_ID}.srt"

    def test_bom_and_crlf(self, tmp_path):
        (tmp_path / f"{VIDEO_ID}.srt").write_bytes(
            b"\xef\xbb\xbf1\r\n00:00:01,000 --> 00:00:02,500\r\nHi there\r\n"
        )
        subs = LocalFileSource(tmp_path).fetch(VIDEO_ID)
        assert len(subs) == 1
        assert subs[0].id == 1
        assert subs[0].end_sec == 2.5
        assert subs[0].text == "Hi there"

    def test_not_utf8(self, tmp_path):
        (tmp_path / f"{VIDEO_ID}.srt").write_bytes(b"1\n00:00:01,000 --> 00:00:02,000\n\xff\xfe\x80\n")
        assert LocalFileSource(tmp_path).fetch(VIDEO_ID) == []

    def test_missing(self, tmp_path):
        assert LocalFileSource(tmp_path / "nowhere").fetch(VIDEO_ID) == []
