"""
Tests for the yt-dlp source. subprocess.run is replaced by a fake that
writes the files yt-dlp would produce.
"""

import subprocess
from pathlib import Path

import pytest
from shadowing import ytdlp_source
from shadowing.errors import InvalidVideoIdError
from shadowing.ytdlp_source import YtDlpSource

VIDEO_ID = "dQw4w9WgXcQ"

VTT = """WEBVTT

00:00:01.000 --> 00:00:02.500
never gonna

00:00:02.500 --> 00:00:04.000
give you up
"""


class FakeRun:
    """Records calls and optionally writes a caption file next to -o."""

    def __init__(self, suffix=".en.vtt", content=VTT, returncode=0, exc=None):
        self.suffix = suffix
        self.content = content
        self.returncode = returncode
        self.exc = exc
        self.calls = []

    def __call__(self, cmd, capture_output=False, text=False, timeout=None):
        self.calls.append({"cmd": cmd, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        output_base = cmd[cmd.index("-o") + 1]
        if self.suffix:
            Path(f"{output_base}{self.suffix}").write_text(self.content, encoding="utf-8")
        return subprocess.CompletedProcess(cmd, self.returncode, "", "error text")

    @property
    def output_base(self):
        cmd = self.calls[-1]["cmd"]
        return cmd[cmd.index("-o") + 1]


@pytest.fixture
def source(tmp_path):
    return YtDlpSource(language="en", timeout=30.0, temp_dir=str(tmp_path))


class TestCommand:

    def test_requests_manual_and_auto_english(self, source, tmp_path):
        cmd = source.build_command(VIDEO_ID, tmp_path / "out")
        assert cmd[0] == "yt-dlp"
        assert "--skip-download" in cmd
        assert "--write-sub" in cmd and "--write-auto-sub" in cmd
        assert cmd[cmd.index("--sub-lang") + 1] == "en,en-orig"
        assert cmd[-1] == f"https://www.youtube.com/watch?v={VIDEO_ID}"

    @pytest.mark.parametrize("bad_id", ["abc", "dQw4w9WgX;Q", "a; rm -rf ~"])
    def test_invalid_id_rejected_before_process(self, source, monkeypatch, bad_id):
        fake = FakeRun()
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        with pytest.raises(InvalidVideoIdError):
            source.fetch(bad_id)
        assert fake.calls == []


class TestFetch:

    def test_reads_plain_english(self, source, monkeypatch):
        fake = FakeRun()
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        subs = source.fetch(VIDEO_ID)
        assert [s.text for s in subs] == ["never gonna", "give you up"]
        assert fake.calls[0]["timeout"] == 30.0

    def test_reads_original_variant(self, source, monkeypatch):
        fake = FakeRun(suffix=".en-orig.vtt")
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        assert len(source.fetch(VIDEO_ID)) == 2

    def test_temp_files_removed(self, source, monkeypatch, tmp_path):
        fake = FakeRun()
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        source.fetch(VIDEO_ID)
        assert list(tmp_path.glob("*.vtt")) == []

    def test_temp_files_removed_when_unparseable(self, source, monkeypatch, tmp_path):
        fake = FakeRun(content="\xff garbage without cues")
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        assert source.fetch(VIDEO_ID) == []
        assert list(tmp_path.glob("*.vtt")) == []

    def test_unique_output_paths(self, source, monkeypatch):
        fake = FakeRun()
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        source.fetch(VIDEO_ID)
        first = fake.output_base
        source.fetch(VIDEO_ID)
        assert fake.output_base != first

    def test_process_failure_with_output_still_parsed(self, source, monkeypatch):
        fake = FakeRun(returncode=1)
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        assert len(source.fetch(VIDEO_ID)) == 2

    def test_no_output_is_empty(self, source, monkeypatch):
        fake = FakeRun(suffix=None, returncode=1)
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        assert source.fetch(VIDEO_ID) == []

    def test_timeout_is_empty(self, source, monkeypatch):
        fake = FakeRun(exc=subprocess.TimeoutExpired(["yt-dlp"], 30))
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        assert source.fetch(VIDEO_ID) == []

    def test_missing_tool_is_empty(self, source, monkeypatch):
        fake = FakeRun(exc=FileNotFoundError("yt-dlp"))
        monkeypatch.setattr(ytdlp_source.subprocess, "run", fake)
        assert source.fetch(VIDEO_ID) == []
