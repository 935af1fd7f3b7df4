"""
Shadowing Practice — Subtitle Package

Subtitle acquisition and playback sync for spoken-English shadowing:
  - models: Subtitle, RepeatRegion, CaptionTrack
  - errors: exception hierarchy
  - timecode: HH:MM:SS.mmm / HH:MM:SS,mmm conversion
  - srt_parser / vtt_parser / json3_parser: caption format parsers
  - video_id: id validation and URL parsing
  - caption_source: source interface and local .srt files
  - page_scraper: caption tracks scraped from the watch page
  - ytdlp_source: captions extracted by the yt-dlp tool
  - acquisition: source fallback chain
  - srt_writer: SRT export and preview
  - sync_engine: active subtitle + A-B repeat
  - scorer: word-overlap accuracy
  - player: external player interface
  - recognizer: speech-to-text via Faster-Whisper
  - session: timer-driven playback session
"""

__version__ = "0.3.0"
