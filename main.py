"""
Shadowing Practice — CLI Entry Point

Usage:
    python main.py https://www.youtube.com/watch?v=dQw4w9WgXcQ
    python main.py dQw4w9WgXcQ -o subs.srt
    python main.py dQw4w9WgXcQ --mode page
    python main.py dQw4w9WgXcQ --at 42.5 --say "never gonna give you up"
    python main.py dQw4w9WgXcQ --at 42.5 --audio attempt.wav
"""

import sys
import argparse
import logging
from pathlib import Path

from config import load_config
from shadowing.acquisition import SubtitleAcquirer
from shadowing.errors import RecognizerUnavailable
from shadowing.recognizer import WhisperRecognizer
from shadowing.scorer import compare_transcript
from shadowing.srt_writer import SRTWriter
from shadowing.sync_engine import find_active
from shadowing.timecode import format_timestamp
from shadowing.video_id import extract_video_id


def setup_logging(level: str = "INFO", log_file: str = None):
    """Configure logging for the application."""
    log_format = (
        "%(asctime)s | %(levelname)-7s | %(name)-20s | %(message)s"
    )
    date_format = "%H:%M:%S"

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
        force=True
    )

    # Suppress noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("faster_whisper").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Shadowing Practice — fetch YouTube subtitles and score "
                    "your spoken attempts against them.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py dQw4w9WgXcQ                     # Show subtitle preview
  python main.py dQw4w9WgXcQ -o subs.srt         # Save as SRT
  python main.py dQw4w9WgXcQ --mode page         # Scrape the watch page
  python main.py dQw4w9WgXcQ --cache             # Keep a local copy
  python main.py dQw4w9WgXcQ --at 42.5           # Subtitle at 42.5s
  python main.py dQw4w9WgXcQ --at 42.5 --say "hello there"
  python main.py dQw4w9WgXcQ --at 42.5 --audio attempt.wav
        """
    )

    parser.add_argument(
        "video",
        help="YouTube URL or 11-character video id"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write the acquired subtitles to this SRT file"
    )
    parser.add_argument(
        "--mode",
        default=None,
        choices=["page", "tool"],
        help="Remote source: scrape the watch page or run yt-dlp (default: from config.yaml)"
    )
    parser.add_argument(
        "--subtitles-dir",
        type=Path,
        default=None,
        help="Directory of pre-supplied <video_id>.srt files"
    )
    parser.add_argument(
        "--cache",
        action="store_true",
        help="Save fetched subtitles into the subtitles directory"
    )
    parser.add_argument(
        "--at",
        type=float,
        default=None,
        help="Playback position in seconds; prints the active subtitle"
    )
    attempt = parser.add_mutually_exclusive_group()
    attempt.add_argument(
        "--say",
        default=None,
        help="Your spoken attempt as text, scored against the subtitle at --at"
    )
    attempt.add_argument(
        "--audio",
        type=Path,
        default=None,
        help="WAV recording of your attempt, transcribed then scored"
    )
    parser.add_argument(
        "-m", "--model",
        default=None,
        help="Whisper model for --audio (default: from config.yaml)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to custom config.yaml file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print results"
    )
    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    # ── Validate input ──
    video_id = extract_video_id(args.video)
    if video_id is None:
        print(f"Error: Not a YouTube URL or video id: {args.video}")
        sys.exit(2)

    if (args.say is not None or args.audio) and args.at is None:
        print("Error: --say/--audio need --at to pick the subtitle to compare against.")
        sys.exit(2)

    # ── Load config ──
    config = load_config(args.config)
    config.update_from_args(args)

    # ── Setup logging ──
    log_level = "DEBUG" if args.verbose else ("WARNING" if args.quiet else config.logging.level)
    setup_logging(level=log_level, log_file=config.logging.file)

    try:
        acquirer = SubtitleAcquirer(config)
        subtitles = acquirer.acquire(video_id)

        if not subtitles:
            print(f"\n  No subtitles available for {video_id}.")
            return

        writer = SRTWriter()
        if not args.quiet:
            print(f"\n  [OK] {len(subtitles)} subtitles for {video_id}")
            print(writer.write_preview(subtitles, max_entries=5))

        if args.output:
            writer.write(subtitles, args.output)
            if not args.quiet:
                print(f"  [OK] Saved to: {args.output}")

        if args.at is None:
            return

        active = find_active(subtitles, args.at)
        if active is None:
            print(f"\n  No subtitle at {format_timestamp(args.at)}")
        else:
            print(f"\n  [{format_timestamp(active.start_sec)} → "
                  f"{format_timestamp(active.end_sec)}] {active.text}")

        recognized = args.say
        if args.audio:
            recognizer = WhisperRecognizer(config.asr)
            if not recognizer.is_supported():
                raise RecognizerUnavailable(
                    "faster-whisper is not installed; use --say instead"
                )
            recognized = recognizer.transcribe(args.audio)
            print(f"  You said: {recognized or '(nothing recognized)'}")

        if recognized is not None:
            reference = active.text if active else ""
            comparison = compare_transcript(reference, recognized)
            print(f"  Accuracy: {comparison.accuracy}%")
            if comparison.missed_words:
                print(f"  Missed:   {' '.join(comparison.missed_words)}")

    except KeyboardInterrupt:
        print("\n\n  [WARN] Interrupted by user.")
        sys.exit(130)
    except RecognizerUnavailable as e:
        print(f"\n  [ERROR] {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        print(f"\n  [ERROR] File error: {e}")
        sys.exit(1)
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"\n  [ERROR] Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
