"""
Shadowing Session — Ties the player, subtitles and scoring together.

One session per player. Loading a new video stops the poll timer,
acquires the new subtitles, swaps them into the sync engine in a single
assignment and restarts the timer, so no tick ever mixes two videos.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional

from .acquisition import SubtitleAcquirer
from .errors import RecognizerUnavailable
from .models import Subtitle
from .player import SPEED_OPTIONS, VideoPlayer
from .recognizer import SpeechRecognizer
from .scorer import Comparison, compare_transcript
from .sync_engine import PlaybackSyncEngine, TickResult

logger = logging.getLogger(__name__)

# Called with the active subtitle (or None) whenever it changes
SubtitleCallback = Optional[Callable[[Optional[Subtitle]], None]]


class PlaybackTimer:
    """
    Calls a function at a fixed interval on a daemon thread.

    Each call completes before the next interval starts, so calls never
    overlap.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="playback-poll", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 2.0):
        self._stop.set()
        if self._thread is not None:
            if self._thread is not threading.current_thread():
                self._thread.join(timeout=timeout)
            self._thread = None

    def _loop(self):
        while not self._stop.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Playback poll failed: {e}", exc_info=True)


class ShadowingSession:
    """
    Playback session for one learner and one player.

    Usage:
        session = ShadowingSession(player, SubtitleAcquirer(config))
        session.load_video("dQw4w9WgXcQ")
        ...
        comparison = session.score_text("never gonna give you up")
        session.stop()
    """

    def __init__(self, player: VideoPlayer, acquirer: SubtitleAcquirer,
                 recognizer: Optional[SpeechRecognizer] = None,
                 poll_interval: float = 0.1, mark_span: float = 10.0,
                 on_subtitle: SubtitleCallback = None):
        self.player = player
        self.acquirer = acquirer
        self.recognizer = recognizer
        self.engine = PlaybackSyncEngine(mark_span=mark_span)
        self.timer = PlaybackTimer(poll_interval, self.poll_once)
        self.on_subtitle = on_subtitle
        self._poll_lock = threading.Lock()
        self.video_id: Optional[str] = None
        self.playback_speed = 1.0
        self.current_time = 0.0
        self.last_transcript = ""

    @classmethod
    def from_config(cls, config, player: VideoPlayer,
                    recognizer: Optional[SpeechRecognizer] = None,
                    on_subtitle: SubtitleCallback = None) -> "ShadowingSession":
        """Session with an acquirer and playback timing taken from AppConfig."""
        return cls(
            player,
            SubtitleAcquirer(config),
            recognizer=recognizer,
            poll_interval=config.playback.poll_interval,
            mark_span=config.playback.repeat_mark_span,
            on_subtitle=on_subtitle,
        )

    # ── Lifecycle ───────────────────────────────────────────

    def load_video(self, video_id: str) -> List[Subtitle]:
        """Switch to a new video. Returns its subtitles ([] if none)."""
        self.timer.stop()
        self.engine.load([])
        subtitles = self.acquirer.acquire(video_id)
        self.engine.load(subtitles)
        self.engine.clear_repeat()
        self.video_id = video_id
        self.current_time = 0.0
        self.last_transcript = ""
        self.timer.start()
        logger.info(f"Session loaded {video_id}: {len(subtitles)} subtitles")
        return subtitles

    def start(self):
        self.timer.start()

    def stop(self):
        self.timer.stop()

    # ── Polling ─────────────────────────────────────────────

    def poll_once(self) -> Optional[TickResult]:
        """
        Read the player position, update the active subtitle, apply repeat.

        Returns None, doing nothing, while another poll (including the
        seek it is applying) is still running.
        """
        if not self._poll_lock.acquire(blocking=False):
            logger.debug("Poll dropped: previous poll still running")
            return None
        try:
            return self._poll()
        finally:
            self._poll_lock.release()

    def _poll(self) -> Optional[TickResult]:
        position = self.player.get_current_time()
        previous_id = self.engine.active_id

        result = self.engine.tick(position)
        if result is None:
            return None

        self.current_time = position
        if result.seek_to is not None:
            self.player.seek_to(result.seek_to, True)
        if result.active_id != previous_id and self.on_subtitle:
            self.on_subtitle(self.engine.active_subtitle)
        return result

    # ── Controls ────────────────────────────────────────────

    def set_playback_speed(self, rate: float):
        if rate not in SPEED_OPTIONS:
            raise ValueError(f"Unsupported playback speed {rate}; choose from {SPEED_OPTIONS}")
        self.player.set_playback_rate(rate)
        self.playback_speed = rate

    def mark_repeat_start(self):
        self.engine.mark_a(self.current_time)

    def mark_repeat_end(self):
        self.engine.mark_b(self.current_time)

    def toggle_repeat(self) -> bool:
        return self.engine.toggle_repeat()

    def clear_repeat(self):
        self.engine.clear_repeat()

    # ── Shadowing ───────────────────────────────────────────

    @property
    def reference_text(self) -> str:
        active = self.engine.active_subtitle
        return active.text if active else ""

    @property
    def can_record(self) -> bool:
        return self.recognizer is not None and self.recognizer.is_supported()

    def score_text(self, recognized: str) -> Comparison:
        """Score a transcript against the active subtitle."""
        self.last_transcript = recognized or ""
        return compare_transcript(self.reference_text, self.last_transcript)

    def score_recording(self, audio_path: Path) -> Comparison:
        """Transcribe a recording and score it against the active subtitle."""
        if not self.can_record:
            raise RecognizerUnavailable("Speech recognition is not available")
        transcript = self.recognizer.transcribe(audio_path)
        return self.score_text(transcript)
