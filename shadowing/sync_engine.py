"""
Playback Sync Engine — Active subtitle tracking and A-B repeat.

Called once per player poll (~100ms) with the current position:
  - finds the first subtitle whose [start, end] contains the position
  - if the repeat region is active and the position reached its end,
    asks for a seek back to its start

A seek is requested once per crossing. The engine re-arms only after a
tick sees the position back before the region end, so a player that is
slow to apply the seek does not receive a burst of duplicate seeks.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .models import RepeatRegion, Subtitle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick."""
    active_id: Optional[int]
    seek_to: Optional[float] = None


def find_active(subtitles: Sequence[Subtitle], position: float) -> Optional[Subtitle]:
    """First subtitle (in sequence order) containing position, inclusive."""
    for sub in subtitles:
        if sub.start_sec <= position <= sub.end_sec:
            return sub
    return None


class PlaybackSyncEngine:
    """
    Holds the subtitle sequence for one video session.

    Usage:
        engine = PlaybackSyncEngine(subtitles)
        result = engine.tick(player.get_current_time())
        if result and result.seek_to is not None:
            player.seek_to(result.seek_to, True)
    """

    def __init__(self, subtitles: Optional[List[Subtitle]] = None,
                 mark_span: float = 10.0):
        self._subtitles = tuple(subtitles or ())
        self.mark_span = mark_span
        self.repeat = RepeatRegion()
        self._active: Optional[Subtitle] = None
        self._seek_pending = False
        self._tick_lock = threading.Lock()

    # ── Subtitles ───────────────────────────────────────────

    @property
    def subtitles(self) -> Sequence[Subtitle]:
        return self._subtitles

    def load(self, subtitles: List[Subtitle]):
        """Replace the whole sequence (new video)."""
        with self._tick_lock:
            self._subtitles = tuple(subtitles)
            self._active = None
            self._seek_pending = False
        logger.debug(f"Loaded {len(self._subtitles)} subtitles")

    @property
    def active_subtitle(self) -> Optional[Subtitle]:
        return self._active

    @property
    def active_id(self) -> Optional[int]:
        return self._active.id if self._active else None

    # ── Tick ────────────────────────────────────────────────

    def tick(self, position: float) -> Optional[TickResult]:
        """
        Advance to a new playback position.

        Returns:
            TickResult, or None if another tick is still running (the
            call is dropped without touching state).
        """
        if not self._tick_lock.acquire(blocking=False):
            logger.debug(f"Tick at {position:.2f}s dropped: previous tick busy")
            return None
        try:
            self._active = find_active(self._subtitles, position)
            seek_to = self._check_repeat(position)
            return TickResult(self.active_id, seek_to)
        finally:
            self._tick_lock.release()

    def _check_repeat(self, position: float) -> Optional[float]:
        region = self.repeat
        if not region.is_active:
            self._seek_pending = False
            return None

        if position < region.end:
            self._seek_pending = False
            return None

        if self._seek_pending:
            return None

        self._seek_pending = True
        logger.debug(f"Repeat: {position:.2f}s ≥ {region.end:.2f}s, seek to {region.start:.2f}s")
        return region.start

    # ── Repeat region ───────────────────────────────────────

    def set_repeat(self, start: float, end: float):
        self._replace_repeat(RepeatRegion(start, end, self.repeat.enabled))

    def mark_a(self, position: float):
        """Set A at position. B defaults to position + mark_span."""
        end = self.repeat.end if self.repeat.end is not None else position + self.mark_span
        self.set_repeat(position, end)

    def mark_b(self, position: float):
        """Set B at position. A defaults to position - mark_span."""
        if self.repeat.start is not None:
            start = self.repeat.start
        else:
            start = max(0.0, position - self.mark_span)
        self.set_repeat(start, position)

    def toggle_repeat(self) -> bool:
        """Flip the loop on/off. Stays off while a bound is missing."""
        region = self.repeat
        enabled = region.is_complete and not region.enabled
        self._replace_repeat(RepeatRegion(region.start, region.end, enabled))
        return enabled

    def clear_repeat(self):
        self._replace_repeat(RepeatRegion())

    def _replace_repeat(self, region: RepeatRegion):
        # Ticks only ever see a whole region, old or new
        with self._tick_lock:
            self.repeat = region
            self._seek_pending = False
