"""
Data models shared by the parsers, sources and the sync engine.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Subtitle:
    """One timed caption line."""
    id: int
    start_sec: float
    end_sec: float
    text: str

    @property
    def duration(self) -> float:
        return self.end_sec - self.start_sec

    def contains(self, position: float) -> bool:
        return self.start_sec <= position <= self.end_sec

    def __repr__(self):
        return (f"Sub#{self.id}({self.start_sec:.2f}–{self.end_sec:.2f}s, "
                f"'{self.text[:50]}')")


@dataclass(frozen=True)
class RepeatRegion:
    """A-B loop bounds. Only active when enabled and both bounds are set.

    Immutable: changing the loop means swapping in a new region.
    """
    start: Optional[float] = None
    end: Optional[float] = None
    enabled: bool = False

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def is_active(self) -> bool:
        return self.enabled and self.is_complete


@dataclass
class CaptionTrack:
    """A caption track listed in the watch page manifest."""
    base_url: str
    language_code: str
    kind: str = ""
