"""
Video player capability consumed by the playback session.

The real player (browser widget, VLC, mpv...) lives outside this
package. Implementations wrap it behind this interface.
"""

from abc import ABC, abstractmethod

SPEED_OPTIONS = (0.5, 0.75, 1.0, 1.25, 1.5, 2.0)


class VideoPlayer(ABC):
    """Controls and queries an external video player."""

    @abstractmethod
    def play(self) -> None:
        pass

    @abstractmethod
    def pause(self) -> None:
        pass

    @abstractmethod
    def seek_to(self, seconds: float, allow_seek_ahead: bool) -> None:
        pass

    @abstractmethod
    def set_playback_rate(self, rate: float) -> None:
        pass

    @abstractmethod
    def get_current_time(self) -> float:
        pass

    @abstractmethod
    def get_duration(self) -> float:
        pass
