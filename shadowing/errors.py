"""Exceptions raised inside the shadowing package."""


class ShadowingError(Exception):
    """Base class for shadowing errors."""


class InvalidVideoIdError(ShadowingError, ValueError):
    """Video identifier is not 11 characters of [A-Za-z0-9_-]."""

    def __init__(self, video_id):
        self.video_id = video_id
        super().__init__(f"Invalid video id: {video_id!r}")


class SourceUnavailable(ShadowingError):
    """A caption source has nothing to offer (network, file, manifest...)."""


class CaptionTimeout(SourceUnavailable):
    """The external caption tool exceeded its time budget."""


class ParseFailure(ShadowingError):
    """A caption payload was present but could not be parsed."""


class RecognizerUnavailable(ShadowingError):
    """No usable speech recognizer is configured."""
