"""
Timecode helpers — HH:MM:SS,mmm (SRT) and HH:MM:SS.mmm (WebVTT).

Parsing accepts only the fixed-width 2/2/2/3 digit form. Anything else
is reported as "no match" (None) so callers can skip the line.
"""

import re
from typing import Optional, Tuple

_TIMECODE = r"(\d{2}):(\d{2}):(\d{2})[,.](\d{3})"

TIMECODE_RE = re.compile(r"^" + _TIMECODE + r"$")

SRT_TIMING_RE = re.compile(
    r"(\d{2}):(\d{2}):(\d{2}),(\d{3}) --> (\d{2}):(\d{2}):(\d{2}),(\d{3})"
)
VTT_TIMING_RE = re.compile(
    r"(\d{2}):(\d{2}):(\d{2})\.(\d{3}) --> (\d{2}):(\d{2}):(\d{2})\.(\d{3})"
)


def groups_to_seconds(hours, minutes, seconds, millis) -> float:
    """Combine four matched integer groups into seconds."""
    return (
        int(hours) * 3600
        + int(minutes) * 60
        + int(seconds)
        + int(millis) / 1000
    )


def timecode_to_seconds(text: str) -> Optional[float]:
    """
    Convert a single timecode to seconds.

    Examples:
        "00:01:02.500" -> 62.5
        "01:00:00,000" -> 3600.0

    Returns:
        Seconds as float, or None if the text is not a timecode.
    """
    match = TIMECODE_RE.match(text.strip())
    if not match:
        return None
    return groups_to_seconds(*match.groups())


def parse_timing_line(line: str, pattern: re.Pattern) -> Optional[Tuple[float, float]]:
    """
    Extract (start, end) seconds from a "A --> B" timing line.

    Args:
        line: The candidate timing line.
        pattern: SRT_TIMING_RE or VTT_TIMING_RE.

    Returns:
        (start_sec, end_sec), or None when the line does not match.
    """
    match = pattern.search(line)
    if not match:
        return None
    g = match.groups()
    return groups_to_seconds(*g[:4]), groups_to_seconds(*g[4:])


def format_timestamp(seconds: float, separator: str = ",") -> str:
    """
    Convert seconds to HH:MM:SS,mmm (or HH:MM:SS.mmm with separator=".").

    Negative values clamp to zero.
    """
    if seconds < 0:
        seconds = 0.0

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    millis = int(round((seconds % 1) * 1000))

    # Rounding could push to 1000
    if millis >= 1000:
        millis = 999

    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{millis:03d}"
