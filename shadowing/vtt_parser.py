"""
WebVTT Parser — Reads YouTube-style .vtt cue files.

YouTube auto-captions are "rolling": each cue repeats the previous line
as scroll context and carries per-word timestamp tags, e.g.

    00:00:01.000 --> 00:00:03.000 align:start position:0%
    hello there
    how<00:00:01.500><c> are</c><c> you</c>

Cue text is cleaned of timestamp, styling and positioning tags.
Bracketed annotations ("[Music]") are dropped. A cue whose text equals
the last emitted cue is skipped; only the immediately preceding entry is
compared. Ids are assigned 1..n over emitted cues.
"""

import logging
import re
from typing import List

from .models import Subtitle
from .timecode import VTT_TIMING_RE, parse_timing_line

logger = logging.getLogger(__name__)

_INLINE_TIMESTAMP = re.compile(r"<\d{2}:\d{2}:\d{2}\.\d{3}>")
_STYLE_TAG = re.compile(r"</?(?:c|i|b|u|v|ruby|rt|lang)(?:[.\s][^>]*)?>")
_POSITION_DIRECTIVE = re.compile(
    r"\b(?:align|position|line|size|region|vertical):\S+"
)


def clean_cue_line(line: str) -> str:
    """Strip inline timestamps, style tags and positioning directives."""
    line = _INLINE_TIMESTAMP.sub("", line)
    line = _STYLE_TAG.sub("", line)
    line = _POSITION_DIRECTIVE.sub("", line)
    return line.strip()


def _is_speech(line: str) -> bool:
    return bool(line) and line != " " and not line.startswith("[")


def parse_vtt(content: str) -> List[Subtitle]:
    """
    Parse WebVTT content.

    Args:
        content: Full text of the .vtt file.

    Returns:
        Subtitles with dense 1-based ids, consecutive duplicates removed.
    """
    lines = content.lstrip("\ufeff").replace("\r\n", "\n").split("\n")
    subtitles: List[Subtitle] = []
    i = 0
    n = len(lines)

    while i < n:
        line = lines[i]
        i += 1
        if "-->" not in line:
            continue

        timing = parse_timing_line(line, VTT_TIMING_RE)
        if timing is None:
            logger.debug(f"VTT: malformed timing line skipped: {line!r}")
            continue

        # A lone " " line belongs to the cue; an empty line ends it
        text_lines = []
        while i < n and (lines[i].strip() or lines[i] == " ") and "-->" not in lines[i]:
            cleaned = clean_cue_line(lines[i])
            if _is_speech(cleaned):
                text_lines.append(cleaned)
            i += 1

        text = " ".join(text_lines).strip()
        if not text:
            continue
        if subtitles and subtitles[-1].text == text:
            continue

        start, end = timing
        subtitles.append(Subtitle(len(subtitles) + 1, start, end, text))

    return subtitles
