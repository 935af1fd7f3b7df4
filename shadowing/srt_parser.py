"""
SRT Parser — Reads SubRip blocks into Subtitle objects.

SRT format:
    1
    00:00:01,200 --> 00:00:04,800
    Hello everyone, welcome to the show.

The block's own index is kept as the subtitle id. Blocks with fewer than
three lines, a non-numeric index or a malformed timing line are skipped.
"""

import logging
import re
from typing import List

from .models import Subtitle
from .timecode import SRT_TIMING_RE, parse_timing_line

logger = logging.getLogger(__name__)

_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")


def parse_srt(content: str) -> List[Subtitle]:
    """
    Parse SRT file content.

    Args:
        content: Full text of the .srt file.

    Returns:
        Subtitles in block order.
    """
    content = content.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    subtitles: List[Subtitle] = []
    skipped = 0

    for block in _BLOCK_SEPARATOR.split(content.strip()):
        lines = block.split("\n")
        if len(lines) < 3:
            if block.strip():
                skipped += 1
            continue

        try:
            sub_id = int(lines[0].strip())
        except ValueError:
            skipped += 1
            continue

        timing = parse_timing_line(lines[1], SRT_TIMING_RE)
        if timing is None:
            skipped += 1
            continue

        text = " ".join(lines[2:]).strip()
        if not text:
            skipped += 1
            continue

        start, end = timing
        subtitles.append(Subtitle(sub_id, start, end, text))

    if skipped:
        logger.debug(f"SRT: skipped {skipped} malformed block(s)")
    return subtitles
