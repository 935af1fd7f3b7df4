"""
SRT Writer — Saves acquired subtitles as SubRip files.

Used to export a fetched track and to populate the local subtitles
directory, so later sessions for the same video are served from disk.
"""

import logging
from pathlib import Path
from typing import List

from .models import Subtitle
from .timecode import format_timestamp

logger = logging.getLogger(__name__)


class SRTWriter:
    """
    Writes Subtitle objects to a SubRip file.

    Output:
        1
        00:00:01,200 --> 00:00:04,800
        Hello everyone, welcome to the show.

    Blocks are re-indexed 1..n, so the file reads back with ids matching
    positions even if the source numbering had gaps.
    """

    def write(self, subtitles: List[Subtitle], output_path: Path):
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            for i, sub in enumerate(subtitles):
                f.write(f"{i + 1}\n")
                f.write(
                    f"{format_timestamp(sub.start_sec)} --> "
                    f"{format_timestamp(sub.end_sec)}\n"
                )
                f.write(f"{sub.text}\n")
                f.write("\n")

        logger.info(f"SRT written: {len(subtitles)} subtitles → {output_path}")

    def write_preview(self, subtitles: List[Subtitle], max_entries: int = 10) -> str:
        """
        Short human-readable listing of the first subtitles.

        Args:
            subtitles: Subtitles to list.
            max_entries: Maximum entries to include.
        """
        lines = []
        shown = min(len(subtitles), max_entries)

        for sub in subtitles[:shown]:
            ts_start = format_timestamp(sub.start_sec)
            ts_end = format_timestamp(sub.end_sec)
            text_preview = sub.text[:80]
            if len(sub.text) > 80:
                text_preview += "..."
            lines.append(f"  [{ts_start} → {ts_end}] {text_preview}")

        if len(subtitles) > shown:
            lines.append(f"  ... and {len(subtitles) - shown} more entries")

        return "\n".join(lines)
