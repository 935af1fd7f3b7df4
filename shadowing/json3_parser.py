"""
JSON3 Parser — YouTube timedtext "fmt=json3" event lists.

Payload shape:
    {"events": [
        {"tStartMs": 1000, "dDurationMs": 2000,
         "segs": [{"utf8": "hello "}, {"utf8": "world"}]},
        ...
    ]}

Events without "segs" (window/style events) are ignored. Ids follow the
order of the remaining events and are assigned before entries with empty
text are dropped, so a track can have gaps in its numbering.
"""

import json
import logging
from typing import List, Union

from .errors import ParseFailure
from .models import Subtitle

logger = logging.getLogger(__name__)


def _millis(event: dict, key: str) -> float:
    value = event.get(key) or 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseFailure(f"json3 {key} is not a number: {value!r}")
    return value


def _segs(event: dict) -> list:
    segs = event["segs"]
    return segs if isinstance(segs, list) else []


def _seg_text(seg) -> str:
    # Malformed segs (non-dict, null utf8) carry no text
    if not isinstance(seg, dict):
        return ""
    text = seg.get("utf8")
    return text if isinstance(text, str) else ""


def parse_json3(payload: Union[str, bytes, dict, None]) -> List[Subtitle]:
    """
    Convert a json3 payload into subtitles.

    Args:
        payload: Decoded mapping, or the raw JSON text.

    Returns:
        Subtitles with sequential ids. Entries with empty text are dropped
        after numbering, so ids follow event order.

    Raises:
        ParseFailure: If a text payload is not valid JSON, is not an object,
            or carries non-numeric event timings.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise ParseFailure(f"json3 payload is not valid JSON: {e}") from e

    if payload is None:
        return []
    if not isinstance(payload, dict):
        raise ParseFailure(f"json3 payload must be an object, got {type(payload).__name__}")

    events = payload.get("events") or []
    if not isinstance(events, list):
        raise ParseFailure(f"json3 events must be a list, got {type(events).__name__}")
    with_text = [
        e for e in events
        if isinstance(e, dict) and e.get("segs") is not None
    ]

    subtitles = []
    for index, event in enumerate(with_text):
        start_ms = _millis(event, "tStartMs")
        duration_ms = _millis(event, "dDurationMs")
        text = "".join(_seg_text(seg) for seg in _segs(event))
        text = text.replace("\n", " ").strip()
        if not text:
            continue
        subtitles.append(Subtitle(
            id=index + 1,
            start_sec=start_ms / 1000,
            end_sec=(start_ms + duration_ms) / 1000,
            text=text,
        ))

    logger.debug(f"json3: {len(events)} events → {len(subtitles)} subtitles")
    return subtitles
