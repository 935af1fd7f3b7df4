"""
Transcript Scorer — Word-overlap accuracy for a shadowing attempt.

A reference word counts as matched when it appears anywhere in the
recognized transcript. Word order and repetition are ignored.
"""

import math
from dataclasses import dataclass, field
from typing import List


@dataclass
class Comparison:
    """Result of comparing a subtitle line with what the learner said."""
    accuracy: int
    matched_words: List[str] = field(default_factory=list)
    missed_words: List[str] = field(default_factory=list)


def _words(text: str) -> List[str]:
    return (text or "").lower().split()


def compare_transcript(reference: str, recognized: str) -> Comparison:
    """
    Compare reference text against recognized speech.

    Returns:
        Comparison with accuracy in [0, 100]. Empty recognized text or
        an empty reference scores 0.
    """
    if not recognized:
        return Comparison(0, [], _words(reference))

    reference_words = _words(reference)
    if not reference_words:
        return Comparison(0)

    recognized_words = set(_words(recognized))
    matched = [w for w in reference_words if w in recognized_words]
    missed = [w for w in reference_words if w not in recognized_words]

    # Half-up rounding: 12.5 -> 13
    accuracy = int(math.floor(len(matched) / len(reference_words) * 100 + 0.5))
    return Comparison(accuracy, matched, missed)


def score_transcript(reference: str, recognized: str) -> int:
    """Accuracy percentage (0-100) of recognized speech against reference."""
    return compare_transcript(reference, recognized).accuracy
