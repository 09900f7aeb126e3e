from __future__ import annotations

from rapidfuzz.distance import Levenshtein

EXACT_MATCH_SCORE = 1.0
SUBSTRING_MATCH_SCORE = 0.9


def _prepare(text: str) -> str:
    return (text or "").strip().lower()


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost edit distance between the case-folded strings."""
    return Levenshtein.distance((a or "").lower(), (b or "").lower())


def similarity(a: str, b: str) -> float:
    """Score two phrases in [0, 1]; the first matching rule decides.

    1. equal after trim + lowercase -> 1.0
    2. one contains the other -> 0.9
    3. 1 - edit distance / length of the longer string
    """
    left = _prepare(a)
    right = _prepare(b)

    if left == right:
        return EXACT_MATCH_SCORE

    # The empty string is a substring of everything; it only scores by distance.
    if left and right and (right in left or left in right):
        return SUBSTRING_MATCH_SCORE

    longest = max(len(left), len(right))
    return 1.0 - Levenshtein.distance(left, right) / longest
