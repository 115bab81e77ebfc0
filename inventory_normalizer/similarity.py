"""
Edit-distance scoring used by the matcher.

``similarity`` is the normalised complement of Levenshtein distance:

    (max(len(a), len(b)) - levenshtein(a, b)) / max(len(a), len(b))

with two empty strings scoring 1.0. Scores lie in [0, 1].
"""

from __future__ import annotations


def levenshtein(a: str, b: str) -> int:
    """
    Classic edit distance (insert / delete / substitute, cost 1 each).

    Uses two rolling rows sized by the shorter string; both rows are
    allocated per call so concurrent callers never share scratch space.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)
    for i, ca in enumerate(a, start=1):
        current[0] = i
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous, current = current, previous
    return previous[len(b)]


def similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein(a, b)) / float(longest)
