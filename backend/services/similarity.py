"""Edit-distance title similarity used to check a path ends at the target role."""

import re

from rapidfuzz.distance import Levenshtein

DEFAULT_THRESHOLD = 0.6

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lower-case and collapse runs of whitespace."""
    return _WHITESPACE_RE.sub(" ", title or "").strip().lower()


def title_similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]: 1 - distance / max(len(a), len(b)).

    Both strings are normalized first; two empty titles score 1.0.
    """
    na, nb = normalize_title(a), normalize_title(b)
    if not na and not nb:
        return 1.0
    return Levenshtein.normalized_similarity(na, nb)


def titles_match(a: str, b: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    return title_similarity(a, b) >= threshold
