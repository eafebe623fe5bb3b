"""
Token-sort fuzzy matching of free-text filters against stored values.

token_sort_ratio("long island cty", "Long Island City") -> 97
fuzzy_match("astorya", ["Astoria", "Flushing"])          -> "Astoria"
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

DEFAULT_CUTOFF = 60

_NON_WORD = re.compile(r"\W+", re.UNICODE)


def _normalize(text: str) -> str:
    return _NON_WORD.sub(" ", (text or "").lower()).strip()


def _sorted_tokens(text: str) -> str:
    return " ".join(sorted(_normalize(text).split()))


def _lcs_length(a: str, b: str) -> int:
    # two-row DP over characters
    prev = [0] * (len(b) + 1)
    for ch in a:
        curr = [0]
        for j, other in enumerate(b, start=1):
            if ch == other:
                curr.append(prev[j - 1] + 1)
            else:
                curr.append(max(prev[j], curr[j - 1]))
        prev = curr
    return prev[-1]


def indel_ratio(a: str, b: str) -> float:
    """
    1 - indel_distance / (len(a) + len(b)), i.e. 2 * LCS / total length.
    Insertions and deletions cost 1, a substitution costs 2.
    """
    total = len(a) + len(b)
    if total == 0:
        return 0.0
    return 2.0 * _lcs_length(a, b) / total


def token_sort_ratio(a: str, b: str) -> int:
    """
    0–100 similarity, insensitive to word order and case.

    Tokens of each string are sorted and rejoined before comparing,
    so "City Island Long" and "Long Island City" score 100.
    """
    left = _sorted_tokens(a)
    right = _sorted_tokens(b)
    if not left or not right:
        return 0
    return int(round(100 * indel_ratio(left, right)))


def extract_best(query: str, choices: Iterable[str]) -> Optional[tuple[str, int]]:
    """Highest scoring choice; the first one wins a tie."""
    best: Optional[tuple[str, int]] = None
    for choice in choices:
        score = token_sort_ratio(query, choice)
        if best is None or score > best[1]:
            best = (choice, score)
    return best


def fuzzy_match(query: str, choices: Iterable[str], cutoff: int = DEFAULT_CUTOFF) -> Optional[str]:
    best = extract_best(query, choices)
    if best is not None and best[1] >= cutoff:
        return best[0]
    return None
