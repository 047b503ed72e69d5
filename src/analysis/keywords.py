"""Word-frequency helpers for task descriptions."""
from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Mapping

from spark_ai.models import KeywordCount

# tokens this short ("the", "and", "for") carry no signal
MIN_KEYWORD_LENGTH = 4
DEFAULT_TOP_N = 10


def extract_keywords(descriptions: Iterable[str]) -> Counter:
    """Count lowercase whitespace-separated tokens across all descriptions.

    Counts are accumulated over the whole input, not per description.
    """
    counts: Counter = Counter()
    for text in descriptions:
        if not text:
            continue
        for token in text.lower().split():
            if len(token) >= MIN_KEYWORD_LENGTH:
                counts[token] += 1
    return counts


def top_keywords(frequencies: Mapping[str, int], limit: int = DEFAULT_TOP_N) -> List[KeywordCount]:
    """Return at most `limit` entries ordered by descending count.

    The sort is stable, so equal counts keep the mapping's iteration order.
    Callers should not rely on that order.
    """
    if limit <= 0:
        return []
    ranked = sorted(frequencies.items(), key=lambda item: item[1], reverse=True)
    return [KeywordCount(word=word, count=count) for word, count in ranked[:limit]]
