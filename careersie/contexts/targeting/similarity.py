"""
Similarity metrics used by relevance scoring.

All functions are pure and tolerate empty input by returning 0 (or 100 for
keyword overlap against a job with no keywords).
"""

import math
from collections import Counter
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, unlike Python's banker's round()."""
    return int(math.floor(value + 0.5))


def _normalized_set(items: Iterable[str]) -> set[str]:
    return {item.lower().strip() for item in items}


def jaccard_similarity(items1: list[str], items2: list[str]) -> float:
    """
    Jaccard similarity of two string lists after lower-casing and trimming.

    Returns 0 when either list is empty: no data on one side is no evidence of
    a match.
    """
    if not items1 or not items2:
        return 0.0

    set1 = _normalized_set(items1)
    set2 = _normalized_set(items2)

    return len(set1 & set2) / len(set1 | set2)


def word_frequencies(texts: Iterable[str]) -> Counter:
    """Bag-of-words term counts over lower-cased, whitespace-split texts."""
    counts = Counter()
    for text in texts:
        counts.update(text.lower().split())
    return counts


def cosine_similarity(texts1: list[str], texts2: list[str]) -> float:
    """
    Cosine similarity between the word-frequency vectors of two text lists.

    Plain bag of words: no stemming, no stop words, no TF-IDF weighting.
    Returns 0 when either side has no words.
    """
    freq1 = word_frequencies(texts1)
    freq2 = word_frequencies(texts2)

    magnitude1 = math.sqrt(sum(count * count for count in freq1.values()))
    magnitude2 = math.sqrt(sum(count * count for count in freq2.values()))

    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    dot_product = sum(count * freq2[word] for word, count in freq1.items() if word in freq2)

    # Guard against float drift pushing identical vectors past 1.0
    return min(dot_product / (magnitude1 * magnitude2), 1.0)


def contains_keyword(pool: list[str], keyword: str) -> bool:
    """
    True if any pool entry contains keyword, case-insensitively.

    The keyword is stripped before matching, so " react " finds "React.js".
    The skill explanations in relevance_scorer compare skills unstripped.
    """
    needle = keyword.lower().strip()
    return any(needle in entry.lower() for entry in pool)


def keyword_overlap(profile_keywords: list[str], job_keywords: list[str]) -> float:
    """
    Percentage of job keywords found in the profile keyword pool.

    A job keyword counts as found when some profile keyword contains it
    (case-insensitive substring). A job without keywords scores 100.

    Returns:
        Score in [0, 100], not rounded
    """
    if not job_keywords:
        return 100.0

    matched_count = sum(1 for keyword in job_keywords if contains_keyword(profile_keywords, keyword))

    return matched_count / len(job_keywords) * 100
