"""
Similarity scorers -- two interchangeable measures of summary/source closeness.

  - Jaccard over word tri-grams: |A ∩ B| / |A ∪ B| of the n-gram sets.
  - Cosine over word-frequency vectors: dot(v1, v2) / (|v1| * |v2|).

Both report the maximum over all sources: a summary only needs to resemble
one source too closely to be a problem. Empty vocabularies score 0.0.
"""

import math
from collections import Counter
from typing import Sequence

from .tokenizer import ngrams, tokenize, word_frequencies

DEFAULT_NGRAM_SIZE = 3


def jaccard_similarity(first: set[str], second: set[str]) -> float:
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def cosine_similarity(first: Counter, second: Counter) -> float:
    if not first or not second:
        return 0.0
    dot = sum(count * second.get(word, 0) for word, count in first.items())
    norm_first = math.sqrt(sum(c * c for c in first.values()))
    norm_second = math.sqrt(sum(c * c for c in second.values()))
    if norm_first == 0 or norm_second == 0:
        return 0.0
    # float rounding can nudge identical vectors past 1.0
    return min(1.0, dot / (norm_first * norm_second))


def max_ngram_similarity(
    summary_text: str | None,
    source_texts: Sequence[str],
    n: int = DEFAULT_NGRAM_SIZE,
) -> float:
    """Highest tri-gram Jaccard similarity between the summary and any source."""
    summary_ngrams = ngrams(tokenize(summary_text), n)
    best = 0.0
    for source in source_texts:
        best = max(best, jaccard_similarity(summary_ngrams, ngrams(source, n)))
    return best


def max_cosine_similarity(summary_text: str | None, source_texts: Sequence[str]) -> float:
    """Highest word-frequency cosine similarity between the summary and any source."""
    summary_vector = word_frequencies(summary_text)
    best = 0.0
    for source in source_texts:
        best = max(best, cosine_similarity(summary_vector, word_frequencies(source)))
    return best
