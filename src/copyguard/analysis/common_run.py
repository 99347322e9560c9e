"""
Longest-common-run finder -- the largest contiguous summary word span that
appears inside any single source.

Runs are compared word by word, so a run never starts or ends in the middle
of a source word. Each source is scanned with the longest-common-substring
table over words, keeping one row at a time: O(W * M) time for W summary
words and M source words.
"""

import logging
from typing import Sequence

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def _longest_run_in(summary_words: list[str], source_words: list[str]) -> int:
    best = 0
    previous = [0] * (len(source_words) + 1)
    for word in summary_words:
        current = [0] * (len(source_words) + 1)
        for j, source_word in enumerate(source_words, start=1):
            if word == source_word:
                current[j] = previous[j - 1] + 1
                if current[j] > best:
                    best = current[j]
        previous = current
    return best


def max_consecutive_match(summary_text: str | None, source_texts: Sequence[str]) -> int:
    """Word count of the longest summary run found verbatim in one source."""
    summary_words = tokenize(summary_text)
    if not summary_words:
        return 0

    best = 0
    for source in source_texts:
        source_words = tokenize(source)
        if len(source_words) <= best:
            continue
        best = max(best, _longest_run_in(summary_words, source_words))
        if best == len(summary_words):
            break

    logger.debug(f"[CommonRun] longest shared run: {best} words")
    return best
