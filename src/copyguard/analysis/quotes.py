"""
Verbatim-quote detector -- finds long literal word runs copied from sources.

Slides a window of `window_size` summary tokens across the summary and tests
each joined window against the tokenized, space-joined text of all sources
concatenated. Matches are whole-word: "he quick" does not match "the quick".
The first hit wins.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from .tokenizer import joined_tokens, tokenize

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 15
PHRASE_DISPLAY_LENGTH = 50


@dataclass
class QuoteMatch:
    """A copied run found in the summary.

    phrase: the matched words, truncated for display.
    position: index of the first matched word in the summary tokens.
    """

    phrase: str
    position: int
    word_count: int


def _display(phrase: str) -> str:
    if len(phrase) <= PHRASE_DISPLAY_LENGTH:
        return phrase
    return phrase[:PHRASE_DISPLAY_LENGTH] + "..."


def find_long_quote(
    summary_text: str | None,
    source_texts: Sequence[str],
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> QuoteMatch | None:
    """Return the first `window_size`-word run shared with the sources, or None."""
    summary_words = tokenize(summary_text)
    if window_size < 1 or len(summary_words) < window_size:
        return None

    haystack = joined_tokens(" ".join(t or "" for t in source_texts))
    if not haystack:
        return None
    padded = f" {haystack} "

    for i in range(len(summary_words) - window_size + 1):
        phrase = " ".join(summary_words[i:i + window_size])
        if f" {phrase} " in padded:
            logger.debug(f"[Quotes] {window_size}-word run at position {i}")
            return QuoteMatch(phrase=_display(phrase), position=i, word_count=window_size)
    return None


def has_long_quote(
    summary_text: str | None,
    source_texts: Sequence[str],
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> bool:
    return find_long_quote(summary_text, source_texts, window_size) is not None
