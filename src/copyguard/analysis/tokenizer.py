"""
Tokenizer -- the single definition of "a word" for every check.

Lower-cases, replaces anything that is not a word character, whitespace or a
Hangul syllable with a space, splits on whitespace and drops one-character
tokens. Korean text passes through intact.

The n-gram and frequency helpers below are built on tokenize() so that all
checks agree on token boundaries.
"""

import re
from collections import Counter
from typing import Iterable

_NON_WORD = re.compile(r"[^\w\s가-힣]")
MIN_TOKEN_LENGTH = 2


def tokenize(text: str | None) -> list[str]:
    """Split text into lower-cased word tokens. Empty or None gives []."""
    if not text:
        return []
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [word for word in cleaned.split() if len(word) >= MIN_TOKEN_LENGTH]


def joined_tokens(text: str | None) -> str:
    """Tokenized text re-joined with single spaces (substring search target)."""
    return " ".join(tokenize(text))


def vocabulary(texts: str | Iterable[str] | None) -> set[str]:
    """Unique tokens of one text or of several texts combined."""
    if texts is None:
        return set()
    if isinstance(texts, str):
        return set(tokenize(texts))
    words: set[str] = set()
    for text in texts:
        words.update(tokenize(text))
    return words


def ngrams(text: str | list[str] | None, n: int = 3) -> set[str]:
    """Set of contiguous n-word sequences, each joined with a space.

    Accepts raw text or an already tokenized list.
    """
    words = text if isinstance(text, list) else tokenize(text)
    if n < 1 or len(words) < n:
        return set()
    return {" ".join(words[i:i + n]) for i in range(len(words) - n + 1)}


def word_frequencies(text: str | None) -> Counter:
    """Sparse word -> count vector."""
    return Counter(tokenize(text))
