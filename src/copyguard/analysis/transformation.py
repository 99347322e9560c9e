"""Transformation ratio -- share of the summary's vocabulary not found in any source."""

from typing import Sequence

from .tokenizer import vocabulary


def transformation_ratio(summary_text: str | None, source_texts: Sequence[str]) -> float:
    """Return 1 - |summary ∩ sources| / |summary| over unique tokens.

    A summary with no tokens has nothing rewritten and scores 0.0.
    """
    summary_words = vocabulary(summary_text)
    if not summary_words:
        return 0.0
    source_words = vocabulary(source_texts)
    matched = len(summary_words & source_words)
    return 1.0 - matched / len(summary_words)
