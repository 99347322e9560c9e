"""
Copyright risk analyzer -- decides whether an AI summary is too close to its sources.

Runs after a summary is generated and again during compliance audits.
Failing summaries are regenerated upstream; the analyzer only judges.

Components:
  - tokenize: the shared word splitter (Korean-aware)
  - find_long_quote / has_long_quote: sliding-window verbatim run detector
  - max_ngram_similarity / max_cosine_similarity: similarity scorers
  - transformation_ratio: share of summary vocabulary absent from sources
  - max_consecutive_match: longest shared word run
  - SummaryValidator / ComplianceChecker: the two verdict policies
  - ViolationLedger: bounded log of failed verdicts
"""

from .common_run import max_consecutive_match
from .ledger import AuditHistory, LedgerStats, ViolationLedger
from .models import (
    CandidateSummary,
    CheckKind,
    CheckResult,
    SourceDocument,
    Verdict,
    Violation,
    ViolationLogEntry,
    ViolationType,
)
from .quotes import QuoteMatch, find_long_quote, has_long_quote
from .similarity import (
    cosine_similarity,
    jaccard_similarity,
    max_cosine_similarity,
    max_ngram_similarity,
)
from .tokenizer import ngrams, tokenize, word_frequencies
from .transformation import transformation_ratio
from .validators import ComplianceChecker, SummaryValidator, needs_regeneration, validate_summary

__all__ = [
    "AuditHistory",
    "CandidateSummary",
    "CheckKind",
    "CheckResult",
    "ComplianceChecker",
    "LedgerStats",
    "QuoteMatch",
    "SourceDocument",
    "SummaryValidator",
    "Verdict",
    "Violation",
    "ViolationLedger",
    "ViolationLogEntry",
    "ViolationType",
    "cosine_similarity",
    "find_long_quote",
    "has_long_quote",
    "jaccard_similarity",
    "max_consecutive_match",
    "max_cosine_similarity",
    "max_ngram_similarity",
    "needs_regeneration",
    "ngrams",
    "tokenize",
    "transformation_ratio",
    "validate_summary",
    "word_frequencies",
]
