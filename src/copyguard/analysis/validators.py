"""
Verdict aggregators -- two copyright policies composed from the shared checks.

SummaryValidator runs right after a summary is generated:
  - verbatim run of max_quote_length words -> fail
  - tri-gram Jaccard similarity >= max_similarity_score -> fail
  - transformation ratio <= min_transformation_ratio -> fail
  - longest consecutive match >= max_quote_length -> fail

ComplianceChecker is the stricter audit policy:
  - verbatim run of max_quote_length words -> fail
  - word-frequency cosine similarity > max_similarity_score -> fail
  - transformation ratio < min_transformation_ratio -> fail
  - longest consecutive match >= max_quote_length -> fail
  - no sources, or any source URL not starting with "http" -> fail

The similarity and transformation operators differ between the two policies
on purpose; do not merge them.

A summary with no tokens at all is not flagged by the transformation check:
its ratio is 0.0 but there is no copied vocabulary to report.
"""

import logging
from typing import Sequence

from ..config import ValidationConfig
from .common_run import max_consecutive_match
from .ledger import ViolationLedger
from .models import (
    CandidateSummary,
    CheckKind,
    CheckResult,
    SourceDocument,
    Verdict,
    Violation,
    ViolationType,
)
from .quotes import find_long_quote
from .similarity import max_cosine_similarity, max_ngram_similarity
from .tokenizer import tokenize
from .transformation import transformation_ratio

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "저작권 검증 통과"


def _percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def source_texts(sources: Sequence[SourceDocument]) -> list[str]:
    """One comparison string (title + snippet + body) per source."""
    return [source.comparison_text() for source in sources]


# =============================================================================
# SHARED CHECKS
# =============================================================================


def check_long_quote(summary_text: str, texts: Sequence[str], window_size: int) -> CheckResult:
    match = find_long_quote(summary_text, texts, window_size)
    if match is None:
        return CheckResult(violation=False, metric=0)
    return CheckResult(
        violation=True,
        metric=match.word_count,
        reason=f"{window_size}단어 이상 직접 인용 감지",
        evidence=match.phrase,
    )


def check_transformation(
    summary_text: str, texts: Sequence[str], minimum: float, inclusive: bool
) -> CheckResult:
    """inclusive=True fails at the threshold itself (ratio <= minimum)."""
    ratio = transformation_ratio(summary_text, texts)
    if not tokenize(summary_text):
        return CheckResult(violation=False, metric=ratio)
    failed = ratio <= minimum if inclusive else ratio < minimum
    return CheckResult(
        violation=failed,
        metric=ratio,
        reason=f"변형도 부족 ({_percent(ratio)})" if failed else None,
    )


def check_consecutive_match(summary_text: str, texts: Sequence[str], limit: int) -> CheckResult:
    longest = max_consecutive_match(summary_text, texts)
    failed = longest >= limit
    return CheckResult(
        violation=failed,
        metric=longest,
        reason=f"연속 {longest}단어 일치" if failed else None,
    )


def check_source_links(sources: Sequence[SourceDocument]) -> CheckResult:
    if not sources:
        return CheckResult(violation=True, metric=0, reason="출처 링크 없음")
    invalid = [s for s in sources if not s.url or not s.url.startswith("http")]
    if invalid:
        return CheckResult(
            violation=True,
            metric=len(sources),
            reason="유효하지 않은 출처 URL",
            evidence=invalid[0].url or None,
        )
    return CheckResult(violation=False, metric=len(sources))


def needs_regeneration(verdict: Verdict) -> bool:
    return not verdict.is_safe


# =============================================================================
# POLICIES
# =============================================================================


class _Policy:
    """Common plumbing: text assembly, verdict building, ledger recording."""

    name = ""
    violation_types: dict[str, str] = {}

    def __init__(
        self,
        config: ValidationConfig | None = None,
        ledger: ViolationLedger | None = None,
    ):
        self.config = config or ValidationConfig()
        self._ledger = ledger

    def run_checks(
        self, summary: CandidateSummary, sources: Sequence[SourceDocument]
    ) -> dict[str, CheckResult]:
        raise NotImplementedError

    def validate(
        self, summary: CandidateSummary, sources: Sequence[SourceDocument]
    ) -> Verdict:
        """Run every check of this policy and build the verdict."""
        checks = self.run_checks(summary, sources)
        failing = {kind: r for kind, r in checks.items() if r.violation}
        violations = [
            Violation(
                type=self.violation_types.get(kind, kind),
                reason=result.reason or kind,
                details=result.evidence,
                metric=result.metric,
            )
            for kind, result in failing.items()
        ]
        verdict = Verdict(
            is_safe=not failing,
            checks=checks,
            message=", ".join(v.reason for v in violations) if violations else SUCCESS_MESSAGE,
            violations=violations,
            summary_id=summary.id,
            category=summary.category,
            policy=self.name,
        )

        if verdict.is_safe:
            logger.debug(f"[Validator] {self.name}: {summary.category} passed")
        else:
            logger.warning(
                f"[Validator] {self.name}: {summary.category} failed "
                f"({len(violations)} violations): {verdict.message}"
            )
            if self._ledger is not None:
                self._ledger.record(verdict, summary.id, summary.category)
        return verdict


class SummaryValidator(_Policy):
    """
    Post-generation check over the four text heuristics.

    Usage:
        validator = SummaryValidator()
        verdict = validator.validate(summary, articles)
        if not verdict.is_safe:
            print(verdict.message)   # e.g. "15단어 이상 직접 인용 감지, 연속 20단어 일치"
    """

    name = "summary"
    violation_types = {
        CheckKind.LONG_QUOTE: ViolationType.LONG_QUOTE,
        CheckKind.SIMILARITY: ViolationType.HIGH_SIMILARITY,
        CheckKind.TRANSFORMATION: ViolationType.INSUFFICIENT_REWRITING,
        CheckKind.CONSECUTIVE_MATCH: ViolationType.CONSECUTIVE_MATCH,
    }

    def run_checks(
        self, summary: CandidateSummary, sources: Sequence[SourceDocument]
    ) -> dict[str, CheckResult]:
        summary_text = summary.comparison_text()
        texts = source_texts(sources)
        cfg = self.config

        similarity = max_ngram_similarity(summary_text, texts)
        similar = similarity >= cfg.max_similarity_score
        return {
            CheckKind.LONG_QUOTE: check_long_quote(summary_text, texts, cfg.max_quote_length),
            CheckKind.SIMILARITY: CheckResult(
                violation=similar,
                metric=similarity,
                reason=f"문장 유사도 높음 ({_percent(similarity)})" if similar else None,
            ),
            CheckKind.TRANSFORMATION: check_transformation(
                summary_text, texts, cfg.min_transformation_ratio, inclusive=True
            ),
            CheckKind.CONSECUTIVE_MATCH: check_consecutive_match(
                summary_text, texts, cfg.max_quote_length
            ),
        }


class ComplianceChecker(_Policy):
    """
    Stricter audit policy: cosine structure similarity plus source links.

    Usage:
        checker = ComplianceChecker(ValidationConfig(max_quote_length=10), ledger=ledger)
        verdict = checker.validate(summary, articles)
    """

    name = "compliance"
    violation_types = {
        CheckKind.LONG_QUOTE: ViolationType.LONG_QUOTE,
        CheckKind.SIMILARITY: ViolationType.HIGH_SIMILARITY,
        CheckKind.REWRITING: ViolationType.INSUFFICIENT_REWRITING,
        CheckKind.CONSECUTIVE_MATCH: ViolationType.CONSECUTIVE_MATCH,
        CheckKind.SOURCE_LINKS: ViolationType.MISSING_SOURCES,
    }

    def run_checks(
        self, summary: CandidateSummary, sources: Sequence[SourceDocument]
    ) -> dict[str, CheckResult]:
        summary_text = summary.comparison_text()
        texts = source_texts(sources)
        cfg = self.config

        similarity = max_cosine_similarity(summary_text, texts)
        similar = similarity > cfg.max_similarity_score
        return {
            CheckKind.LONG_QUOTE: check_long_quote(summary_text, texts, cfg.max_quote_length),
            CheckKind.SIMILARITY: CheckResult(
                violation=similar,
                metric=similarity,
                reason=f"원문과 구조 과도하게 유사 ({_percent(similarity)})" if similar else None,
            ),
            CheckKind.REWRITING: check_transformation(
                summary_text, texts, cfg.min_transformation_ratio, inclusive=False
            ),
            CheckKind.CONSECUTIVE_MATCH: check_consecutive_match(
                summary_text, texts, cfg.max_quote_length
            ),
            CheckKind.SOURCE_LINKS: check_source_links(summary.sources),
        }


def validate_summary(
    summary: CandidateSummary,
    sources: Sequence[SourceDocument],
    config: ValidationConfig | None = None,
    ledger: ViolationLedger | None = None,
) -> Verdict:
    """Run the post-generation policy once."""
    return SummaryValidator(config, ledger).validate(summary, sources)
