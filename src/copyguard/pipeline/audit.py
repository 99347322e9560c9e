"""
Batch audit -- re-validate every stored summary against its category's articles.

Validations are independent, so they run on worker threads, at most
`concurrency` at a time. The report keeps the input order.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..analysis.ledger import AuditHistory
from ..analysis.models import CandidateSummary, SourceDocument, Verdict
from ..analysis.validators import ComplianceChecker

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


@dataclass
class AuditReport:
    total: int = 0
    passed: int = 0
    failed: int = 0
    violations: list[dict[str, Any]] = field(default_factory=list)
    audited_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "violations": self.violations,
            "audited_at": self.audited_at.isoformat(),
        }


async def audit_summaries(
    summaries: list[CandidateSummary],
    articles_by_category: dict[str, list[SourceDocument]],
    checker: ComplianceChecker | None = None,
    history: AuditHistory | None = None,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> AuditReport:
    """Validate all summaries and summarize the outcome."""
    checker = checker or ComplianceChecker()
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def _validate(summary: CandidateSummary) -> Verdict:
        async with semaphore:
            articles = articles_by_category.get(summary.category, [])
            return await asyncio.to_thread(checker.validate, summary, articles)

    logger.info(f"[Audit] Auditing {len(summaries)} summaries")
    verdicts = await asyncio.gather(*(_validate(s) for s in summaries))

    report = AuditReport(total=len(summaries))
    for summary, verdict in zip(summaries, verdicts):
        if verdict.is_safe:
            report.passed += 1
            continue
        report.failed += 1
        report.violations.append({
            "id": summary.id,
            "category": summary.category,
            "title": summary.title,
            "violations": [v.to_dict() for v in verdict.violations],
        })

    if history is not None:
        history.record(report)

    logger.info(f"[Audit] Complete: {report.passed}/{report.total} passed")
    return report
