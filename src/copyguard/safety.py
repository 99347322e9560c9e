"""
Response safety -- legal shaping applied to summaries before they are served.

  generate_disclaimer()     -- AI-generated notice naming the source outlets
  generate_attribution()    -- "출처: A, B" line
  apply_copyright_safety()  -- serializable summary with disclaimer, attribution,
                               compliance flag and AI-generated marker
  block_violations()        -- drops summaries that failed validation
  require_source_links()    -- drops summaries without any source
"""

import logging
from typing import Any, Sequence

from .analysis.models import CandidateSummary, SourceDocument

logger = logging.getLogger(__name__)

BASE_DISCLAIMER = "본 내용은 AI가 생성한 요약입니다."
ANONYMOUS_DISCLAIMER = "본 내용은 AI가 공개 정보를 종합하여 재작성한 요약입니다."


def _unique_names(sources: Sequence[SourceDocument]) -> list[str]:
    names: list[str] = []
    for source in sources:
        if source.source_name and source.source_name not in names:
            names.append(source.source_name)
    return names


def generate_disclaimer(sources: Sequence[SourceDocument] | None) -> str:
    if not sources:
        return BASE_DISCLAIMER
    names = _unique_names(sources)
    if not names:
        return ANONYMOUS_DISCLAIMER
    return f"본 내용은 {', '.join(names)} 등의 공개 정보를 AI가 종합하여 재작성한 요약입니다."


def generate_attribution(sources: Sequence[SourceDocument] | None) -> str:
    named = [s.source_name for s in sources or [] if s.source_name]
    if not named:
        return ""
    return f"출처: {', '.join(named)}"


def summary_to_dict(summary: CandidateSummary) -> dict[str, Any]:
    return {
        "id": summary.id,
        "category": summary.category,
        "title": summary.title,
        "body": summary.body,
        "sources": [
            {
                "name": s.source_name,
                "url": s.url,
                "title": s.title,
                "published_at": s.published_at.isoformat() if s.published_at else None,
            }
            for s in summary.sources
        ],
        "generated_at": summary.generated_at.isoformat(),
        "is_fallback": summary.is_fallback,
        "validation_passed": summary.validation_passed,
        "validation_details": summary.validation_details,
    }


def apply_copyright_safety(summary: CandidateSummary) -> dict[str, Any]:
    """Serialize a summary with the legal fields every response must carry."""
    data = summary_to_dict(summary)
    data["disclaimer"] = generate_disclaimer(summary.sources)
    data["attribution"] = generate_attribution(summary.sources)
    data["copyright_compliant"] = summary.validation_passed is True
    data["ai_generated"] = not summary.is_fallback
    return data


def block_violations(
    summaries: Sequence[CandidateSummary],
) -> tuple[list[CandidateSummary], int]:
    """Drop summaries whose validation explicitly failed. Unvalidated ones pass."""
    kept = [s for s in summaries if s.validation_passed is not False]
    blocked = len(summaries) - len(kept)
    if blocked:
        logger.info(f"[Safety] Blocked {blocked} summaries that failed copyright validation")
    return kept, blocked


def require_source_links(
    summaries: Sequence[CandidateSummary],
) -> tuple[list[CandidateSummary], int]:
    """Drop summaries that carry no source at all."""
    kept = [s for s in summaries if s.sources]
    filtered = len(summaries) - len(kept)
    if filtered:
        logger.info(f"[Safety] Filtered {filtered} summaries without source links")
    return kept, filtered
