"""
Compliance API -- copyright validation, violation ledger and audits.

  POST   /api/v1/compliance/check                  -- Validate an ad-hoc summary
  GET    /api/v1/compliance/stats                  -- Pass rate + ledger statistics
  GET    /api/v1/compliance/violations             -- Ledger entries (filters: category, since)
  DELETE /api/v1/compliance/violations             -- Clear the ledger (admin)
  POST   /api/v1/compliance/audit                  -- Audit all stored summaries (admin)
  GET    /api/v1/compliance/audit/history          -- Recent audit reports
  POST   /api/v1/compliance/validate/{category}    -- Re-validate one stored summary
  POST   /api/v1/compliance/regenerate/{category}  -- Regenerate until safe (admin)
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ...analysis.validators import ComplianceChecker, SummaryValidator
from ...pipeline.audit import audit_summaries
from ...safety import apply_copyright_safety
from ...security import (
    MAX_SUMMARY_LENGTH,
    ValidationError,
    validate_category,
    validate_in_choices,
    validate_length,
    validate_list_size,
    validate_timestamp,
)
from ..middleware.auth import AdminContext, require_admin
from ..models.requests import CheckRequest
from ..models.responses import ComplianceStatsResponse, LedgerStatsResponse, VerdictResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/compliance")

POLICIES = ["summary", "compliance"]
MAX_ARTICLES = 50
MAX_QUERY_LIMIT = 500


def _verdict_response(verdict) -> VerdictResponse:
    return VerdictResponse(**verdict.to_dict())


def _checked_category(category: str) -> str:
    try:
        return validate_category(category)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/check", response_model=VerdictResponse)
async def check_summary(body: CheckRequest, request: Request) -> VerdictResponse:
    """Validate a summary against explicit articles without storing it."""
    try:
        validate_in_choices(body.policy, POLICIES, "policy")
        validate_category(body.summary.category)
        validate_length(
            body.summary.title + body.summary.body, "summary", max_length=MAX_SUMMARY_LENGTH
        )
        validate_list_size(body.articles, "articles", max_items=MAX_ARTICLES)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = request.app.state
    config = body.thresholds.apply(state.settings.validation)
    ledger = state.ledger if body.record else None
    policy_cls = ComplianceChecker if body.policy == "compliance" else SummaryValidator

    summary = body.summary.to_summary()
    articles = [a.to_source() for a in body.articles] or summary.sources
    verdict = await asyncio.to_thread(policy_cls(config, ledger).validate, summary, articles)
    return _verdict_response(verdict)


@router.get("/stats", response_model=ComplianceStatsResponse)
async def compliance_stats(request: Request) -> ComplianceStatsResponse:
    state = request.app.state
    summaries = state.store.summaries()
    total = len(summaries)
    passed = sum(1 for s in summaries if s.validation_passed)
    return ComplianceStatsResponse(
        total_summaries=total,
        passed_validation=passed,
        failed_validation=total - passed,
        pass_rate=f"{passed / total * 100:.1f}%" if total else "N/A",
        violations=LedgerStatsResponse(**state.ledger.stats().to_dict()),
    )


@router.get("/violations")
async def list_violations(
    request: Request,
    limit: int = 50,
    category: str | None = None,
    since: str | None = None,
) -> dict:
    """Ledger entries, newest first, plus stored summaries that currently fail."""
    try:
        since_dt = validate_timestamp(since, "since") if since else None
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = request.app.state
    entries = state.ledger.query(
        limit=max(0, min(limit, MAX_QUERY_LIMIT)), category=category, since=since_dt
    )
    failed_summaries = [
        {
            "id": s.id,
            "category": s.category,
            "title": s.title,
            "validation_details": s.validation_details,
            "generated_at": s.generated_at.isoformat(),
        }
        for s in state.store.summaries()
        if s.validation_passed is False
    ]
    return {
        "total": len(entries) + len(failed_summaries),
        "violations": [e.to_dict() for e in entries],
        "failed_summaries": failed_summaries,
    }


@router.delete("/violations")
async def clear_violations(
    request: Request,
    admin: AdminContext = Depends(require_admin),
) -> dict:
    request.app.state.ledger.clear()
    logger.info(f"[Compliance] Violation ledger cleared by {admin.operator}")
    return {"cleared": True}


@router.post("/audit")
async def run_audit(
    request: Request,
    admin: AdminContext = Depends(require_admin),
) -> dict:
    """Re-validate every stored summary under the compliance policy."""
    state = request.app.state
    summaries = state.store.summaries()
    if not summaries:
        raise HTTPException(status_code=400, detail="No summaries to audit")

    logger.info(f"[Compliance] Audit started by {admin.operator}")
    report = await audit_summaries(
        summaries,
        state.store.articles_by_category(),
        checker=state.compliance_checker,
        history=state.audit_history,
        concurrency=state.settings.audit_concurrency,
    )
    return {"result": report.to_dict()}


@router.get("/audit/history")
async def audit_history(request: Request, limit: int = 10) -> dict:
    reports = request.app.state.audit_history.recent(max(0, min(limit, 100)))
    return {"history": [r.to_dict() for r in reports]}


@router.post("/validate/{category}", response_model=VerdictResponse)
async def validate_category_summary(category: str, request: Request) -> VerdictResponse:
    """Run the compliance policy on the stored summary for one category."""
    category = _checked_category(category)
    state = request.app.state
    stored = state.store.get(category)
    if stored is None:
        raise HTTPException(status_code=404, detail=f"No summary for category '{category}'")

    verdict = await asyncio.to_thread(
        state.compliance_checker.validate, stored.summary, stored.articles
    )
    return _verdict_response(verdict)


@router.post("/regenerate/{category}")
async def regenerate_category(
    category: str,
    request: Request,
    admin: AdminContext = Depends(require_admin),
) -> dict:
    """Ask the summarizer for a new summary until one passes validation."""
    category = _checked_category(category)
    state = request.app.state
    if state.pipeline is None:
        raise HTTPException(status_code=503, detail="No summarizer configured")

    stored = state.store.get(category)
    if stored is None or not stored.articles:
        raise HTTPException(status_code=400, detail=f"No articles stored for '{category}'")

    logger.info(f"[Compliance] Regeneration of {category} requested by {admin.operator}")
    summary = await state.pipeline.regenerate(category, stored.articles)
    if summary is None:
        raise HTTPException(
            status_code=409,
            detail="Could not generate a summary that passes validation",
        )
    return {"summary": apply_copyright_safety(summary)}
