"""
Summaries API -- store generated summaries and serve them safely.

  GET  /api/v1/summaries        -- Stored summaries with disclaimer/attribution;
                                   failed or source-less summaries are withheld
  GET  /api/v1/summaries/stats  -- Store statistics
  POST /api/v1/summaries        -- Ingest a summary + its articles (admin).
                                   Non-fallback summaries are validated first.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ...pipeline.summaries import attach_verdict
from ...safety import apply_copyright_safety, block_violations, require_source_links
from ...security import (
    MAX_SUMMARY_LENGTH,
    ValidationError,
    validate_category,
    validate_length,
    validate_list_size,
)
from ..middleware.auth import AdminContext, require_admin
from ..models.requests import IngestRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/summaries")

MAX_ARTICLES = 50


@router.get("")
async def list_summaries(request: Request) -> dict:
    summaries = request.app.state.store.summaries()
    safe, blocked = block_violations(summaries)
    linked, filtered = require_source_links(safe)
    return {
        "summaries": [apply_copyright_safety(s) for s in linked],
        "blocked_count": blocked,
        "filtered_count": filtered,
    }


@router.get("/stats")
async def summary_stats(request: Request) -> dict:
    return request.app.state.store.stats()


@router.post("")
async def ingest_summary(
    body: IngestRequest,
    request: Request,
    admin: AdminContext = Depends(require_admin),
) -> dict:
    try:
        validate_category(body.summary.category)
        validate_length(
            body.summary.title + body.summary.body, "summary", max_length=MAX_SUMMARY_LENGTH
        )
        validate_list_size(body.articles, "articles", max_items=MAX_ARTICLES)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = request.app.state
    summary = body.summary.to_summary()
    articles = [a.to_source() for a in body.articles] or list(summary.sources)

    if not summary.is_fallback:
        attach_verdict(summary, state.summary_validator.validate(summary, articles))

    state.store.put(summary, articles)
    logger.info(
        f"[Summary] Stored {summary.category} summary {summary.id} "
        f"(validated={summary.validation_passed}, by={admin.operator})"
    )
    return {"summary": apply_copyright_safety(summary)}
