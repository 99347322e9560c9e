"""
Health endpoint.

  GET /health -- Liveness probe (always returns 200 if the process is alive)
"""

import time

from fastapi import APIRouter, Request

from ..models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def liveness(request: Request) -> HealthResponse:
    state = request.app.state
    start_time = getattr(state, "start_time", time.time())
    return HealthResponse(
        status="healthy",
        summaries_stored=len(state.store),
        violations_logged=len(state.ledger),
        summarizer_configured=state.pipeline is not None,
        uptime_seconds=round(time.time() - start_time, 1),
    )
