"""
API Gateway -- FastAPI application factory.

Composes the process-lifetime objects (violation ledger, audit history,
summary store, validators, optional summarizer pipeline) once and hangs them
on app.state for the routes.

    uvicorn copyguard.api.gateway:create_app --factory --host 0.0.0.0 --port 8000

Security:
  - CORS restricted to configured origins (default: localhost only)
  - Production auth check on startup
  - All external input validated at the boundary
"""

import logging
import os
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..analysis.ledger import AuditHistory, ViolationLedger
from ..analysis.validators import ComplianceChecker, SummaryValidator
from ..config import Settings, load_settings
from ..pipeline.store import SummaryStore
from ..pipeline.summaries import Summarizer, SummaryPipeline
from .middleware.auth import check_production_auth
from .routes import compliance, health, summaries

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
]


def _get_cors_origins() -> list[str]:
    """Load CORS origins from environment or use safe defaults."""
    origins_env = os.environ.get("CORS_ORIGINS", "")
    if origins_env.strip():
        return [o.strip() for o in origins_env.split(",") if o.strip()]
    return DEFAULT_CORS_ORIGINS


def create_app(
    settings: Settings | None = None,
    summarizer: Summarizer | None = None,
    ledger: ViolationLedger | None = None,
    store: SummaryStore | None = None,
) -> FastAPI:
    """
    Application factory -- creates and configures the FastAPI app.

    Args:
        settings: Thresholds and bounds (loaded from the environment if None).
        summarizer: Summary generator used for regeneration. Without one the
            regenerate endpoint answers 503.
        ledger: Shared violation ledger (a fresh one if None).
        store: Summary store (a fresh one if None).
    """
    check_production_auth()
    settings = settings or load_settings()

    application = FastAPI(
        title="copyguard API",
        description="Copyright safety validation for AI news summaries",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=_get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )

    if ledger is None:
        ledger = ViolationLedger(
            max_entries=settings.ledger_max_entries,
            keep_entries=settings.ledger_keep_entries,
        )
    if store is None:
        store = SummaryStore()
    summary_validator = SummaryValidator(settings.validation, ledger)

    state = application.state
    state.settings = settings
    state.ledger = ledger
    state.audit_history = AuditHistory()
    state.store = store
    state.summary_validator = summary_validator
    state.compliance_checker = ComplianceChecker(settings.validation, ledger)
    state.pipeline = (
        SummaryPipeline(
            summarizer,
            validator=summary_validator,
            store=store,
            max_attempts=settings.regenerate_attempts,
        )
        if summarizer is not None
        else None
    )
    state.start_time = time.time()

    application.include_router(health.router, tags=["Health"])
    application.include_router(summaries.router, prefix="/api/v1", tags=["Summaries"])
    application.include_router(compliance.router, prefix="/api/v1", tags=["Compliance"])

    logger.info(
        "[Gateway] API initialized "
        f"(quote={settings.validation.max_quote_length}, "
        f"similarity={settings.validation.max_similarity_score}, "
        f"transformation={settings.validation.min_transformation_ratio})"
    )
    return application
