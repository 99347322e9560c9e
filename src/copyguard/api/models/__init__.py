"""Pydantic models for API request/response contracts."""
from .requests import (
    CheckRequest,
    IngestRequest,
    SourceDocumentIn,
    SummaryIn,
    ThresholdOverrides,
)
from .responses import (
    CheckResultOut,
    ComplianceStatsResponse,
    HealthResponse,
    LedgerStatsResponse,
    VerdictResponse,
    ViolationOut,
)
