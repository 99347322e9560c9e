"""Pydantic response models -- what the compliance API returns."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "healthy"
    summaries_stored: int = 0
    violations_logged: int = 0
    summarizer_configured: bool = False
    uptime_seconds: float = 0.0


class CheckResultOut(BaseModel):
    violation: bool
    metric: float | None = None
    reason: str | None = None
    evidence: str | None = None


class ViolationOut(BaseModel):
    type: str
    reason: str
    details: str | None = None
    metric: float | None = None


class VerdictResponse(BaseModel):
    """Verdict for one summary."""

    is_safe: bool
    message: str
    policy: str
    summary_id: str | None = None
    category: str | None = None
    checks: dict[str, CheckResultOut] = Field(default_factory=dict)
    violations: list[ViolationOut] = Field(default_factory=list)
    checked_at: str


class LedgerStatsResponse(BaseModel):
    total_violations: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    by_violation_type: dict[str, int] = Field(default_factory=dict)
    last_violation_at: str | None = None


class ComplianceStatsResponse(BaseModel):
    total_summaries: int = 0
    passed_validation: int = 0
    failed_validation: int = 0
    pass_rate: str = "N/A"
    violations: LedgerStatsResponse
