"""Data models for the copyright risk analyzer."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _generate_id() -> str:
    return uuid.uuid4().hex[:12]


class CheckKind:
    """Names of the individual checks. Plain strings so callers can add their own."""

    LONG_QUOTE = "long_quote"
    SIMILARITY = "similarity"
    TRANSFORMATION = "transformation"
    CONSECUTIVE_MATCH = "consecutive_match"
    REWRITING = "rewriting"
    SOURCE_LINKS = "source_links"


class ViolationType:
    """Violation categories counted by the ledger statistics."""

    LONG_QUOTE = "long_quote"
    HIGH_SIMILARITY = "high_similarity"
    INSUFFICIENT_REWRITING = "insufficient_rewriting"
    CONSECUTIVE_MATCH = "consecutive_match"
    MISSING_SOURCES = "missing_sources"


# =============================================================================
# INPUTS
# =============================================================================


@dataclass(frozen=True)
class SourceDocument:
    """One original article a summary was written from.

    Owned by the crawler; the analyzer only reads it.
    """

    title: str = ""
    snippet: str = ""
    body: str = ""
    source_name: str = ""
    url: str = ""
    published_at: datetime | None = None

    def comparison_text(self) -> str:
        return f"{self.title or ''} {self.snippet or ''} {self.body or ''}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceDocument":
        published = data.get("published_at")
        if isinstance(published, str) and published:
            published = datetime.fromisoformat(published)
        return cls(
            title=data.get("title") or "",
            snippet=data.get("snippet") or "",
            body=data.get("body") or "",
            source_name=data.get("source_name") or "",
            url=data.get("url") or "",
            published_at=published or None,
        )


@dataclass
class CandidateSummary:
    """
    An AI-generated summary awaiting validation.

    is_fallback: produced without an LLM call (first article's own title and
                 snippet); validation is skipped for these upstream.
    validation_passed / validation_details: attached by the caller after the
                 analyzer runs. The analyzer itself never writes them.
    """

    title: str = ""
    body: str = ""
    category: str = ""
    sources: list[SourceDocument] = field(default_factory=list)
    generated_at: datetime = field(default_factory=_now)
    is_fallback: bool = False
    validation_passed: bool | None = None
    validation_details: dict[str, Any] | None = None
    id: str = field(default_factory=_generate_id)

    def comparison_text(self) -> str:
        return f"{self.title or ''} {self.body or ''}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CandidateSummary":
        kwargs: dict[str, Any] = {
            "title": data.get("title") or "",
            "body": data.get("body") or "",
            "category": data.get("category") or "",
            "sources": [SourceDocument.from_dict(s) for s in data.get("sources") or []],
            "is_fallback": bool(data.get("is_fallback", False)),
        }
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        generated = data.get("generated_at")
        if isinstance(generated, str) and generated:
            kwargs["generated_at"] = datetime.fromisoformat(generated)
        return cls(**kwargs)


# =============================================================================
# RESULTS
# =============================================================================


@dataclass
class CheckResult:
    """Outcome of a single check.

    Attributes:
        violation: True when the check failed.
        metric: The measured value (score, ratio, word count), if any.
        reason: Human-readable failure description, None when passing.
        evidence: Offending text fragment, if the check produces one.
    """

    violation: bool = False
    metric: float | None = None
    reason: str | None = None
    evidence: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "violation": self.violation,
            "metric": self.metric,
            "reason": self.reason,
            "evidence": self.evidence,
        }


@dataclass
class Violation:
    """A failing check in the shape the ledger and audit reports count."""

    type: str
    reason: str
    details: str | None = None
    metric: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "reason": self.reason,
            "details": self.details,
            "metric": self.metric,
        }


@dataclass
class Verdict:
    """Pass/fail decision plus per-check diagnostics for one summary."""

    is_safe: bool
    checks: dict[str, CheckResult] = field(default_factory=dict)
    message: str = ""
    violations: list[Violation] = field(default_factory=list)
    summary_id: str | None = None
    category: str | None = None
    policy: str = ""
    checked_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_safe": self.is_safe,
            "checks": {kind: r.to_dict() for kind, r in self.checks.items()},
            "message": self.message,
            "violations": [v.to_dict() for v in self.violations],
            "summary_id": self.summary_id,
            "category": self.category,
            "policy": self.policy,
            "checked_at": self.checked_at.isoformat(),
        }


@dataclass
class ViolationLogEntry:
    """A failed verdict as stored in the violation ledger."""

    verdict: Verdict
    summary_id: str | None = None
    category: str | None = None
    logged_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary_id": self.summary_id,
            "category": self.category,
            "logged_at": self.logged_at.isoformat(),
            "verdict": self.verdict.to_dict(),
        }
