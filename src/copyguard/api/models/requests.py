"""
Pydantic request models -- what clients send to the compliance API.

These convert into the analyzer's dataclasses at the boundary; nothing past
the route handlers sees a raw dict.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ...analysis.models import CandidateSummary, SourceDocument
from ...config import ValidationConfig


class SourceDocumentIn(BaseModel):
    """One original article."""

    title: str = ""
    snippet: str = ""
    body: str = ""
    source_name: str = ""
    url: str = ""
    published_at: datetime | None = None

    def to_source(self) -> SourceDocument:
        return SourceDocument(
            title=self.title,
            snippet=self.snippet,
            body=self.body,
            source_name=self.source_name,
            url=self.url,
            published_at=self.published_at,
        )


class SummaryIn(BaseModel):
    """An AI-generated summary and the sources it links to."""

    id: str | None = None
    title: str = ""
    body: str = ""
    category: str = Field(..., description="News category, e.g. 경제")
    sources: list[SourceDocumentIn] = Field(default_factory=list)
    is_fallback: bool = False

    def to_summary(self) -> CandidateSummary:
        summary = CandidateSummary(
            title=self.title,
            body=self.body,
            category=self.category,
            sources=[s.to_source() for s in self.sources],
            is_fallback=self.is_fallback,
        )
        if self.id:
            summary.id = self.id
        return summary


class ThresholdOverrides(BaseModel):
    """Optional per-request thresholds; unset fields keep the server config."""

    max_quote_length: int | None = Field(None, ge=1)
    max_similarity_score: float | None = Field(None, ge=0.0, le=1.0)
    min_transformation_ratio: float | None = Field(None, ge=0.0, le=1.0)

    def apply(self, base: ValidationConfig) -> ValidationConfig:
        return ValidationConfig(
            max_quote_length=(
                base.max_quote_length
                if self.max_quote_length is None
                else self.max_quote_length
            ),
            max_similarity_score=(
                base.max_similarity_score
                if self.max_similarity_score is None
                else self.max_similarity_score
            ),
            min_transformation_ratio=(
                base.min_transformation_ratio
                if self.min_transformation_ratio is None
                else self.min_transformation_ratio
            ),
        )


class CheckRequest(BaseModel):
    """Ad-hoc validation of one summary against explicit articles."""

    summary: SummaryIn
    articles: list[SourceDocumentIn] = Field(
        default_factory=list,
        description="Articles to compare against (defaults to summary.sources)",
    )
    policy: str = Field("compliance", description="summary or compliance")
    thresholds: ThresholdOverrides = Field(default_factory=ThresholdOverrides)
    record: bool = Field(False, description="Record a failing verdict in the ledger")


class IngestRequest(BaseModel):
    """Store a generated summary together with the articles it came from."""

    summary: SummaryIn
    articles: list[SourceDocumentIn] = Field(default_factory=list)
