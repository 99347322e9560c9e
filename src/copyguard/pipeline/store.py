"""
SummaryStore -- the current summary and its source articles per category.

Holds one CandidateSummary per category together with the articles it was
generated from, so audits and regeneration can re-validate against the same
inputs. Process memory only; persistence belongs to the caller.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..analysis.models import CandidateSummary, SourceDocument


@dataclass
class StoredSummary:
    summary: CandidateSummary
    articles: list[SourceDocument] = field(default_factory=list)


class SummaryStore:
    """
    Thread-safe category -> summary map.

    Usage:
        store = SummaryStore()
        store.put(summary, articles)
        store.get("경제").summary.validation_passed
    """

    def __init__(self):
        self._items: dict[str, StoredSummary] = {}
        self._last_updated: datetime | None = None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def put(self, summary: CandidateSummary, articles: list[SourceDocument] | None = None) -> None:
        """Store or replace the summary for summary.category."""
        with self._lock:
            self._items[summary.category] = StoredSummary(summary, list(articles or []))
            self._last_updated = datetime.now(timezone.utc)

    def get(self, category: str) -> StoredSummary | None:
        with self._lock:
            return self._items.get(category)

    def summaries(self) -> list[CandidateSummary]:
        with self._lock:
            return [item.summary for item in self._items.values()]

    def articles_by_category(self) -> dict[str, list[SourceDocument]]:
        with self._lock:
            return {category: list(item.articles) for category, item in self._items.items()}

    def stats(self) -> dict[str, Any]:
        summaries = self.summaries()
        total = len(summaries)
        validated = sum(1 for s in summaries if s.validation_passed)
        fallback = sum(1 for s in summaries if s.is_fallback)
        return {
            "last_updated": self._last_updated.isoformat() if self._last_updated else None,
            "total": total,
            "validated": validated,
            "failed": total - validated,
            "fallback": fallback,
            "ai_generated": total - fallback,
            "categories": [
                {
                    "category": s.category,
                    "validated": s.validation_passed,
                    "source_count": len(s.sources),
                }
                for s in summaries
            ],
        }
