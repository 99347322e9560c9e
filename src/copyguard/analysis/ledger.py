"""
ViolationLedger -- bounded in-memory record of failed verdicts.

Append-only. When the number of entries exceeds `max_entries`, the ledger is
compacted in one step down to the most recent `keep_entries` (1000 -> 500 by
default), not trimmed one entry at a time.

Process-lifetime state: a restart loses it. All access goes through a lock so
one ledger can be shared by validators running on worker threads.

AuditHistory keeps the outcome of recent batch audits with the same
compaction policy (100 -> 50).
"""

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .models import Verdict, ViolationLogEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_KEEP_ENTRIES = 500
DEFAULT_HISTORY_MAX = 100
DEFAULT_HISTORY_KEEP = 50


@dataclass
class LedgerStats:
    total_violations: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
    by_violation_type: dict[str, int] = field(default_factory=dict)
    last_violation_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_violations": self.total_violations,
            "by_category": dict(self.by_category),
            "by_violation_type": dict(self.by_violation_type),
            "last_violation_at": (
                self.last_violation_at.isoformat() if self.last_violation_at else None
            ),
        }


class ViolationLedger:
    """
    Bounded log of failed verdicts.

    Usage:
        ledger = ViolationLedger()
        checker = ComplianceChecker(ledger=ledger)
        checker.validate(summary, sources)     # failures are recorded

        ledger.query(limit=20, category="경제")
        ledger.stats().total_violations
        ledger.clear()
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        keep_entries: int = DEFAULT_KEEP_ENTRIES,
    ):
        if not 0 < keep_entries <= max_entries:
            raise ValueError("keep_entries must be positive and not exceed max_entries")
        self._max_entries = max_entries
        self._keep_entries = keep_entries
        self._entries: list[ViolationLogEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def record(
        self,
        verdict: Verdict,
        summary_id: str | None = None,
        category: str | None = None,
    ) -> ViolationLogEntry:
        """Append a failed verdict. Compacts when the bound is exceeded."""
        entry = ViolationLogEntry(
            verdict=verdict,
            summary_id=summary_id if summary_id is not None else verdict.summary_id,
            category=category if category is not None else verdict.category,
        )
        with self._lock:
            self._entries.append(entry)
            if len(self._entries) > self._max_entries:
                self._entries = self._entries[-self._keep_entries:]
                logger.info(
                    f"[Ledger] Compacted to the most recent {self._keep_entries} entries"
                )
        return entry

    def query(
        self,
        limit: int = 50,
        category: str | None = None,
        since: datetime | None = None,
    ) -> list[ViolationLogEntry]:
        """Most recent entries first, optionally filtered by category and time."""
        with self._lock:
            entries = list(self._entries)

        if category:
            entries = [e for e in entries if e.category == category]
        if since is not None:
            if since.tzinfo is None:
                since = since.replace(tzinfo=timezone.utc)
            entries = [e for e in entries if e.verdict.checked_at >= since]

        if limit <= 0:
            return []
        return list(reversed(entries[-limit:]))

    def stats(self) -> LedgerStats:
        with self._lock:
            entries = list(self._entries)

        by_category: Counter = Counter()
        by_type: Counter = Counter()
        for entry in entries:
            by_category[entry.category or ""] += 1
            for violation in entry.verdict.violations:
                by_type[violation.type] += 1

        return LedgerStats(
            total_violations=len(entries),
            by_category=dict(by_category),
            by_violation_type=dict(by_type),
            last_violation_at=entries[-1].verdict.checked_at if entries else None,
        )

    def clear(self) -> None:
        with self._lock:
            self._entries = []
        logger.info("[Ledger] Violation log cleared")


class AuditHistory:
    """Recent batch audit reports, newest last, compacted like the ledger."""

    def __init__(self, max_entries: int = DEFAULT_HISTORY_MAX, keep_entries: int = DEFAULT_HISTORY_KEEP):
        if not 0 < keep_entries <= max_entries:
            raise ValueError("keep_entries must be positive and not exceed max_entries")
        self._max_entries = max_entries
        self._keep_entries = keep_entries
        self._reports: list[Any] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)

    def record(self, report: Any) -> None:
        with self._lock:
            self._reports.append(report)
            if len(self._reports) > self._max_entries:
                self._reports = self._reports[-self._keep_entries:]

    def recent(self, limit: int = 10) -> list[Any]:
        """Most recent reports first."""
        if limit <= 0:
            return []
        with self._lock:
            return list(reversed(self._reports[-limit:]))
