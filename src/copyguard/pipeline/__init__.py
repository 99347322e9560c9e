"""
Collaborator-facing flows around the analyzer.

  - SummaryStore: current summary + articles per category
  - SummaryPipeline: summarizer -> validation -> store, with regeneration
  - audit_summaries: batch re-validation under the compliance policy
"""
from .audit import AuditReport, audit_summaries
from .store import StoredSummary, SummaryStore
from .summaries import Summarizer, SummaryPipeline, attach_verdict
