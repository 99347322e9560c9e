"""
SummaryPipeline -- drives an external summarizer through copyright validation.

The summarizer is any object implementing the Summarizer protocol (an LLM
client wrapper in production, a stub in tests). The pipeline never looks at
prompts or model output; it only validates what comes back.

Two flows:
  - summarize_categories(): one summary per category from its top articles.
    Fallback summaries (no LLM call) skip validation. A category whose
    summarizer call raises is logged and skipped; the others still run.
  - regenerate(): up to max_attempts generate-and-validate rounds. The first
    safe summary replaces the stored one; if none passes, the stored summary
    is left alone and None is returned.

Re-running the validator on the same text always gives the same verdict, so
every retry asks the summarizer for a new summary.
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from ..analysis.models import CandidateSummary, SourceDocument, Verdict
from ..analysis.validators import SummaryValidator
from .store import SummaryStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 2.0
DEFAULT_TOP_ARTICLES = 3


@runtime_checkable
class Summarizer(Protocol):
    """Produces a CandidateSummary for a category from its articles."""

    async def summarize(
        self, articles: list[SourceDocument], category: str
    ) -> CandidateSummary:
        ...


def attach_verdict(summary: CandidateSummary, verdict: Verdict) -> CandidateSummary:
    """Record the verdict on the summary before it is stored."""
    summary.validation_passed = verdict.is_safe
    summary.validation_details = verdict.to_dict()
    return summary


class SummaryPipeline:
    """
    Usage:
        pipeline = SummaryPipeline(summarizer=my_llm_summarizer, store=store)
        await pipeline.summarize_categories({"경제": articles, "IT": it_articles})

        new = await pipeline.regenerate("경제", articles)
        if new is None:
            # the previous summary is still in the store
    """

    def __init__(
        self,
        summarizer: Summarizer,
        validator: SummaryValidator | None = None,
        store: SummaryStore | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._summarizer = summarizer
        self._validator = validator or SummaryValidator()
        self.store = store if store is not None else SummaryStore()
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay

    async def summarize_categories(
        self,
        articles_by_category: dict[str, list[SourceDocument]],
        top_n: int = DEFAULT_TOP_ARTICLES,
        delay: float = 0.0,
    ) -> list[CandidateSummary]:
        """Summarize and validate every category that has articles."""
        results: list[CandidateSummary] = []

        for category, articles in articles_by_category.items():
            if not articles:
                continue
            top_articles = list(articles[:top_n])

            logger.info(f"[Summary] Generating summary for {category}")
            try:
                summary = await self._summarizer.summarize(top_articles, category)
            except Exception as e:
                logger.error(f"[Summary] Summarizer failed for {category}, skipping: {e}")
                continue

            if not summary.is_fallback:
                attach_verdict(summary, self._validator.validate(summary, top_articles))

            self.store.put(summary, top_articles)
            results.append(summary)

            if delay > 0:
                await asyncio.sleep(delay)

        passed = sum(1 for s in results if s.validation_passed)
        logger.info(
            f"[Summary] {len(results)} summaries generated "
            f"(passed: {passed}, failed: {len(results) - passed})"
        )
        return results

    async def regenerate(
        self, category: str, articles: list[SourceDocument]
    ) -> CandidateSummary | None:
        """Retry the summarizer until a summary passes validation."""
        for attempt in range(1, self._max_attempts + 1):
            logger.info(
                f"[Summary] Regenerating {category} (attempt {attempt}/{self._max_attempts})"
            )
            try:
                summary = await self._summarizer.summarize(articles, category)
            except Exception as e:
                logger.warning(f"[Summary] Summarizer failed for {category}: {e}")
                summary = None

            if summary is not None:
                verdict = self._validator.validate(summary, articles)
                attach_verdict(summary, verdict)
                if verdict.is_safe:
                    self.store.put(summary, articles)
                    return summary

            if attempt < self._max_attempts and self._retry_delay > 0:
                await asyncio.sleep(self._retry_delay)

        logger.warning(
            f"[Summary] {category}: no summary passed validation after "
            f"{self._max_attempts} attempts, keeping the previous one"
        )
        return None
