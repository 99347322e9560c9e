"""
Verdict policies -- SummaryValidator and ComplianceChecker end to end.

Covers the threshold operators of each policy, empty-input behavior, the
Korean market-news scenario and sensitivity to configured thresholds.
"""

import pytest

from copyguard.analysis.models import CandidateSummary, CheckKind, SourceDocument, ViolationType
from copyguard.analysis.validators import (
    SUCCESS_MESSAGE,
    ComplianceChecker,
    SummaryValidator,
    needs_regeneration,
    validate_summary,
)
from copyguard.config import ConfigError, ValidationConfig

BANK_SOURCE = (
    "regulators approved merger between two regional banks after months review "
    "citing stronger capital buffers improved lending capacity across rural districts "
    "while critics warned about reduced competition higher fees"
)

# 10 words shared with BANK_SOURCE, 12 new words around them
BANK_SUMMARY = (
    "officials celebrated yesterday saying citing stronger capital buffers improved "
    "lending capacity across rural districts consolidation should deliver benefits "
    "households nationwide analysts remain"
)


def _bank_article(url="https://news.example.com/banks"):
    return SourceDocument(title="", body=BANK_SOURCE, source_name="Daily", url=url)


class TestMarketScenario:
    """Korean summary against a Korean market article."""

    def test_rewritten_summary_is_safe(self, safe_summary, market_source):
        verdict = validate_summary(safe_summary, [market_source])
        assert verdict.is_safe
        assert verdict.message == SUCCESS_MESSAGE
        assert verdict.violations == []
        assert not needs_regeneration(verdict)

    def test_verbatim_copy_fails_with_quote_message(self, copied_summary, market_source):
        verdict = validate_summary(copied_summary, [market_source])
        assert not verdict.is_safe
        assert verdict.checks[CheckKind.LONG_QUOTE].violation
        assert verdict.checks[CheckKind.CONSECUTIVE_MATCH].metric == 20
        assert "15단어 이상 직접 인용 감지" in verdict.message
        assert "연속 20단어 일치" in verdict.message
        assert needs_regeneration(verdict)

    def test_verdict_carries_summary_identity(self, copied_summary, market_source):
        verdict = SummaryValidator().validate(copied_summary, [market_source])
        assert verdict.summary_id == copied_summary.id
        assert verdict.category == "경제"
        assert verdict.policy == "summary"

    def test_validator_does_not_mutate_summary(self, copied_summary, market_source):
        SummaryValidator().validate(copied_summary, [market_source])
        assert copied_summary.validation_passed is None
        assert copied_summary.validation_details is None


class TestEmptyInput:
    """Degenerate inputs never crash and never flag by accident."""

    def test_empty_summary_is_safe(self, make_summary, market_source):
        verdict = validate_summary(make_summary(""), [market_source])
        assert verdict.is_safe
        checks = verdict.checks
        assert checks[CheckKind.SIMILARITY].metric == 0.0
        assert checks[CheckKind.TRANSFORMATION].metric == 0.0
        assert checks[CheckKind.CONSECUTIVE_MATCH].metric == 0
        assert not any(r.violation for r in checks.values())

    def test_empty_summary_passes_compliance_with_links(self, make_summary, market_source):
        assert ComplianceChecker().validate(make_summary(""), [market_source]).is_safe

    def test_empty_sources_only_leave_transformation_to_judge(self, safe_summary):
        verdict = validate_summary(safe_summary, [])
        assert verdict.is_safe
        assert verdict.checks[CheckKind.TRANSFORMATION].metric == 1.0

    def test_sources_with_missing_text(self, safe_summary):
        blank = SourceDocument(url="https://news.example.com/blank")
        assert validate_summary(safe_summary, [blank]).is_safe


class TestSummaryPolicy:
    """Jaccard similarity fails at the threshold itself."""

    def test_similarity_fails_at_threshold(self, make_summary):
        # identical text -> Jaccard 1.0
        summary = make_summary(BANK_SOURCE, sources=[_bank_article()])
        config = ValidationConfig(max_similarity_score=1.0, min_transformation_ratio=0.0,
                                  max_quote_length=100)
        verdict = SummaryValidator(config).validate(summary, [_bank_article()])
        sim = verdict.checks[CheckKind.SIMILARITY]
        assert sim.metric == pytest.approx(1.0)
        assert sim.violation
        assert "문장 유사도 높음 (100.0%)" in verdict.message

    def test_transformation_fails_at_threshold(self, make_summary):
        # two shared words, two new words -> ratio exactly 0.5
        summary = make_summary("regulators approved sunny weather", sources=[_bank_article()])
        verdict = SummaryValidator().validate(summary, [_bank_article()])
        check = verdict.checks[CheckKind.TRANSFORMATION]
        assert check.metric == pytest.approx(0.5)
        assert check.violation
        assert "변형도 부족 (50.0%)" in verdict.message
        assert [v.type for v in verdict.violations] == [ViolationType.INSUFFICIENT_REWRITING]

    def test_no_source_link_requirement(self, make_summary):
        summary = make_summary(BANK_SUMMARY, sources=[])
        verdict = SummaryValidator().validate(summary, [_bank_article()])
        assert verdict.is_safe
        assert CheckKind.SOURCE_LINKS not in verdict.checks


class TestCompliancePolicy:
    """Cosine similarity, inclusive transformation threshold, source links."""

    def test_similarity_passes_at_threshold(self, make_summary):
        # identical text -> cosine 1.0, which is not above a 1.0 limit
        summary = make_summary(BANK_SOURCE, sources=[_bank_article()])
        config = ValidationConfig(max_similarity_score=1.0, min_transformation_ratio=0.0,
                                  max_quote_length=100)
        verdict = ComplianceChecker(config).validate(summary, [_bank_article()])
        sim = verdict.checks[CheckKind.SIMILARITY]
        assert sim.metric == pytest.approx(1.0)
        assert sim.violation is False

    def test_transformation_passes_at_threshold(self, make_summary):
        summary = make_summary("regulators approved sunny weather", sources=[_bank_article()])
        verdict = ComplianceChecker().validate(summary, [_bank_article()])
        assert not verdict.checks[CheckKind.REWRITING].violation
        assert verdict.is_safe

    def test_missing_sources_fail(self, make_summary):
        summary = make_summary(BANK_SUMMARY, sources=[])
        verdict = ComplianceChecker().validate(summary, [_bank_article()])
        assert not verdict.is_safe
        assert verdict.checks[CheckKind.SOURCE_LINKS].reason == "출처 링크 없음"
        assert [v.type for v in verdict.violations] == [ViolationType.MISSING_SOURCES]

    @pytest.mark.parametrize("url", ["", "ftp://news.example.com/a", "news.example.com/a"])
    def test_invalid_source_url_fails(self, make_summary, url):
        article = _bank_article(url=url)
        summary = make_summary(BANK_SUMMARY, sources=[_bank_article(), article])
        verdict = ComplianceChecker().validate(summary, [article])
        assert verdict.checks[CheckKind.SOURCE_LINKS].violation
        assert verdict.checks[CheckKind.SOURCE_LINKS].reason == "유효하지 않은 출처 URL"

    def test_quote_evidence_is_reported(self, copied_summary, market_source):
        verdict = ComplianceChecker().validate(copied_summary, [market_source])
        quote = verdict.checks[CheckKind.LONG_QUOTE]
        assert quote.violation
        assert quote.evidence.startswith("한국은행이 기준금리를")
        types = {v.type for v in verdict.violations}
        assert ViolationType.LONG_QUOTE in types
        assert ViolationType.CONSECUTIVE_MATCH in types

    def test_records_failures_in_ledger(self, copied_summary, safe_summary, market_source, ledger):
        checker = ComplianceChecker(ledger=ledger)
        checker.validate(safe_summary, [market_source])
        checker.validate(copied_summary, [market_source])
        assert len(ledger) == 1
        entry = ledger.query()[0]
        assert entry.summary_id == copied_summary.id
        assert entry.category == "경제"


class TestConfigSensitivity:
    """Thresholds are parameters, not constants."""

    def test_lower_quote_length_flags_shared_run(self, make_summary):
        summary = make_summary(BANK_SUMMARY, sources=[_bank_article()])
        articles = [_bank_article()]

        default = SummaryValidator().validate(summary, articles)
        assert default.is_safe
        assert default.checks[CheckKind.CONSECUTIVE_MATCH].metric == 10

        strict = SummaryValidator(ValidationConfig(max_quote_length=5)).validate(summary, articles)
        assert not strict.is_safe
        assert strict.checks[CheckKind.LONG_QUOTE].violation
        assert "5단어 이상 직접 인용 감지" in strict.message

    def test_higher_similarity_limit_lets_summary_pass(self, make_summary):
        article = SourceDocument(body="alpha", url="https://news.example.com/alpha")
        body = " ".join(["alpha"] * 10 + ["beta", "gamma", "delta", "epsilon"])
        summary = make_summary(body, sources=[article])

        default = ComplianceChecker().validate(summary, [article])
        assert not default.is_safe
        assert default.checks[CheckKind.SIMILARITY].metric == pytest.approx(0.9806, abs=1e-3)

        relaxed = ComplianceChecker(ValidationConfig(max_similarity_score=0.99))
        assert relaxed.validate(summary, [article]).is_safe

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_quote_length": 0},
            {"max_similarity_score": 1.5},
            {"min_transformation_ratio": -0.1},
        ],
    )
    def test_invalid_thresholds_are_rejected(self, kwargs):
        with pytest.raises(ConfigError):
            ValidationConfig(**kwargs)


class TestVerdictSerialization:
    def test_to_dict_is_json_ready(self, copied_summary, market_source):
        data = validate_summary(copied_summary, [market_source]).to_dict()
        assert data["is_safe"] is False
        assert data["checks"]["long_quote"]["violation"] is True
        assert isinstance(data["checked_at"], str)
        assert {v["type"] for v in data["violations"]} >= {"long_quote", "consecutive_match"}

    def test_summary_from_dict(self):
        summary = CandidateSummary.from_dict({
            "id": "abc",
            "title": "증시 상승",
            "body": "본문",
            "category": "경제",
            "sources": [{"url": "https://x.example.com", "source_name": "연합뉴스"}],
        })
        assert summary.id == "abc"
        assert summary.sources[0].source_name == "연합뉴스"
        assert summary.comparison_text() == "증시 상승 본문"
