"""
Response safety -- disclaimers, attribution and serving filters.
"""

from copyguard.analysis.models import SourceDocument
from copyguard.safety import (
    BASE_DISCLAIMER,
    apply_copyright_safety,
    block_violations,
    generate_attribution,
    generate_disclaimer,
    require_source_links,
)


class TestDisclaimer:
    def test_names_each_outlet_once(self, market_source):
        other = SourceDocument(source_name="한국경제", url="https://x.example.com")
        text = generate_disclaimer([market_source, other, market_source])
        assert text.startswith("본 내용은 연합뉴스, 한국경제 등의")

    def test_without_sources(self):
        assert generate_disclaimer([]) == BASE_DISCLAIMER
        assert generate_attribution(None) == ""

    def test_attribution(self, market_source):
        assert generate_attribution([market_source]) == "출처: 연합뉴스"


class TestServing:
    def test_apply_marks_compliance(self, safe_summary):
        data = apply_copyright_safety(safe_summary)
        assert data["copyright_compliant"] is False  # not validated yet
        assert data["ai_generated"] is True

        safe_summary.validation_passed = True
        data = apply_copyright_safety(safe_summary)
        assert data["copyright_compliant"] is True
        assert data["sources"][0]["url"] == "https://news.example.com/economy/1"

    def test_block_and_filter(self, make_summary):
        passed = make_summary("a")
        passed.validation_passed = True
        failed = make_summary("b")
        failed.validation_passed = False
        unchecked = make_summary("c", sources=[])

        kept, blocked = block_violations([passed, failed, unchecked])
        assert kept == [passed, unchecked]
        assert blocked == 1

        linked, filtered = require_source_links(kept)
        assert linked == [passed]
        assert filtered == 1
