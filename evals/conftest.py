"""Shared fixtures -- Korean market-news articles, summary factory, fresh ledger."""

import pytest

from copyguard.analysis.ledger import ViolationLedger
from copyguard.analysis.models import CandidateSummary, SourceDocument

MARKET_BODY = (
    "한국은행이 기준금리를 동결하면서 국내 증시는 외국인 투자자들의 매수세에 힘입어 "
    "사흘 연속 상승했으며 전문가들은 반도체 업종을 중심으로 당분간 강세가 이어질 것으로 "
    "전망했다 다만 환율 변동성은 여전히 부담 요인으로 꼽혔다"
)

SAFE_BODY = "국내 증시가 상승세를 이어가며 투자자들의 관심이 높아지고 있다"


@pytest.fixture
def market_source():
    return SourceDocument(
        title="기준금리 동결",
        body=MARKET_BODY,
        source_name="연합뉴스",
        url="https://news.example.com/economy/1",
    )


@pytest.fixture
def make_summary(market_source):
    """Build a CandidateSummary; sources default to the market article."""

    def _make(body, title="", category="경제", sources=None):
        return CandidateSummary(
            title=title,
            body=body,
            category=category,
            sources=[market_source] if sources is None else sources,
        )

    return _make


@pytest.fixture
def safe_summary(make_summary):
    return make_summary(SAFE_BODY, title="증시 상승")


@pytest.fixture
def copied_summary(make_summary):
    """Title plus the first 20 words of the market article, verbatim."""
    return make_summary(" ".join(MARKET_BODY.split()[:20]), title="증시 상승")


@pytest.fixture
def ledger():
    return ViolationLedger()
