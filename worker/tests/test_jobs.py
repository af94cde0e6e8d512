"""
Tests for the RQ scoring job handler (called directly, no Redis).
"""

from __future__ import annotations

import pytest

from worker.heuristics import RuleRegistry, ScoringEngine, SiteAggregator, default_rules
from worker.heuristics.rules import HeroCTARule
from worker.jobs import process_scoring_job
from worker.tests.builders import make_healthy_page, make_page

RUBRIC = {"conversion": 0.40, "trust": 0.25, "performance": 0.20, "mobile": 0.15}


@pytest.fixture
def engine() -> ScoringEngine:
    return ScoringEngine(RuleRegistry(default_rules()), SiteAggregator(RUBRIC))


def as_payload(page) -> dict:
    return page.model_dump(mode="json", by_alias=True)


def test_job_returns_camel_case_crawl_score(engine):
    pages = [as_payload(make_healthy_page("product")), as_payload(make_page("home", page_id="home"))]

    result = process_scoring_job("test-crawl-1", pages, engine=engine)

    assert result["crawlId"] == "test-crawl-1"
    assert set(result) == {"crawlId", "siteScore", "pages", "findings", "rejectedPages"}
    assert result["rejectedPages"] == []
    assert set(result["siteScore"]) == {"overall", "breakdown", "categories"}
    assert [p["pageId"] for p in result["pages"]] == ["test-page-1", "home"]
    first = result["findings"][0]
    assert first["pageId"] == "home"
    assert first["ruleId"] == "hero_cta_missing"
    assert first["evidence"] == {"ctaCount": 0, "pageType": "home", "aboveFoldHeight": 800.0}


def test_job_accepts_raw_crawler_payload():
    pages = [
        {
            "id": "p1",
            "crawlId": "crawl-9",
            "url": "https://shop.example.com",
            "type": "home",
            "metrics": {"aboveFold": {"ctaButtons": [], "height": 720}, "performance": {"loadTime": 900}},
        }
    ]
    engine = ScoringEngine(RuleRegistry([HeroCTARule()]), SiteAggregator(RUBRIC))

    result = process_scoring_job("crawl-9", pages, engine=engine)

    assert len(result["findings"]) == 1
    assert result["siteScore"]["breakdown"]["conversion"] == 0
    assert result["siteScore"]["overall"] == 0


def test_job_reports_unparseable_page_as_rejected(engine):
    pages = [{"id": "p1", "crawlId": "crawl-9", "url": "https://x", "type": "blog", "metrics": {}}]

    result = process_scoring_job("crawl-9", pages, engine=engine)

    assert result["pages"] == []
    assert result["siteScore"]["overall"] is None
    rejected = result["rejectedPages"]
    assert [(r["index"], r["pageId"]) for r in rejected] == [(0, "p1")]
    assert rejected[0]["errors"]


def test_malformed_page_does_not_abort_the_crawl(engine):
    good = as_payload(make_healthy_page("product", page_id="good"))
    broken = {
        "id": "broken",
        "crawlId": "test-crawl-1",
        "url": "https://test-store.myshopify.com/broken",
        "type": "home",
        "metrics": {"aboveFold": {"ctaButtons": [], "height": "tall"}},
    }

    result = process_scoring_job("test-crawl-1", [broken, good], engine=engine)

    assert [p["pageId"] for p in result["pages"]] == ["good"]
    assert result["rejectedPages"][0]["index"] == 0
    assert result["rejectedPages"][0]["pageId"] == "broken"
    assert result["siteScore"]["overall"] == 100


def test_hero_image_without_size_is_scored(engine):
    """A hero image group with only a src parses and scores as a missing hero."""
    good = as_payload(make_healthy_page("home", page_id="good"))
    partial = as_payload(make_page("home", page_id="partial"))
    partial["metrics"]["heroImage"] = {"src": "https://cdn.example.com/hero.jpg"}

    result = process_scoring_job("test-crawl-1", [good, partial], engine=engine)

    assert result["rejectedPages"] == []
    assert [p["pageId"] for p in result["pages"]] == ["good", "partial"]
    partial_codes = [f["ruleId"] for f in result["pages"][1]["findings"]]
    assert "hero_image_missing" in partial_codes


def test_job_rejects_pages_from_another_crawl(engine):
    pages = [as_payload(make_page("home", crawl_id="crawl-2"))]

    with pytest.raises(ValueError, match="crawl-1"):
        process_scoring_job("crawl-1", pages, engine=engine)


def test_job_builds_engine_from_environment(monkeypatch):
    monkeypatch.setenv("HEURISTICS_DISABLED_RULES", "page_performance")
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("RUBRIC_WEIGHTS", raising=False)

    result = process_scoring_job("test-crawl-1", [as_payload(make_page("collection"))])

    outcomes = result["pages"][0]["outcomes"]
    assert "page_performance" not in {o["ruleId"] for o in outcomes}
