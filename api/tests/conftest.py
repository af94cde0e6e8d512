"""
Pytest configuration and fixtures for API tests.

The scoring engine is built in-process from the default rule set; no Redis
is needed because enqueueing is patched where a test exercises it.
"""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from api.services.scoring_service import ScoringService, get_scoring_service
from worker.heuristics import RuleRegistry, ScoringEngine, SiteAggregator, default_rules

TEST_RUBRIC = {"conversion": 0.40, "trust": 0.25, "performance": 0.20, "mobile": 0.15}


@pytest.fixture
def scoring_service() -> ScoringService:
    engine = ScoringEngine(
        RuleRegistry(default_rules(), disabled=["alt_text_coverage"]),
        SiteAggregator(TEST_RUBRIC),
    )
    return ScoringService(engine)


@pytest.fixture
def client(scoring_service) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client wired to a known scoring service."""
    app = create_app()
    app.dependency_overrides[get_scoring_service] = lambda: scoring_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def page_payload():
    """Factory for camelCase page records as the crawler posts them."""

    def _make(
        page_type: str = "home",
        *,
        page_id: str = "page-1",
        crawl_id: str = "crawl-1",
        **metrics,
    ) -> dict:
        return {
            "id": page_id,
            "crawlId": crawl_id,
            "url": f"https://test-store.myshopify.com/{page_id}",
            "type": page_type,
            "metrics": {
                "aboveFold": {"ctaButtons": [], "height": 800},
                "performance": {"loadTime": 1200},
                **metrics,
            },
        }

    return _make
