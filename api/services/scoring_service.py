"""
Service layer for scoring operations.

Sits between the routes and the heuristic engine / job queue so the routes
only deal with HTTP concerns.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from api.queue import enqueue_scoring_job
from api.schemas import RuleResponse
from shared.config import get_config
from shared.logging import get_logger
from worker.heuristics import (
    CrawlScore,
    Page,
    RejectedPage,
    ScoringEngine,
    build_scoring_engine,
    check_crawl_pages,
    parse_pages,
)

logger = get_logger(__name__)


class NoValidPagesError(Exception):
    """Raised when none of the submitted page records could be parsed."""

    def __init__(self, rejected: list[RejectedPage]):
        super().__init__(f"All {len(rejected)} page record(s) were rejected")
        self.rejected = rejected


class ScoringService:
    """Service for scoring crawls and describing the rule set."""

    def __init__(self, engine: ScoringEngine):
        self.engine = engine

    def score_crawl(self, crawl_id: str, raw_pages: list[dict[str, Any]]) -> CrawlScore:
        """
        Score a crawl synchronously.

        Records that fail to parse are reported in rejectedPages. Raises
        NoValidPagesError if nothing parsed, ValueError on crawl id mismatch
        or duplicate page ids.
        """
        pages, rejected = self._parse(raw_pages)
        return self.engine.score_crawl(crawl_id, pages, rejected)

    def enqueue_scoring(
        self, crawl_id: str, raw_pages: list[dict[str, Any]]
    ) -> tuple[str, list[RejectedPage]]:
        """
        Hand a crawl to the background worker.

        Pages go through the same parsing and crawl checks as synchronous
        scoring so a bad request fails here instead of inside the worker.
        Only the pages that parsed are enqueued.
        """
        pages, rejected = self._parse(raw_pages)
        check_crawl_pages(crawl_id, pages)
        payload = [p.model_dump(mode="json", by_alias=True) for p in pages]
        return enqueue_scoring_job(crawl_id, payload), rejected

    def list_rules(self) -> list[RuleResponse]:
        return [RuleResponse.model_validate(d) for d in self.engine.registry.describe()]

    @staticmethod
    def _parse(raw_pages: list[dict[str, Any]]) -> tuple[list[Page], list[RejectedPage]]:
        pages, rejected = parse_pages(raw_pages)
        if not pages:
            raise NoValidPagesError(rejected)
        return pages, rejected


@lru_cache(maxsize=1)
def get_scoring_engine() -> ScoringEngine:
    engine = build_scoring_engine(get_config())
    logger.info(
        "scoring_engine_built",
        rule_count=len(engine.registry.rules),
        enabled_rule_count=len(engine.registry.enabled_rules),
        rubric=engine.aggregator.rubric,
    )
    return engine


def get_scoring_service() -> ScoringService:
    """Dependency to get a ScoringService instance."""
    return ScoringService(get_scoring_engine())
