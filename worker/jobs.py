"""
RQ job handlers for crawl scoring.

Thin entrypoint: bind logging context, parse the crawler's page payloads one
by one, run the scoring engine, return a JSON-compatible result (stored by RQ).
A page that cannot be parsed is listed under rejectedPages; the rest of the
crawl is still scored.
"""

from __future__ import annotations

from typing import Any, Optional

from shared.config import get_config
from shared.logging import bind_request_context, clear_request_context, get_logger
from worker.heuristics import ScoringEngine, build_scoring_engine

logger = get_logger(__name__)


def process_scoring_job(
    crawl_id: str,
    pages: list[dict[str, Any]],
    engine: Optional[ScoringEngine] = None,
) -> dict[str, Any]:
    """
    RQ job handler: score all pages of one crawl.

    Args:
        crawl_id: Crawl the pages belong to
        pages: Page records as produced by the crawler (camelCase JSON)
        engine: Optional pre-built engine (tests); built from config otherwise

    Returns:
        The crawl score dumped with camelCase keys, including any pages
        rejected at intake.

    Raises:
        ValueError: if a parsed page belongs to another crawl or two pages
            share an id
    """
    bind_request_context(crawl_id=crawl_id)
    logger.info("scoring_job_started", page_count=len(pages))

    try:
        if engine is None:
            engine = build_scoring_engine(get_config())

        result = engine.score_raw_pages(crawl_id, pages)
        logger.info(
            "scoring_job_completed",
            overall=result.site_score.overall,
            finding_count=len(result.findings),
            rejected_count=len(result.rejected_pages),
        )
        return result.model_dump(mode="json", by_alias=True)
    finally:
        clear_request_context()
