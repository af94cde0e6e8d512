"""
Scoring engine: registry evaluation per page, then site aggregation per crawl.

Page evaluations are independent and may run in a thread pool. Aggregation
waits for all of them (join) before computing category scores.
"""

from __future__ import annotations

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Optional, Sequence

from shared.config import AppConfig
from shared.logging import get_logger
from worker.heuristics.aggregator import SiteAggregator
from worker.heuristics.intake import check_crawl_pages, parse_pages
from worker.heuristics.models import CrawlScore, Page, PageEvaluation, RejectedPage
from worker.heuristics.registry import RuleRegistry
from worker.heuristics.rules import default_rules

logger = get_logger(__name__)


class ScoringEngine:
    def __init__(
        self,
        registry: RuleRegistry,
        aggregator: SiteAggregator,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.registry = registry
        self.aggregator = aggregator
        self.max_workers = max_workers

    def evaluate_page(self, page: Page) -> PageEvaluation:
        return self.registry.evaluate(page)

    def evaluate_pages(self, pages: Sequence[Page]) -> list[PageEvaluation]:
        """Evaluate pages, preserving input order in the result."""
        if self.max_workers == 1 or len(pages) <= 1:
            return [self.registry.evaluate(page) for page in pages]

        # One context copy per page so worker threads log with the caller's
        # bound fields (crawl_id, ...).
        contexts = [contextvars.copy_context() for _ in pages]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(pages))) as pool:
            return list(
                pool.map(
                    lambda ctx, page: ctx.run(self.registry.evaluate, page),
                    contexts,
                    pages,
                )
            )

    def score_crawl(
        self,
        crawl_id: str,
        pages: Sequence[Page],
        rejected: Sequence[RejectedPage] = (),
    ) -> CrawlScore:
        """
        Score every page of one crawl and aggregate the site score.

        Raises ValueError if a page belongs to a different crawl or two pages
        share an id. Pages rejected at intake are passed through to the result.
        """
        check_crawl_pages(crawl_id, pages)

        started = time.perf_counter()
        logger.info("crawl_scoring_started", crawl_id=crawl_id, page_count=len(pages))

        evaluations = self.evaluate_pages(pages)
        site_score = self.aggregator.aggregate(evaluations)
        findings = tuple(f for evaluation in evaluations for f in evaluation.findings)

        logger.info(
            "crawl_scoring_completed",
            crawl_id=crawl_id,
            page_count=len(pages),
            finding_count=len(findings),
            rejected_count=len(rejected),
            degraded_count=sum(1 for f in findings if f.degraded),
            overall=site_score.overall,
            undefined_categories=site_score.undefined_categories,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )

        return CrawlScore(
            crawl_id=crawl_id,
            site_score=site_score,
            pages=tuple(evaluations),
            findings=findings,
            rejected_pages=tuple(rejected),
        )

    def score_raw_pages(self, crawl_id: str, raw_pages: Iterable[Any]) -> CrawlScore:
        """Parse crawler records one by one, then score the pages that parsed."""
        pages, rejected = parse_pages(raw_pages)
        return self.score_crawl(crawl_id, pages, rejected)


def build_scoring_engine(config: Optional[AppConfig] = None) -> ScoringEngine:
    """Wire the default rule set, rubric and worker count from configuration."""
    if config is None:
        config = AppConfig.from_env()
    registry = RuleRegistry(default_rules(), disabled=config.disabled_rules)
    aggregator = SiteAggregator(config.rubric_weights)
    return ScoringEngine(registry, aggregator, max_workers=config.scoring_max_workers)
