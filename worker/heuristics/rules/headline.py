"""
Headline rule: the main headline should exist and be short enough to scan.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import HeadlineLengthEvidence, PageTypeEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class HeadlineConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("home", "product", "collection")
    min_words: int = 3
    max_words: int = 12


class HeadlineLengthRule(BaseHeuristicRule):
    rule_id = "headline_length"
    name = "Headline Length"
    description = "Checks that the primary headline is present and between 3 and 12 words"
    category = "conversion"
    max_score = 10
    config_class = HeadlineConfig

    config: HeadlineConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        headline = page.metrics.headline
        if headline is not None and headline.text.strip():
            return None
        return self._failed_result(
            page, "headline_missing", "high", PageTypeEvidence(page_type=page.type)
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        text = " ".join(page.metrics.headline.text.split())
        word_count = len(text.split(" "))

        if self.config.min_words <= word_count <= self.config.max_words:
            return self._passed_result()

        return self._failed_result(
            page,
            "headline_length_suboptimal",
            "med",
            HeadlineLengthEvidence(
                text=text,
                word_count=word_count,
                min_words=self.config.min_words,
                max_words=self.config.max_words,
            ),
            score=self._partial_score(),
        )
