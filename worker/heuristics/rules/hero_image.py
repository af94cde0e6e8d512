"""
Hero image rule: a large hero image above the fold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import HeroImageMissingEvidence, HeroImageSmallEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class HeroImageConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("home", "product")
    min_width: float = 600
    min_height: float = 300


class HeroImageRule(BaseHeuristicRule):
    rule_id = "hero_image_presence"
    name = "Hero Image"
    description = "Checks for a sufficiently large hero image above the fold"
    category = "conversion"
    max_score = 10
    config_class = HeroImageConfig

    config: HeroImageConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        hero = page.metrics.hero_image
        # An image whose size was not measured counts as missing.
        if hero is not None and hero.above_fold and hero.size is not None:
            return None
        return self._failed_result(
            page,
            "hero_image_missing",
            "high",
            HeroImageMissingEvidence(
                page_type=page.type,
                above_fold_height=page.metrics.above_fold.height,
            ),
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        hero = page.metrics.hero_image
        if hero.size.width >= self.config.min_width and hero.size.height >= self.config.min_height:
            return self._passed_result()

        return self._failed_result(
            page,
            "hero_image_small",
            "low",
            HeroImageSmallEvidence(
                src=hero.src,
                size=hero.size,
                min_width=self.config.min_width,
                min_height=self.config.min_height,
            ),
            score=self._partial_score(),
        )
