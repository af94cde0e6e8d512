"""
Price display rule: product pages show the price, ideally without scrolling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import PageTypeEvidence, PriceBelowFoldEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class PriceDisplayConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("product",)


class PriceDisplayRule(BaseHeuristicRule):
    rule_id = "price_display"
    name = "Price Display"
    description = "Ensures the product price is visible above the fold"
    category = "conversion"
    max_score = 10
    config_class = PriceDisplayConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        price = page.metrics.price
        if price is not None and price.visible:
            return None
        return self._failed_result(
            page, "price_missing", "high", PageTypeEvidence(page_type=page.type)
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        price = page.metrics.price
        if price.above_fold:
            return self._passed_result()

        return self._failed_result(
            page,
            "price_below_fold",
            "med",
            PriceBelowFoldEvidence(
                price_text=price.text,
                price_top=price.position.top if price.position else None,
                above_fold_height=page.metrics.above_fold.height,
            ),
            score=self._partial_score(),
        )
