"""
Sticky add-to-cart rule: on mobile, the add-to-cart button stays reachable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import PageTypeEvidence, StickyAddToCartEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class StickyAddToCartConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("product",)
    partial_score_ratio: float = 0.4


class StickyAddToCartRule(BaseHeuristicRule):
    rule_id = "sticky_add_to_cart"
    name = "Sticky Add to Cart"
    description = "Checks for an add-to-cart button that stays visible while scrolling on mobile"
    category = "mobile"
    max_score = 10
    config_class = StickyAddToCartConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        add_to_cart = page.metrics.add_to_cart
        if add_to_cart is not None and add_to_cart.present:
            return None
        return self._failed_result(
            page, "add_to_cart_missing", "high", PageTypeEvidence(page_type=page.type)
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        add_to_cart = page.metrics.add_to_cart
        if add_to_cart.sticky_on_mobile:
            return self._passed_result()

        return self._failed_result(
            page,
            "sticky_add_to_cart_missing",
            "med",
            StickyAddToCartEvidence(
                button_text=add_to_cart.text,
                selector=add_to_cart.selector,
                sticky=False,
            ),
            score=self._partial_score(),
        )
