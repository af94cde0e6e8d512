"""
Shipping info rule: shipping cost or free-shipping messaging before checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import PageTypeEvidence, ShippingInfoHiddenEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class ShippingInfoConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("product", "cart")


class ShippingInfoRule(BaseHeuristicRule):
    rule_id = "shipping_info"
    name = "Shipping Information"
    description = "Checks that shipping costs or free-shipping thresholds are communicated"
    category = "conversion"
    max_score = 10
    config_class = ShippingInfoConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        shipping = page.metrics.shipping
        if shipping is not None and any(m.strip() for m in shipping.messages):
            return None
        return self._failed_result(
            page, "shipping_info_missing", "high", PageTypeEvidence(page_type=page.type)
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        shipping = page.metrics.shipping
        if shipping.above_fold:
            return self._passed_result()

        return self._failed_result(
            page,
            "shipping_info_hidden",
            "low",
            ShippingInfoHiddenEvidence(
                messages=tuple(m for m in shipping.messages if m.strip()),
                free_shipping_threshold=shipping.free_shipping_threshold,
            ),
            score=self._partial_score(),
        )
