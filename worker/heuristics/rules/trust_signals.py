"""
Trust signals rule: security badges, guarantees and payment icons near the purchase.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import PageTypeEvidence, TrustSignalsWeakEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class TrustSignalsConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("product", "cart", "checkout")
    min_badges: int = 2


class TrustSignalsRule(BaseHeuristicRule):
    rule_id = "trust_signals"
    name = "Trust Signals Presence"
    description = "Checks for trust signals like security badges, guarantees and payment icons"
    category = "trust"
    max_score = 10
    config_class = TrustSignalsConfig

    config: TrustSignalsConfig

    def _badges(self, page: Page) -> tuple[str, ...]:
        trust = page.metrics.trust
        if trust is None:
            return ()
        # Same badge reported twice (header + footer) counts once.
        return tuple(dict.fromkeys(b.strip().lower() for b in trust.badges if b.strip()))

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        if self._badges(page):
            return None
        return self._failed_result(
            page, "trust_signals_missing", "high", PageTypeEvidence(page_type=page.type)
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        badges = self._badges(page)
        if len(badges) >= self.config.min_badges:
            return self._passed_result()

        return self._failed_result(
            page,
            "trust_signals_weak",
            "low",
            TrustSignalsWeakEvidence(
                badges=badges,
                badge_count=len(badges),
                min_badges=self.config.min_badges,
            ),
            score=self._partial_score(),
        )
