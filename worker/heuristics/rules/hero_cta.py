"""
Hero CTA rule: a prominent call-to-action must be visible above the fold.

Scoring:
- 15 points: at least one prominent CTA above the fold
- 7 points: CTAs present but none prominent (47% of max)
- 0 points: no CTA above the fold
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import CTACandidate, HeroCTAMissingEvidence, HeroCTAWeakEvidence
from worker.heuristics.models import CTAButton, HeuristicResult, Page


@dataclass(frozen=True)
class HeroCTAConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("home", "product")
    partial_score_ratio: float = 0.47
    min_prominent_width: float = 120
    min_prominent_height: float = 35


class HeroCTARule(BaseHeuristicRule):
    rule_id = "hero_cta_detection"
    name = "Hero CTA Presence"
    description = "Ensures prominent call-to-action buttons are visible above the fold"
    category = "conversion"
    max_score = 15
    config_class = HeroCTAConfig

    config: HeroCTAConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        above_fold = page.metrics.above_fold
        if above_fold.cta_buttons:
            return None
        return self._failed_result(
            page,
            "hero_cta_missing",
            "high",
            HeroCTAMissingEvidence(
                cta_count=0,
                page_type=page.type,
                above_fold_height=above_fold.height,
            ),
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        cta_buttons = page.metrics.above_fold.cta_buttons
        if any(self.is_prominent_cta(cta) for cta in cta_buttons):
            return self._passed_result()

        return self._failed_result(
            page,
            "hero_cta_weak",
            "med",
            HeroCTAWeakEvidence(
                cta_count=len(cta_buttons),
                prominent_count=0,
                weak_ctas=tuple(
                    CTACandidate(text=cta.text, size=cta.size, prominent=cta.prominent)
                    for cta in cta_buttons
                ),
            ),
            score=self._partial_score(),
        )

    def is_prominent_cta(self, cta: CTAButton) -> bool:
        """Extractor flag AND minimum rendered size; both must hold."""
        return (
            cta.prominent
            and cta.size.width >= self.config.min_prominent_width
            and cta.size.height >= self.config.min_prominent_height
        )
