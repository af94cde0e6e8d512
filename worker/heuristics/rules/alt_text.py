"""
Alt-text coverage rule: share of images that carry descriptive alt text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.evidence import AltTextEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class AltTextConfig(RuleConfig):
    min_coverage: float = 0.9


class AltTextCoverageRule(BaseHeuristicRule):
    rule_id = "alt_text_coverage"
    name = "Image Alt Text Coverage"
    description = "Checks that product and content images carry alt text"
    category = "trust"
    max_score = 10
    config_class = AltTextConfig

    config: AltTextConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        image_alt = page.metrics.image_alt
        if image_alt is not None and image_alt.is_consistent:
            if image_alt.total == 0 or image_alt.with_alt > 0:
                return None
        # Not measured, or counts that contradict each other, count the same
        # as no alt text at all.
        total = image_alt.total if image_alt and image_alt.total is not None else 0
        return self._failed_result(
            page,
            "alt_text_missing",
            "high",
            AltTextEvidence(
                total_images=total,
                images_with_alt=0,
                coverage=0.0,
                min_coverage=self.config.min_coverage,
            ),
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        image_alt = page.metrics.image_alt
        if image_alt.total == 0:
            return self._passed_result()

        coverage = image_alt.with_alt / image_alt.total
        if coverage >= self.config.min_coverage:
            return self._passed_result()

        return self._failed_result(
            page,
            "alt_text_coverage_low",
            "low",
            AltTextEvidence(
                total_images=image_alt.total,
                images_with_alt=image_alt.with_alt,
                coverage=round(coverage, 2),
                min_coverage=self.config.min_coverage,
            ),
            score=self._partial_score(),
        )
