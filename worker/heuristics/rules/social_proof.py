"""
Social proof rule: a review widget with enough rated reviews.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.constants import PageType
from worker.heuristics.evidence import SocialProofMissingEvidence, SocialProofWeakEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class SocialProofConfig(RuleConfig):
    applicable_page_types: tuple[PageType, ...] = ("home", "product")
    min_reviews: int = 5


class SocialProofRule(BaseHeuristicRule):
    rule_id = "social_proof"
    name = "Social Proof"
    description = "Checks for customer reviews and ratings"
    category = "trust"
    max_score = 10
    config_class = SocialProofConfig

    config: SocialProofConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        reviews = page.metrics.reviews
        if reviews is not None and reviews.widget_present and reviews.review_count > 0:
            return None
        return self._failed_result(
            page,
            "social_proof_missing",
            "high",
            SocialProofMissingEvidence(
                page_type=page.type,
                widget_present=bool(reviews and reviews.widget_present),
                review_count=reviews.review_count if reviews else 0,
            ),
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        reviews = page.metrics.reviews
        if reviews.review_count >= self.config.min_reviews and reviews.average_rating is not None:
            return self._passed_result()

        return self._failed_result(
            page,
            "social_proof_weak",
            "med",
            SocialProofWeakEvidence(
                review_count=reviews.review_count,
                average_rating=reviews.average_rating,
                min_reviews=self.config.min_reviews,
            ),
            score=self._partial_score(),
        )
