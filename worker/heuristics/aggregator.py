"""
Site aggregator: combine page evaluations of one crawl into a SiteScore.

Scoring formula:
- Category score = round(100 * earned points / possible points) over every
  (page, rule) evaluation in that category where the rule applied
- Skipped and degraded evaluations count in neither numerator nor denominator
- A category with no applicable evaluation is undefined (None), not 0
- Overall = weighted mean of defined category scores; the rubric weights of
  undefined categories are redistributed proportionally

The rubric (category -> weight) is configuration passed in by the caller.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping, Optional

from shared.logging import get_logger
from worker.heuristics.constants import CATEGORIES
from worker.heuristics.models import CategoryScore, PageEvaluation, ScoreBreakdown, SiteScore

logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def validate_rubric(rubric: Mapping[str, float]) -> dict[str, float]:
    """
    Normalize a rubric to one weight per known category.

    Unknown categories, negative weights and an all-zero rubric raise
    ValueError. Categories left out get weight 0.
    """
    unknown = sorted(set(rubric) - set(CATEGORIES))
    if unknown:
        raise ValueError(f"Unknown rubric categories: {', '.join(unknown)}")

    weights = {category: float(rubric.get(category, 0.0)) for category in CATEGORIES}
    negative = [c for c, w in weights.items() if w < 0 or math.isnan(w)]
    if negative:
        raise ValueError(f"Rubric weights must be non-negative: {', '.join(negative)}")
    if sum(weights.values()) <= 0:
        raise ValueError("Rubric needs at least one positive weight")
    return weights


class SiteAggregator:
    def __init__(self, rubric: Mapping[str, float]) -> None:
        self._rubric = validate_rubric(rubric)

    @property
    def rubric(self) -> dict[str, float]:
        return dict(self._rubric)

    def aggregate(self, evaluations: Iterable[PageEvaluation]) -> SiteScore:
        """
        Compute the site score for a finished crawl.

        Must be called with every page evaluation of the crawl; the category
        totals are not meaningful for a partial set.
        """
        totals = {c: {"earned": 0, "possible": 0, "evaluations": 0} for c in CATEGORIES}

        for evaluation in evaluations:
            for outcome in evaluation.outcomes:
                if outcome.skipped or outcome.degraded:
                    continue
                bucket = totals[outcome.category]
                bucket["earned"] += outcome.score
                bucket["possible"] += outcome.max_score
                bucket["evaluations"] += 1

        category_scores: list[CategoryScore] = []
        for category in CATEGORIES:
            data = totals[category]
            if data["possible"] > 0:
                score: Optional[int] = round_half_up(100.0 * data["earned"] / data["possible"])
            else:
                score = None
                logger.info("category_undefined", category=category)

            category_scores.append(
                CategoryScore(
                    category=category,
                    score=score,
                    earned=data["earned"],
                    possible=data["possible"],
                    evaluations=data["evaluations"],
                    weight=self._rubric[category],
                )
            )

        breakdown = ScoreBreakdown(**{cs.category: cs.score for cs in category_scores})
        return SiteScore(
            overall=_weighted_overall(category_scores),
            breakdown=breakdown,
            categories=tuple(category_scores),
        )


def _weighted_overall(category_scores: list[CategoryScore]) -> Optional[int]:
    defined = [cs for cs in category_scores if cs.score is not None and cs.weight > 0]
    total_weight = sum(cs.weight for cs in defined)
    if total_weight == 0:
        return None

    weighted = sum(cs.score * cs.weight for cs in defined)
    return round_half_up(weighted / total_weight)
