"""
Page performance rule: full page load time.

Scoring:
- 15 points: load time at or under 2500ms
- 7 points: up to 4000ms
- 0 points: slower than 4000ms
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worker.heuristics.base import BaseHeuristicRule, RuleConfig
from worker.heuristics.evidence import PageLoadEvidence
from worker.heuristics.models import HeuristicResult, Page


@dataclass(frozen=True)
class PerformanceConfig(RuleConfig):
    good_load_time_ms: float = 2500
    max_load_time_ms: float = 4000


class PagePerformanceRule(BaseHeuristicRule):
    rule_id = "page_performance"
    name = "Page Load Speed"
    description = "Measures page load time against conversion-safe thresholds"
    category = "performance"
    max_score = 15
    config_class = PerformanceConfig

    config: PerformanceConfig

    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        load_time = page.metrics.performance.load_time
        if load_time <= self.config.max_load_time_ms:
            return None
        return self._failed_result(
            page,
            "page_load_very_slow",
            "high",
            PageLoadEvidence(load_time=load_time, threshold=self.config.max_load_time_ms),
        )

    def check_quality(self, page: Page) -> HeuristicResult:
        load_time = page.metrics.performance.load_time
        if load_time <= self.config.good_load_time_ms:
            return self._passed_result()

        return self._failed_result(
            page,
            "page_load_slow",
            "med",
            PageLoadEvidence(load_time=load_time, threshold=self.config.good_load_time_ms),
            score=self._partial_score(),
        )
