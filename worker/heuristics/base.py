"""
Rule contract shared by every CRO heuristic.

Each rule is a pure function of (page.type, page.metrics) and walks the same
ladder:

1. applicability filter: page type outside the rule's set -> skipped
2. absence check: the signal is missing -> high-severity finding, score 0
3. quality check: full credit, or partial credit floor(max_score * ratio)
   with a finding

Thresholds live in a frozen config dataclass injected at construction so
tests can vary them without touching rule logic.
"""

from __future__ import annotations

import math
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from worker.heuristics.constants import (
    ALL_PAGE_TYPES,
    FINDING_ID_NAMESPACE_NAME,
    Category,
    PageType,
    Severity,
)
from worker.heuristics.evidence import FindingEvidence
from worker.heuristics.models import Finding, HeuristicResult, Page

_FINDING_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, FINDING_ID_NAMESPACE_NAME)


@dataclass(frozen=True)
class RuleConfig:
    applicable_page_types: tuple[PageType, ...] = ALL_PAGE_TYPES
    partial_score_ratio: float = 0.5


def finding_id_for(page_id: str, finding_code: str) -> str:
    """
    Content-derived finding id.

    Stable across repeated evaluations, unique per (page, finding code).
    """
    return str(uuid.uuid5(_FINDING_NAMESPACE, f"{page_id}:{finding_code}"))


def build_finding(
    page_id: str,
    finding_code: str,
    severity: Optional[Severity],
    evidence: Union[FindingEvidence, dict],
    *,
    degraded: bool = False,
) -> Finding:
    return Finding(
        id=finding_id_for(page_id, finding_code),
        page_id=page_id,
        rule_id=finding_code,
        severity=severity,
        degraded=degraded,
        evidence=evidence,
    )


def describe_page_types(page_types: tuple[str, ...]) -> str:
    """("home", "product") -> "home and product pages"."""
    names = list(page_types)
    if not names:
        return "no pages"
    if len(names) == 1:
        return f"{names[0]} pages"
    return f"{', '.join(names[:-1])} and {names[-1]} pages"


class BaseHeuristicRule(ABC):
    """Base class for CRO heuristic rules."""

    rule_id: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str]
    category: ClassVar[Category]
    max_score: ClassVar[int]
    config_class: ClassVar[type[RuleConfig]] = RuleConfig

    def __init__(self, config: Optional[RuleConfig] = None) -> None:
        self.config = config if config is not None else self.config_class()

    @property
    def applicable_page_types(self) -> tuple[PageType, ...]:
        return self.config.applicable_page_types

    @property
    def skip_reason(self) -> str:
        return f"Rule only applies to {describe_page_types(self.applicable_page_types)}"

    def analyze(self, page: Page) -> HeuristicResult:
        if not self.is_applicable(page.type):
            return self._skipped_result()

        missing = self.check_absence(page)
        if missing is not None:
            return missing

        return self.check_quality(page)

    @abstractmethod
    def check_absence(self, page: Page) -> Optional[HeuristicResult]:
        """Return a hard-fail result when the signal is missing, else None."""

    @abstractmethod
    def check_quality(self, page: Page) -> HeuristicResult:
        """Grade a signal known to be present."""

    def is_applicable(self, page_type: str) -> bool:
        return page_type in self.applicable_page_types

    def describe(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "max_score": self.max_score,
            "applicable_page_types": list(self.applicable_page_types),
        }

    # Result builders

    def _partial_score(self) -> int:
        return math.floor(self.max_score * self.config.partial_score_ratio)

    def _skipped_result(self) -> HeuristicResult:
        return HeuristicResult(
            passed=False,
            score=0,
            finding=None,
            skipped=True,
            reason=self.skip_reason,
        )

    def _passed_result(self) -> HeuristicResult:
        return HeuristicResult(passed=True, score=self.max_score, finding=None)

    def _failed_result(
        self,
        page: Page,
        finding_code: str,
        severity: Severity,
        evidence: FindingEvidence,
        score: int = 0,
    ) -> HeuristicResult:
        return HeuristicResult(
            passed=False,
            score=score,
            finding=build_finding(page.id, finding_code, severity, evidence),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule_id={self.rule_id!r})"
