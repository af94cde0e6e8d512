"""
Rule registry: the ordered set of enabled rules applied to every page.

Registry order is the order findings are reported in. Rules never see each
other's results, so every enabled rule runs exactly once per page. A rule
that raises or returns an invalid result is isolated into a degraded finding
and the rest of the page is still scored.
"""

from __future__ import annotations

from typing import Iterable, Optional

from shared.logging import get_logger
from worker.heuristics.base import BaseHeuristicRule, build_finding
from worker.heuristics.constants import CATEGORIES
from worker.heuristics.errors import HeuristicError, get_user_safe_error_summary
from worker.heuristics.evidence import RuleErrorEvidence
from worker.heuristics.models import (
    Finding,
    HeuristicResult,
    Page,
    PageEvaluation,
    RuleOutcome,
)

logger = get_logger(__name__)


class RuleRegistry:
    def __init__(
        self,
        rules: Iterable[BaseHeuristicRule],
        disabled: Iterable[str] = (),
    ) -> None:
        self._rules: list[BaseHeuristicRule] = []
        for rule in rules:
            _check_rule_metadata(rule)
            if self.get(rule.rule_id) is not None:
                raise ValueError(f"Duplicate rule_id in registry: {rule.rule_id!r}")
            self._rules.append(rule)

        self._disabled = frozenset(disabled)
        unknown = sorted(self._disabled - {r.rule_id for r in self._rules})
        if unknown:
            logger.warning("disabled_rules_not_registered", rule_ids=unknown)

    @property
    def rules(self) -> list[BaseHeuristicRule]:
        return list(self._rules)

    @property
    def enabled_rules(self) -> list[BaseHeuristicRule]:
        return [r for r in self._rules if r.rule_id not in self._disabled]

    def get(self, rule_id: str) -> Optional[BaseHeuristicRule]:
        for rule in self._rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def is_enabled(self, rule_id: str) -> bool:
        return self.get(rule_id) is not None and rule_id not in self._disabled

    def describe(self) -> list[dict]:
        """Rule metadata in registry order, with the enabled flag."""
        return [
            {**rule.describe(), "enabled": rule.rule_id not in self._disabled}
            for rule in self._rules
        ]

    def evaluate(self, page: Page) -> PageEvaluation:
        """
        Run every enabled rule against one page.

        Returns the non-null findings in registry order, the page score (sum
        of rule scores) and one outcome per rule for site aggregation.
        """
        findings: list[Finding] = []
        outcomes: list[RuleOutcome] = []
        seen_codes: set[str] = set()

        for rule in self.enabled_rules:
            outcome, finding = self._run_rule(rule, page, seen_codes)
            outcomes.append(outcome)
            if finding is not None:
                seen_codes.add(finding.rule_id)
                findings.append(finding)

        return PageEvaluation(
            page_id=page.id,
            page_type=page.type,
            url=page.url,
            findings=tuple(findings),
            page_score=sum(o.score for o in outcomes),
            max_score=sum(o.max_score for o in outcomes if not o.skipped),
            outcomes=tuple(outcomes),
        )

    def _run_rule(
        self,
        rule: BaseHeuristicRule,
        page: Page,
        seen_codes: set[str],
    ) -> tuple[RuleOutcome, Optional[Finding]]:
        try:
            result = rule.analyze(page)
            _check_result_contract(rule, page, result, seen_codes)
        except Exception as e:
            logger.error(
                "rule_evaluation_failed",
                rule_id=rule.rule_id,
                page_id=page.id,
                page_type=page.type,
                error=str(e),
                error_type=type(e).__name__,
            )
            summary = get_user_safe_error_summary(e)
            finding = build_finding(
                page.id,
                rule.rule_id,
                None,
                RuleErrorEvidence(error=summary, error_type=type(e).__name__),
                degraded=True,
            )
            outcome = RuleOutcome(
                rule_id=rule.rule_id,
                category=rule.category,
                score=0,
                max_score=rule.max_score,
                passed=False,
                degraded=True,
                reason=summary,
            )
            return outcome, finding

        outcome = RuleOutcome(
            rule_id=rule.rule_id,
            category=rule.category,
            score=result.score,
            max_score=rule.max_score,
            passed=result.passed,
            skipped=result.skipped,
            reason=result.reason,
        )
        return outcome, result.finding


def _check_rule_metadata(rule: BaseHeuristicRule) -> None:
    """Reject rules whose metadata would break outcomes or aggregation."""
    rule_id = getattr(rule, "rule_id", None)
    if not isinstance(rule_id, str) or not rule_id:
        raise ValueError(f"Rule {type(rule).__name__} has no rule_id")

    category = getattr(rule, "category", None)
    if category not in CATEGORIES:
        raise ValueError(
            f"Rule {rule_id!r} has unknown category {category!r}; "
            f"expected one of {', '.join(CATEGORIES)}"
        )

    max_score = getattr(rule, "max_score", None)
    # bool is an int subclass
    if isinstance(max_score, bool) or not isinstance(max_score, int) or max_score <= 0:
        raise ValueError(
            f"Rule {rule_id!r} max_score must be a positive integer, got {max_score!r}"
        )


def _check_result_contract(
    rule: BaseHeuristicRule,
    page: Page,
    result: object,
    seen_codes: set[str],
) -> None:
    if not isinstance(result, HeuristicResult):
        raise HeuristicError("Invalid rule result", rule=rule.rule_id, page_id=page.id)
    if result.score > rule.max_score:
        raise HeuristicError("Score out of range", rule=rule.rule_id, page_id=page.id)
    finding = result.finding
    if finding is None:
        return
    if finding.page_id != page.id:
        raise HeuristicError("Invalid rule result", rule=rule.rule_id, page_id=page.id)
    if finding.rule_id in seen_codes:
        raise HeuristicError("Duplicate finding", rule=rule.rule_id, page_id=page.id)
