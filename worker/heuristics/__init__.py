"""
Deterministic CRO heuristic engine.

Rules inspect one crawled page's metrics and emit findings with a severity
and a score; the registry applies them per page; the aggregator turns a
crawl's page evaluations into a weighted site score.

Public API: re-exports the symbols used by jobs, the API and tests so that
`from worker.heuristics import ...` is enough.
"""

from __future__ import annotations

from worker.heuristics.aggregator import SiteAggregator, round_half_up, validate_rubric
from worker.heuristics.base import (
    BaseHeuristicRule,
    RuleConfig,
    build_finding,
    describe_page_types,
    finding_id_for,
)
from worker.heuristics.constants import (
    ALL_PAGE_TYPES,
    CATEGORIES,
    Category,
    PageType,
    Severity,
)
from worker.heuristics.engine import ScoringEngine, build_scoring_engine
from worker.heuristics.errors import HeuristicError, get_user_safe_error_summary
from worker.heuristics.intake import check_crawl_pages, parse_pages
from worker.heuristics.evidence import EVIDENCE_SCHEMAS, FindingEvidence, RuleErrorEvidence
from worker.heuristics.models import (
    AboveFoldMetrics,
    CategoryScore,
    CrawlScore,
    CTAButton,
    Finding,
    HeuristicResult,
    Page,
    PageEvaluation,
    PageMetrics,
    PerformanceMetrics,
    RejectedPage,
    RuleOutcome,
    ScoreBreakdown,
    SiteScore,
)
from worker.heuristics.registry import RuleRegistry
from worker.heuristics.rules import default_rules

__all__ = [
    # constants
    "ALL_PAGE_TYPES",
    "CATEGORIES",
    "Category",
    "PageType",
    "Severity",
    # models
    "AboveFoldMetrics",
    "CategoryScore",
    "CrawlScore",
    "CTAButton",
    "Finding",
    "HeuristicResult",
    "Page",
    "PageEvaluation",
    "PageMetrics",
    "PerformanceMetrics",
    "RejectedPage",
    "RuleOutcome",
    "ScoreBreakdown",
    "SiteScore",
    # evidence
    "EVIDENCE_SCHEMAS",
    "FindingEvidence",
    "RuleErrorEvidence",
    # rules
    "BaseHeuristicRule",
    "RuleConfig",
    "build_finding",
    "describe_page_types",
    "finding_id_for",
    "default_rules",
    # registry / scoring
    "RuleRegistry",
    "SiteAggregator",
    "round_half_up",
    "validate_rubric",
    "ScoringEngine",
    "build_scoring_engine",
    # intake
    "check_crawl_pages",
    "parse_pages",
    # errors
    "HeuristicError",
    "get_user_safe_error_summary",
]
