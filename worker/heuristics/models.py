"""
Heuristic engine data model: page metrics, pages, findings, results, scores.

Metrics are produced by the crawler and validated here once; every model is
frozen so rules can share them freely without copying. Sequences are tuples
for the same reason.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from pydantic import (
    Field,
    SerializeAsAny,
    ValidationInfo,
    field_validator,
    model_validator,
)

from worker.heuristics.constants import Category, PageType, Severity
from worker.heuristics.evidence import FindingEvidence, evidence_schema_for
from worker.heuristics.schema import FrozenModel, Position, Size


# --- metrics (crawler output) ---


class CTAButton(FrozenModel):
    text: str
    selector: str
    position: Position
    size: Size
    # Pre-computed by the extractor; rules apply their own size check on top.
    prominent: bool


class AboveFoldMetrics(FrozenModel):
    cta_buttons: tuple[CTAButton, ...] = ()
    height: float = Field(ge=0)


class PerformanceMetrics(FrozenModel):
    load_time: float = Field(ge=0, description="Full page load in milliseconds")


class HeadlineMetrics(FrozenModel):
    text: str = ""
    tag: Optional[str] = None


class HeroImageMetrics(FrozenModel):
    src: Optional[str] = None
    size: Optional[Size] = None
    above_fold: bool = True


class PriceMetrics(FrozenModel):
    visible: Optional[bool] = None
    text: Optional[str] = None
    position: Optional[Position] = None
    above_fold: bool = False


class ReviewMetrics(FrozenModel):
    widget_present: bool = False
    review_count: int = Field(0, ge=0)
    average_rating: Optional[float] = Field(None, ge=0, le=5)


class ShippingMetrics(FrozenModel):
    messages: tuple[str, ...] = ()
    free_shipping_threshold: Optional[float] = Field(None, ge=0)
    above_fold: bool = False


class AddToCartMetrics(FrozenModel):
    present: Optional[bool] = None
    text: Optional[str] = None
    selector: Optional[str] = None
    sticky_on_mobile: bool = False


class TrustMetrics(FrozenModel):
    badges: tuple[str, ...] = ()


class ImageAltMetrics(FrozenModel):
    total: Optional[int] = Field(None, ge=0)
    with_alt: Optional[int] = Field(None, ge=0)

    @property
    def is_consistent(self) -> bool:
        """Both counts reported and with_alt within total."""
        return (
            self.total is not None
            and self.with_alt is not None
            and self.with_alt <= self.total
        )


class PageMetrics(FrozenModel):
    """
    Everything observed on one crawled page.

    above_fold and performance are always extracted. The remaining groups
    are optional, and so are most fields inside them; rules treat a missing
    group or field as the worst case.
    """

    above_fold: AboveFoldMetrics
    performance: PerformanceMetrics
    headline: Optional[HeadlineMetrics] = None
    hero_image: Optional[HeroImageMetrics] = None
    price: Optional[PriceMetrics] = None
    reviews: Optional[ReviewMetrics] = None
    shipping: Optional[ShippingMetrics] = None
    add_to_cart: Optional[AddToCartMetrics] = None
    trust: Optional[TrustMetrics] = None
    image_alt: Optional[ImageAltMetrics] = None


# --- findings and pages ---


class Finding(FrozenModel):
    id: str
    page_id: str
    # Finding code, e.g. "hero_cta_missing"; the rule's own id for degraded findings.
    rule_id: str
    severity: Optional[Severity]
    degraded: bool = False
    evidence: SerializeAsAny[FindingEvidence]

    @field_validator("evidence", mode="before")
    @classmethod
    def _validate_evidence(cls, value: Any, info: ValidationInfo) -> FindingEvidence:
        schema = evidence_schema_for(
            info.data.get("rule_id", ""),
            degraded=bool(info.data.get("degraded", False)),
        )
        if isinstance(value, schema):
            return value
        if isinstance(value, FindingEvidence):
            value = value.model_dump()
        return schema.model_validate(value)

    @model_validator(mode="after")
    def _severity_required_unless_degraded(self) -> "Finding":
        if self.severity is None and not self.degraded:
            raise ValueError("severity is required for non-degraded findings")
        return self


class Page(FrozenModel):
    id: str
    crawl_id: str
    url: str
    type: PageType
    metrics: PageMetrics
    findings: tuple[Finding, ...] = ()

    def with_findings(self, findings: Iterable[Finding]) -> "Page":
        """Return a copy with findings attached; metrics are shared, not copied."""
        return self.model_copy(update={"findings": tuple(findings)})


# --- rule results ---


class HeuristicResult(FrozenModel):
    passed: bool
    score: int = Field(ge=0)
    finding: Optional[Finding] = None
    skipped: bool = False
    reason: Optional[str] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "HeuristicResult":
        if self.skipped and (self.score != 0 or self.finding is not None or self.passed):
            raise ValueError("skipped results carry no score, no finding and do not pass")
        if self.passed and self.finding is not None:
            raise ValueError("passing results carry no finding")
        return self


class RuleOutcome(FrozenModel):
    """One rule's contribution to a page evaluation, kept for aggregation."""

    rule_id: str
    category: Category
    score: int
    max_score: int
    passed: bool
    skipped: bool = False
    degraded: bool = False
    reason: Optional[str] = None


class PageEvaluation(FrozenModel):
    page_id: str
    page_type: PageType
    url: str
    findings: tuple[Finding, ...]
    page_score: int
    # Sum of max_score over the rules that applied to this page.
    max_score: int
    outcomes: tuple[RuleOutcome, ...]


# --- site scores ---


class ScoreBreakdown(FrozenModel):
    performance: Optional[int] = Field(None, ge=0, le=100)
    conversion: Optional[int] = Field(None, ge=0, le=100)
    trust: Optional[int] = Field(None, ge=0, le=100)
    mobile: Optional[int] = Field(None, ge=0, le=100)


class CategoryScore(FrozenModel):
    category: Category
    # None when no rule of this category applied anywhere in the crawl.
    score: Optional[int] = Field(None, ge=0, le=100)
    earned: int
    possible: int
    evaluations: int
    weight: float


class SiteScore(FrozenModel):
    overall: Optional[int] = Field(None, ge=0, le=100)
    breakdown: ScoreBreakdown
    categories: tuple[CategoryScore, ...] = ()

    @property
    def undefined_categories(self) -> list[str]:
        return [c.category for c in self.categories if c.score is None]


class RejectedPage(FrozenModel):
    """A page record that could not be parsed and was left out of scoring."""

    index: int
    page_id: Optional[str] = None
    errors: tuple[str, ...]


class CrawlScore(FrozenModel):
    crawl_id: str
    site_score: SiteScore
    pages: tuple[PageEvaluation, ...]
    findings: tuple[Finding, ...]
    rejected_pages: tuple[RejectedPage, ...] = ()
