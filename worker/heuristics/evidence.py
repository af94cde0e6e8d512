"""
Typed evidence payloads, one schema per finding code.

Finding.evidence is validated against EVIDENCE_SCHEMAS[finding.rule_id], so
the recommendation service always receives a known shape for a given code.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ConfigDict

from worker.heuristics.constants import PageType
from worker.heuristics.schema import FrozenModel, Size


class FindingEvidence(FrozenModel):
    model_config = ConfigDict(extra="forbid")


class PageTypeEvidence(FindingEvidence):
    """Absence findings that only need the page context."""

    page_type: PageType


# --- hero CTA ---


class HeroCTAMissingEvidence(FindingEvidence):
    cta_count: int
    page_type: PageType
    above_fold_height: float


class CTACandidate(FindingEvidence):
    text: str
    size: Size
    prominent: bool


class HeroCTAWeakEvidence(FindingEvidence):
    cta_count: int
    prominent_count: int
    weak_ctas: tuple[CTACandidate, ...]


# --- headline ---


class HeadlineLengthEvidence(FindingEvidence):
    text: str
    word_count: int
    min_words: int
    max_words: int


# --- hero image ---


class HeroImageMissingEvidence(FindingEvidence):
    page_type: PageType
    above_fold_height: float


class HeroImageSmallEvidence(FindingEvidence):
    src: Optional[str]
    size: Size
    min_width: float
    min_height: float


# --- price ---


class PriceBelowFoldEvidence(FindingEvidence):
    price_text: Optional[str]
    price_top: Optional[float]
    above_fold_height: float


# --- social proof ---


class SocialProofMissingEvidence(FindingEvidence):
    page_type: PageType
    widget_present: bool
    review_count: int


class SocialProofWeakEvidence(FindingEvidence):
    review_count: int
    average_rating: Optional[float]
    min_reviews: int


# --- shipping ---


class ShippingInfoHiddenEvidence(FindingEvidence):
    messages: tuple[str, ...]
    free_shipping_threshold: Optional[float]


# --- add to cart ---


class StickyAddToCartEvidence(FindingEvidence):
    button_text: Optional[str]
    selector: Optional[str]
    sticky: bool


# --- performance ---


class PageLoadEvidence(FindingEvidence):
    load_time: float
    threshold: float


# --- trust ---


class TrustSignalsWeakEvidence(FindingEvidence):
    badges: tuple[str, ...]
    badge_count: int
    min_badges: int


# --- alt text ---


class AltTextEvidence(FindingEvidence):
    total_images: int
    images_with_alt: int
    coverage: float
    min_coverage: float


# --- degraded ---


class RuleErrorEvidence(FindingEvidence):
    error: str
    error_type: str


EVIDENCE_SCHEMAS: dict[str, type[FindingEvidence]] = {
    "hero_cta_missing": HeroCTAMissingEvidence,
    "hero_cta_weak": HeroCTAWeakEvidence,
    "headline_missing": PageTypeEvidence,
    "headline_length_suboptimal": HeadlineLengthEvidence,
    "hero_image_missing": HeroImageMissingEvidence,
    "hero_image_small": HeroImageSmallEvidence,
    "price_missing": PageTypeEvidence,
    "price_below_fold": PriceBelowFoldEvidence,
    "social_proof_missing": SocialProofMissingEvidence,
    "social_proof_weak": SocialProofWeakEvidence,
    "shipping_info_missing": PageTypeEvidence,
    "shipping_info_hidden": ShippingInfoHiddenEvidence,
    "add_to_cart_missing": PageTypeEvidence,
    "sticky_add_to_cart_missing": StickyAddToCartEvidence,
    "page_load_very_slow": PageLoadEvidence,
    "page_load_slow": PageLoadEvidence,
    "trust_signals_missing": PageTypeEvidence,
    "trust_signals_weak": TrustSignalsWeakEvidence,
    "alt_text_missing": AltTextEvidence,
    "alt_text_coverage_low": AltTextEvidence,
}


def evidence_schema_for(finding_code: str, *, degraded: bool = False) -> type[FindingEvidence]:
    """
    Return the evidence model for a finding code.

    Degraded findings always carry RuleErrorEvidence. Unknown codes raise
    ValueError so a typo in a rule cannot produce an unvalidated payload.
    """
    if degraded:
        return RuleErrorEvidence
    try:
        return EVIDENCE_SCHEMAS[finding_code]
    except KeyError:
        raise ValueError(f"No evidence schema registered for finding {finding_code!r}") from None
