"""
The ten CRO heuristic rules.

`default_rules()` returns one instance of each, in the order findings are
reported.
"""

from __future__ import annotations

from worker.heuristics.base import BaseHeuristicRule
from worker.heuristics.rules.alt_text import AltTextConfig, AltTextCoverageRule
from worker.heuristics.rules.headline import HeadlineConfig, HeadlineLengthRule
from worker.heuristics.rules.hero_cta import HeroCTAConfig, HeroCTARule
from worker.heuristics.rules.hero_image import HeroImageConfig, HeroImageRule
from worker.heuristics.rules.performance import PagePerformanceRule, PerformanceConfig
from worker.heuristics.rules.price_display import PriceDisplayConfig, PriceDisplayRule
from worker.heuristics.rules.shipping_info import ShippingInfoConfig, ShippingInfoRule
from worker.heuristics.rules.social_proof import SocialProofConfig, SocialProofRule
from worker.heuristics.rules.sticky_add_to_cart import StickyAddToCartConfig, StickyAddToCartRule
from worker.heuristics.rules.trust_signals import TrustSignalsConfig, TrustSignalsRule

DEFAULT_RULE_CLASSES: tuple[type[BaseHeuristicRule], ...] = (
    HeroCTARule,
    HeadlineLengthRule,
    HeroImageRule,
    PriceDisplayRule,
    SocialProofRule,
    ShippingInfoRule,
    StickyAddToCartRule,
    PagePerformanceRule,
    TrustSignalsRule,
    AltTextCoverageRule,
)


def default_rules() -> list[BaseHeuristicRule]:
    return [rule_class() for rule_class in DEFAULT_RULE_CLASSES]


__all__ = [
    "DEFAULT_RULE_CLASSES",
    "default_rules",
    "AltTextConfig",
    "AltTextCoverageRule",
    "HeadlineConfig",
    "HeadlineLengthRule",
    "HeroCTAConfig",
    "HeroCTARule",
    "HeroImageConfig",
    "HeroImageRule",
    "PagePerformanceRule",
    "PerformanceConfig",
    "PriceDisplayConfig",
    "PriceDisplayRule",
    "ShippingInfoConfig",
    "ShippingInfoRule",
    "SocialProofConfig",
    "SocialProofRule",
    "StickyAddToCartConfig",
    "StickyAddToCartRule",
    "TrustSignalsConfig",
    "TrustSignalsRule",
]
