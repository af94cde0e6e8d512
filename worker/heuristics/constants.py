"""
Heuristic engine constants: page types, severities, scoring categories.
"""

from __future__ import annotations

from typing import Literal

PageType = Literal["home", "product", "collection", "cart", "checkout"]
Severity = Literal["high", "med", "low"]
Category = Literal["performance", "conversion", "trust", "mobile"]

ALL_PAGE_TYPES: tuple[PageType, ...] = ("home", "product", "collection", "cart", "checkout")

# Canonical breakdown order for SiteScore.
CATEGORIES: tuple[Category, ...] = ("performance", "conversion", "trust", "mobile")

# Namespace for content-derived finding ids (uuid5 of page id + finding code).
FINDING_ID_NAMESPACE_NAME = "storefront-cro-audit/finding"
