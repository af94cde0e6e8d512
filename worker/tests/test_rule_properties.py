"""
Properties every default rule must hold on every page: determinism, score
bounds, skip implies zero, pass implies no finding.

Pages cover each page type crossed with empty, healthy, degraded and
partially extracted metrics.
"""

from __future__ import annotations

import itertools

import pytest

from worker.heuristics import ALL_PAGE_TYPES, default_rules
from worker.tests.builders import WEAK_CTA, make_healthy_page, make_page

DEGRADED_GROUPS = {
    "headline": {"text": "Hi"},
    "hero_image": {"size": {"width": 100, "height": 100}},
    "price": {"visible": True, "aboveFold": False},
    "reviews": {"widgetPresent": True, "reviewCount": 2},
    "shipping": {"messages": ["Ships in 3 days"]},
    "add_to_cart": {"present": True},
    "trust": {"badges": ["ssl"]},
    "image_alt": {"total": 20, "withAlt": 3},
}

# Groups reported without the fields the rules grade on.
PARTIAL_GROUPS = {
    "hero_image": {"src": "https://cdn.example.com/hero.jpg"},
    "price": {"text": "$49.00"},
    "add_to_cart": {"text": "Add to cart"},
    "image_alt": {"total": 4, "withAlt": 9},
}


def build_pages():
    pages = []
    for page_type in ALL_PAGE_TYPES:
        pages.append(make_page(page_type))
        pages.append(make_healthy_page(page_type))
        pages.append(
            make_page(page_type, cta_buttons=[WEAK_CTA], load_time=3100, **DEGRADED_GROUPS)
        )
        pages.append(make_page(page_type, load_time=12000, height=0))
        pages.append(make_page(page_type, **PARTIAL_GROUPS))
    return pages


PAGES = build_pages()
RULES = default_rules()

CASES = list(itertools.product(RULES, PAGES))
CASE_IDS = [f"{rule.rule_id}-{page.type}-{i % 5}" for i, (rule, page) in enumerate(CASES)]


@pytest.mark.parametrize("rule,page", CASES, ids=CASE_IDS)
def test_rule_properties(rule, page):
    result = rule.analyze(page)

    assert 0 <= result.score <= rule.max_score
    if result.skipped:
        assert result.score == 0
        assert result.finding is None
        assert result.passed is False
    if result.passed:
        assert result.finding is None
        assert result.score == rule.max_score
    if not result.passed and not result.skipped:
        assert result.finding is not None
        assert result.finding.page_id == page.id
        assert result.finding.severity in ("high", "med", "low")
        assert result.score < rule.max_score


@pytest.mark.parametrize("rule", RULES, ids=[r.rule_id for r in RULES])
def test_rules_are_deterministic(rule):
    for page in PAGES:
        assert rule.analyze(page) == rule.analyze(page)


@pytest.mark.parametrize("rule", RULES, ids=[r.rule_id for r in RULES])
def test_skipped_exactly_outside_applicable_types(rule):
    for page in PAGES:
        assert rule.analyze(page).skipped is (page.type not in rule.applicable_page_types)


def test_hard_fail_is_high_severity_with_zero_score():
    for rule, page in CASES:
        result = rule.analyze(page)
        if result.finding is not None and result.finding.severity == "high":
            assert result.score == 0


def test_default_rules_in_table_order():
    assert [r.rule_id for r in RULES] == [
        "hero_cta_detection",
        "headline_length",
        "hero_image_presence",
        "price_display",
        "social_proof",
        "shipping_info",
        "sticky_add_to_cart",
        "page_performance",
        "trust_signals",
        "alt_text_coverage",
    ]
    assert {r.category for r in RULES} == {"performance", "conversion", "trust", "mobile"}
