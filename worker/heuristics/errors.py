"""
Heuristic engine errors and user-safe error summaries.

Degraded findings are handed to the recommendation and reporting layers, so
their evidence only ever carries a summary from USER_SAFE_ERROR_SUMMARIES.
The detailed exception stays in the logs.
"""

from __future__ import annotations

from typing import Optional

USER_SAFE_ERROR_SUMMARIES = frozenset(
    {
        "Duplicate finding",
        "Invalid rule result",
        "Rule evaluation failed",
        "Score out of range",
    }
)


class HeuristicError(Exception):
    """Raised when a rule breaks its contract while evaluating a page."""

    def __init__(self, message: str, rule: str, page_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.rule = rule
        self.page_id = page_id


def get_user_safe_error_summary(
    exc: BaseException,
    fallback: str = "Rule evaluation failed",
) -> str:
    """
    Return a user-safe summary for a rule failure.

    HeuristicError messages are used only if they are on the allowlist;
    anything else maps to the fallback.
    """
    if isinstance(exc, HeuristicError):
        msg = str(exc).strip()
        if msg and msg in USER_SAFE_ERROR_SUMMARIES:
            return msg
    return fallback
