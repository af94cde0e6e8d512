"""
Crawl intake: turn raw crawler page records into Page models.

Pages are validated one at a time. A record that cannot be parsed is
reported as a RejectedPage and the rest of the crawl is still scored.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from shared.logging import get_logger
from worker.heuristics.models import Page, RejectedPage

logger = get_logger(__name__)

# Error lines kept per rejected page; the full error goes to the logs.
MAX_ERRORS_PER_PAGE = 10


def _format_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid')}" if location else error.get("msg", "invalid")


def parse_pages(raw_pages: Iterable[Any]) -> tuple[list[Page], list[RejectedPage]]:
    """
    Validate crawler page records individually.

    Returns the parsed pages in input order and one RejectedPage per record
    that failed validation (index refers to the input position).
    """
    pages: list[Page] = []
    rejected: list[RejectedPage] = []

    for index, raw in enumerate(raw_pages):
        if isinstance(raw, Page):
            pages.append(raw)
            continue
        try:
            pages.append(Page.model_validate(raw))
        except ValidationError as e:
            page_id = raw.get("id") if isinstance(raw, dict) else None
            errors = e.errors(include_url=False, include_input=False)
            logger.warning(
                "page_rejected",
                index=index,
                page_id=page_id,
                error_count=len(errors),
                errors=[_format_error(err) for err in errors],
            )
            rejected.append(
                RejectedPage(
                    index=index,
                    page_id=page_id if isinstance(page_id, str) else None,
                    errors=tuple(_format_error(err) for err in errors[:MAX_ERRORS_PER_PAGE]),
                )
            )

    return pages, rejected


def check_crawl_pages(crawl_id: str, pages: Sequence[Page]) -> None:
    """
    Raise ValueError if a page belongs to another crawl or two pages share
    an id.
    """
    mismatched = [p.id for p in pages if p.crawl_id != crawl_id]
    if mismatched:
        raise ValueError(
            f"Pages {', '.join(mismatched)} do not belong to crawl {crawl_id!r}"
        )
    page_ids = [p.id for p in pages]
    duplicates = sorted({pid for pid in page_ids if page_ids.count(pid) > 1})
    if duplicates:
        raise ValueError(
            f"Duplicate page ids in crawl {crawl_id!r}: {', '.join(duplicates)}"
        )
