"""
Pydantic schemas for API request/response contracts.

Score payloads reuse the heuristic engine models directly; this module only
adds the envelopes around them. Keys are camelCase on the wire. Page records
are accepted as raw objects and parsed one by one by the scoring service, so
one malformed page cannot reject the whole request.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from worker.heuristics import Category, PageType, RejectedPage


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request schemas
class ScoreCrawlRequest(ApiModel):
    """Request schema for POST /crawls/{crawl_id}/score and .../score/jobs."""

    pages: list[dict[str, Any]] = Field(
        ...,
        min_length=1,
        description="Crawled page records (id, crawlId, url, type, metrics)",
    )


# Response schemas
class ScoreJobResponse(ApiModel):
    """Response schema for POST /crawls/{crawl_id}/score/jobs."""

    job_id: str
    crawl_id: str
    status: Literal["queued"]
    rejected_pages: list[RejectedPage] = Field(default_factory=list)


class RuleResponse(ApiModel):
    """Response schema for one entry of GET /rules."""

    rule_id: str
    name: str
    description: str
    category: Category
    max_score: int = Field(..., gt=0)
    applicable_page_types: list[PageType]
    enabled: bool
