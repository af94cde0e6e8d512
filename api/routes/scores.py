"""
Route handlers for crawl scoring endpoints.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from api.queue import QueueUnavailableError
from api.schemas import ScoreCrawlRequest, ScoreJobResponse
from api.services.scoring_service import (
    NoValidPagesError,
    ScoringService,
    get_scoring_service,
)
from shared.logging import bind_request_context, get_logger
from worker.heuristics import CrawlScore

logger = get_logger(__name__)
router = APIRouter(prefix="/crawls", tags=["scoring"])


def _no_valid_pages(e: NoValidPagesError) -> HTTPException:
    logger.warning("crawl_scoring_rejected", error=str(e), rejected_count=len(e.rejected))
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "message": "No page in the request could be parsed",
            "rejectedPages": [r.model_dump(mode="json", by_alias=True) for r in e.rejected],
        },
    )


@router.post(
    "/{crawl_id}/score",
    response_model=CrawlScore,
    summary="Score a crawl synchronously",
)
def score_crawl(
    crawl_id: str,
    request: ScoreCrawlRequest,
    service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> CrawlScore:
    """
    Run every enabled heuristic rule over the crawl's pages and return the
    site score, per-page evaluations and the ordered finding list. Page
    records that cannot be parsed are listed in rejectedPages; the request
    fails with 422 only when none of them parse.
    """
    bind_request_context(crawl_id=crawl_id)
    logger.info("crawl_scoring_requested", page_count=len(request.pages))

    try:
        return service.score_crawl(crawl_id, request.pages)
    except NoValidPagesError as e:
        raise _no_valid_pages(e)
    except ValueError as e:
        logger.warning("crawl_scoring_rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post(
    "/{crawl_id}/score/jobs",
    response_model=ScoreJobResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Queue a crawl for background scoring",
)
def enqueue_crawl_scoring(
    crawl_id: str,
    request: ScoreCrawlRequest,
    service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> ScoreJobResponse:
    """Enqueue the crawl on the scoring worker queue; the result is stored by RQ."""
    bind_request_context(crawl_id=crawl_id)

    try:
        job_id, rejected = service.enqueue_scoring(crawl_id, request.pages)
    except NoValidPagesError as e:
        raise _no_valid_pages(e)
    except ValueError as e:
        logger.warning("crawl_scoring_rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except QueueUnavailableError as e:
        logger.error("scoring_job_enqueue_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to enqueue scoring job. Please try again later.",
        )

    return ScoreJobResponse(
        job_id=job_id,
        crawl_id=crawl_id,
        status="queued",
        rejected_pages=rejected,
    )
