"""
RQ (Redis Queue) setup for the API service.

This module provides RQ queue configuration and scoring job enqueueing.
"""

from __future__ import annotations

from typing import Any, Optional

import redis
from rq import Queue

from shared.config import get_config
from shared.logging import get_logger
from worker.constants import SCORING_JOB_PATH, SCORING_QUEUE_NAME

logger = get_logger(__name__)

# Global Redis connection and queue (initialized on first use).
_redis_conn: Optional[redis.Redis] = None
_queue: Optional[Queue] = None


class QueueUnavailableError(Exception):
    """Raised when a scoring job cannot be handed to Redis."""


def get_redis_connection() -> redis.Redis:
    """Get or create the Redis connection."""
    global _redis_conn
    if _redis_conn is None:
        config = get_config()
        if not config.redis_url:
            raise QueueUnavailableError(
                "REDIS_URL environment variable is required. "
                "Set it to a Redis connection string (e.g., redis://localhost:6379/0)."
            )
        _redis_conn = redis.from_url(config.redis_url)
    return _redis_conn


def get_queue() -> Queue:
    """Get or create the RQ queue."""
    global _queue
    if _queue is None:
        _queue = Queue(SCORING_QUEUE_NAME, connection=get_redis_connection())
    return _queue


def enqueue_scoring_job(crawl_id: str, pages: list[dict[str, Any]]) -> str:
    """
    Enqueue a scoring job in RQ and return its job id.

    Uses the string job path so the queue never needs the worker's rule code
    loaded. Raises QueueUnavailableError when Redis cannot be reached.
    """
    config = get_config()
    try:
        job = get_queue().enqueue(
            SCORING_JOB_PATH,
            crawl_id=crawl_id,
            pages=pages,
            job_timeout=config.scoring_job_timeout_seconds,
        )
    except redis.RedisError as e:
        logger.error(
            "redis_connection_failed",
            error=str(e),
            error_type=type(e).__name__,
            crawl_id=crawl_id,
        )
        raise QueueUnavailableError(f"Failed to connect to Redis: {e}") from e

    logger.info("scoring_job_enqueued", crawl_id=crawl_id, job_id=job.id, page_count=len(pages))
    return job.id
