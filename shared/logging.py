"""
Structured logging setup for the Storefront CRO Audit project.

All runtime logging goes through structlog. The API and the scoring worker
share this baseline:

- Logs are JSON lines with an ISO UTC timestamp and a ``message`` event key.
- Context (crawl_id, page_id, rule_id, ...) can be bound per request or job
  and is merged into every subsequent log line from the same context.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog


def _build_shared_processors() -> list[structlog.types.Processor]:
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        timestamper,
        structlog.processors.EventRenamer("message"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _plain_handler(handler: logging.Handler, level: int) -> logging.Handler:
    # structlog renders the JSON line; stdlib only passes it through.
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_stdout: bool = True,
) -> None:
    """
    Configure structlog and the standard logging module.

    Called once at process startup by the API and by the worker. Calling it
    again replaces the root handlers.

    - When log_stdout is True (default), logs go to stdout.
    - When log_file is set, logs are also appended to that file (parent
      directory created if needed).
    - If neither applies, stdout is used so the process never has zero handlers.
    """

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if log_stdout:
        root.addHandler(_plain_handler(logging.StreamHandler(sys.stdout), level))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(_plain_handler(logging.FileHandler(log_file, encoding="utf-8"), level))

    if not root.handlers:
        root.addHandler(_plain_handler(logging.StreamHandler(sys.stdout), level))

    structlog.configure(
        processors=_build_shared_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Obtain a structured logger.

    Usage:
        from shared.logging import get_logger, bind_request_context

        logger = get_logger(__name__)
        bind_request_context(crawl_id="...")
        logger.info("crawl_scoring_started", page_count=12)
    """

    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_request_context(
    *,
    crawl_id: Optional[str] = None,
    page_id: Optional[str] = None,
    page_type: Optional[str] = None,
    rule_id: Optional[str] = None,
    **extra: Any,
) -> Mapping[str, Any]:
    """
    Bind common context fields for scoring logs.

    Keys with None values are dropped. Returns the bound mapping.
    """

    context: dict[str, Any] = {
        "crawl_id": crawl_id,
        "page_id": page_id,
        "page_type": page_type,
        "rule_id": rule_id,
        **extra,
    }
    filtered_context = {k: v for k, v in context.items() if v is not None}

    structlog.contextvars.bind_contextvars(**filtered_context)
    return filtered_context


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
