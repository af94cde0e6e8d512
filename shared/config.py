"""
Environment-based configuration for the Storefront CRO Audit project.

This module exposes a small, typed configuration surface that is shared
between the API and worker services. All values are sourced from
environment variables with sensible, non-secret defaults.

No secrets or credentials are hard-coded here; they must be provided via
the environment (or tooling such as python-dotenv in local development).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

Environment = Literal["local", "dev", "staging", "prod"]

# Site-level rubric: category -> weight. Product-defined; override with
# RUBRIC_WEIGHTS="conversion=0.4,trust=0.25,performance=0.2,mobile=0.15".
DEFAULT_RUBRIC_WEIGHTS: Mapping[str, float] = {
    "conversion": 0.40,
    "trust": 0.25,
    "performance": 0.20,
    "mobile": 0.15,
}

MAX_SCORING_WORKERS = 32


@dataclass(frozen=True)
class AppConfig:
    """
    Top-level application configuration.

    Cross-cutting settings (logging, queue) plus the scoring knobs the
    heuristic engine is wired with at startup.
    """

    environment: Environment
    log_level: str

    # Optional file path for structured JSON logs; when set, logs are written
    # to file (and stdout if log_stdout).
    log_file: Optional[str]
    log_stdout: bool

    # Queue endpoint for background scoring jobs. URI only.
    redis_url: Optional[str]
    scoring_job_timeout_seconds: int

    # Number of pages evaluated in parallel within one crawl (1 = sequential).
    scoring_max_workers: int

    rubric_weights: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_RUBRIC_WEIGHTS)
    )
    disabled_rules: frozenset[str] = frozenset()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Construct configuration from environment variables.

        All fields have sensible defaults suitable for local development.
        Production deployments are expected to override these via env vars.
        """

        environment = os.getenv("APP_ENV", "local")

        if environment not in {"local", "dev", "staging", "prod"}:
            raise ValueError(f"Unsupported APP_ENV value: {environment!r}")

        def _bool_env(name: str, default: bool) -> bool:
            raw = (os.getenv(name) or str(default)).strip().lower()
            return raw in ("true", "1", "yes")

        def _max_workers() -> int:
            raw = os.getenv("SCORING_MAX_WORKERS", "1").strip()
            try:
                workers = int(raw)
            except ValueError:
                return 1
            return max(1, min(MAX_SCORING_WORKERS, workers))

        return cls(
            environment=environment,  # type: ignore[arg-type]
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
            log_stdout=_bool_env("LOG_STDOUT", True),
            redis_url=os.getenv("REDIS_URL") or None,
            scoring_job_timeout_seconds=int(os.getenv("SCORING_JOB_TIMEOUT_SECONDS", "300")),
            scoring_max_workers=_max_workers(),
            rubric_weights=parse_rubric_weights(os.getenv("RUBRIC_WEIGHTS")),
            disabled_rules=parse_rule_list(os.getenv("HEURISTICS_DISABLED_RULES")),
        )


def parse_rubric_weights(raw: Optional[str]) -> dict[str, float]:
    """
    Parse a ``category=weight`` comma-separated list.

    Empty or unset input yields the default rubric. Category names are not
    checked here; the aggregator validates them against its known set.
    """
    if not raw or not raw.strip():
        return dict(DEFAULT_RUBRIC_WEIGHTS)

    weights: dict[str, float] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, value = entry.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Malformed RUBRIC_WEIGHTS entry: {entry!r}")
        try:
            weights[name.strip().lower()] = float(value)
        except ValueError as e:
            raise ValueError(f"Non-numeric weight in RUBRIC_WEIGHTS entry: {entry!r}") from e
    return weights


def parse_rule_list(raw: Optional[str]) -> frozenset[str]:
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def get_config() -> AppConfig:
    """
    Helper to obtain the current configuration.

    In simple scripts, calling this function directly is sufficient. In
    longer-lived processes, consider constructing a single `AppConfig`
    instance at startup and passing it explicitly through your code.
    """

    return AppConfig.from_env()
