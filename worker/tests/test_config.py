"""
Tests for environment-based configuration.
"""

from __future__ import annotations

import pytest

from shared.config import (
    DEFAULT_RUBRIC_WEIGHTS,
    MAX_SCORING_WORKERS,
    AppConfig,
    parse_rubric_weights,
    parse_rule_list,
)

ENV_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_FILE",
    "LOG_STDOUT",
    "REDIS_URL",
    "SCORING_JOB_TIMEOUT_SECONDS",
    "SCORING_MAX_WORKERS",
    "RUBRIC_WEIGHTS",
    "HEURISTICS_DISABLED_RULES",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = AppConfig.from_env()

    assert config.environment == "local"
    assert config.log_level == "INFO"
    assert config.log_file is None
    assert config.log_stdout is True
    assert config.redis_url is None
    assert config.scoring_job_timeout_seconds == 300
    assert config.scoring_max_workers == 1
    assert dict(config.rubric_weights) == dict(DEFAULT_RUBRIC_WEIGHTS)
    assert config.disabled_rules == frozenset()


def test_values_from_environment(clean_env):
    clean_env.setenv("APP_ENV", "prod")
    clean_env.setenv("LOG_STDOUT", "false")
    clean_env.setenv("REDIS_URL", "redis://localhost:6379/0")
    clean_env.setenv("SCORING_MAX_WORKERS", "8")
    clean_env.setenv("RUBRIC_WEIGHTS", "conversion=0.5, performance=0.5")
    clean_env.setenv("HEURISTICS_DISABLED_RULES", "social_proof, trust_signals,")

    config = AppConfig.from_env()

    assert config.environment == "prod"
    assert config.log_stdout is False
    assert config.redis_url == "redis://localhost:6379/0"
    assert config.scoring_max_workers == 8
    assert config.rubric_weights == {"conversion": 0.5, "performance": 0.5}
    assert config.disabled_rules == frozenset({"social_proof", "trust_signals"})


def test_unsupported_environment_raises(clean_env):
    clean_env.setenv("APP_ENV", "qa")

    with pytest.raises(ValueError, match="APP_ENV"):
        AppConfig.from_env()


@pytest.mark.parametrize(
    "raw,expected",
    [("0", 1), ("-4", 1), ("abc", 1), ("1000", MAX_SCORING_WORKERS), ("4", 4)],
)
def test_max_workers_is_clamped(clean_env, raw, expected):
    clean_env.setenv("SCORING_MAX_WORKERS", raw)

    assert AppConfig.from_env().scoring_max_workers == expected


# --- parsers ---


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_empty_rubric_uses_defaults(raw):
    assert parse_rubric_weights(raw) == dict(DEFAULT_RUBRIC_WEIGHTS)


def test_rubric_names_are_normalized():
    assert parse_rubric_weights(" Conversion = 1 ,TRUST=2") == {"conversion": 1.0, "trust": 2.0}


@pytest.mark.parametrize("raw", ["conversion", "=0.5", "conversion=high"])
def test_malformed_rubric_raises(raw):
    with pytest.raises(ValueError, match="RUBRIC_WEIGHTS"):
        parse_rubric_weights(raw)


def test_parse_rule_list():
    assert parse_rule_list(None) == frozenset()
    assert parse_rule_list(" a ,b,, a") == frozenset({"a", "b"})
