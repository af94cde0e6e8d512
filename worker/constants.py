"""
Worker-level constants for the scoring job flow.
"""

from __future__ import annotations

SCORING_QUEUE_NAME = "scoring_jobs"

# Dotted path so the API can enqueue without importing worker code.
SCORING_JOB_PATH = "worker.jobs.process_scoring_job"
