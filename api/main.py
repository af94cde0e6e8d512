"""
FastAPI application entrypoint for the Storefront CRO Audit scoring API.

This module sets up the FastAPI app, configures logging, and registers
route handlers.
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import rules, scores
from shared.config import get_config
from shared.logging import configure_logging

load_dotenv()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()

    configure_logging(
        level=logging.getLevelName(config.log_level.upper()),
        log_file=config.log_file,
        log_stdout=config.log_stdout,
    )

    app = FastAPI(
        title="Storefront CRO Audit API",
        description="Heuristic scoring of crawled storefront pages",
        version="0.1.0",
    )

    # CORS middleware (permissive for MVP; tighten in production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(scores.router)
    app.include_router(rules.router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
