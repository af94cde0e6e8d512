"""
Shared utilities for the Storefront CRO Audit project.

This package is intentionally small and focused. It provides:

- `shared.config` for environment-based configuration
- `shared.logging` for structlog-based structured logging

Both the API service and the worker service treat `shared/` as read-only
infrastructure code; nothing scoring-specific lives here.
"""
