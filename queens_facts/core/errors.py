from __future__ import annotations

from typing import Dict, Optional


class QueensFactsError(Exception):
    """Base class for errors the API maps to a status code."""

    status_code = 500

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers


class ConfigError(QueensFactsError):
    """Startup configuration is missing or unusable."""


class NotFoundError(QueensFactsError):
    status_code = 404


class RateLimitError(QueensFactsError):
    status_code = 429


class UpstreamError(QueensFactsError):
    """Supabase was unreachable or rejected the query."""

    status_code = 500


class AuditWriteError(QueensFactsError):
    """An audit insert failed. Never surfaced by the endpoint audit path."""
