"""
Error taxonomy for the rewrite flow.

Every error is terminal for the current request. Each class carries a stable
``kind`` and the HTTP status the API layer reports, so callers can decide
whether a retry makes sense.
"""
from typing import Optional


class RewriteError(Exception):
    """Base class for all failures surfaced to the caller."""

    kind = "rewrite_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload = {"error": self.message, "kind": self.kind}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(RewriteError):
    """Required field missing or empty after sanitization."""

    kind = "validation_error"
    status_code = 400


class ConfigurationError(RewriteError):
    """Credential missing or completion client unavailable."""

    kind = "configuration_error"
    status_code = 500


class UpstreamAuthError(RewriteError):
    """Completion service rejected the credentials."""

    kind = "upstream_auth_error"
    status_code = 502


class UpstreamRateLimitError(RewriteError):
    """Completion service asked us to back off."""

    kind = "upstream_rate_limited"
    status_code = 429


class UpstreamUnavailableError(RewriteError):
    """Completion service failed server-side, was unreachable, or timed out."""

    kind = "upstream_unavailable"
    status_code = 503


class EmptyCompletionError(RewriteError):
    """Completion call succeeded but produced no usable text."""

    kind = "empty_completion"
    status_code = 502


class UnknownError(RewriteError):
    """Anything else; the underlying message travels in ``details``."""

    kind = "unknown_error"
    status_code = 500
