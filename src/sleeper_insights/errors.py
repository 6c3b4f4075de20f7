"""Exception types shared by the Sleeper and generative-AI integrations."""

from __future__ import annotations

import json


class RemoteError(RuntimeError):
    """Raised when an upstream HTTP API fails or returns a non-2xx response.

    ``status`` is ``None`` for transport failures (DNS, connection reset,
    timeouts) where no HTTP response was received.
    """

    def __init__(
        self,
        status: int | None,
        message: str,
        *,
        body: str | None = None,
    ) -> None:
        super().__init__(message if status is None else f"HTTP {status}: {message}")
        self.status = status
        self.message = message
        self.body = body

    @classmethod
    def from_response(cls, status: int, body: str) -> RemoteError:
        """Build an error from a failed response, reading ``{"error": {...}}`` bodies."""

        message = body.strip()[:200] or "empty response body"
        try:
            decoded = json.loads(body)
        except (TypeError, ValueError):
            decoded = None

        if isinstance(decoded, dict):
            error = decoded.get("error")
            if isinstance(error, dict):
                code = error.get("code")
                if isinstance(code, int) and not isinstance(code, bool):
                    status = code
                if isinstance(error.get("message"), str):
                    message = error["message"]
            elif isinstance(error, str):
                message = error

        return cls(status, message, body=body)

    @property
    def is_rate_limited(self) -> bool:
        """True when the failure looks like rate limiting or quota exhaustion."""
        return self.status == 429 or "quota" in self.message.lower()


class ParseError(ValueError):
    """Raised when a model reply does not contain a recoverable JSON object."""


class ConfigurationError(RuntimeError):
    """Raised when a required configuration value is missing or invalid."""


class DashboardError(RuntimeError):
    """Raised when league data needed by a dashboard view cannot be loaded."""


__all__ = [
    "ConfigurationError",
    "DashboardError",
    "ParseError",
    "RemoteError",
]
