"""Read-only client for the public Sleeper fantasy API."""

from .client import MAX_WEEK, MIN_WEEK, SLEEPER_BASE_URL, SleeperClient

__all__ = [
    "MAX_WEEK",
    "MIN_WEEK",
    "SLEEPER_BASE_URL",
    "SleeperClient",
]
