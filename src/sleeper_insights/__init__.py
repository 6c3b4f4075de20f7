"""Sleeper fantasy league dashboard with AI-generated insights."""

from .cli import main

__all__ = ["main"]
