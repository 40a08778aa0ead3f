"""Exception hierarchy shared by the engine and its wrappers."""

from __future__ import annotations


class WebPilotError(Exception):
    """Base class for errors raised by webpilot."""


class ConfigurationError(WebPilotError):
    """Required prerequisites are missing or invalid; fatal for the whole run."""
