"""Tracker provider implementations."""

from gogs_cli.providers.gogs_rest import GogsRestProvider

__all__ = ["GogsRestProvider"]
