"""HTTP access to the Gogs REST API."""

from gogs_cli.api.client import API_ROOT, APIClient

__all__ = ["API_ROOT", "APIClient"]
