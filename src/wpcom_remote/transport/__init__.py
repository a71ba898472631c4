"""HTTP transport seam and its default httpx implementation."""

from .base import ApiVersion, HttpClient, versioned_path
from .httpx_client import HttpxClient

__all__ = ["ApiVersion", "HttpClient", "HttpxClient", "versioned_path"]
