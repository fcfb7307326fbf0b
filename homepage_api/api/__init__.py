"""HTTP client base classes."""

from .base_client import BaseAPIClient

__all__ = ["BaseAPIClient"]
