"""Core functionality for animix."""

from .config import CatalogConfig
from .errors import CatalogError, NotFoundError, UpstreamError, ValidationError
from .http_client import http_get, http_post, err_payload
from .clients import AniListClient, JikanClient, MangaDexClient

__all__ = [
    "CatalogConfig",
    "CatalogError", "NotFoundError", "UpstreamError", "ValidationError",
    "http_get", "http_post", "err_payload",
    "AniListClient", "JikanClient", "MangaDexClient",
]
