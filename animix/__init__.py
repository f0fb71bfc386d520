"""animix package.

Exports the FastMCP app factory `create_app` and the catalog services.
"""
from .server import create_app
from .services.anime import AnimeService
from .services.manga import MangaService

__all__ = ["create_app", "AnimeService", "MangaService"]
