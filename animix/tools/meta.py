"""Metadata tools for animix."""

from importlib.metadata import version, PackageNotFoundError
from typing import Optional

from ..core.config import CatalogConfig
from ..core.http_client import SCHEMA

# Version info
try:
    __VERSION__ = version("animix")
except PackageNotFoundError:
    __VERSION__ = "0.0.0+dev"

SOURCES = ["anilist", "jikan", "mangadex"]


def health():
    """Health check endpoint."""
    return {"schemaVersion": SCHEMA, "ok": True, "sources": SOURCES}


def about(config: Optional[CatalogConfig] = None):
    """About information for the service."""
    config = config or CatalogConfig()
    return {
        "schemaVersion": SCHEMA,
        "name": "animix",
        "version": __VERSION__,
        "summary": "Anime and manga catalog: AniList first, Jikan fallback and enrichment, MangaDex for manga.",
        "endpoints": {
            "anilist": config.anilist_url,
            "jikan": config.jikan_url,
            "mangadex": config.mangadex_url,
        },
        "limits": {"maxPerPage": 50, "timeoutSec": config.timeout, "attempts": config.max_attempts},
    }


def register_tools(mcp, config: Optional[CatalogConfig] = None):
    """Register meta tools with FastMCP."""
    mcp.tool()(health)

    @mcp.tool(name="about")
    def _about():
        """About information for the service."""
        return about(config)
