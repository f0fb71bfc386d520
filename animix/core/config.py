"""Configuration object injected into clients and services."""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DELAYS = {
    "jikan.top": 0.5,
    "jikan.schedule": 0.5,
    "jikan.recommendations": 1.0,
}


class CatalogConfig(BaseModel):
    """Endpoints, fixed filters and limits for every provider."""

    model_config = ConfigDict(frozen=True)

    anilist_url: str = "https://graphql.anilist.co"
    anilist_site: str = "https://anilist.co"
    jikan_url: str = "https://api.jikan.moe/v4"
    mal_site: str = "https://myanimelist.net"
    mangadex_url: str = "https://api.mangadex.org"
    mangadex_uploads_url: str = "https://uploads.mangadex.org"

    content_ratings: Tuple[str, ...] = ("safe", "suggestive")
    languages: Tuple[str, ...] = ("en",)

    timeout: float = Field(default=15.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)
    user_agent: str = "animix/0.1"

    delays: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_DELAYS))

    schedule_timezone: str = "UTC"
    schedule_page_size: int = Field(default=50, ge=1, le=50)
    weekly_window_size: int = Field(default=20, ge=1, le=50)
    weekly_top_limit: int = Field(default=10, ge=1)
    recommendations_limit: int = Field(default=10, ge=1)
