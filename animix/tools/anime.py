"""Anime tools for animix."""

from typing import Optional

from ..services.anime import AnimeService
from . import respond

# Well-known series served by famous_anime (AniList ids)
FAMOUS_ANIME_IDS = [
    20,      # Naruto
    21,      # One Piece
    269,     # Bleach
    813,     # Dragon Ball Z
    6702,    # Fairy Tail
    1535,    # Death Note
    11061,   # Hunter x Hunter (2011)
    16498,   # Attack on Titan
    21459,   # Boku no Hero Academia
    101922,  # Demon Slayer
]


def register_tools(mcp, service: AnimeService):
    """Register anime tools with FastMCP."""

    @mcp.tool()
    def top_anime(type: str = "anime", filter: str = "airing", page: int = 1, limit: int = 20):
        """Top anime. filter: 'airing' | 'upcoming' | 'favorite' | anything else (popularity)."""
        return respond("anilist", lambda: service.get_top_anime(type, filter, page, limit))

    @mcp.tool()
    def current_season_anime(page: int = 1):
        """Anime airing this season (Jikan)."""
        return respond("jikan", lambda: service.get_current_season_anime(page))

    @mcp.tool()
    def seasonal_anime(year: int, season: str, page: int = 1):
        """Anime of a given season. season: winter | spring | summer | fall."""
        return respond("jikan", lambda: service.get_seasonal_anime(year, season, page))

    @mcp.tool()
    def anime_schedule(day: Optional[str] = None):
        """Recently aired episodes with weekday and time; optional day filter (e.g. 'Monday')."""
        return respond("anilist", lambda: service.get_anime_schedule(day))

    @mcp.tool()
    def search_anime(q: str, page: int = 1, limit: int = 20):
        """Full-text anime search (AniList)."""
        return respond("anilist", lambda: service.search_anime(q, page, limit))

    @mcp.tool()
    def anime_details(id: str):
        """Full anime detail by AniList id, enriched with MAL producers, streaming and stats."""
        return respond("anilist", lambda: service.get_anime_by_id(id))

    @mcp.tool()
    def anime_episodes(id: str, page: int = 1, mal_id: Optional[str] = None):
        """Episode list. Uses mal_id when given, otherwise id, as the MyAnimeList id."""
        return respond("jikan", lambda: service.get_anime_episodes(mal_id or id, page))

    @mcp.tool()
    def anime_recommendations(id: str, mal_id: Optional[str] = None):
        """Up to 10 MyAnimeList recommendations; empty when MAL is unavailable."""
        return respond("jikan", lambda: service.get_anime_recommendations(mal_id or id))

    @mcp.tool()
    def famous_anime():
        """A fixed selection of well-known series."""
        return respond("anilist", lambda: service.get_famous_anime_by_ids(FAMOUS_ANIME_IDS))

    @mcp.tool()
    def weekly_top_episodes():
        """The 10 most popular episodes aired in the last 7 days."""
        return respond("anilist", service.get_top_episodes_of_week)
