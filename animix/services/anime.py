"""Anime operations: AniList first, Jikan for fallback and enrichment."""

import logging
import time
from datetime import timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from ..core.clients import AniListClient, JikanClient
from ..core.config import CatalogConfig
from ..core.errors import NotFoundError, ValidationError
from ..core.normalizers import (
    anime_from_anilist, anime_from_jikan, enrichment_from_jikan, episode_from_jikan,
    pagination_from_anilist, pagination_from_jikan, recommendation_from_jikan,
    recommendations_from_anilist, relations_from_anilist, schedule_from_anilist,
    schedule_from_jikan, weekly_episode_from_anilist,
)
from ..core.queries import (
    AIRING_SCHEDULE, AIRING_WINDOW, ANIME_BY_IDS, ANIME_DETAIL, SEARCH_ANIME, TOP_ANIME,
)
from ..core.rate_limit import RateLimiter
from ..models.types import (
    AnimeDetail, AnimePage, EpisodePage, ExternalLinks, MediaRecord, RecommendationRecord,
    SchedulePage, WeeklyTopEpisodes,
)
from ..utils.helpers import clamp
from .policy import POLICIES, run_policy

logger = logging.getLogger(__name__)

WEEK = 7 * 24 * 3600
SEASONS = ("winter", "spring", "summer", "fall")

# filter -> (AniList sort, AniList status)
TOP_FILTERS: Dict[str, Tuple[str, Optional[str]]] = {
    "airing": ("POPULARITY_DESC", "RELEASING"),
    "upcoming": ("POPULARITY_DESC", "NOT_YET_RELEASED"),
    "favorite": ("FAVOURITES_DESC", None),
}
DEFAULT_TOP_FILTER: Tuple[str, Optional[str]] = ("POPULARITY_DESC", None)


def top_sort_and_status(filter: Optional[str]) -> Tuple[str, Optional[str]]:
    """Map a top-anime filter onto AniList sort and status; filters match exactly."""
    return TOP_FILTERS.get(filter, DEFAULT_TOP_FILTER)


def parse_id(value: Any, what: str = "id") -> int:
    """Positive integer id or ValidationError."""
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"A valid {what} is required.") from None
    if n <= 0:
        raise ValidationError(f"A valid {what} is required.")
    return n


def _media_nodes(data: Dict[str, Any], field: str = "media") -> List[Dict[str, Any]]:
    return [n for n in ((data.get("Page") or {}).get(field) or []) if n]


def _page_info(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return (data.get("Page") or {}).get("pageInfo")


def _schedule_nodes(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [n for n in _media_nodes(data, "airingSchedules") if n.get("media")]


class AnimeService:
    """Aggregates the primary (AniList) and secondary (Jikan) anime catalogs."""

    def __init__(
        self,
        config: Optional[CatalogConfig] = None,
        anilist: Optional[AniListClient] = None,
        jikan: Optional[JikanClient] = None,
        limiter: Optional[RateLimiter] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or CatalogConfig()
        self.anilist = anilist or AniListClient(self.config)
        self.jikan = jikan or JikanClient(self.config)
        self.limiter = limiter or RateLimiter(self.config.delays)
        self.clock = clock

    # ---------- listings ----------

    def get_top_anime(self, type: str = "anime", filter: str = "airing",
                      page: int = 1, limit: int = 20) -> AnimePage:
        """Top anime for a filter; Jikan's top list when AniList fails.

        `type` is accepted for compatibility and only anime is served.
        """
        page = max(1, int(page))
        sort, status = top_sort_and_status(filter)

        def from_anilist() -> AnimePage:
            per = clamp(limit, 1, 50)
            data = self.anilist.execute(TOP_ANIME, {"page": page, "perPage": per, "sort": [sort], "status": status})
            media = _media_nodes(data)
            return AnimePage(
                results=[anime_from_anilist(m) for m in media],
                pagination=pagination_from_anilist(_page_info(data), len(media)),
            )

        def from_jikan() -> AnimePage:
            self.limiter.wait("jikan.top")
            return self._jikan_page(self.jikan.top_anime(page, clamp(limit, 1, 25)))

        return run_policy(POLICIES["anime.top"], {"anilist": from_anilist, "jikan": from_jikan})

    def get_current_season_anime(self, page: int = 1) -> AnimePage:
        page = max(1, int(page))
        return run_policy(POLICIES["anime.season_now"], {
            "jikan": lambda: self._jikan_page(self.jikan.season_now(page)),
        })

    def get_seasonal_anime(self, year: int, season: str, page: int = 1) -> AnimePage:
        yr = parse_id(year, "year")
        sea = (season or "").strip().lower()
        if sea not in SEASONS:
            raise ValidationError(f"Season must be one of {', '.join(SEASONS)}.")
        page = max(1, int(page))
        return run_policy(POLICIES["anime.season"], {
            "jikan": lambda: self._jikan_page(self.jikan.season(yr, sea, page)),
        })

    def search_anime(self, query: str, page: int = 1, limit: int = 20) -> AnimePage:
        if not query or not str(query).strip():
            raise ValidationError("Search query is required")
        page = max(1, int(page))

        def from_anilist() -> AnimePage:
            data = self.anilist.execute(SEARCH_ANIME, {
                "search": str(query).strip(), "page": page, "perPage": clamp(limit, 1, 50),
            })
            media = _media_nodes(data)
            return AnimePage(
                results=[anime_from_anilist(m) for m in media],
                pagination=pagination_from_anilist(_page_info(data), len(media)),
            )

        return run_policy(POLICIES["anime.search"], {"anilist": from_anilist})

    # ---------- schedule ----------

    def get_anime_schedule(self, day: Optional[str] = None) -> SchedulePage:
        """Recently aired episodes, optionally for one weekday (case-insensitive)."""
        wanted = day.strip().lower() if day and day.strip() else None
        tz_name = self.config.schedule_timezone
        tz = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)

        def from_anilist() -> SchedulePage:
            data = self.anilist.execute(AIRING_SCHEDULE, {"page": 1, "perPage": self.config.schedule_page_size})
            nodes = _schedule_nodes(data)
            entries = [schedule_from_anilist(n, tz, tz_name) for n in nodes]
            if wanted:
                entries = [e for e in entries if (e.airing_day or "").lower() == wanted]
            return SchedulePage(
                results=entries,
                pagination=pagination_from_anilist(_page_info(data), len(entries)),
            )

        def from_jikan() -> SchedulePage:
            self.limiter.wait("jikan.schedule")
            body = self.jikan.schedules(wanted)
            items = [schedule_from_jikan(a) for a in (body.get("data") or []) if a]
            return SchedulePage(results=items, pagination=pagination_from_jikan(body.get("pagination"), len(items)))

        return run_policy(POLICIES["anime.schedule"], {"anilist": from_anilist, "jikan": from_jikan})

    # ---------- detail ----------

    def get_anime_by_id(self, id: Any) -> AnimeDetail:
        """Full AniList detail merged with Jikan enrichment.

        Enrichment is soft-fail: when Jikan fails, or the media has no MAL id,
        producers/licensors/streamingPlatforms/additionalStudios are `[]` and
        broadcast/trailer/malStats are null.
        """
        anilist_id = parse_id(id, "AniList id")

        def from_anilist() -> Dict[str, Any]:
            media = self.anilist.execute(ANIME_DETAIL, {"id": anilist_id}).get("Media")
            if not media:
                raise NotFoundError(f"Anime {anilist_id} not found", "anilist")
            return media

        media = run_policy(POLICIES["anime.detail"], {"anilist": from_anilist})
        base = anime_from_anilist(media)

        extras = None
        if not base.mal_id:
            logger.debug("Anime %s has no MAL id, skipping enrichment", base.id)
        else:
            extras = run_policy(POLICIES["anime.enrichment"], {
                "jikan": lambda: enrichment_from_jikan((self.jikan.anime_full(int(base.mal_id)).get("data")) or {}),
            })

        return AnimeDetail(
            **dict(base),
            relations=relations_from_anilist(media),
            recommendations=recommendations_from_anilist(media),
            external_links=ExternalLinks(
                anilist=f"{self.config.anilist_site}/anime/{base.id}",
                mal=f"{self.config.mal_site}/anime/{base.mal_id}" if base.mal_id else None,
            ),
            producers=extras.producers if extras else [],
            licensors=extras.licensors if extras else [],
            streaming_platforms=extras.streaming if extras else [],
            broadcast=extras.broadcast if extras else None,
            trailer=extras.trailer if extras else None,
            mal_stats=extras.stats if extras else None,
            additional_studios=extras.studios if extras else [],
        )

    def get_anime_episodes(self, mal_id: Any = None, page: int = 1) -> EpisodePage:
        mid = parse_id(mal_id, "MyAnimeList id")
        page = max(1, int(page))

        def from_jikan() -> EpisodePage:
            body = self.jikan.episodes(mid, page)
            eps = [episode_from_jikan(e) for e in (body.get("data") or []) if e]
            return EpisodePage(results=eps, pagination=pagination_from_jikan(body.get("pagination"), len(eps)))

        return run_policy(POLICIES["anime.episodes"], {"jikan": from_jikan})

    def get_anime_recommendations(self, mal_id: Any) -> List[RecommendationRecord]:
        """Up to ten Jikan recommendations; `[]` when Jikan fails."""
        mid = parse_id(mal_id, "MyAnimeList id")

        def from_jikan() -> List[RecommendationRecord]:
            self.limiter.wait("jikan.recommendations")
            body = self.jikan.recommendations(mid)
            entries = [r for r in (body.get("data") or []) if r][: self.config.recommendations_limit]
            return [recommendation_from_jikan(r) for r in entries]

        return run_policy(POLICIES["anime.recommendations"], {"jikan": from_jikan})

    # ---------- curated views ----------

    def get_famous_anime_by_ids(self, ids: Iterable[Any]) -> List[MediaRecord]:
        """Batch lookup by AniList id, ordered like `ids`; `[]` when AniList fails."""
        wanted = list(dict.fromkeys(parse_id(i, "AniList id") for i in ids))
        if not wanted:
            return []

        def from_anilist() -> List[MediaRecord]:
            data = self.anilist.execute(ANIME_BY_IDS, {"id_in": wanted, "page": 1, "perPage": min(len(wanted), 50)})
            by_id = {r.id: r for r in (anime_from_anilist(m) for m in _media_nodes(data))}
            return [by_id[str(i)] for i in wanted if str(i) in by_id]

        return run_policy(POLICIES["anime.famous"], {"anilist": from_anilist})

    def get_top_episodes_of_week(self) -> WeeklyTopEpisodes:
        """Episodes aired in the last 7 days, most popular series first."""
        now = int(self.clock())

        def from_anilist() -> WeeklyTopEpisodes:
            data = self.anilist.execute(AIRING_WINDOW, {
                "page": 1,
                "perPage": self.config.weekly_window_size,
                "airingAt_greater": now - WEEK,
                "airingAt_lesser": now,
            })
            nodes = _schedule_nodes(data)
            # sorted() is stable: equal popularity keeps provider order
            ranked = sorted(nodes, key=lambda n: n["media"].get("popularity") or 0, reverse=True)
            top = ranked[: self.config.weekly_top_limit]
            return WeeklyTopEpisodes(results=[weekly_episode_from_anilist(n) for n in top])

        return run_policy(POLICIES["anime.weekly_top"], {"anilist": from_anilist})

    # ---------- helpers ----------

    def _jikan_page(self, body: Dict[str, Any]) -> AnimePage:
        items = [anime_from_jikan(a) for a in (body.get("data") or []) if a]
        return AnimePage(results=items, pagination=pagination_from_jikan(body.get("pagination"), len(items)))
