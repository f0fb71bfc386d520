"""Unified records returned by the catalog services.

All records are frozen and serialize with camelCase keys
(``record.model_dump(by_alias=True)``).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------- Anime ----------

class Aired(Record):
    from_: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    string: Optional[str] = None


class MediaStats(Record):
    average_score: Optional[float] = None
    popularity: Optional[int] = None
    favourites: Optional[int] = None
    trending: Optional[int] = None


class MediaRecord(Record):
    id: str
    mal_id: Optional[str] = None
    title: str
    title_english: Optional[str] = None
    title_japanese: Optional[str] = None
    synopsis: str
    cover_image: Optional[str] = None
    banner_image: Optional[str] = None
    episodes: Optional[int] = None
    status: Optional[str] = None
    score: Optional[float] = Field(None, ge=0, le=10)   # 0-10
    rating: Optional[float] = None                      # provider's own scale
    age_rating: Optional[str] = None                    # MAL audience rating, e.g. "PG-13 - Teens 13 or older"
    year: Optional[int] = None
    season: Optional[str] = None
    studios: List[str] = []
    genres: List[str] = []
    themes: List[str] = []
    synonyms: List[str] = []
    type: Optional[str] = None                          # TV/MOVIE/OVA/ONA/SPECIAL...
    source: Optional[str] = None
    duration: Optional[int] = None                      # minutes
    aired: Aired = Aired()
    stats: MediaStats = MediaStats()


class RelationRecord(Record):
    id: str
    relation_type: Optional[str] = None
    title: str
    cover_image: Optional[str] = None
    episodes: Optional[int] = None
    season_year: Optional[int] = None
    season: Optional[str] = None
    format: Optional[str] = None
    duration: Optional[int] = None


class RecommendationRecord(Record):
    id: str
    title: str
    cover_image: Optional[str] = None
    score: Optional[float] = Field(None, ge=0, le=10)


class StreamingLink(Record):
    name: str
    url: str


class Broadcast(Record):
    day: Optional[str] = None
    time: Optional[str] = None
    timezone: Optional[str] = None
    string: Optional[str] = None


class Trailer(Record):
    url: str
    site: Optional[str] = None
    thumbnail: Optional[str] = None


class MalStats(Record):
    rank: Optional[int] = None
    popularity: Optional[int] = None
    members: Optional[int] = None
    favorites: Optional[int] = None
    score: Optional[float] = None
    scored_by: Optional[int] = None


class ExternalLinks(Record):
    anilist: Optional[str] = None
    mal: Optional[str] = None


class Enrichment(Record):
    """Secondary-catalog fields merged into an anime detail."""

    producers: List[str] = []
    licensors: List[str] = []
    studios: List[str] = []
    streaming: List[StreamingLink] = []
    broadcast: Optional[Broadcast] = None
    trailer: Optional[Trailer] = None
    stats: Optional[MalStats] = None


class AnimeDetail(MediaRecord):
    relations: List[RelationRecord] = []
    recommendations: List[RecommendationRecord] = []
    external_links: ExternalLinks = ExternalLinks()
    producers: List[str] = []
    licensors: List[str] = []
    streaming_platforms: List[StreamingLink] = []
    broadcast: Optional[Broadcast] = None
    trailer: Optional[Trailer] = None
    mal_stats: Optional[MalStats] = None
    additional_studios: List[str] = []


class EpisodeRecord(Record):
    id: str
    number: int
    title: Optional[str] = None
    title_japanese: Optional[str] = None
    title_romanji: Optional[str] = None
    aired: Optional[str] = None
    score: Optional[float] = None
    filler: bool = False
    recap: bool = False
    forum_url: Optional[str] = None


class ScheduleEntry(Record):
    id: str
    title: str
    title_english: Optional[str] = None
    cover_image: Optional[str] = None
    airing_day: Optional[str] = None
    airing_time: Optional[str] = None
    timezone: Optional[str] = None
    episode: Optional[int] = None
    episodes: Optional[int] = None
    airing_at: Optional[str] = None
    score: Optional[float] = Field(None, ge=0, le=10)
    type: Optional[str] = None
    year: Optional[int] = None


class WeeklyEpisode(MediaRecord):
    episode: Optional[int] = None
    aired_at: str
    episode_title: str


class PageItems(Record):
    count: int = 0
    total: Optional[int] = None
    per_page: Optional[int] = None


class Pagination(Record):
    current_page: Optional[int] = None
    has_next_page: bool = False
    last_visible_page: Optional[int] = None
    items: PageItems = PageItems()


class AnimePage(Record):
    results: List[MediaRecord] = []
    pagination: Pagination = Pagination()


class SchedulePage(Record):
    results: List[ScheduleEntry] = []
    pagination: Pagination = Pagination()


class EpisodePage(Record):
    results: List[EpisodeRecord] = []
    pagination: Pagination = Pagination()


class WeeklyTopEpisodes(Record):
    results: List[WeeklyEpisode] = []


# ---------- Manga ----------

class Title(Record):
    english: Optional[str] = None
    romaji: Optional[str] = None
    native: Optional[str] = None


class StatisticsRecord(Record):
    rating: Optional[float] = None          # bayesian
    rating_votes: Optional[int] = None
    follows: Optional[int] = None


class MangaRecord(Record):
    id: str
    title: Title
    display_title: str
    description: str
    status: Optional[str] = None
    genres: List[str] = []
    tags: List[str] = []
    cover: Optional[str] = None
    rating: Optional[float] = None
    rating_votes: Optional[int] = None
    follows: Optional[int] = None
    last_chapter: Optional[str] = None
    publication_year: Optional[int] = None
    demographic: Optional[str] = None
    content_rating: Optional[str] = None


class MangaDetail(MangaRecord):
    authors: List[str] = []


class ChapterRecord(Record):
    id: str
    title: Optional[str] = None
    chapter: str
    volume: Optional[str] = None
    pages: int = 0
    readable_at: Optional[str] = None
    translated_language: Optional[str] = None


class LatestChapter(ChapterRecord):
    manga: Optional[MangaRecord] = None


class MangaPage(Record):
    results: List[MangaRecord] = []
    total: int = 0
    limit: int
    page: int
    has_next_page: bool = False


class ChapterPage(Record):
    results: List[ChapterRecord] = []
    total: int = 0
    limit: int
    page: int
    has_next_page: bool = False


class LatestChapters(Record):
    results: List[LatestChapter] = []


class PageImage(Record):
    index: int
    url: str


class ChapterPages(Record):
    chapter_id: str
    pages: List[PageImage] = []
    page_count: int = 0
