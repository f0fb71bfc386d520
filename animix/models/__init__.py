"""Provider schemas and unified records for animix."""

from .types import (
    MediaRecord, AnimeDetail, RelationRecord, RecommendationRecord, EpisodeRecord,
    ScheduleEntry, WeeklyEpisode, Pagination, AnimePage, SchedulePage, EpisodePage,
    WeeklyTopEpisodes, MangaRecord, MangaDetail, ChapterRecord, LatestChapter,
    StatisticsRecord, MangaPage, ChapterPage, LatestChapters, ChapterPages, PageImage,
)

__all__ = [
    "MediaRecord", "AnimeDetail", "RelationRecord", "RecommendationRecord", "EpisodeRecord",
    "ScheduleEntry", "WeeklyEpisode", "Pagination", "AnimePage", "SchedulePage", "EpisodePage",
    "WeeklyTopEpisodes", "MangaRecord", "MangaDetail", "ChapterRecord", "LatestChapter",
    "StatisticsRecord", "MangaPage", "ChapterPage", "LatestChapters", "ChapterPages", "PageImage",
]
