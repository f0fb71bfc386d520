"""Data normalization functions for different API sources.

Each function takes one raw provider record (a decoded JSON dict), validates
it against the provider schema in ``animix.models`` and maps it onto a
unified record. A record that does not match the schema raises UpstreamError.
"""

from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..models.anilist import AnilistAiringSchedule, AnilistCoverImage, AnilistMedia, AnilistPageInfo, AnilistTitle
from ..models.jikan import (
    JikanAnime, JikanEpisode, JikanImages, JikanPagination, JikanRecommendation,
)
from ..models.mangadex import MangaDexChapter, MangaDexManga, MangaDexRelationship, MangaDexStatistics
from ..models.types import (
    Aired, Broadcast, ChapterRecord, Enrichment, EpisodeRecord, MalStats, MangaRecord,
    MediaRecord, MediaStats, PageItems, Pagination, RecommendationRecord, RelationRecord,
    ScheduleEntry, StatisticsRecord, StreamingLink, Title, Trailer, WeeklyEpisode,
)
from ..utils.helpers import (
    describe, fuzzy_date, iso_utc, normalize_weekday, parse_duration, preferred_title,
    scale_score, to_id,
)
from .errors import UpstreamError

M = TypeVar("M", bound=BaseModel)


def parse(model: Type[M], raw: Any, source: str) -> M:
    """Validate a raw provider record at the normalization boundary."""
    try:
        return model.model_validate(raw)
    except SchemaError as e:
        raise UpstreamError(f"Unexpected {model.__name__} payload: {e.error_count()} invalid field(s)", source) from e


def _names(items: Iterable[Any]) -> List[str]:
    return [i.name for i in items if i is not None and i.name]


# ---------- AniList ----------

def _anilist_title(t: Optional[AnilistTitle]) -> AnilistTitle:
    return t or AnilistTitle()


def _anilist_cover(c: Optional[AnilistCoverImage]) -> Optional[str]:
    return (c.large or c.medium) if c else None


def anime_from_anilist(raw: Dict[str, Any]) -> MediaRecord:
    m = parse(AnilistMedia, raw, "anilist")
    return _anime_from_media(m)


def _anime_from_media(m: AnilistMedia) -> MediaRecord:
    t = _anilist_title(m.title)
    start, end = m.startDate, m.endDate
    return MediaRecord(
        id=str(m.id),
        mal_id=to_id(m.idMal),
        title=preferred_title(t.english, t.romaji, t.native),
        title_english=t.english,
        title_japanese=t.native,
        synopsis=describe(m.description),
        cover_image=_anilist_cover(m.coverImage),
        banner_image=m.bannerImage or _anilist_cover(m.coverImage),
        episodes=m.episodes,
        status=m.status,
        score=scale_score(m.averageScore, 100),
        rating=m.averageScore,
        year=m.seasonYear or (start.year if start else None),
        season=m.season.lower() if m.season else None,
        studios=_names(m.studios.nodes) if m.studios else [],
        genres=list(m.genres),
        themes=_names(m.tags),
        synonyms=list(m.synonyms),
        type=m.format,
        source=m.source,
        duration=m.duration,
        aired=Aired(
            from_=fuzzy_date(start.year, start.month, start.day) if start else None,
            to=fuzzy_date(end.year, end.month, end.day) if end else None,
        ),
        stats=MediaStats(
            average_score=m.averageScore,
            popularity=m.popularity,
            favourites=m.favourites,
            trending=m.trending,
        ),
    )


def relations_from_anilist(raw: Dict[str, Any]) -> List[RelationRecord]:
    """Relation edges of a detail payload; edges without a node id are dropped."""
    m = parse(AnilistMedia, raw, "anilist")
    out: List[RelationRecord] = []
    for edge in (m.relations.edges if m.relations else []):
        node = edge.node if edge else None
        if node is None or node.id is None:
            continue
        t = _anilist_title(node.title)
        out.append(RelationRecord(
            id=str(node.id),
            relation_type=edge.relationType,
            title=preferred_title(t.english, t.romaji, t.native),
            cover_image=_anilist_cover(node.coverImage),
            episodes=node.episodes,
            season_year=node.seasonYear,
            season=node.season.lower() if node.season else None,
            format=node.format,
            duration=node.duration,
        ))
    return out


def recommendations_from_anilist(raw: Dict[str, Any]) -> List[RecommendationRecord]:
    m = parse(AnilistMedia, raw, "anilist")
    out: List[RecommendationRecord] = []
    for node in (m.recommendations.nodes if m.recommendations else []):
        rec = node.mediaRecommendation if node else None
        if rec is None or rec.id is None:
            continue
        t = _anilist_title(rec.title)
        out.append(RecommendationRecord(
            id=str(rec.id),
            title=preferred_title(t.english, t.romaji, t.native),
            cover_image=_anilist_cover(rec.coverImage),
            score=scale_score(rec.averageScore, 100),
        ))
    return out


def schedule_from_anilist(raw: Dict[str, Any], tz: tzinfo, tz_name: str) -> ScheduleEntry:
    """One airing schedule node; weekday and HH:MM are computed in `tz`."""
    s = parse(AnilistAiringSchedule, raw, "anilist")
    m = s.media
    if m is None:
        raise UpstreamError("Airing schedule without media", "anilist")
    t = _anilist_title(m.title)
    when = datetime.fromtimestamp(s.airingAt, tz=tz)
    return ScheduleEntry(
        id=str(m.id),
        title=preferred_title(t.english, t.romaji, t.native),
        title_english=t.english,
        cover_image=_anilist_cover(m.coverImage),
        airing_day=when.strftime("%A"),
        airing_time=when.strftime("%H:%M"),
        timezone=tz_name,
        episode=s.episode,
        episodes=m.episodes,
        airing_at=iso_utc(s.airingAt),
        score=scale_score(m.averageScore, 100),
        type=m.format,
        year=m.seasonYear,
    )


def weekly_episode_from_anilist(raw: Dict[str, Any]) -> WeeklyEpisode:
    s = parse(AnilistAiringSchedule, raw, "anilist")
    if s.media is None:
        raise UpstreamError("Airing schedule without media", "anilist")
    base = _anime_from_media(s.media)
    return WeeklyEpisode(
        **dict(base),
        episode=s.episode,
        aired_at=iso_utc(s.airingAt),
        episode_title=f"Episode {s.episode}" if s.episode is not None else "Episode",
    )


def pagination_from_anilist(raw: Optional[Dict[str, Any]], count: int) -> Pagination:
    p = parse(AnilistPageInfo, raw or {}, "anilist")
    return Pagination(
        current_page=p.currentPage,
        has_next_page=bool(p.hasNextPage),
        last_visible_page=p.lastPage,
        items=PageItems(count=count, total=p.total, per_page=p.perPage),
    )


# ---------- Jikan ----------

def _jikan_image(images: Optional[JikanImages]) -> Optional[str]:
    if images is None:
        return None
    for img in (images.jpg, images.webp):
        if img is None:
            continue
        url = img.large_image_url or img.image_url
        if url:
            return url
    return None


def anime_from_jikan(raw: Dict[str, Any]) -> MediaRecord:
    a = parse(JikanAnime, raw, "jikan")
    aired = a.aired
    prop_from = aired.prop.from_date if aired and aired.prop else None
    trailer_img = a.trailer.images if a.trailer else None
    cover = _jikan_image(a.images)
    return MediaRecord(
        id=str(a.mal_id),
        mal_id=str(a.mal_id),
        title=preferred_title(a.title_english, a.title, a.title_japanese),
        title_english=a.title_english,
        title_japanese=a.title_japanese,
        synopsis=describe(a.synopsis),
        cover_image=cover,
        banner_image=(trailer_img.maximum_image_url if trailer_img else None) or cover,
        episodes=a.episodes,
        status=a.status,
        score=scale_score(a.score, 10),
        rating=a.score,
        age_rating=a.rating,
        year=a.year or (prop_from.year if prop_from else None),
        season=a.season.lower() if a.season else None,
        studios=_names(a.studios),
        genres=_names(a.genres),
        themes=_names(a.themes),
        synonyms=list(a.title_synonyms),
        type=a.type,
        source=a.source,
        duration=parse_duration(a.duration),
        aired=Aired(
            from_=aired.from_date if aired else None,
            to=aired.to if aired else None,
            string=aired.string if aired else None,
        ),
        stats=MediaStats(popularity=a.popularity, favourites=a.favorites),
    )


def schedule_from_jikan(raw: Dict[str, Any]) -> ScheduleEntry:
    a = parse(JikanAnime, raw, "jikan")
    b = a.broadcast
    return ScheduleEntry(
        id=str(a.mal_id),
        title=preferred_title(a.title_english, a.title, a.title_japanese),
        title_english=a.title_english,
        cover_image=_jikan_image(a.images),
        airing_day=normalize_weekday(b.day) if b else None,
        airing_time=b.time if b else None,
        timezone=b.timezone if b else None,
        episodes=a.episodes,
        score=scale_score(a.score, 10),
        type=a.type,
        year=a.year,
    )


def episode_from_jikan(raw: Dict[str, Any]) -> EpisodeRecord:
    e = parse(JikanEpisode, raw, "jikan")
    return EpisodeRecord(
        id=str(e.mal_id),
        number=e.mal_id,
        title=e.title,
        title_japanese=e.title_japanese,
        title_romanji=e.title_romanji,
        aired=e.aired,
        score=e.score,
        filler=bool(e.filler),
        recap=bool(e.recap),
        forum_url=e.forum_url,
    )


def recommendation_from_jikan(raw: Dict[str, Any]) -> RecommendationRecord:
    r = parse(JikanRecommendation, raw, "jikan")
    entry = r.entry
    return RecommendationRecord(
        id=str(entry.mal_id),
        title=preferred_title(None, entry.title, None),
        cover_image=_jikan_image(entry.images),
    )


def enrichment_from_jikan(raw: Dict[str, Any]) -> Enrichment:
    """Producers, licensors, streaming, broadcast, trailer and rank stats."""
    a = parse(JikanAnime, raw, "jikan")
    trailer = None
    if a.trailer and a.trailer.url:
        imgs = a.trailer.images
        trailer = Trailer(
            url=a.trailer.url,
            site="youtube" if a.trailer.youtube_id else None,
            thumbnail=(imgs.maximum_image_url or imgs.large_image_url) if imgs else None,
        )
    b = a.broadcast
    return Enrichment(
        producers=_names(a.producers),
        licensors=_names(a.licensors),
        studios=_names(a.studios),
        streaming=[StreamingLink(name=s.name, url=s.url) for s in a.streaming if s.name and s.url],
        broadcast=Broadcast(day=b.day, time=b.time, timezone=b.timezone, string=b.string) if b else None,
        trailer=trailer,
        stats=MalStats(
            rank=a.rank,
            popularity=a.popularity,
            members=a.members,
            favorites=a.favorites,
            score=a.score,
            scored_by=a.scored_by,
        ),
    )


def pagination_from_jikan(raw: Optional[Dict[str, Any]], count: int) -> Pagination:
    p = parse(JikanPagination, raw or {}, "jikan")
    items = p.items
    return Pagination(
        current_page=p.current_page,
        has_next_page=bool(p.has_next_page),
        last_visible_page=p.last_visible_page,
        items=PageItems(
            count=items.count if items and items.count is not None else count,
            total=items.total if items else None,
            per_page=items.per_page if items else None,
        ),
    )


# ---------- MangaDex ----------

def _localized(values: Mapping[str, Optional[str]], *langs: str) -> Optional[str]:
    for lang in langs:
        if values.get(lang):
            return values[lang]
    return None


def _manga_title(m: MangaDexManga) -> Title:
    attrs = m.attributes
    english = _localized(attrs.title, "en")
    if not english:
        english = next((alt["en"] for alt in attrs.altTitles if alt.get("en")), None)
    native = _localized(attrs.title, "ja", "jp")
    romaji = _localized(attrs.title, "ja-ro", "ja", "jp")
    if not romaji:
        # original-language title, whatever its language code
        romaji = next((v for k, v in attrs.title.items() if v and k != "en"), None)
    return Title(english=english, romaji=romaji, native=native)


def cover_url(m: MangaDexManga, uploads_url: str) -> Optional[str]:
    for rel in m.relationships:
        if rel.type == "cover_art" and rel.attributes and rel.attributes.get("fileName"):
            return f"{uploads_url}/covers/{m.id}/{rel.attributes['fileName']}.512.jpg"
    return None


def manga_from_mangadex(raw: Dict[str, Any], uploads_url: str,
                        stats: Optional[StatisticsRecord] = None) -> MangaRecord:
    m = parse(MangaDexManga, raw, "mangadex")
    return _manga_record(m, uploads_url, stats)


def _manga_record(m: MangaDexManga, uploads_url: str, stats: Optional[StatisticsRecord]) -> MangaRecord:
    attrs = m.attributes
    title = _manga_title(m)
    stats = stats or StatisticsRecord()
    tags = [
        t.attributes.name["en"] for t in attrs.tags
        if t.attributes and t.attributes.name.get("en")
    ]
    return MangaRecord(
        id=m.id,
        title=title,
        display_title=preferred_title(title.english, title.romaji, title.native),
        description=describe(_localized(attrs.description, "en")),
        status=attrs.status,
        genres=tags,
        tags=tags,
        cover=cover_url(m, uploads_url),
        rating=stats.rating,
        rating_votes=stats.rating_votes,
        follows=stats.follows if stats.follows is not None else attrs.follows,
        last_chapter=attrs.lastChapter or None,
        publication_year=attrs.year,
        demographic=attrs.publicationDemographic,
        content_rating=attrs.contentRating,
    )


def manga_from_relationship(rel: MangaDexRelationship, uploads_url: str,
                            stats: Optional[StatisticsRecord] = None) -> Optional[MangaRecord]:
    """Manga summary embedded in a chapter; None when attributes were not expanded."""
    if rel.type != "manga" or not rel.attributes:
        return None
    m = parse(MangaDexManga, {"id": rel.id, "type": rel.type, "attributes": rel.attributes}, "mangadex")
    return _manga_record(m, uploads_url, stats)


def authors_from_mangadex(raw: Dict[str, Any]) -> List[str]:
    """Author and artist names, deduplicated in order."""
    m = parse(MangaDexManga, raw, "mangadex")
    names: List[str] = []
    for rel in m.relationships:
        if rel.type not in ("author", "artist") or not rel.attributes:
            continue
        name = rel.attributes.get("name")
        if name and name not in names:
            names.append(name)
    return names


def chapter_from_mangadex(raw: Dict[str, Any]) -> ChapterRecord:
    c = parse(MangaDexChapter, raw, "mangadex")
    attrs = c.attributes
    return ChapterRecord(
        id=c.id,
        title=attrs.title or None,
        chapter=attrs.chapter or "—",
        volume=attrs.volume or None,
        pages=attrs.pages or 0,
        readable_at=attrs.readableAt or attrs.publishAt,
        translated_language=attrs.translatedLanguage,
    )


def statistics_from_mangadex(raw: Optional[Dict[str, Any]]) -> StatisticsRecord:
    s = parse(MangaDexStatistics, raw or {}, "mangadex")
    rating = s.rating
    votes = rating.votes if rating else None
    if votes is None and rating and rating.distribution:
        votes = sum(v or 0 for v in rating.distribution.values())
    return StatisticsRecord(
        rating=rating.bayesian if rating else None,
        rating_votes=votes,
        follows=s.follows,
    )
