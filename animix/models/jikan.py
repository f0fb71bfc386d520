from typing import Optional

from pydantic import Field

from .base import NullableList, SourceModel

# Based on the Jikan v4 responses (https://api.jikan.moe/v4/anime/21/full,
# /schedules, /anime/21/episodes, /anime/21/recommendations).


class JikanImage(SourceModel):
    image_url: Optional[str] = None
    small_image_url: Optional[str] = None
    large_image_url: Optional[str] = None


class JikanImages(SourceModel):
    jpg: Optional[JikanImage] = None
    webp: Optional[JikanImage] = None


class JikanTrailerImages(SourceModel):
    image_url: Optional[str] = None
    large_image_url: Optional[str] = None
    maximum_image_url: Optional[str] = None


class JikanTrailer(SourceModel):
    youtube_id: Optional[str] = None
    url: Optional[str] = None
    embed_url: Optional[str] = None
    images: Optional[JikanTrailerImages] = None


class JikanAiredPropDate(SourceModel):
    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None


class JikanAiredProp(SourceModel):
    from_date: Optional[JikanAiredPropDate] = Field(None, alias="from")
    to: Optional[JikanAiredPropDate] = None


class JikanAired(SourceModel):
    from_date: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    string: Optional[str] = None
    prop: Optional[JikanAiredProp] = None


class JikanBroadcast(SourceModel):
    day: Optional[str] = None
    time: Optional[str] = None
    timezone: Optional[str] = None
    string: Optional[str] = None


class JikanEntity(SourceModel):
    mal_id: Optional[int] = None
    name: Optional[str] = None
    url: Optional[str] = None


class JikanStreaming(SourceModel):
    name: Optional[str] = None
    url: Optional[str] = None


class JikanAnime(SourceModel):
    mal_id: int
    url: Optional[str] = None
    images: Optional[JikanImages] = None
    trailer: Optional[JikanTrailer] = None
    title: Optional[str] = None
    title_english: Optional[str] = None
    title_japanese: Optional[str] = None
    title_synonyms: NullableList[str] = []
    type: Optional[str] = None
    source: Optional[str] = None
    episodes: Optional[int] = None
    status: Optional[str] = None
    aired: Optional[JikanAired] = None
    duration: Optional[str] = None
    rating: Optional[str] = None
    score: Optional[float] = None
    scored_by: Optional[int] = None
    rank: Optional[int] = None
    popularity: Optional[int] = None
    members: Optional[int] = None
    favorites: Optional[int] = None
    synopsis: Optional[str] = None
    season: Optional[str] = None
    year: Optional[int] = None
    broadcast: Optional[JikanBroadcast] = None
    producers: NullableList[JikanEntity] = []
    licensors: NullableList[JikanEntity] = []
    studios: NullableList[JikanEntity] = []
    genres: NullableList[JikanEntity] = []
    themes: NullableList[JikanEntity] = []
    streaming: NullableList[JikanStreaming] = []


class JikanEpisode(SourceModel):
    mal_id: int
    url: Optional[str] = None
    title: Optional[str] = None
    title_japanese: Optional[str] = None
    title_romanji: Optional[str] = None
    aired: Optional[str] = None
    score: Optional[float] = None
    filler: Optional[bool] = None
    recap: Optional[bool] = None
    forum_url: Optional[str] = None


class JikanRecommendationEntry(SourceModel):
    mal_id: int
    url: Optional[str] = None
    images: Optional[JikanImages] = None
    title: Optional[str] = None


class JikanRecommendation(SourceModel):
    entry: JikanRecommendationEntry
    votes: Optional[int] = None


class JikanPaginationItems(SourceModel):
    count: Optional[int] = None
    total: Optional[int] = None
    per_page: Optional[int] = None


class JikanPagination(SourceModel):
    last_visible_page: Optional[int] = None
    has_next_page: Optional[bool] = None
    current_page: Optional[int] = None
    items: Optional[JikanPaginationItems] = None
