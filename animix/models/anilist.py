from typing import Optional

from .base import NullableList, SourceModel

# Based on the AniList GraphQL schema (https://graphql.anilist.co).
# Only the fields selected in animix.core.queries are modelled.


class AnilistTitle(SourceModel):
    english: Optional[str] = None
    native: Optional[str] = None
    romaji: Optional[str] = None


class AnilistCoverImage(SourceModel):
    large: Optional[str] = None
    medium: Optional[str] = None


class AnilistFuzzyDate(SourceModel):
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None


class AnilistName(SourceModel):
    name: Optional[str] = None


class AnilistStudios(SourceModel):
    nodes: NullableList[AnilistName] = []


class AnilistRelationNode(SourceModel):
    id: Optional[int] = None
    title: Optional[AnilistTitle] = None
    coverImage: Optional[AnilistCoverImage] = None
    episodes: Optional[int] = None
    season: Optional[str] = None
    seasonYear: Optional[int] = None
    format: Optional[str] = None
    duration: Optional[int] = None


class AnilistRelationEdge(SourceModel):
    relationType: Optional[str] = None
    node: Optional[AnilistRelationNode] = None


class AnilistRelations(SourceModel):
    edges: NullableList[Optional[AnilistRelationEdge]] = []


class AnilistRecommendedMedia(SourceModel):
    id: Optional[int] = None
    title: Optional[AnilistTitle] = None
    coverImage: Optional[AnilistCoverImage] = None
    averageScore: Optional[float] = None


class AnilistRecommendationNode(SourceModel):
    mediaRecommendation: Optional[AnilistRecommendedMedia] = None


class AnilistRecommendations(SourceModel):
    nodes: NullableList[Optional[AnilistRecommendationNode]] = []


class AnilistMedia(SourceModel):
    id: int
    idMal: Optional[int] = None
    title: Optional[AnilistTitle] = None
    description: Optional[str] = None
    coverImage: Optional[AnilistCoverImage] = None
    bannerImage: Optional[str] = None
    episodes: Optional[int] = None
    status: Optional[str] = None
    averageScore: Optional[float] = None
    popularity: Optional[int] = None
    favourites: Optional[int] = None
    trending: Optional[int] = None
    synonyms: NullableList[str] = []
    seasonYear: Optional[int] = None
    season: Optional[str] = None
    genres: NullableList[str] = []
    studios: Optional[AnilistStudios] = None
    tags: NullableList[AnilistName] = []
    format: Optional[str] = None
    source: Optional[str] = None
    duration: Optional[int] = None
    startDate: Optional[AnilistFuzzyDate] = None
    endDate: Optional[AnilistFuzzyDate] = None
    relations: Optional[AnilistRelations] = None
    recommendations: Optional[AnilistRecommendations] = None


class AnilistAiringSchedule(SourceModel):
    id: Optional[int] = None
    episode: Optional[int] = None
    airingAt: int
    media: Optional[AnilistMedia] = None


class AnilistPageInfo(SourceModel):
    total: Optional[int] = None
    currentPage: Optional[int] = None
    lastPage: Optional[int] = None
    hasNextPage: Optional[bool] = None
    perPage: Optional[int] = None
