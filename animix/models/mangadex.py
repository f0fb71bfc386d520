from typing import Dict, Optional

from pydantic import Field

from .base import LocalizedString, NullableList, SourceModel

# Based on the MangaDex API v5 (https://api.mangadex.org/docs/).
# Localized strings are maps of language code to text.


class MangaDexTagName(SourceModel):
    name: LocalizedString = {}


class MangaDexTag(SourceModel):
    id: Optional[str] = None
    attributes: Optional[MangaDexTagName] = None


class MangaDexMangaAttributes(SourceModel):
    title: LocalizedString = {}
    altTitles: NullableList[LocalizedString] = []
    description: LocalizedString = {}
    status: Optional[str] = None
    year: Optional[int] = None
    lastChapter: Optional[str] = None
    publicationDemographic: Optional[str] = None
    contentRating: Optional[str] = None
    tags: NullableList[MangaDexTag] = []
    follows: Optional[int] = None


class MangaDexRelationship(SourceModel):
    id: str
    type: str
    attributes: Optional[dict] = None


class MangaDexManga(SourceModel):
    id: str
    type: Optional[str] = None
    attributes: MangaDexMangaAttributes = Field(default_factory=MangaDexMangaAttributes)
    relationships: NullableList[MangaDexRelationship] = []


class MangaDexChapterAttributes(SourceModel):
    title: Optional[str] = None
    volume: Optional[str] = None
    chapter: Optional[str] = None
    pages: Optional[int] = None
    translatedLanguage: Optional[str] = None
    readableAt: Optional[str] = None
    publishAt: Optional[str] = None


class MangaDexChapter(SourceModel):
    id: str
    attributes: MangaDexChapterAttributes = Field(default_factory=MangaDexChapterAttributes)
    relationships: NullableList[MangaDexRelationship] = []


class MangaDexRating(SourceModel):
    average: Optional[float] = None
    bayesian: Optional[float] = None
    votes: Optional[int] = None
    distribution: Dict[str, Optional[int]] = {}


class MangaDexStatistics(SourceModel):
    rating: Optional[MangaDexRating] = None
    follows: Optional[int] = None


class MangaDexAtHomeChapter(SourceModel):
    hash: Optional[str] = None
    data: NullableList[str] = []


class MangaDexAtHome(SourceModel):
    baseUrl: Optional[str] = None
    chapter: Optional[MangaDexAtHomeChapter] = None
