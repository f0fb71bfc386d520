"""Manga operations backed by MangaDex."""

import logging
from typing import Any, Dict, Mapping, Optional

from ..core.clients import MangaDexClient
from ..core.config import CatalogConfig
from ..core.errors import NotFoundError, ValidationError
from ..core.normalizers import (
    authors_from_mangadex, chapter_from_mangadex, manga_from_mangadex, manga_from_relationship, parse,
)
from ..core.statistics import fetch_statistics
from ..models.mangadex import MangaDexAtHome, MangaDexChapter, MangaDexRelationship
from ..models.types import (
    ChapterPage, ChapterPages, LatestChapter, LatestChapters, MangaDetail, MangaPage, PageImage,
)
from ..utils.helpers import clamp
from .policy import POLICIES, run_policy

logger = logging.getLogger(__name__)

TRENDING_ORDER = {"rating": "desc"}
POPULAR_ORDER = {"followedCount": "desc"}
RELEVANCE_ORDER = {"relevance": "desc"}


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def has_next_page(offset: int, limit: int, total: int) -> bool:
    return offset + limit < total


def _require_id(value: Any, what: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"A {what} is required.")
    return text


class MangaService:
    """Listings, details, chapters and page images from the manga catalog."""

    def __init__(self, config: Optional[CatalogConfig] = None, mangadex: Optional[MangaDexClient] = None):
        self.config = config or CatalogConfig()
        self.mangadex = mangadex or MangaDexClient(self.config)

    # ---------- listings ----------

    def fetch_manga_list(self, page: int = 1, limit: int = 12,
                         order: Optional[Mapping[str, str]] = None,
                         query: Optional[str] = None) -> MangaPage:
        page = max(1, int(page))
        limit = clamp(limit, 1, 100)
        offset = page_offset(page, limit)

        def from_mangadex() -> MangaPage:
            body = self.mangadex.manga_list(limit, offset, order or {}, query)
            items = [m for m in (body.get("data") or []) if m]
            stats = fetch_statistics(self.mangadex, (m.get("id") for m in items))
            results = [
                manga_from_mangadex(m, self.config.mangadex_uploads_url, stats.get(m.get("id")))
                for m in items
            ]
            total = body.get("total")
            return MangaPage(
                results=results,
                total=total if total is not None else len(results),
                limit=limit,
                page=page,
                has_next_page=has_next_page(offset, limit, total or 0),
            )

        return run_policy(POLICIES["manga.list"], {"mangadex": from_mangadex})

    def get_trending(self, page: int = 1, limit: int = 12) -> MangaPage:
        return self.fetch_manga_list(page, limit, TRENDING_ORDER)

    def get_popular(self, page: int = 1, limit: int = 12) -> MangaPage:
        return self.fetch_manga_list(page, limit, POPULAR_ORDER)

    def search_manga(self, query: str, page: int = 1, limit: int = 20) -> MangaPage:
        if not query or not str(query).strip():
            raise ValidationError("Search query is required")
        return self.fetch_manga_list(page, limit, RELEVANCE_ORDER, str(query).strip())

    # ---------- detail ----------

    def get_manga_details(self, id: Any) -> MangaDetail:
        """One manga with statistics and author/artist names.

        Statistics are soft-fail: rating, ratingVotes and follows fall back
        to null (follows to the manga's own count) when they cannot be fetched.
        """
        manga_id = _require_id(id, "manga id")

        def from_mangadex() -> Dict[str, Any]:
            data = self.mangadex.manga(manga_id).get("data")
            if not data:
                raise NotFoundError("Manga not found", "mangadex")
            return data

        data = run_policy(POLICIES["manga.detail"], {"mangadex": from_mangadex})
        stats = fetch_statistics(self.mangadex, [manga_id])
        manga = manga_from_mangadex(data, self.config.mangadex_uploads_url, stats.get(manga_id))
        return MangaDetail(**dict(manga), authors=authors_from_mangadex(data))

    # ---------- chapters ----------

    def get_manga_chapters(self, manga_id: Any, page: int = 1, limit: int = 100) -> ChapterPage:
        mid = _require_id(manga_id, "manga id")
        page = max(1, int(page))
        limit = clamp(limit, 1, 100)
        offset = page_offset(page, limit)

        def from_mangadex() -> ChapterPage:
            body = self.mangadex.chapters(mid, limit, offset)
            chapters = [chapter_from_mangadex(c) for c in (body.get("data") or []) if c]
            total = body.get("total")
            return ChapterPage(
                results=chapters,
                total=total if total is not None else len(chapters),
                limit=limit,
                page=page,
                has_next_page=has_next_page(offset, limit, total or 0),
            )

        return run_policy(POLICIES["manga.chapters"], {"mangadex": from_mangadex})

    def get_latest_chapters(self, limit: int = 12) -> LatestChapters:
        """Latest chapters, each with its manga summary (null when not embedded)."""
        limit = clamp(limit, 1, 100)

        def from_mangadex() -> LatestChapters:
            raw = [c for c in (self.mangadex.latest_chapters(limit).get("data") or []) if c]
            chapters = [parse(MangaDexChapter, c, "mangadex") for c in raw]

            embedded: Dict[str, MangaDexRelationship] = {}
            for chapter in chapters:
                for rel in chapter.relationships:
                    if rel.type == "manga" and rel.attributes:
                        embedded[rel.id] = rel

            logger.debug("%d latest chapter(s), %d embedded manga", len(chapters), len(embedded))
            stats = fetch_statistics(self.mangadex, embedded.keys())
            uploads = self.config.mangadex_uploads_url
            results = []
            for chapter, payload in zip(chapters, raw):
                rel = next((r for r in chapter.relationships if r.type == "manga"), None)
                manga = manga_from_relationship(rel, uploads, stats.get(rel.id)) if rel else None
                results.append(LatestChapter(**dict(chapter_from_mangadex(payload)), manga=manga))
            return LatestChapters(results=results)

        return run_policy(POLICIES["manga.latest"], {"mangadex": from_mangadex})

    def get_chapter_pages(self, chapter_id: Any) -> ChapterPages:
        """Absolute, 1-indexed page image URLs for a chapter."""
        cid = _require_id(chapter_id, "chapter id")

        def from_mangadex() -> ChapterPages:
            home = parse(MangaDexAtHome, self.mangadex.at_home_server(cid), "mangadex")
            base_url = home.baseUrl
            hash_ = home.chapter.hash if home.chapter else None
            files = [f for f in (home.chapter.data if home.chapter else []) if f]
            if not base_url or not hash_ or not files:
                raise NotFoundError("Pages not available for this chapter", "mangadex")
            pages = [
                PageImage(index=i, url=f"{base_url}/data/{hash_}/{name}")
                for i, name in enumerate(files, start=1)
            ]
            return ChapterPages(chapter_id=cid, pages=pages, page_count=len(pages))

        return run_policy(POLICIES["manga.pages"], {"mangadex": from_mangadex})
