"""Manga tools for animix."""

from ..services.manga import MangaService
from . import respond


def register_tools(mcp, service: MangaService):
    """Register manga tools with FastMCP."""

    @mcp.tool()
    def trending_manga(page: int = 1, limit: int = 12):
        """Manga ordered by rating."""
        return respond("mangadex", lambda: service.get_trending(page, limit))

    @mcp.tool()
    def popular_manga(page: int = 1, limit: int = 12):
        """Manga ordered by follow count."""
        return respond("mangadex", lambda: service.get_popular(page, limit))

    @mcp.tool()
    def latest_chapters(limit: int = 12):
        """Most recently readable chapters with their manga."""
        return respond("mangadex", lambda: service.get_latest_chapters(limit))

    @mcp.tool()
    def search_manga(query: str, page: int = 1, limit: int = 20):
        """Search manga by title."""
        return respond("mangadex", lambda: service.search_manga(query, page, limit))

    @mcp.tool()
    def manga_details(id: str):
        """Manga detail with statistics and authors."""
        return respond("mangadex", lambda: service.get_manga_details(id))

    @mcp.tool()
    def manga_chapters(id: str, page: int = 1, limit: int = 100):
        """Chapters of a manga, ascending by chapter number."""
        return respond("mangadex", lambda: service.get_manga_chapters(id, page, limit))

    @mcp.tool()
    def chapter_pages(chapter_id: str):
        """Page image URLs of a chapter."""
        return respond("mangadex", lambda: service.get_chapter_pages(chapter_id))
