import pytest

from animix.core.clients import AniListClient, JikanClient, MangaDexClient
from animix.core.config import CatalogConfig
from animix.core.queries import SEARCH_ANIME

CONFIG = CatalogConfig()


@pytest.mark.integration
def test_anilist_search_minimal():
    data = AniListClient(CONFIG).execute(SEARCH_ANIME, {"search": "One Piece", "page": 1, "perPage": 1})
    media = data.get("Page", {}).get("media", [])
    assert isinstance(media, list)
    assert len(media) >= 0  # rate limiting may return nothing, but must not break


@pytest.mark.integration
def test_jikan_top_smoke():
    body = JikanClient(CONFIG).top_anime(1, 1)
    assert isinstance(body.get("data"), list)


@pytest.mark.integration
def test_mangadex_list_smoke():
    body = MangaDexClient(CONFIG).manga_list(1, 0, {"rating": "desc"})
    assert isinstance(body.get("data"), list)
