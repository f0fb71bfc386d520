import types

import pytest

from animix.core import http_client as hc
from animix.core.clients import AniListClient, JikanClient, MangaDexClient
from animix.core.config import CatalogConfig
from animix.core.errors import NotFoundError, UpstreamError
from animix.core.queries import ANIME_DETAIL


class DummyResponse:
    def __init__(self, status_code=200, json_data=None, bad_json=False):
        self.status_code = status_code
        self._json = json_data
        self._bad = bad_json

    def json(self):
        if self._bad:
            raise ValueError("not json")
        return self._json


@pytest.fixture
def transport(monkeypatch):
    """Serves queued responses (or exceptions) and records each request."""
    state = {"queue": [], "requests": []}

    def fake_request(method, url, timeout=None, headers=None, **kw):
        state["requests"].append({"method": method, "url": url, "timeout": timeout, "headers": headers, **kw})
        item = state["queue"].pop(0) if len(state["queue"]) > 1 else state["queue"][0]
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(hc, "time", types.SimpleNamespace(sleep=lambda *_: None))
    monkeypatch.setattr(hc.requests, "request", fake_request)
    return state


CONFIG = CatalogConfig(timeout=4, max_attempts=2, user_agent="animix-tests")


def test_anilist_posts_query_and_returns_data(transport):
    transport["queue"] = [DummyResponse(200, {"data": {"Media": {"id": 1}}})]
    data = AniListClient(CONFIG).execute(ANIME_DETAIL, {"id": 1})
    assert data == {"Media": {"id": 1}}
    req = transport["requests"][0]
    assert req["method"] == "POST"
    assert req["url"] == "https://graphql.anilist.co"
    assert req["json"]["variables"] == {"id": 1}
    assert req["json"]["query"].startswith("query AnimeDetail")
    assert req["timeout"] == 4
    assert req["headers"]["User-Agent"] == "animix-tests"


def test_anilist_graphql_404_is_not_found(transport):
    transport["queue"] = [DummyResponse(404, {"errors": [{"message": "Not Found.", "status": 404}], "data": {"Media": None}})]
    with pytest.raises(NotFoundError) as ei:
        AniListClient(CONFIG).execute(ANIME_DETAIL, {"id": 999999})
    assert ei.value.source == "anilist"


def test_anilist_graphql_errors_are_upstream(transport):
    transport["queue"] = [DummyResponse(400, {"errors": [{"message": "Syntax Error", "status": 400}]})]
    with pytest.raises(UpstreamError) as ei:
        AniListClient(CONFIG).execute(ANIME_DETAIL, {"id": 1})
    assert ei.value.status_code == 400
    assert "Syntax Error" in ei.value.message


def test_retries_exhausted_become_upstream_error(transport):
    transport["queue"] = [DummyResponse(503)]
    with pytest.raises(UpstreamError) as ei:
        JikanClient(CONFIG).top_anime(1, 25)
    assert ei.value.status_code == 503
    assert ei.value.source == "jikan"
    assert len(transport["requests"]) == 2


def test_timeout_becomes_upstream_error(transport):
    transport["queue"] = [hc.requests.Timeout("slow")]
    with pytest.raises(UpstreamError) as ei:
        JikanClient(CONFIG).anime_full(21)
    assert ei.value.status_code is None
    assert "timed out" in ei.value.message


def test_connection_error_becomes_upstream_error(transport):
    transport["queue"] = [hc.requests.ConnectionError("refused")]
    with pytest.raises(UpstreamError):
        MangaDexClient(CONFIG).manga("m1")


def test_rest_404_is_not_found(transport):
    transport["queue"] = [DummyResponse(404, {"status": 404})]
    with pytest.raises(NotFoundError):
        JikanClient(CONFIG).episodes(1, 1)
    assert len(transport["requests"]) == 1


def test_rest_4xx_is_upstream(transport):
    transport["queue"] = [DummyResponse(400, {"result": "error"})]
    with pytest.raises(UpstreamError) as ei:
        MangaDexClient(CONFIG).chapters("m1", 10, 0)
    assert ei.value.status_code == 400


def test_undecodable_body(transport):
    transport["queue"] = [DummyResponse(200, bad_json=True)]
    with pytest.raises(UpstreamError):
        JikanClient(CONFIG).schedules("monday")


def test_non_object_body(transport):
    transport["queue"] = [DummyResponse(200, ["not", "an", "object"])]
    with pytest.raises(UpstreamError):
        JikanClient(CONFIG).season_now(1)


def test_jikan_paths_and_params(transport):
    transport["queue"] = [DummyResponse(200, {"data": []})]
    jikan = JikanClient(CONFIG)
    jikan.top_anime(2, 25)
    jikan.season(2024, "fall", 1)
    jikan.schedules("Monday")
    jikan.recommendations(21)
    urls = [(r["url"], r.get("params")) for r in transport["requests"]]
    assert urls == [
        ("https://api.jikan.moe/v4/top/anime", {"page": 2, "limit": 25}),
        ("https://api.jikan.moe/v4/seasons/2024/fall", {"page": 1}),
        ("https://api.jikan.moe/v4/schedules", {"filter": "monday"}),
        ("https://api.jikan.moe/v4/anime/21/recommendations", None),
    ]


def test_mangadex_list_params(transport):
    transport["queue"] = [DummyResponse(200, {"data": [], "total": 0})]
    MangaDexClient(CONFIG).manga_list(12, 12, {"rating": "desc"}, "berserk")
    params = transport["requests"][0]["params"]
    assert params["limit"] == 12 and params["offset"] == 12
    assert params["order[rating]"] == "desc"
    assert params["title"] == "berserk"
    assert params["contentRating[]"] == ["safe", "suggestive"]
    assert params["availableTranslatedLanguage[]"] == ["en"]
    assert params["includes[]"] == ["cover_art"]


def test_mangadex_statistics_params(transport):
    transport["queue"] = [DummyResponse(200, {"statistics": {}})]
    MangaDexClient(CONFIG).statistics(["a", "b"])
    req = transport["requests"][0]
    assert req["url"] == "https://api.mangadex.org/statistics/manga"
    assert req["params"] == {"manga[]": ["a", "b"]}
