"""Provider doubles shared by the service and tool tests."""

import pytest

from animix.core.config import CatalogConfig
from animix.core.rate_limit import RateLimiter


class FakeSource:
    """Answers each method call from a canned response.

    A response may be a dict, an exception instance (raised) or a callable
    taking the call arguments.
    """

    def __init__(self, **responses):
        self.responses = responses
        self.calls = []

    def _answer(self, name, *args):
        self.calls.append((name,) + args)
        resp = self.responses[name]
        if isinstance(resp, Exception):
            raise resp
        if callable(resp):
            return resp(*args)
        return resp

    def called(self, name):
        return [c[1:] for c in self.calls if c[0] == name]


class FakeAniList(FakeSource):
    """Dispatches on the GraphQL query name."""

    def execute(self, query, variables=None):
        return self._answer(query.name, variables or {})


class FakeJikan(FakeSource):
    def top_anime(self, page, limit):
        return self._answer("top_anime", page, limit)

    def season_now(self, page):
        return self._answer("season_now", page)

    def season(self, year, season, page):
        return self._answer("season", year, season, page)

    def schedules(self, day=None):
        return self._answer("schedules", day)

    def anime_full(self, mal_id):
        return self._answer("anime_full", mal_id)

    def episodes(self, mal_id, page):
        return self._answer("episodes", mal_id, page)

    def recommendations(self, mal_id):
        return self._answer("recommendations", mal_id)


class FakeMangaDex(FakeSource):
    def manga_list(self, limit, offset, order, title=None):
        return self._answer("manga_list", limit, offset, dict(order), title)

    def manga(self, manga_id):
        return self._answer("manga", manga_id)

    def statistics(self, ids):
        return self._answer("statistics", list(ids))

    def chapters(self, manga_id, limit, offset):
        return self._answer("chapters", manga_id, limit, offset)

    def latest_chapters(self, limit):
        return self._answer("latest_chapters", limit)

    def at_home_server(self, chapter_id):
        return self._answer("at_home_server", chapter_id)


def anilist_media(id, score=80, popularity=100, title=None, **extra):
    media = {
        "id": id,
        "idMal": id + 1000,
        "title": title if title is not None else {"romaji": f"Romaji {id}", "english": f"English {id}"},
        "description": "A <b>show</b>.<br>Second line",
        "coverImage": {"large": f"https://img.example/{id}.jpg"},
        "averageScore": score,
        "popularity": popularity,
        "episodes": 12,
        "status": "RELEASING",
        "season": "FALL",
        "seasonYear": 2024,
        "genres": ["Action"],
        "studios": {"nodes": [{"name": "Studio A"}]},
        "format": "TV",
    }
    media.update(extra)
    return media


def anilist_page(media, field="media", **page_info):
    info = {"total": len(media), "currentPage": 1, "lastPage": 1, "hasNextPage": False, "perPage": 20}
    info.update(page_info)
    return {"Page": {"pageInfo": info, field: media}}


def jikan_anime(mal_id, score=8.5, **extra):
    anime = {
        "mal_id": mal_id,
        "title": f"Jikan {mal_id}",
        "title_english": None,
        "images": {"jpg": {"image_url": f"https://cdn.example/{mal_id}.jpg"}},
        "score": score,
        "type": "TV",
        "episodes": 24,
        "duration": "24 min per ep",
        "genres": [{"name": "Drama"}],
        "studios": [{"name": "Studio B"}],
    }
    anime.update(extra)
    return anime


@pytest.fixture
def config():
    return CatalogConfig()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def limiter(config, sleeps):
    return RateLimiter(config.delays, sleep=sleeps.append)
