from datetime import timezone

import pytest

from animix.core.errors import UpstreamError
from animix.core.normalizers import (
    anime_from_anilist, anime_from_jikan, enrichment_from_jikan, episode_from_jikan,
    pagination_from_anilist, pagination_from_jikan, recommendation_from_jikan,
    recommendations_from_anilist, relations_from_anilist, schedule_from_anilist, schedule_from_jikan,
    weekly_episode_from_anilist,
)
from animix.utils.helpers import NO_DESCRIPTION, UNKNOWN_TITLE, preferred_title, scale_score

from conftest import anilist_media, jikan_anime


def test_anilist_media_maps_onto_unified_record():
    r = anime_from_anilist(anilist_media(5, score=87, startDate={"year": 2024, "month": 10}))
    assert r.id == "5"
    assert r.mal_id == "1005"
    assert r.title == "English 5"
    assert r.synopsis == "A show.\nSecond line"
    assert r.score == 8.7
    assert r.rating == 87
    assert r.season == "fall"
    assert r.studios == ["Studio A"]
    assert r.type == "TV"
    assert r.aired.from_ == "2024-10-01"
    assert r.banner_image == "https://img.example/5.jpg"


def test_anilist_title_precedence():
    assert anime_from_anilist(anilist_media(1, title={"romaji": "R", "native": "N"})).title == "R"
    assert anime_from_anilist(anilist_media(1, title={"native": "N"})).title == "N"
    assert anime_from_anilist(dict(anilist_media(1), title=None)).title == UNKNOWN_TITLE


def test_missing_description_gets_placeholder():
    assert anime_from_anilist(anilist_media(1, description=None)).synopsis == NO_DESCRIPTION


@pytest.mark.parametrize("raw, expected", [(0, None), (None, None), (100, 10.0), (55, 5.5), (120, None)])
def test_anilist_score_is_rescaled(raw, expected):
    assert anime_from_anilist(anilist_media(1, score=raw)).score == expected


def test_score_helper_bounds():
    assert scale_score(9.1) == 9.1
    assert scale_score(11) is None
    assert scale_score("8") is None
    assert scale_score(True) is None


def test_preferred_title():
    assert preferred_title("E", "R", "N") == "E"
    assert preferred_title(None, "R", "N") == "R"
    assert preferred_title("", None, None) == UNKNOWN_TITLE


def test_media_without_id_is_an_upstream_error():
    with pytest.raises(UpstreamError) as ei:
        anime_from_anilist({"title": {"romaji": "x"}})
    assert ei.value.source == "anilist"


def test_relations_and_recommendations_skip_empty_nodes():
    raw = anilist_media(
        1,
        relations={"edges": [
            {"relationType": "SEQUEL", "node": {"id": 2, "title": {"romaji": "Two"}, "season": "SPRING"}},
            {"relationType": "PREQUEL", "node": None},
            None,
        ]},
        recommendations={"nodes": [
            {"mediaRecommendation": {"id": 9, "title": {"english": "Nine"}, "averageScore": 70}},
            {"mediaRecommendation": None},
        ]},
    )
    rels = relations_from_anilist(raw)
    assert [(r.id, r.relation_type, r.title, r.season) for r in rels] == [("2", "SEQUEL", "Two", "spring")]
    recs = recommendations_from_anilist(raw)
    assert [(r.id, r.title, r.score) for r in recs] == [("9", "Nine", 7.0)]


def test_schedule_from_anilist_uses_weekday_in_timezone():
    # 2024-01-01 00:00:00 UTC was a Monday
    node = {"id": 1, "episode": 3, "airingAt": 1704067200, "media": anilist_media(7)}
    e = schedule_from_anilist(node, timezone.utc, "UTC")
    assert (e.airing_day, e.airing_time, e.timezone) == ("Monday", "00:00", "UTC")
    assert e.airing_at == "2024-01-01T00:00:00Z"
    assert e.episode == 3
    assert e.id == "7"


def test_weekly_episode_title():
    node = {"airingAt": 1704067200, "episode": 4, "media": anilist_media(7)}
    w = weekly_episode_from_anilist(node)
    assert w.episode_title == "Episode 4"
    assert w.aired_at == "2024-01-01T00:00:00Z"
    assert w.stats.popularity == 100


def test_pagination_from_anilist():
    p = pagination_from_anilist({"total": 40, "currentPage": 2, "lastPage": 2, "hasNextPage": False, "perPage": 20}, 20)
    assert (p.current_page, p.has_next_page, p.last_visible_page) == (2, False, 2)
    assert (p.items.count, p.items.total, p.items.per_page) == (20, 40, 20)
    assert pagination_from_anilist(None, 0).has_next_page is False


def test_jikan_anime():
    r = anime_from_jikan(jikan_anime(
        21, title_english="One Piece", aired={"from": "1999-10-20T00:00:00+00:00", "prop": {"from": {"year": 1999}}},
    ))
    assert (r.id, r.mal_id, r.title) == ("21", "21", "One Piece")
    assert r.score == 8.5
    assert r.duration == 24
    assert r.year == 1999
    assert r.aired.from_ == "1999-10-20T00:00:00+00:00"
    assert r.cover_image == "https://cdn.example/21.jpg"
    assert r.genres == ["Drama"]


def test_jikan_null_collections():
    r = anime_from_jikan(jikan_anime(1, genres=None, studios=None, themes=None, score=None))
    assert r.genres == [] and r.studios == [] and r.themes == []
    assert r.score is None


def test_schedule_from_jikan_normalizes_broadcast_day():
    e = schedule_from_jikan(jikan_anime(3, broadcast={"day": "Mondays", "time": "23:00", "timezone": "Asia/Tokyo"}))
    assert (e.airing_day, e.airing_time, e.timezone) == ("Monday", "23:00", "Asia/Tokyo")


def test_episode_and_recommendation_from_jikan():
    ep = episode_from_jikan({"mal_id": 2, "title": "Ep", "filler": None, "recap": True})
    assert (ep.id, ep.number, ep.filler, ep.recap) == ("2", 2, False, True)
    rec = recommendation_from_jikan({"entry": {"mal_id": 5, "title": "Five", "images": {"webp": {"image_url": "w"}}}})
    assert (rec.id, rec.title, rec.cover_image) == ("5", "Five", "w")


def test_enrichment_from_jikan():
    raw = jikan_anime(
        1,
        producers=[{"name": "P1"}, {"name": None}],
        licensors=None,
        streaming=[{"name": "Crunchyroll", "url": "https://cr.example"}, {"name": "Bad", "url": None}],
        trailer={"url": "https://yt.example", "youtube_id": "abc", "images": {"maximum_image_url": "thumb"}},
        broadcast={"day": "Sundays", "time": "17:00", "timezone": "Asia/Tokyo", "string": "Sundays at 17:00 (JST)"},
        rank=3, members=1000, scored_by=500,
    )
    e = enrichment_from_jikan(raw)
    assert e.producers == ["P1"]
    assert e.licensors == []
    assert [s.name for s in e.streaming] == ["Crunchyroll"]
    assert (e.trailer.site, e.trailer.thumbnail) == ("youtube", "thumb")
    assert e.broadcast.day == "Sundays"
    assert (e.stats.rank, e.stats.members, e.stats.scored_by) == (3, 1000, 500)


def test_pagination_from_jikan_counts_items_when_missing():
    p = pagination_from_jikan({"current_page": 1, "has_next_page": True, "last_visible_page": 4}, 25)
    assert p.has_next_page is True
    assert p.items.count == 25


def test_jikan_audience_rating_is_kept_apart_from_score():
    r = anime_from_jikan(jikan_anime(1, score=7.5, rating="PG-13 - Teens 13 or older"))
    assert r.rating == 7.5
    assert r.age_rating == "PG-13 - Teens 13 or older"
    assert r.model_dump(by_alias=True)["ageRating"] == "PG-13 - Teens 13 or older"
    assert anime_from_anilist(anilist_media(1)).age_rating is None
