"""Source clients: one request to one provider, raw payload back.

Transport failures, non-success statuses and undecodable bodies are
translated into the catalog error taxonomy here, so callers only ever see
``CatalogError`` subclasses.
"""

import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional

import requests

from . import http_client
from .config import CatalogConfig
from .errors import NotFoundError, UpstreamError
from .queries import GraphQLQuery

logger = logging.getLogger(__name__)


class _SourceClient:
    source = "upstream"

    def __init__(self, base_url: str, config: CatalogConfig):
        self.base_url = base_url.rstrip("/")
        self.config = config

    def _send(self, method: str, url: str, **kw) -> requests.Response:
        headers = {"User-Agent": self.config.user_agent, "Accept": "application/json", **kw.pop("headers", {})}
        send = http_client.http_post if method == "POST" else http_client.http_get
        try:
            return send(
                url,
                timeout=self.config.timeout,
                attempts=self.config.max_attempts,
                headers=headers,
                **kw,
            )
        except requests.HTTPError as e:
            resp = getattr(e, "response", None)
            sc = resp.status_code if resp is not None else None
            raise UpstreamError(f"{self.source} responded {sc}", self.source, sc) from e
        except requests.Timeout as e:
            raise UpstreamError(f"{self.source} timed out", self.source) from e
        except requests.RequestException as e:
            raise UpstreamError(f"{self.source} unreachable: {e}", self.source) from e

    def _decode(self, r: requests.Response) -> Dict[str, Any]:
        try:
            body = r.json()
        except ValueError as e:
            raise UpstreamError(f"{self.source} returned an undecodable body", self.source, r.status_code) from e
        if not isinstance(body, dict):
            raise UpstreamError(f"{self.source} returned an unexpected body", self.source, r.status_code)
        return body

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        r = self._send("GET", f"{self.base_url}{path}", params=params)
        if r.status_code == 404:
            raise NotFoundError(f"{self.source}: {path} not found", self.source)
        if r.status_code >= 400:
            raise UpstreamError(f"{self.source} responded {r.status_code}", self.source, r.status_code)
        return self._decode(r)


class AniListClient(_SourceClient):
    """GraphQL client for the primary anime catalog."""

    source = "anilist"

    def __init__(self, config: CatalogConfig):
        super().__init__(config.anilist_url, config)

    def execute(self, query: GraphQLQuery, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run `query` and return its `data` object."""
        logger.debug("anilist %s %s", query.name, variables)
        r = self._send("POST", self.base_url,
                       json={"query": query.render(), "variables": variables or {}},
                       headers={"Content-Type": "application/json"})
        body = self._decode(r)
        errors = body.get("errors")
        if errors:
            statuses = {e.get("status") for e in errors if isinstance(e, dict)}
            message = json.dumps(errors, ensure_ascii=False)
            if 404 in statuses or r.status_code == 404:
                raise NotFoundError(message, self.source)
            raise UpstreamError(message, self.source, r.status_code)
        if r.status_code >= 400:
            raise UpstreamError(f"{self.source} responded {r.status_code}", self.source, r.status_code)
        data = body.get("data")
        if not isinstance(data, dict):
            raise UpstreamError(f"{self.source} returned no data for {query.name}", self.source)
        return data


class JikanClient(_SourceClient):
    """REST client for the secondary anime catalog."""

    source = "jikan"

    def __init__(self, config: CatalogConfig):
        super().__init__(config.jikan_url, config)

    def top_anime(self, page: int, limit: int) -> Dict[str, Any]:
        return self._get("/top/anime", {"page": page, "limit": limit})

    def season_now(self, page: int) -> Dict[str, Any]:
        return self._get("/seasons/now", {"page": page})

    def season(self, year: int, season: str, page: int) -> Dict[str, Any]:
        return self._get(f"/seasons/{year}/{season}", {"page": page})

    def schedules(self, day: Optional[str] = None) -> Dict[str, Any]:
        return self._get("/schedules", {"filter": day.lower()} if day else None)

    def anime_full(self, mal_id: int) -> Dict[str, Any]:
        return self._get(f"/anime/{mal_id}/full")

    def episodes(self, mal_id: int, page: int) -> Dict[str, Any]:
        return self._get(f"/anime/{mal_id}/episodes", {"page": page})

    def recommendations(self, mal_id: int) -> Dict[str, Any]:
        return self._get(f"/anime/{mal_id}/recommendations")


class MangaDexClient(_SourceClient):
    """REST client for the manga catalog."""

    source = "mangadex"

    def __init__(self, config: CatalogConfig):
        super().__init__(config.mangadex_url, config)

    def _filters(self, language_key: str) -> Dict[str, Any]:
        return {
            "contentRating[]": list(self.config.content_ratings),
            language_key: list(self.config.languages),
        }

    def manga_list(self, limit: int, offset: int, order: Mapping[str, str],
                   title: Optional[str] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "limit": limit,
            "offset": offset,
            "includes[]": ["cover_art"],
            **self._filters("availableTranslatedLanguage[]"),
        }
        for key, value in order.items():
            params[f"order[{key}]"] = value
        if title:
            params["title"] = title
        return self._get("/manga", params)

    def manga(self, manga_id: str) -> Dict[str, Any]:
        return self._get(f"/manga/{manga_id}", {"includes[]": ["cover_art", "author", "artist"]})

    def statistics(self, ids: Iterable[str]) -> Dict[str, Any]:
        return self._get("/statistics/manga", {"manga[]": list(ids)})

    def chapters(self, manga_id: str, limit: int, offset: int) -> Dict[str, Any]:
        return self._get("/chapter", {
            "manga": manga_id,
            "limit": limit,
            "offset": offset,
            "includes[]": ["scanlation_group"],
            **self._filters("translatedLanguage[]"),
            "order[chapter]": "asc",
        })

    def latest_chapters(self, limit: int) -> Dict[str, Any]:
        return self._get("/chapter", {
            "limit": limit,
            "includes[]": ["manga"],
            **self._filters("translatedLanguage[]"),
            "order[readableAt]": "desc",
        })

    def at_home_server(self, chapter_id: str) -> Dict[str, Any]:
        return self._get(f"/at-home/server/{chapter_id}")
