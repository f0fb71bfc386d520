"""Batch statistics lookup for manga records."""

import logging
from typing import Dict, Iterable

from ..models.types import StatisticsRecord
from ..services.policy import POLICIES, run_policy
from .clients import MangaDexClient
from .normalizers import statistics_from_mangadex

logger = logging.getLogger(__name__)


def fetch_statistics(client: MangaDexClient, ids: Iterable[str]) -> Dict[str, StatisticsRecord]:
    """Rating, votes and follows keyed by manga id.

    Ids are deduplicated in order. No request is sent for an empty id set.
    A provider failure yields an empty mapping, so callers fall back to
    "no statistics" (all fields null).
    """
    unique = list(dict.fromkeys(i for i in ids if i))
    if not unique:
        return {}

    def from_mangadex() -> Dict[str, StatisticsRecord]:
        stats = client.statistics(unique).get("statistics")
        if not isinstance(stats, dict):
            return {}
        return {key: statistics_from_mangadex(entry) for key, entry in stats.items()}

    result = run_policy(POLICIES["manga.statistics"], {"mangadex": from_mangadex})
    logger.debug("Statistics for %d/%d manga", len(result), len(unique))
    return result
