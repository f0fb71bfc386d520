"""Declarative source policies for every catalog operation.

Each operation maps to an ordered list of source steps. A step is tagged with
what happens when its source fails:

- ``PROPAGATE``: the error reaches the caller.
- ``FALLBACK``: the failure is logged and the next step runs; when no step
  is left the error reaches the caller.
- ``SOFT_FAIL``: the failure is logged and the policy default is returned.

Only ``CatalogError`` counts as a provider failure; anything else is a bug
and propagates untouched.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..core.errors import CatalogError
from ..models.types import WeeklyTopEpisodes

logger = logging.getLogger(__name__)


class OnFailure(str, Enum):
    PROPAGATE = "propagate"
    FALLBACK = "fallback"
    SOFT_FAIL = "soft_fail"


@dataclass(frozen=True)
class Step:
    source: str
    on_failure: OnFailure = OnFailure.PROPAGATE


@dataclass(frozen=True)
class Policy:
    name: str
    steps: Tuple[Step, ...]
    default: Optional[Callable[[], Any]] = field(default=None, compare=False)

    @property
    def sources(self) -> Tuple[str, ...]:
        return tuple(s.source for s in self.steps)


def _policy(name: str, *steps: Step, default: Optional[Callable[[], Any]] = None) -> Tuple[str, Policy]:
    return name, Policy(name, steps, default)


P, F, S = OnFailure.PROPAGATE, OnFailure.FALLBACK, OnFailure.SOFT_FAIL

POLICIES: Dict[str, Policy] = dict([
    # anime
    _policy("anime.top", Step("anilist", F), Step("jikan", P)),
    _policy("anime.season_now", Step("jikan", P)),
    _policy("anime.season", Step("jikan", P)),
    _policy("anime.schedule", Step("anilist", F), Step("jikan", P)),
    _policy("anime.search", Step("anilist", P)),
    _policy("anime.detail", Step("anilist", P)),
    _policy("anime.enrichment", Step("jikan", S), default=lambda: None),
    _policy("anime.episodes", Step("jikan", P)),
    _policy("anime.recommendations", Step("jikan", S), default=list),
    _policy("anime.famous", Step("anilist", S), default=list),
    _policy("anime.weekly_top", Step("anilist", S), default=WeeklyTopEpisodes),
    # manga
    _policy("manga.list", Step("mangadex", P)),
    _policy("manga.detail", Step("mangadex", P)),
    _policy("manga.statistics", Step("mangadex", S), default=dict),
    _policy("manga.chapters", Step("mangadex", P)),
    _policy("manga.latest", Step("mangadex", P)),
    _policy("manga.pages", Step("mangadex", P)),
])


def run_policy(policy: Policy, attempts: Mapping[str, Callable[[], Any]]) -> Any:
    """Run the attempt registered for each step's source, in order."""
    last: Optional[CatalogError] = None
    for step in policy.steps:
        attempt = attempts[step.source]
        try:
            return attempt()
        except CatalogError as e:
            last = e
            if step.on_failure is OnFailure.FALLBACK:
                logger.warning("%s: %s failed (%s), falling back", policy.name, step.source, e)
                continue
            if step.on_failure is OnFailure.SOFT_FAIL:
                logger.warning("%s: %s failed (%s), using default", policy.name, step.source, e)
                return policy.default() if policy.default else None
            raise
    if last is not None:
        raise last
    raise ValueError(f"Policy {policy.name} has no steps")
