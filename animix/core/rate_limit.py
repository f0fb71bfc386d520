"""Fixed pre-call delays for rate-limited provider endpoints.

Delays are local to the call chain that waits on them; concurrent callers
are not coordinated and can still exceed a provider's limit together.
"""

import logging
import time
from typing import Callable, Mapping

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sleeps a configured number of seconds before a named call site.

    Args:
        delays: call site name (e.g. ``"jikan.top"``) -> seconds.
        sleep: blocking sleep function, swapped out in tests.
    """

    def __init__(self, delays: Mapping[str, float], sleep: Callable[[float], None] = time.sleep):
        self._delays = dict(delays)
        self._sleep = sleep

    def delay_for(self, call_site: str) -> float:
        return max(0.0, float(self._delays.get(call_site, 0.0)))

    def wait(self, call_site: str) -> None:
        seconds = self.delay_for(call_site)
        if seconds > 0:
            logger.debug("Waiting %.2fs before %s", seconds, call_site)
            self._sleep(seconds)
