"""
Client-side request throttle.

OpenSky enforces its own limits on the server; this gate only saves
round-trips the server would reject anyway. Minimum intervals:
- /states/all: 4.9s authenticated, 9.9s anonymous
- /states/own: 0.9s authenticated (anonymous access is refused)
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class RequestType(Enum):
    """Endpoint identity used as the rate gate key."""
    GET_STATES = 'get_states'
    GET_MY_STATES = 'get_my_states'


# (authenticated_ms, anonymous_ms)
DEFAULT_INTERVALS_MS = {
    RequestType.GET_STATES: (4900, 9900),
    RequestType.GET_MY_STATES: (900, 0),
}


class RateGate:
    """
    Tracks the last call time per endpoint and admits or denies calls.

    Every call to admit() records the current time, including denied
    ones, so a burst of calls keeps pushing the window forward.
    """

    def __init__(
        self,
        authenticated: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        self.authenticated = authenticated
        self._clock = clock
        self._last_request_ms: Dict[RequestType, int] = {}
        self._lock = threading.Lock()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def admit(
        self,
        endpoint: RequestType,
        authenticated_interval_ms: int,
        anonymous_interval_ms: int,
    ) -> bool:
        """
        Decide whether a request to endpoint may be issued now.

        Admits the first call for an endpoint, otherwise only when more
        than the interval for the current access mode has elapsed since
        the previous call.
        """
        with self._lock:
            now = self._now_ms()
            previous = self._last_request_ms.get(endpoint)
            self._last_request_ms[endpoint] = now

        if previous is None:
            return True

        elapsed = now - previous
        interval = authenticated_interval_ms if self.authenticated else anonymous_interval_ms
        if elapsed > interval:
            return True

        logger.debug(
            f'Rate limiting {endpoint.name}: {elapsed}ms since last call, '
            f'{interval}ms required'
        )
        return False

    def admit_default(self, endpoint: RequestType) -> bool:
        """admit() with the standard OpenSky intervals for endpoint."""
        authenticated_ms, anonymous_ms = DEFAULT_INTERVALS_MS[endpoint]
        return self.admit(endpoint, authenticated_ms, anonymous_ms)

    def last_request_ms(self, endpoint: RequestType) -> Optional[int]:
        """Timestamp (ms) of the last recorded call, or None."""
        with self._lock:
            return self._last_request_ms.get(endpoint)
