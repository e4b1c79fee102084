import json
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests

from flightstates.client import OpenSkyClient

FIXED_TIME = 1714765200

# Positional arrays as returned by /states/all
STATE_SWR = [
    "4b1805", "SWR123  ", "Switzerland", 1714765198, 1714765200,
    8.5492, 47.4582, 3048.0, False, 180.5, 92.3, 6.5,
    None, 3124.2, "1000", False, 0,
]
STATE_EZS = [
    "4b1a2b", "EZS45AB ", "Switzerland", 1714765197, 1714765199,
    6.1089, 46.2381, 1219.2, False, 120.0, 225.0, -4.2,
    [1234, 5678], 1280.1, "3041", False, 2,
]
STATE_UAL = [
    "a0b1c2", "UAL839  ", "United States", 1714765190, 1714765200,
    -87.9048, 41.9786, 10668.0, False, 240.8, 271.0, 0.0,
    None, 10820.4, "4521", False, 0,
]
STATE_DLH = [
    "3c6444", "DLH400  ", "Germany", 1714765199, 1714765200,
    8.5706, 50.0333, None, True, 0, 180, None,
    None, None, None, False, 0,
]
STATE_SPARSE = [
    "abc123", None, "Switzerland", None, None, 8.5, 46.9, None,
    False, None, None, None, [], None, None, False, 0,
]

WORLD_STATES = [STATE_SWR, STATE_EZS, STATE_UAL, STATE_DLH, STATE_SPARSE]


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSession:
    """Call-counting stand-in for requests.Session."""

    def __init__(self, handler: Callable[[str, List], Any]):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({
            'url': url,
            'params': list(params or []),
            'headers': dict(headers or {}),
            'timeout': timeout,
        })
        result = self.handler(url, params)
        if isinstance(result, Exception):
            raise result
        return result

    def close(self) -> None:
        self.closed = True


def make_response(
    body: Any = None,
    status: int = 200,
    content_type: Optional[str] = 'application/json; charset=utf-8',
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode('utf-8')
    else:
        response._content = json.dumps(body).encode('utf-8')
    if content_type is not None:
        response.headers['Content-Type'] = content_type
    return response


def filtered_states(params) -> Dict[str, Any]:
    """World fixture, narrowed by the bounding box query parameters if present."""
    query = dict(params or [])
    states = WORLD_STATES
    if 'lamin' in query:
        lamin, lamax = float(query['lamin']), float(query['lamax'])
        lomin, lomax = float(query['lomin']), float(query['lomax'])
        states = [
            s for s in states
            if lamin <= s[6] <= lamax and lomin <= s[5] <= lomax
        ]
    return {'time': FIXED_TIME, 'states': states}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def world_session():
    return FakeSession(lambda url, params: make_response(filtered_states(params)))


@pytest.fixture
def anon_client(world_session, clock):
    return OpenSkyClient(session=world_session, clock=clock)


@pytest.fixture
def auth_client(world_session, clock):
    return OpenSkyClient('alice', 's3cret', session=world_session, clock=clock)
