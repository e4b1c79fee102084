"""
OpenSky Network API client.

Handles communication with the OpenSky REST API, including:
- Authentication (optional, raises rate limits and unlocks /states/own)
- ICAO24, sensor serial and bounding box filters
- Client-side rate limiting via RateGate
- Mapping of HTTP and decoding failures onto the flightstates errors

A request refused by the rate gate is not sent and the call returns
None ("no new data, try later").
"""

import logging
import time as _time
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import requests
from requests.utils import get_encoding_from_headers

from flightstates.client.decoder import parse_plane_states
from flightstates.client.rate_gate import RateGate, RequestType
from flightstates.config import DEFAULT_BASE_URL, OpenSkyConfig
from flightstates.exceptions import AuthorizationError, ProtocolError, TransportError
from flightstates.models import BoundingBox, PlaneStates

logger = logging.getLogger(__name__)

STATES_PATH = '/states/all'
MY_STATES_PATH = '/states/own'

QueryParams = List[Tuple[str, str]]


class OpenSkyClient:
    """
    Client for OpenSky Network API.

    Handles:
    - GET requests to /states/all and /states/own
    - Anonymous or authenticated access
    - Per-endpoint rate limiting (internal tracking)
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = _time.time,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        # An injected session belongs to the caller and is left open
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

        self._headers: Dict[str, str] = {}
        self._authenticated = client_id is not None and client_secret is not None
        if self._authenticated:
            self._headers = {
                'grant_type': 'client_credentials',
                'client_id': client_id,
                'client_secret': client_secret,
            }
            logger.info(f'OpenSky client authenticated access enabled for {client_id}')
        else:
            logger.info('OpenSky client running with anonymous access (lower rate limits)')

        self.rate_gate = RateGate(authenticated=self._authenticated, clock=clock)

    @classmethod
    def from_config(cls, cfg: OpenSkyConfig, **kwargs) -> 'OpenSkyClient':
        """Create client from application configuration."""
        return cls(
            client_id=cfg.client_id,
            client_secret=cfg.client_secret,
            base_url=cfg.base_url,
            timeout=cfg.timeout_seconds,
            **kwargs,
        )

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> 'OpenSkyClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Request plumbing
    # -------------------------------------------------------------------------

    def _get(self, path: str, params: QueryParams) -> PlaneStates:
        """
        Make the actual HTTP request and return the decoded response.

        Raises:
            TransportError on network errors, non-2xx responses or an
                unreadable character encoding
            ProtocolError on an invalid URL or unexpected JSON
        """
        url = f'{self.base_url}{path}'
        logger.debug(f'Fetching states: {url} params={params}')

        try:
            response = self.session.get(
                url,
                params=params,
                headers=self._headers,
                timeout=self.timeout,
            )
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as e:
            logger.error(f'Invalid OpenSky URL {url}: {e}')
            raise ProtocolError(
                f'Programming error: invalid URI {url}. Please report a bug',
                endpoint=path,
            ) from e
        except requests.exceptions.Timeout as e:
            logger.error('OpenSky API timeout')
            raise TransportError(f'Request to {path} timed out', endpoint=path) from e
        except requests.exceptions.RequestException as e:
            logger.error(f'OpenSky request failed: {e}')
            raise TransportError(f'Request to {path} failed: {e}', endpoint=path) from e

        status = response.status_code
        if not 200 <= status < 300:
            if status == 429:
                logger.warning('OpenSky rate limit exceeded')
            else:
                logger.error(f'OpenSky API error: {status}')
            raise TransportError(
                f'Could not get OpenSky vectors, HTTP {status} from {path}',
                status_code=status,
                endpoint=path,
            )

        content_type = response.headers.get('Content-Type')
        encoding = get_encoding_from_headers(response.headers)
        if encoding == 'ISO-8859-1' and 'charset' not in (content_type or '').lower():
            # requests' text/* fallback, not a charset the server declared
            encoding = None
        if encoding is None:
            raise TransportError(
                f'Could not read charset in response. Content-Type is {content_type}',
                status_code=status,
                endpoint=path,
            )
        try:
            text = response.content.decode(encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise TransportError(
                f'Could not decode response from {path} as {encoding}',
                status_code=status,
                endpoint=path,
            ) from e

        try:
            plane_states = parse_plane_states(text)
        except ProtocolError as e:
            e.endpoint = path
            logger.error(f'Unexpected OpenSky response from {path}: {e}')
            raise

        logger.info(f'Received {len(plane_states)} state vectors from OpenSky')
        return plane_states

    @staticmethod
    def _filter_params(name: str, values: Optional[Iterable]) -> QueryParams:
        if values is None:
            return []
        # A single address, not a sequence of one-character addresses
        if isinstance(values, str):
            values = (values,)
        return [(name, str(value)) for value in values]

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def get_states(
        self,
        time: int = 0,
        icao24: Optional[Iterable[str]] = None,
        bbox: Optional[BoundingBox] = None,
    ) -> Optional[PlaneStates]:
        """
        Retrieve state vectors for a given time.

        Args:
            time: Unix timestamp (seconds). 0 means the most recent data.
            icao24: Only return vectors for these ICAO24 addresses (a single
                address may be passed as a plain string)
            bbox: Only return vectors inside this area

        Returns:
            PlaneStates, or None when the rate limit was reached and no
            request was sent
        """
        params = self._filter_params('icao24', icao24)
        params.append(('time', str(time)))
        if bbox is not None:
            params.extend((name, str(value)) for name, value in bbox.to_params())

        if not self.rate_gate.admit_default(RequestType.GET_STATES):
            return None
        return self._get(STATES_PATH, params)

    def get_states_by_location(
        self,
        center_lat: float,
        center_lon: float,
        radius_km: float,
        time: int = 0,
    ) -> Optional[PlaneStates]:
        """
        Fetch states within radius of a center point.

        Convenience method that constructs bounding box from center + radius.
        """
        bbox = BoundingBox.from_center_radius(center_lat, center_lon, radius_km)
        return self.get_states(time=time, bbox=bbox)

    def get_my_states(
        self,
        time: int = 0,
        icao24: Optional[Iterable[str]] = None,
        serials: Optional[Iterable[int]] = None,
    ) -> Optional[PlaneStates]:
        """
        Retrieve state vectors seen by your own sensors.

        Authentication is required for this operation.

        Args:
            time: Unix timestamp (seconds). 0 means the most recent data.
            icao24: Only return vectors for these ICAO24 addresses (a single
                address may be passed as a plain string)
            serials: Only return vectors seen by these sensor serial
                numbers (which must belong to the account)

        Raises:
            AuthorizationError if the client is anonymous; nothing is sent
        """
        if not self._authenticated:
            raise AuthorizationError("Anonymous access of 'myStates' not allowed")

        params = self._filter_params('icao24', icao24)
        params.extend(self._filter_params('serials', serials))
        params.append(('time', str(time)))

        if not self.rate_gate.admit_default(RequestType.GET_MY_STATES):
            return None
        return self._get(MY_STATES_PATH, params)
