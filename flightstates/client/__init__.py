"""
OpenSky API access: request dispatch, rate limiting and response decoding.
"""

from flightstates.client.decoder import decode_plane_states, decode_state_vector, parse_plane_states
from flightstates.client.opensky_client import OpenSkyClient
from flightstates.client.rate_gate import RateGate, RequestType

__all__ = [
    'OpenSkyClient',
    'RateGate',
    'RequestType',
    'decode_plane_states',
    'decode_state_vector',
    'parse_plane_states',
]
