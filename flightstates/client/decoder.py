"""
Decoding of OpenSky /states responses.

The "states" field is an array of positional arrays, not keyed objects.
Each position maps to one StateVector field (array indices):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars, space padded)
2: origin_country  - Country of registration
3: time_position   - Unix timestamp of last position update
4: last_contact    - Unix timestamp of last message
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
8: on_ground       - Boolean
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
11: vertical_rate  - Vertical rate (m/s)
12: sensors        - Sensor serial numbers (array)
13: geo_altitude   - Geometric altitude (meters)
14: squawk         - Transponder code
15: spi            - Special position indicator
16: position_source - 0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM
17: category       - Aircraft category (extended responses only)

Any position may be null, which decodes to None.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

from flightstates.exceptions import ProtocolError
from flightstates.models import PlaneStates, StateVector

BASE_ARITY = 17
EXTENDED_ARITY = 18


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError('expected string')
    return value


def _integer(value: Any) -> int:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError('expected integer')
    return value


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError('expected number')
    return float(value)


def _boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError('expected boolean')
    return value


def _serials(value: Any) -> frozenset:
    if not isinstance(value, list):
        raise TypeError('expected array of serial numbers')
    return frozenset(_integer(serial) for serial in value)


def _callsign(value: Any) -> Optional[str]:
    # OpenSky pads callsigns with trailing spaces
    return _string(value).strip() or None


STATE_VECTOR_FIELDS: Tuple[Tuple[str, Callable[[Any], Any]], ...] = (
    ('icao24', _string),
    ('callsign', _callsign),
    ('origin_country', _string),
    ('time_position', _integer),
    ('last_contact', _integer),
    ('longitude', _number),
    ('latitude', _number),
    ('baro_altitude', _number),
    ('on_ground', _boolean),
    ('velocity', _number),
    ('true_track', _number),
    ('vertical_rate', _number),
    ('sensors', _serials),
    ('geo_altitude', _number),
    ('squawk', _string),
    ('spi', _boolean),
    ('position_source', _integer),
    ('category', _integer),
)


def decode_state_vector(raw: Any) -> StateVector:
    """
    Decode one positional array into a StateVector.

    Raises:
        ProtocolError if raw is not an array of the expected length or a
        position holds a value of the wrong type
    """
    if not isinstance(raw, list):
        raise ProtocolError(f'State vector must be an array, got {type(raw).__name__}')
    if len(raw) not in (BASE_ARITY, EXTENDED_ARITY):
        raise ProtocolError(
            f'State vector has {len(raw)} fields, expected {BASE_ARITY} or {EXTENDED_ARITY}'
        )

    values: Dict[str, Any] = {}
    for index, value in enumerate(raw):
        name, convert = STATE_VECTOR_FIELDS[index]
        if value is None:
            values[name] = None
            continue
        try:
            values[name] = convert(value)
        except TypeError as e:
            raise ProtocolError(
                f'State vector field {index} ({name}): {e}, got {value!r}'
            ) from e

    return StateVector(**values)


def decode_plane_states(document: Any) -> PlaneStates:
    """
    Decode a parsed /states response into PlaneStates.

    A missing, null or empty "states" array yields no state vectors.
    """
    if not isinstance(document, dict):
        raise ProtocolError(f'Response must be a JSON object, got {type(document).__name__}')

    api_time = document.get('time')
    if isinstance(api_time, bool) or not isinstance(api_time, int):
        raise ProtocolError(f'Response "time" must be an integer, got {api_time!r}')

    states_raw: Optional[List[Any]] = document.get('states')
    if states_raw is None:
        states_raw = []
    elif not isinstance(states_raw, list):
        raise ProtocolError(f'Response "states" must be an array, got {type(states_raw).__name__}')

    return PlaneStates(
        time=api_time,
        states=tuple(decode_state_vector(arr) for arr in states_raw),
    )


def parse_plane_states(text: str) -> PlaneStates:
    """Parse a JSON response body and decode it."""
    try:
        document = json.loads(text)
    except ValueError as e:
        raise ProtocolError(f'Could not parse JSON data: {e}') from e
    return decode_plane_states(document)
