"""
flightstates - client for the OpenSky Network state vector API.

Modules:
    client/        OpenSky API client, rate gate and response decoding
    models/        Immutable value types (BoundingBox, StateVector, PlaneStates)
    config.py      Configuration from environment variables
    exceptions.py  Error hierarchy
    app.py         Console entry point
"""

from flightstates.client import OpenSkyClient, RequestType
from flightstates.exceptions import (
    AuthorizationError,
    OpenSkyError,
    ProtocolError,
    TransportError,
    ValidationError,
)
from flightstates.models import BoundingBox, PlaneStates, PositionSource, StateVector

__version__ = '1.0.0'

__all__ = [
    'AuthorizationError',
    'BoundingBox',
    'OpenSkyClient',
    'OpenSkyError',
    'PlaneStates',
    'PositionSource',
    'ProtocolError',
    'RequestType',
    'StateVector',
    'TransportError',
    'ValidationError',
]
