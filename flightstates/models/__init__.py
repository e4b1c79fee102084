"""
Value types for flightstates.

All models are immutable once constructed and safe to share between
threads.
"""

from flightstates.models.bounding_box import BoundingBox
from flightstates.models.state_vector import PlaneStates, PositionSource, StateVector

__all__ = [
    'BoundingBox',
    'PlaneStates',
    'PositionSource',
    'StateVector',
]
