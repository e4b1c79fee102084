"""
Typed aircraft state records.

Mirrors the OpenSky state vector format. Every field may be None when
the service did not report it; unknown is never replaced by zero.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, Optional, Tuple


class PositionSource(IntEnum):
    """Origin of the reported position."""
    ADS_B = 0
    ASTERIX = 1
    MLAT = 2
    FLARM = 3


@dataclass(frozen=True)
class StateVector:
    """
    Snapshot of one aircraft's identity, position and kinematics.

    Units follow the service: meters, m/s, degrees clockwise from north,
    unix seconds.
    """
    icao24: Optional[str]
    callsign: Optional[str]
    origin_country: Optional[str]
    time_position: Optional[int]
    last_contact: Optional[int]
    longitude: Optional[float]
    latitude: Optional[float]
    baro_altitude: Optional[float]
    on_ground: Optional[bool]
    velocity: Optional[float]
    true_track: Optional[float]
    vertical_rate: Optional[float]
    sensors: Optional[FrozenSet[int]]
    geo_altitude: Optional[float]
    squawk: Optional[str]
    spi: Optional[bool]
    position_source: Optional[int]
    # Only present in responses to extended queries
    category: Optional[int] = None

    @property
    def heading(self) -> Optional[float]:
        """Alias for true_track."""
        return self.true_track

    @property
    def source(self) -> Optional[PositionSource]:
        if self.position_source is None:
            return None
        try:
            return PositionSource(self.position_source)
        except ValueError:
            return None

    def has_position(self) -> bool:
        """Check if this state has valid position data."""
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class PlaneStates:
    """
    Decoded response envelope.

    time is the server time (unix seconds) the vectors are associated
    with; states keeps the order of the response.
    """
    time: int
    states: Tuple[StateVector, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self):
        return iter(self.states)
