"""
Geographic bounding box used to filter state vector queries.

OpenSky expects the box as four query parameters in the order
lamin, lamax, lomin, lomax.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from flightstates.exceptions import ValidationError

KM_PER_DEGREE = 111.0


def _check_latitude(lat: float) -> None:
    if not -90 <= lat <= 90:
        raise ValidationError(f'Illegal latitude {lat}. Must be within [-90, 90]')


def _check_longitude(lon: float) -> None:
    if not -180 <= lon <= 180:
        raise ValidationError(f'Illegal longitude {lon}. Must be within [-180, 180]')


@dataclass(frozen=True)
class BoundingBox:
    """
    Rectangular WGS84 area.

    Coordinates are validated on construction; an out of range value
    raises ValidationError and no instance is created.
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def __post_init__(self):
        _check_latitude(self.min_latitude)
        _check_latitude(self.max_latitude)
        _check_longitude(self.min_longitude)
        _check_longitude(self.max_longitude)

    @classmethod
    def from_center_radius(
        cls,
        center_lat: float,
        center_lon: float,
        radius_km: float
    ) -> 'BoundingBox':
        """
        Create bounding box from center point and radius.

        Uses approximate conversion: 1 degree = 111 km at the equator,
        longitude span widened by 1/cos(latitude). Edges are clamped to
        the valid coordinate ranges.
        """
        _check_latitude(center_lat)
        _check_longitude(center_lon)
        if radius_km < 0:
            raise ValidationError(f'Illegal radius {radius_km}. Must not be negative')

        lat_delta = radius_km / KM_PER_DEGREE
        cos_lat = abs(math.cos(math.radians(center_lat)))
        # Near the poles every longitude is within reach
        if cos_lat < 1e-6:
            lon_delta = 180.0
        else:
            lon_delta = radius_km / (KM_PER_DEGREE * cos_lat)

        return cls(
            min_latitude=max(-90.0, center_lat - lat_delta),
            max_latitude=min(90.0, center_lat + lat_delta),
            min_longitude=max(-180.0, center_lon - lon_delta),
            max_longitude=min(180.0, center_lon + lon_delta),
        )

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check whether a position lies inside the box (edges included)."""
        return (
            self.min_latitude <= latitude <= self.max_latitude and
            self.min_longitude <= longitude <= self.max_longitude
        )

    def to_params(self) -> List[Tuple[str, float]]:
        """Convert to OpenSky API query parameters, in wire order."""
        return [
            ('lamin', self.min_latitude),
            ('lamax', self.max_latitude),
            ('lomin', self.min_longitude),
            ('lomax', self.max_longitude),
        ]
