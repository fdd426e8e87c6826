"""Geometry helpers."""

from __future__ import annotations

from pyproj import Geod

from toilet_finder.common.constants import BBOX_DELTA_DEGREES
from toilet_finder.common.models import BoundingBox, Location

_WGS84 = Geod(ellps="WGS84")


def bounding_box(location: Location, delta: float = BBOX_DELTA_DEGREES) -> BoundingBox:
    return BoundingBox(
        south=location.lat - delta,
        west=location.lng - delta,
        north=location.lat + delta,
        east=location.lng + delta,
    )


def geodesic_distance_m(origin: Location, target: Location) -> float:
    _fwd, _back, distance = _WGS84.inv(origin.lng, origin.lat, target.lng, target.lat)
    return float(distance)
