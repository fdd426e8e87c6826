"""Data models shared by discovery and geocoding."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

ELEMENT_KINDS = ("node", "way", "relation")

# Raw OSM tag key -> FeatureTags attribute.
RECOGNISED_TAG_KEYS = {
    "name": "name",
    "addr:street": "street",
    "addr:housenumber": "housenumber",
    "addr:postcode": "postcode",
    "addr:city": "city",
    "railway": "railway",
    "toilets": "toilets",
    "amenity": "amenity",
    "fee": "fee",
    "wheelchair": "wheelchair",
    "diaper": "diaper",
}


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float

    def as_overpass_clause(self) -> str:
        return f"{self.south},{self.west},{self.north},{self.east}"


@dataclass(frozen=True)
class FeatureTags:
    """Closed view over an element's tags; unrecognised keys are kept aside in ``other``."""

    name: str | None = None
    street: str | None = None
    housenumber: str | None = None
    postcode: str | None = None
    city: str | None = None
    railway: str | None = None
    toilets: str | None = None
    amenity: str | None = None
    fee: str | None = None
    wheelchair: str | None = None
    diaper: str | None = None
    other: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "FeatureTags":
        known: dict[str, str] = {}
        other: dict[str, str] = {}
        for key, value in (raw or {}).items():
            if value is None:
                continue
            attr = RECOGNISED_TAG_KEYS.get(key)
            if attr is None:
                other[key] = str(value)
            else:
                known[attr] = str(value)
        return cls(**known, other=other)

    @property
    def is_public_toilet(self) -> bool:
        return self.amenity == "toilets"

    @property
    def is_station_with_toilets(self) -> bool:
        return self.railway == "station" and self.toilets == "yes"


@dataclass(frozen=True)
class GeoFeature:
    id: int
    kind: str
    lat: float | None
    lon: float | None
    center: Location | None
    tags: FeatureTags
    member_ids: tuple[int, ...] = ()

    @classmethod
    def from_element(cls, element: Mapping[str, Any]) -> "GeoFeature":
        kind = element.get("type")
        if kind not in ELEMENT_KINDS:
            raise ValueError(f"Unsupported element type: {kind!r}")
        raw_id = element.get("id")
        if raw_id is None:
            raise ValueError("Element is missing an id")

        center = None
        raw_center = element.get("center")
        if raw_center and raw_center.get("lat") is not None and raw_center.get("lon") is not None:
            center = Location(lat=float(raw_center["lat"]), lng=float(raw_center["lon"]))

        lat = element.get("lat")
        lon = element.get("lon")
        return cls(
            id=int(raw_id),
            kind=kind,
            lat=float(lat) if lat is not None else None,
            lon=float(lon) if lon is not None else None,
            center=center,
            tags=FeatureTags.from_mapping(element.get("tags")),
            member_ids=tuple(int(node_id) for node_id in element.get("nodes") or ()),
        )

    @property
    def position(self) -> Location | None:
        if self.center is not None:
            return self.center
        if self.lat is None or self.lon is None:
            return None
        return Location(lat=self.lat, lng=self.lon)


@dataclass(frozen=True)
class ToiletRecord:
    id: str
    name: str
    location: Location
    address: str
    housed_in: str | None
    fee_exempt: bool
    wheelchair: bool
    diaper: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
