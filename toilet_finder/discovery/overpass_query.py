"""Overpass QL query construction for toilet discovery."""

from __future__ import annotations

from toilet_finder.common.constants import OVERPASS_QUERY_TIMEOUT_SECONDS
from toilet_finder.common.models import BoundingBox

ELEMENT_SELECTORS = ("node", "way", "relation")
TOILET_TAG_FILTERS = (
    '["amenity"="toilets"]',
    '["railway"="station"]["toilets"="yes"]',
)


def _feature_filters(area_clause: str) -> str:
    return "".join(
        f"  {selector}{tag_filter}({area_clause});\n"
        for tag_filter in TOILET_TAG_FILTERS
        for selector in ELEMENT_SELECTORS
    )


def build_overpass_query(bbox: BoundingBox, timeout_seconds: int = OVERPASS_QUERY_TIMEOUT_SECONDS) -> str:
    """Select toilet features in ``bbox`` together with the ways and relations that contain matched nodes.

    Parents come back in the same response so containment can be resolved without a second request.
    ``out center`` makes the server attach a centroid to every way and relation.
    """
    area_clause = bbox.as_overpass_clause()
    return (
        f"[out:json][timeout:{int(timeout_seconds)}];\n"
        "(\n"
        f"{_feature_filters(area_clause)}"
        ")->.features;\n"
        "node.features->.feature_nodes;\n"
        "(\n"
        "  .feature_nodes <;\n"
        ")->.parents;\n"
        "(.features; .parents;);\n"
        "out center;"
    )
