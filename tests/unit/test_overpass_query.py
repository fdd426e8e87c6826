from toilet_finder.common.geometry import bounding_box
from toilet_finder.common.models import Location
from toilet_finder.discovery.overpass_query import build_overpass_query


def _query(timeout: int = 25) -> str:
    return build_overpass_query(bounding_box(Location(lat=1.35, lng=103.82)), timeout)


def test_query_requests_json_and_server_timeout():
    assert _query().startswith("[out:json][timeout:25];")
    assert _query(60).startswith("[out:json][timeout:60];")


def test_query_selects_toilets_and_stations_for_every_element_type():
    query = _query()
    bbox = bounding_box(Location(lat=1.35, lng=103.82)).as_overpass_clause()
    for selector in ("node", "way", "relation"):
        assert f'{selector}["amenity"="toilets"]({bbox});' in query
        assert f'{selector}["railway"="station"]["toilets"="yes"]({bbox});' in query


def test_query_pulls_parents_of_matched_nodes_and_centroids():
    query = _query()
    assert "node.features->.feature_nodes;" in query
    assert ".feature_nodes <;" in query
    assert "(.features; .parents;);" in query
    assert query.rstrip().endswith("out center;")


def test_bbox_clause_orders_south_west_north_east():
    bbox = bounding_box(Location(lat=10.0, lng=20.0))
    assert bbox.as_overpass_clause() == f"{10.0 - 0.05},{20.0 - 0.05},{10.0 + 0.05},{20.0 + 0.05}"
