import json
from pathlib import Path

import pytest

from toilet_finder.common.models import GeoFeature, Location
from toilet_finder.discovery.normalise import (
    build_parent_name_index,
    is_toilet_feature,
    normalise_elements,
    normalise_toilet,
)


def _node(node_id: int, **tags):
    return {"type": "node", "id": node_id, "lat": 1.0, "lon": 2.0, "tags": tags}


def _record(**tags):
    return normalise_elements([_node(1, **tags)])[0]


def test_unnamed_toilet_gets_placeholders():
    record = _record(amenity="toilets")

    assert record.id == "1"
    assert record.name == "public toilet"
    assert record.address == "address not available"
    assert record.housed_in is None
    assert record.location == Location(lat=1.0, lng=2.0)


def test_station_names():
    assert _record(railway="station", toilets="yes", name="Central").name == "central station toilet"
    assert _record(railway="station", toilets="yes").name == "station toilet"


def test_named_toilet_is_lower_cased():
    assert _record(amenity="toilets", name="Jubilee PARK Loo").name == "jubilee park loo"


@pytest.mark.parametrize(
    ("fee", "expected"),
    [("no", True), ("0", True), ("yes", False), ("No", False), ("", False), (None, False), ("donation", False)],
)
def test_fee_exempt_only_for_no_or_zero(fee, expected):
    tags = {"amenity": "toilets"}
    if fee is not None:
        tags["fee"] = fee
    assert _record(**tags).fee_exempt is expected


def test_wheelchair_and_diaper_require_exact_yes():
    record = _record(amenity="toilets", wheelchair="limited", diaper="yes")
    assert record.wheelchair is False
    assert record.diaper is True


def test_address_skips_missing_parts_in_fixed_order():
    element = _node(
        1,
        amenity="toilets",
        **{"addr:street": "Main St", "addr:postcode": "AB1 2CD", "addr:city": "Springfield"},
    )
    assert normalise_elements([element])[0].address == "main st, ab1 2cd, springfield"


def test_parent_index_first_named_way_wins_and_ignores_unnamed():
    features = [
        GeoFeature.from_element({"type": "way", "id": 10, "nodes": [1, 2], "tags": {"building": "yes"}}),
        GeoFeature.from_element({"type": "way", "id": 11, "nodes": [1], "tags": {"name": "First Hall"}}),
        GeoFeature.from_element({"type": "way", "id": 12, "nodes": [1, 2], "tags": {"name": "Second Hall"}}),
        GeoFeature.from_element({"type": "relation", "id": 13, "tags": {"name": "Campus"}}),
    ]

    assert build_parent_name_index(features) == {1: "First Hall", 2: "Second Hall"}


def test_housed_in_only_applies_to_nodes():
    way = GeoFeature.from_element(
        {"type": "way", "id": 5, "center": {"lat": 1.0, "lon": 2.0}, "tags": {"amenity": "toilets"}}
    )
    assert normalise_toilet(way, {5: "Somewhere"}).housed_in is None


def test_non_toilet_elements_are_dropped():
    elements = [
        _node(1, railway="station", toilets="no"),
        _node(2, amenity="bench"),
        {"type": "way", "id": 3, "nodes": [1], "tags": {"name": "Hall"}},
    ]
    assert normalise_elements(elements) == []
    assert not is_toilet_feature(GeoFeature.from_element(_node(4, toilets="yes")))


def test_malformed_and_positionless_elements_are_skipped():
    elements = [
        {"type": "node", "tags": {"amenity": "toilets"}},
        {"type": "relation", "id": 2, "tags": {"amenity": "toilets"}},
        _node(3, amenity="toilets"),
    ]
    assert [record.id for record in normalise_elements(elements)] == ["3"]


def test_fixture_payload_normalises_in_upstream_order():
    payload = json.loads(Path("tests/fixtures/overpass_toilets.json").read_text(encoding="utf-8"))
    records = normalise_elements(payload["elements"])

    assert [record.id for record in records] == ["101", "103", "200", "300"]
    by_id = {record.id: record for record in records}
    assert by_id["101"].housed_in == "raffles place station"
    assert by_id["101"].fee_exempt and by_id["101"].wheelchair and by_id["101"].diaper
    assert by_id["103"].housed_in == "other mall"
    assert by_id["103"].address == "orchard road, 12, 238801, singapore"
    assert by_id["200"].location == Location(lat=1.3, lng=103.8)
    assert by_id["200"].fee_exempt is True
    assert by_id["200"].housed_in is None
    assert by_id["300"].name == "central station toilet"

    for record in records:
        for value in (record.name, record.address, record.housed_in):
            if value is not None:
                assert value == value.lower()
