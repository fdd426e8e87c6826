from toilet_finder.common.models import Location, ToiletRecord
from toilet_finder.discovery.filters import ToiletFilter, filter_toilets


def _record(record_id: str, *, fee_exempt=False, wheelchair=False, diaper=False) -> ToiletRecord:
    return ToiletRecord(
        id=record_id,
        name="public toilet",
        location=Location(lat=0.0, lng=0.0),
        address="address not available",
        housed_in=None,
        fee_exempt=fee_exempt,
        wheelchair=wheelchair,
        diaper=diaper,
    )


RECORDS = [
    _record("1", fee_exempt=True),
    _record("2", fee_exempt=True, wheelchair=True),
    _record("3", wheelchair=True, diaper=True),
    _record("4", fee_exempt=True, wheelchair=True, diaper=True),
]


def test_no_flags_keeps_everything_in_order():
    assert [r.id for r in filter_toilets(RECORDS, ToiletFilter())] == ["1", "2", "3", "4"]


def test_single_flag():
    assert [r.id for r in filter_toilets(RECORDS, ToiletFilter(free=True))] == ["1", "2", "4"]
    assert [r.id for r in filter_toilets(RECORDS, ToiletFilter(diaper=True))] == ["3", "4"]


def test_flags_combine_conjunctively():
    assert [r.id for r in filter_toilets(RECORDS, ToiletFilter(free=True, wheelchair=True))] == ["2", "4"]
    assert [r.id for r in filter_toilets(RECORDS, ToiletFilter(free=True, wheelchair=True, diaper=True))] == ["4"]
