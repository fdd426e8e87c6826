"""Amenity filters over normalised toilet records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from toilet_finder.common.models import ToiletRecord


@dataclass(frozen=True)
class ToiletFilter:
    free: bool = False
    wheelchair: bool = False
    diaper: bool = False

    def matches(self, record: ToiletRecord) -> bool:
        if self.free and not record.fee_exempt:
            return False
        if self.wheelchair and not record.wheelchair:
            return False
        if self.diaper and not record.diaper:
            return False
        return True


def filter_toilets(records: Iterable[ToiletRecord], toilet_filter: ToiletFilter) -> list[ToiletRecord]:
    return [record for record in records if toilet_filter.matches(record)]
