"""Normalise Overpass elements into toilet records."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from toilet_finder.common.constants import (
    ADDRESS_NOT_AVAILABLE,
    DEFAULT_TOILET_NAME,
    STATION_TOILET_NAME,
)
from toilet_finder.common.logging import get_logger, log_event
from toilet_finder.common.models import GeoFeature, ToiletRecord

FEE_EXEMPT_VALUES = ("no", "0")


def parse_features(
    elements: Iterable[Mapping[str, Any]],
    logger: logging.Logger | None = None,
) -> list[GeoFeature]:
    logger = get_logger(logger)
    features: list[GeoFeature] = []
    for element in elements:
        try:
            features.append(GeoFeature.from_element(element))
        except (AttributeError, TypeError, ValueError) as exc:
            log_event(
                logger,
                f"skipping malformed element: {exc}",
                level=logging.WARNING,
                operation="find_toilets",
                source="overpass",
                event="ELEMENT_SKIPPED",
                status="warning",
            )
    return features


def build_parent_name_index(features: Iterable[GeoFeature]) -> dict[int, str]:
    """Map member node id -> name of the first named way listing it."""
    parent_names: dict[int, str] = {}
    for feature in features:
        if feature.kind != "way" or not feature.tags.name or not feature.member_ids:
            continue
        for node_id in feature.member_ids:
            parent_names.setdefault(node_id, feature.tags.name)
    return parent_names


def is_toilet_feature(feature: GeoFeature) -> bool:
    return feature.tags.is_public_toilet or feature.tags.is_station_with_toilets


def _display_name(feature: GeoFeature) -> str:
    tags = feature.tags
    if tags.railway == "station":
        return f"{tags.name} {STATION_TOILET_NAME}" if tags.name else STATION_TOILET_NAME
    if tags.name:
        return tags.name
    return DEFAULT_TOILET_NAME


def _display_address(feature: GeoFeature) -> str:
    tags = feature.tags
    parts = [part for part in (tags.street, tags.housenumber, tags.postcode, tags.city) if part]
    return ", ".join(parts) if parts else ADDRESS_NOT_AVAILABLE


def normalise_toilet(feature: GeoFeature, parent_names: Mapping[int, str]) -> ToiletRecord:
    location = feature.position
    if location is None:
        raise ValueError(f"{feature.kind}/{feature.id} has no coordinates")

    housed_in = parent_names.get(feature.id) if feature.kind == "node" else None
    tags = feature.tags
    return ToiletRecord(
        id=str(feature.id),
        name=_display_name(feature).lower(),
        location=location,
        address=_display_address(feature).lower(),
        housed_in=housed_in.lower() if housed_in else None,
        fee_exempt=tags.fee in FEE_EXEMPT_VALUES,
        wheelchair=tags.wheelchair == "yes",
        diaper=tags.diaper == "yes",
    )


def normalise_elements(
    elements: Iterable[Mapping[str, Any]],
    logger: logging.Logger | None = None,
) -> list[ToiletRecord]:
    logger = get_logger(logger)
    features = parse_features(elements, logger)
    parent_names = build_parent_name_index(features)

    records: list[ToiletRecord] = []
    for feature in features:
        if not is_toilet_feature(feature):
            continue
        try:
            records.append(normalise_toilet(feature, parent_names))
        except ValueError as exc:
            log_event(
                logger,
                f"skipping toilet without position: {exc}",
                level=logging.WARNING,
                operation="find_toilets",
                source="overpass",
                event="ELEMENT_SKIPPED",
                status="warning",
            )
    return records
