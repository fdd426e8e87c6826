"""Reverse geocoding through Nominatim with tiered, never-raising fallbacks."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from toilet_finder.common.config_loader import DEFAULT_SETTINGS, Settings
from toilet_finder.common.constants import (
    COMBINED_CITY_POSTCODE,
    LOOKUP_FAILED_PREFIX,
    NETWORK_ERROR_ADDRESS,
    UNKNOWN_ADDRESS,
)
from toilet_finder.common.http import HttpClient, client_scope
from toilet_finder.common.logging import get_logger, log_event
from toilet_finder.common.models import Location
from toilet_finder.common.time_utils import elapsed_ms


def _component(address: Mapping[str, Any], key: str) -> str | None:
    value = address.get(key)
    if value in (None, ""):
        return None
    return str(value)


def _dedupe(parts: list[str]) -> list[str]:
    return list(dict.fromkeys(parts))


def format_address(address: Mapping[str, Any]) -> str:
    """Build a lower-cased display address from Nominatim ``address`` details.

    Components are house number, road and suburb followed by city and postcode.
    For the combined city (Singapore) city and postcode collapse into one token,
    e.g. ``"singapore 123456"``. Returns an empty string when nothing usable is present.
    """
    parts = [
        part
        for part in (
            _component(address, "house_number"),
            _component(address, "road"),
            _component(address, "suburb"),
        )
        if part
    ]

    city = _component(address, "city")
    postcode = _component(address, "postcode")
    if city and city.lower() == COMBINED_CITY_POSTCODE:
        parts.append(f"{COMBINED_CITY_POSTCODE} {postcode}" if postcode else COMBINED_CITY_POSTCODE)
    else:
        if city:
            parts.append(city)
        if postcode:
            parts.append(postcode)

    return ", ".join(_dedupe(parts)).lower()


def resolve_address_payload(payload: Mapping[str, Any], logger: logging.Logger | None = None) -> str:
    address = payload.get("address")
    if isinstance(address, Mapping):
        formatted = format_address(address)
        if formatted:
            return formatted

    display_name = payload.get("display_name")
    if display_name:
        return str(display_name).lower()

    error = payload.get("error")
    if error:
        log_event(
            get_logger(logger),
            f"nominatim api error: {error}",
            level=logging.WARNING,
            operation="reverse_geocode",
            source="nominatim",
            event="LOOKUP_ERROR",
            status="warning",
        )
        return f"{LOOKUP_FAILED_PREFIX}{error}".lower()

    return UNKNOWN_ADDRESS


def reverse_geocode(
    location: Location,
    *,
    http_client: HttpClient | None = None,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """Resolve ``location`` to a display address. Never raises."""
    settings = settings or DEFAULT_SETTINGS
    logger = get_logger(logger)
    started_at = time.monotonic()

    # Status, transport and payload failures share one handler and one fallback string.
    try:
        with client_scope(
            http_client, timeout=settings.timeout, retry=settings.retry, user_agent=settings.user_agent
        ) as client:
            payload = client.get_json(
                settings.nominatim_endpoint,
                source_type="nominatim",
                params={
                    "format": "json",
                    "lat": location.lat,
                    "lon": location.lng,
                    "addressdetails": 1,
                },
                headers={"Accept-Language": settings.accept_language},
            )
        resolved = resolve_address_payload(payload, logger)
    except Exception as exc:
        log_event(
            logger,
            f"error with openstreetmap reverse geocoding: {exc}",
            level=logging.ERROR,
            operation="reverse_geocode",
            source="nominatim",
            event="LOOKUP_FAIL",
            status="error",
            duration_ms=elapsed_ms(started_at),
            error_code=getattr(exc, "error_code", "UNEXPECTED_ERROR"),
        )
        return NETWORK_ERROR_ADDRESS

    log_event(
        logger,
        "reverse geocoding complete",
        operation="reverse_geocode",
        source="nominatim",
        event="LOOKUP_END",
        status="ok",
        duration_ms=elapsed_ms(started_at),
    )
    return resolved
