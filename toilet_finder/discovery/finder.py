"""Nearby toilet discovery against the Overpass API."""

from __future__ import annotations

import logging
import time

import requests

from toilet_finder.common.config_loader import DEFAULT_SETTINGS, Settings
from toilet_finder.common.constants import DISCOVERY_FAILED_MESSAGE
from toilet_finder.common.errors import DiscoveryError
from toilet_finder.common.geometry import bounding_box
from toilet_finder.common.http import HttpClient, HttpRequestError, client_scope
from toilet_finder.common.logging import get_logger, log_event
from toilet_finder.common.models import Location, ToiletRecord
from toilet_finder.common.time_utils import elapsed_ms
from toilet_finder.discovery.normalise import normalise_elements
from toilet_finder.discovery.overpass_query import build_overpass_query


def _fail(logger: logging.Logger, cause: Exception, started_at: float) -> DiscoveryError:
    error_code = getattr(cause, "error_code", "UNEXPECTED_ERROR")
    log_event(
        logger,
        f"error finding toilets with openstreetmap api: {cause}",
        level=logging.ERROR,
        operation="find_toilets",
        source="overpass",
        event="QUERY_FAIL",
        status="error",
        duration_ms=elapsed_ms(started_at),
        error_code=error_code,
    )
    return DiscoveryError(DISCOVERY_FAILED_MESSAGE)


def find_toilets(
    location: Location,
    *,
    http_client: HttpClient | None = None,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> list[ToiletRecord]:
    """Return toilet records around ``location`` in upstream order.

    Any transport, status or payload failure is logged and surfaced as a single
    :class:`DiscoveryError` carrying a fixed message.
    """
    settings = settings or DEFAULT_SETTINGS
    logger = get_logger(logger)
    bbox = bounding_box(location, settings.bbox_delta_degrees)
    query = build_overpass_query(bbox, settings.overpass_query_timeout_seconds)

    started_at = time.monotonic()
    try:
        with client_scope(
            http_client, timeout=settings.timeout, retry=settings.retry, user_agent=settings.user_agent
        ) as client:
            payload = client.get_json(
                settings.overpass_endpoint,
                source_type="overpass",
                params={"data": query},
            )
    except (HttpRequestError, requests.RequestException) as exc:
        raise _fail(logger, exc, started_at) from exc

    elements = payload.get("elements")
    if elements is None:
        elements = []
    if not isinstance(elements, list):
        cause = HttpRequestError(f"'elements' is {type(elements).__name__}, expected a list")
        raise _fail(logger, cause, started_at) from cause

    records = normalise_elements(elements, logger)
    log_event(
        logger,
        "toilet discovery complete",
        operation="find_toilets",
        source="overpass",
        event="QUERY_END",
        status="ok",
        duration_ms=elapsed_ms(started_at),
        rows_in=len(elements),
        rows_out=len(records),
    )
    return records
