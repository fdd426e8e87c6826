"""Application constants."""

USER_AGENT = "toilet-finder/0.3 (+public toilet lookup; contact: configured-email)"

OVERPASS_ENDPOINT = "https://overpass-api.de/api/interpreter"
OVERPASS_QUERY_TIMEOUT_SECONDS = 25
NOMINATIM_REVERSE_ENDPOINT = "https://nominatim.openstreetmap.org/reverse"
ACCEPT_LANGUAGE = "en-US,en;q=0.9"

BBOX_DELTA_DEGREES = 0.05

ADDRESS_NOT_AVAILABLE = "address not available"
DEFAULT_TOILET_NAME = "public toilet"
STATION_TOILET_NAME = "station toilet"

# Reverse-geocoded addresses in this city collapse city and postcode into one token.
COMBINED_CITY_POSTCODE = "singapore"

DISCOVERY_FAILED_MESSAGE = "failed to find nearby toilets from openstreetmap."
NETWORK_ERROR_ADDRESS = "unknown location (network error)"
LOOKUP_FAILED_PREFIX = "location lookup failed: "
UNKNOWN_ADDRESS = "could not determine address"

EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "operation",
    "source",
    "event",
    "status",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
