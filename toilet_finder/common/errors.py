"""Domain errors and failure typing."""


class ToiletFinderError(Exception):
    """Base class for toilet finder failures."""

    error_code = "TOILET_FINDER_ERROR"


class ConfigError(ToiletFinderError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class DiscoveryError(ToiletFinderError):
    """Raised when nearby toilets cannot be fetched from the feature database."""

    error_code = "DISCOVERY_ERROR"
