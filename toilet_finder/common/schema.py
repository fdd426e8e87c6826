"""Minimal strict schema for YAML settings validation."""

from __future__ import annotations

from toilet_finder.common.errors import ConfigError

SETTINGS_SECTIONS = {
    "overpass": {"endpoint", "query_timeout_seconds", "bbox_delta_degrees"},
    "nominatim": {"endpoint", "accept_language"},
    "http": {"user_agent", "connect_timeout_seconds", "read_timeout_seconds", "max_attempts"},
}

_NUMERIC_KEYS = {
    "query_timeout_seconds",
    "bbox_delta_degrees",
    "connect_timeout_seconds",
    "read_timeout_seconds",
    "max_attempts",
}


def _assert_mapping(obj: object, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping, got {type(obj).__name__}")
    return obj


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_settings_config(cfg: object, *, allow_unknown: bool = False) -> dict:
    cfg = _assert_mapping(cfg, "settings")
    _assert_no_unknown_keys(cfg, set(SETTINGS_SECTIONS), "settings", allow_unknown)

    for section, known in SETTINGS_SECTIONS.items():
        if section not in cfg:
            continue
        values = _assert_mapping(cfg[section], section)
        _assert_no_unknown_keys(values, known, section, allow_unknown)
        for key in _NUMERIC_KEYS & set(values):
            value = values[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"{section}.{key} must be a positive number")

    return cfg
