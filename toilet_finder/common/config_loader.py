"""Settings loading and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from toilet_finder.common import constants
from toilet_finder.common.errors import ConfigError
from toilet_finder.common.fs import read_yaml
from toilet_finder.common.http import RetryConfig, TimeoutConfig
from toilet_finder.common.schema import validate_settings_config


@dataclass(frozen=True)
class Settings:
    overpass_endpoint: str = constants.OVERPASS_ENDPOINT
    overpass_query_timeout_seconds: int = constants.OVERPASS_QUERY_TIMEOUT_SECONDS
    bbox_delta_degrees: float = constants.BBOX_DELTA_DEGREES
    nominatim_endpoint: str = constants.NOMINATIM_REVERSE_ENDPOINT
    accept_language: str = constants.ACCEPT_LANGUAGE
    user_agent: str = constants.USER_AGENT
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)


DEFAULT_SETTINGS = Settings()


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _read_settings_file(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    loaded = read_yaml(path)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Settings file must contain a mapping: {path}")
    return loaded


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    base = _read_settings_file(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = _read_settings_file(overlay_path)
    return _deep_merge(base, overlay)


def settings_from_mapping(cfg: dict) -> Settings:
    cfg = validate_settings_config(cfg)
    overpass = cfg.get("overpass") or {}
    nominatim = cfg.get("nominatim") or {}
    http = cfg.get("http") or {}
    defaults = DEFAULT_SETTINGS
    return Settings(
        overpass_endpoint=str(overpass.get("endpoint", defaults.overpass_endpoint)),
        overpass_query_timeout_seconds=int(
            overpass.get("query_timeout_seconds", defaults.overpass_query_timeout_seconds)
        ),
        bbox_delta_degrees=float(overpass.get("bbox_delta_degrees", defaults.bbox_delta_degrees)),
        nominatim_endpoint=str(nominatim.get("endpoint", defaults.nominatim_endpoint)),
        accept_language=str(nominatim.get("accept_language", defaults.accept_language)),
        user_agent=str(http.get("user_agent", defaults.user_agent)),
        timeout=TimeoutConfig(
            connect=float(http.get("connect_timeout_seconds", defaults.timeout.connect)),
            read=float(http.get("read_timeout_seconds", defaults.timeout.read)),
        ),
        retry=RetryConfig(max_attempts=int(http.get("max_attempts", defaults.retry.max_attempts))),
    )


def load_settings(path: Path | None = None, *, overlay_path: Path | None = None) -> Settings:
    if path is None:
        return DEFAULT_SETTINGS
    return settings_from_mapping(_load_yaml_with_overlay(path, overlay_path))
