"""Formatter configuration loader."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chronofmt.lib.cache import FormatterCache
from chronofmt.lib.handle import resolve_locale

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Resolved locale and zone that every cached formatter is bound to."""

    locale: str = "en_US"
    timezone: str = "UTC"


_SECTION = "formatting"

_ENV_OVERRIDE_MAP: dict[str, str] = {
    "CHRONOFMT_LOCALE": "locale",
    "CHRONOFMT_TIMEZONE": "timezone",
}


def _coerce_file_value(*, raw_value: object, source: str) -> str:
    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    normalized = raw_value.strip()
    if not normalized:
        raise ValueError(f"Invalid value for '{source}': expected non-empty string.")
    return normalized


def _coerce_env_value(*, raw_value: str, env_name: str) -> str:
    normalized = raw_value.strip()
    if not normalized:
        raise ValueError(
            f"Invalid environment override '{env_name}': expected non-empty string."
        )
    return normalized


def _default_values() -> dict[str, str]:
    defaults = FormatterConfig()
    return {field.name: getattr(defaults, field.name) for field in fields(FormatterConfig)}


def _apply_toml_payload(
    *,
    values: dict[str, str],
    payload: dict[str, object],
    path: Path,
) -> None:
    for key, raw_value in payload.items():
        if key != _SECTION:
            logger.warning("Ignoring unknown chronofmt config key '%s'.", key)
            continue
        if not isinstance(raw_value, dict):
            raise ValueError(f"Invalid value for '{key}' in '{path}': expected table.")
        for section_key, section_value in cast("dict[str, object]", raw_value).items():
            if section_key not in values:
                logger.warning(
                    "Ignoring unknown chronofmt config key '%s.%s'.",
                    key,
                    section_key,
                )
                continue
            values[section_key] = _coerce_file_value(
                raw_value=section_value,
                source=f"{key}.{section_key}",
            )


def _apply_env_overrides(values: dict[str, str]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = os.getenv(env_name)
        if raw_value is None:
            continue
        values[field_name] = _coerce_env_value(raw_value=raw_value, env_name=env_name)


def _build_config(values: dict[str, str]) -> FormatterConfig:
    config = FormatterConfig(locale=values["locale"], timezone=values["timezone"])
    resolve_locale(config.locale)
    resolve_zone(config.timezone)
    return config


def resolve_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise ValueError(f"Invalid timezone: {name!r}.") from error


def load_config(path: Path | None = None) -> FormatterConfig:
    """Load the `[formatting]` table from `path` and apply environment overrides."""

    values = _default_values()
    if path is not None and path.is_file():
        payload_obj = tomllib.loads(path.read_text(encoding="utf-8"))
        payload = cast("dict[str, object]", payload_obj)
        _apply_toml_payload(values=values, payload=payload, path=path)

    _apply_env_overrides(values)
    return _build_config(values)


def build_cache(config: FormatterConfig) -> FormatterCache:
    """Construct a formatter cache bound to the configured locale and zone."""

    return FormatterCache(locale=config.locale, zone=resolve_zone(config.timezone))
