"""Validation settings and their JSON override loader."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaValidationError

from .constants import RO_CIUS_CUSTOMIZATION_ID, ROMANIA, RON

LOGGER = logging.getLogger("roefactura.settings")

_SETTINGS_ENV_VAR = "ROEFACTURA_SETTINGS_PATH"
_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "settings.schema.json"


class SettingsLoaderError(RuntimeError):
    """Raised when a settings file cannot be read or does not match the schema."""


@dataclass(frozen=True)
class ValidationSettings:
    """Thresholds and identifiers used by the RO_CIUS validators."""

    customization_id: str = RO_CIUS_CUSTOMIZATION_ID
    domestic_country: str = ROMANIA
    domestic_currency: str = RON
    tolerance: Decimal = Decimal("0.01")
    max_lines: int = 999
    max_line_note_length: int = 300
    max_item_name_length: int = 200
    max_item_description_length: int = 200
    monetary_decimals: int = 2


DEFAULT_SETTINGS = ValidationSettings()

_CACHED_SETTINGS: tuple[Path, float, ValidationSettings] | None = None


def resolve_settings(settings: ValidationSettings | None) -> ValidationSettings:
    """Return ``settings`` or :data:`DEFAULT_SETTINGS` when ``None``."""

    return DEFAULT_SETTINGS if settings is None else settings


def _resolve_settings_path(path: Path | str | None) -> Path | None:
    if path is not None:
        return Path(path)
    candidate = os.getenv(_SETTINGS_ENV_VAR)
    if candidate:
        return Path(candidate)
    return None


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def settings_from_mapping(payload: dict[str, Any]) -> ValidationSettings:
    """Build settings from a decoded JSON object, checking it against the schema."""

    validator = Draft202012Validator(_load_schema())
    try:
        validator.validate(payload)
    except SchemaValidationError as exc:
        msg = f"Invalid settings: {exc.message}"
        raise SettingsLoaderError(msg) from exc

    known = {item.name for item in fields(ValidationSettings)}
    overrides: dict[str, Any] = {key: value for key, value in payload.items() if key in known}
    if "tolerance" in overrides:
        try:
            overrides["tolerance"] = Decimal(str(overrides["tolerance"]))
        except InvalidOperation as exc:
            msg = f"Invalid tolerance {overrides['tolerance']!r}"
            raise SettingsLoaderError(msg) from exc
    return replace(DEFAULT_SETTINGS, **overrides)


def _load_settings_from_disk(path: Path) -> ValidationSettings:
    if not path.exists():
        msg = f"Settings file '{path}' not found"
        raise SettingsLoaderError(msg)

    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            msg = f"Settings file '{path}' is not valid JSON"
            raise SettingsLoaderError(msg) from exc

    if not isinstance(payload, dict):
        msg = f"Settings file '{path}' must contain a JSON object"
        raise SettingsLoaderError(msg)

    return settings_from_mapping(payload)


def load_settings(
    path: Path | str | None = None, *, force_reload: bool = False
) -> ValidationSettings:
    """Load validation settings, with caching.

    The file is taken from ``path`` or from the ``ROEFACTURA_SETTINGS_PATH``
    environment variable. Without either, :data:`DEFAULT_SETTINGS` is returned.
    """

    global _CACHED_SETTINGS

    settings_path = _resolve_settings_path(path)
    if settings_path is None:
        return DEFAULT_SETTINGS

    mtime = settings_path.stat().st_mtime if settings_path.exists() else 0.0

    if not force_reload and _CACHED_SETTINGS:
        cached_path, cached_mtime, cached_settings = _CACHED_SETTINGS
        if cached_path == settings_path and cached_mtime == mtime:
            return cached_settings

    settings = _load_settings_from_disk(settings_path)
    LOGGER.debug("Loaded validation settings from %s", settings_path)
    _CACHED_SETTINGS = (settings_path, mtime, settings)
    return settings


__all__ = [
    "DEFAULT_SETTINGS",
    "SettingsLoaderError",
    "ValidationSettings",
    "load_settings",
    "resolve_settings",
    "settings_from_mapping",
]
