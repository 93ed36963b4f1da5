"""Romanian postal address rules."""

from __future__ import annotations

import re

from ..constants import BUCHAREST, BUCHAREST_SECTOR_PATTERN, ROMANIAN_COUNTY_CODES
from ..models import Address
from ..results import ContractError, Scope, Violation
from ..rules import run_rules, violation
from ..settings import ValidationSettings, resolve_settings

_BUCHAREST_SECTOR = re.compile(BUCHAREST_SECTOR_PATTERN, re.IGNORECASE)


def is_domestic_address(address: Address | None, settings: ValidationSettings) -> bool:
    return address is not None and address.country_code == settings.domestic_country


def _subdivision(address: Address) -> str:
    return (address.country_subdivision or "").strip().upper()


def _is_bucharest(address: Address) -> bool:
    return _subdivision(address) == BUCHAREST


def _check_county(address: Address, settings: ValidationSettings, scope: Scope) -> list[Violation]:
    county = _subdivision(address)
    if county in ROMANIAN_COUNTY_CODES:
        return []
    return [violation("BR-RO-COUNTY", scope, current_value=address.country_subdivision)]


def _check_bucharest_sector(
    address: Address, settings: ValidationSettings, scope: Scope
) -> list[Violation]:
    if not _is_bucharest(address):
        return []
    if _BUCHAREST_SECTOR.match(address.city or ""):
        return []
    return [violation("BR-RO-BUCHAREST", scope, current_value=address.city)]


def _check_city(address: Address, settings: ValidationSettings, scope: Scope) -> list[Violation]:
    # Bucharest cities are judged by the sector rule instead.
    if _is_bucharest(address) or address.city:
        return []
    return [violation("BR-RO-CITY-REQUIRED", scope)]


def _check_country_code(
    address: Address, settings: ValidationSettings, scope: Scope
) -> list[Violation]:
    if address.country_code == settings.domestic_country:
        return []
    return [violation("BR-RO-COUNTRY-CODE", scope, current_value=address.country_code)]


ADDRESS_RULES = (
    _check_county,
    _check_bucharest_sector,
    _check_city,
    _check_country_code,
)


def validate_address(
    address: Address,
    settings: ValidationSettings | None = None,
    *,
    scope: Scope = Scope.DOCUMENT,
) -> list[Violation]:
    """Validate a postal address against the RO_CIUS address conventions.

    Only Romanian addresses are judged; any other address yields no
    violations.
    """

    if not isinstance(address, Address):
        raise ContractError(f"Expected an Address, got {type(address).__name__}")

    settings = resolve_settings(settings)
    if not is_domestic_address(address, settings):
        return []
    return run_rules(ADDRESS_RULES, address, settings, scope)


__all__ = ["ADDRESS_RULES", "is_domestic_address", "validate_address"]
