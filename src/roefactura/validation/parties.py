"""Seller, buyer and payee rules.

The three roles share the :class:`~roefactura.models.Party` shape but carry
different obligations. A party is *domestic* (Romanian) when its postal
address is in Romania; domestic parties must prove their identity and have
their address checked by :mod:`roefactura.validation.address`.
"""

from __future__ import annotations

from ..models import Party
from ..results import ContractError, Scope, Violation
from ..rules import run_rules, violation
from ..settings import ValidationSettings, resolve_settings
from ..utils import has_text, has_visible_text
from .address import is_domestic_address, validate_address


def is_domestic_party(party: Party, settings: ValidationSettings) -> bool:
    return is_domestic_address(party.address, settings)


def _ensure_party(party: object) -> None:
    if not isinstance(party, Party):
        raise ContractError(f"Expected a Party, got {type(party).__name__}")


def _name_required(code: str, scope: Scope):
    def check(party: Party, settings: ValidationSettings) -> list[Violation]:
        if has_text(party.name):
            return []
        return [violation(code, scope)]

    check.__name__ = f"_check_{scope.value}_name"
    return check


def _address_required(code: str, scope: Scope):
    def check(party: Party, settings: ValidationSettings) -> list[Violation]:
        if party.address is not None:
            return []
        return [violation(code, scope)]

    check.__name__ = f"_check_{scope.value}_address"
    return check


def _domestic_address(scope: Scope):
    def check(party: Party, settings: ValidationSettings) -> list[Violation]:
        address = party.address
        if address is None or not is_domestic_address(address, settings):
            return []
        return validate_address(address, settings, scope=scope)

    check.__name__ = f"_check_{scope.value}_domestic_address"
    return check


def _check_seller_legal_id(party: Party, settings: ValidationSettings) -> list[Violation]:
    if not is_domestic_party(party, settings) or has_text(party.legal_registration_id):
        return []
    return [violation("BR-RO-SELLER-ID", Scope.SELLER)]


def _check_buyer_identity(party: Party, settings: ValidationSettings) -> list[Violation]:
    if not is_domestic_party(party, settings):
        return []
    if has_visible_text(party.legal_registration_id) or has_visible_text(party.vat_identifier):
        return []
    return [violation("BR-RO-120", Scope.BUYER)]


SELLER_RULES = (
    _name_required("BR-6", Scope.SELLER),
    _address_required("BR-8", Scope.SELLER),
    _check_seller_legal_id,
    _domestic_address(Scope.SELLER),
)

BUYER_RULES = (
    _check_buyer_identity,
    _name_required("BR-7", Scope.BUYER),
    _address_required("BR-10", Scope.BUYER),
    _domestic_address(Scope.BUYER),
)

PAYEE_RULES = (_name_required("BR-17", Scope.PAYEE),)


def validate_seller(party: Party, settings: ValidationSettings | None = None) -> list[Violation]:
    """Validate the seller (BR-6, BR-8, BR-RO-SELLER-ID and address rules)."""

    _ensure_party(party)
    return run_rules(SELLER_RULES, party, resolve_settings(settings))


def validate_buyer(party: Party, settings: ValidationSettings | None = None) -> list[Violation]:
    """Validate the buyer (BR-7, BR-10, BR-RO-120 and address rules)."""

    _ensure_party(party)
    return run_rules(BUYER_RULES, party, resolve_settings(settings))


def validate_payee(
    party: Party,
    settings: ValidationSettings | None = None,
    *,
    forced_execution: bool = False,
) -> list[Violation]:
    """Validate the payee.

    Under forced execution the payee must be the enforcement authority, so
    both its name and legal registration identifier become mandatory
    (BR-RO-130, reported once per missing field).
    """

    _ensure_party(party)
    violations: list[Violation] = []
    if forced_execution:
        if not has_text(party.name):
            violations.append(
                violation(
                    "BR-RO-130",
                    Scope.PAYEE,
                    message="In forced execution, payee name is required and must be the execution authority name.",
                    field="name",
                )
            )
        if not has_text(party.legal_registration_id):
            violations.append(
                violation(
                    "BR-RO-130",
                    Scope.PAYEE,
                    message="In forced execution, payee legal registration identifier is required.",
                    field="legal_registration_id",
                )
            )
    violations.extend(run_rules(PAYEE_RULES, party, resolve_settings(settings)))
    return violations


__all__ = [
    "BUYER_RULES",
    "PAYEE_RULES",
    "SELLER_RULES",
    "is_domestic_party",
    "validate_buyer",
    "validate_payee",
    "validate_seller",
]
