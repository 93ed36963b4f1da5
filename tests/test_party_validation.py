from __future__ import annotations

import pytest

from conftest import build_party
from roefactura.models import Address, Party
from roefactura.results import ContractError, Scope
from roefactura.validation import validate_buyer, validate_payee, validate_seller


def _codes(violations) -> list[str]:
    return [item.code for item in violations]


FOREIGN_ADDRESS = Address(country_code="HU", country_subdivision="BU", city="Budapest")


def test_romanian_seller_is_valid() -> None:
    assert validate_seller(build_party("Furnizor SRL")) == []


def test_romanian_seller_without_legal_id() -> None:
    violations = validate_seller(build_party("Furnizor SRL", legal_id=None))

    assert _codes(violations) == ["BR-RO-SELLER-ID"]
    assert violations[0].scope is Scope.SELLER


def test_foreign_seller_does_not_need_legal_id() -> None:
    seller = build_party("Kft", legal_id=None, address=FOREIGN_ADDRESS)

    assert validate_seller(seller) == []


def test_seller_without_name_or_address() -> None:
    violations = validate_seller(Party())

    assert _codes(violations) == ["BR-6", "BR-8"]


def test_seller_address_rules_carry_seller_scope() -> None:
    seller = build_party(
        "Furnizor SRL",
        address=Address(country_code="RO", country_subdivision="B", city="Bucuresti"),
    )

    violations = validate_seller(seller)

    assert _codes(violations) == ["BR-RO-BUCHAREST"]
    assert violations[0].scope is Scope.SELLER


def test_romanian_buyer_accepts_vat_identifier_instead_of_legal_id() -> None:
    buyer = build_party("Client SA", legal_id=None, vat_identifier="RO987654")

    assert validate_buyer(buyer) == []


@pytest.mark.parametrize("legal_id, vat_id", [(None, None), ("  ", ""), ("", "   ")])
def test_romanian_buyer_needs_visible_identifier(legal_id, vat_id) -> None:
    buyer = build_party("Client SA", legal_id=legal_id, vat_identifier=vat_id)

    violations = validate_buyer(buyer)

    assert _codes(violations) == ["BR-RO-120"]
    assert violations[0].scope is Scope.BUYER


def test_foreign_buyer_without_identifiers_is_valid() -> None:
    buyer = build_party("Client GmbH", legal_id=None, address=FOREIGN_ADDRESS)

    assert validate_buyer(buyer) == []


def test_buyer_rules_order() -> None:
    buyer = build_party(
        "",
        legal_id=None,
        address=Address(country_code="RO", country_subdivision="XX", city="Iasi"),
    )

    assert _codes(validate_buyer(buyer)) == ["BR-RO-120", "BR-7", "BR-RO-COUNTY"]


def test_buyer_without_address() -> None:
    assert _codes(validate_buyer(Party(name="Client"))) == ["BR-10"]


def test_payee_requires_name() -> None:
    violations = validate_payee(Party())

    assert _codes(violations) == ["BR-17"]
    assert violations[0].scope is Scope.PAYEE


def test_payee_outside_forced_execution_needs_no_legal_id() -> None:
    assert validate_payee(Party(name="Beneficiar")) == []


def test_forced_execution_payee_reports_each_missing_field() -> None:
    violations = validate_payee(Party(), forced_execution=True)

    assert _codes(violations) == ["BR-RO-130", "BR-RO-130", "BR-17"]
    assert [item.details["field"] for item in violations[:2]] == [
        "name",
        "legal_registration_id",
    ]


def test_forced_execution_payee_with_authority_details() -> None:
    payee = Party(name="Executor Judecatoresc", legal_registration_id="RO1234")

    assert validate_payee(payee, forced_execution=True) == []


@pytest.mark.parametrize("validator", [validate_seller, validate_buyer, validate_payee])
def test_non_party_raises_contract_error(validator) -> None:
    with pytest.raises(ContractError):
        validator("Furnizor SRL")
