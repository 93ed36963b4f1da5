from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from conftest import SAMPLE_UBL, write_sample
from roefactura import validate_file
from roefactura.ubl import UblParseError, load_invoice, parse_invoice

CREDIT_NOTE = """<?xml version="1.0" encoding="UTF-8"?>
<CreditNote xmlns="urn:oasis:names:specification:ubl:schema:xsd:CreditNote-2"
            xmlns:cac="urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
            xmlns:cbc="urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2">
  <cbc:ID>CN-7</cbc:ID>
  <cbc:IssueDate>15.03.2024</cbc:IssueDate>
  <cbc:CreditNoteTypeCode>381</cbc:CreditNoteTypeCode>
  <cbc:DocumentCurrencyCode>EUR</cbc:DocumentCurrencyCode>
  <cbc:TaxCurrencyCode>RON</cbc:TaxCurrencyCode>
  <cac:TaxTotal>
    <cbc:TaxAmount currencyID="RON">-49.75</cbc:TaxAmount>
  </cac:TaxTotal>
  <cac:TaxTotal>
    <cbc:TaxAmount currencyID="EUR">-10.00</cbc:TaxAmount>
    <cac:TaxSubtotal>
      <cbc:TaxableAmount currencyID="EUR">-50.005</cbc:TaxableAmount>
      <cbc:TaxAmount currencyID="EUR">-10.00</cbc:TaxAmount>
      <cac:TaxCategory><cbc:ID>S</cbc:ID><cbc:Percent>19</cbc:Percent></cac:TaxCategory>
    </cac:TaxSubtotal>
  </cac:TaxTotal>
  <cac:CreditNoteLine>
    <cbc:ID>1</cbc:ID>
    <cbc:CreditedQuantity unitCode="C62">-1</cbc:CreditedQuantity>
    <cbc:LineExtensionAmount currencyID="EUR">-50.005</cbc:LineExtensionAmount>
    <cac:Item><cbc:Name>Retur</cbc:Name></cac:Item>
    <cac:Price><cbc:PriceAmount currencyID="EUR">50.005</cbc:PriceAmount></cac:Price>
  </cac:CreditNoteLine>
</CreditNote>
"""


def test_reads_invoice_header_and_parties(tmp_path) -> None:
    document = load_invoice(write_sample(tmp_path))

    assert document.number == "FCT-2024-0001"
    assert document.issue_date == date(2024, 3, 1)
    assert document.due_date == date(2024, 3, 31)
    assert document.type_code == "380"
    assert document.currency_code == "RON"
    assert document.customization_id.endswith("RO_CIUS:1.0.0.2021")
    assert document.period.start == date(2024, 2, 1)

    assert document.seller.name == "Furnizor SRL"
    assert document.seller.legal_registration_id == "J40/1234/2010"
    assert document.seller.vat_identifier == "RO12345678"
    assert document.seller.address.country_subdivision == "B"
    assert document.seller.address.city == "Sector 1"
    assert document.buyer.name == "Client SA"
    assert document.payee is None


def test_reads_lines_breakdowns_and_totals() -> None:
    document = parse_invoice(SAMPLE_UBL)

    (line,) = document.lines
    assert line.quantity == Decimal("2")
    assert line.unit_code == "H87"
    assert line.unit_price == Decimal("50.00")
    assert line.item_description == "Consultanta fiscala"
    assert line.note == "Servicii luna februarie"

    (breakdown,) = document.tax_breakdowns
    assert breakdown.category == "S"
    assert breakdown.rate == Decimal("19")
    assert breakdown.tax_amount == Decimal("19.00")

    assert document.totals.tax_inclusive_amount == Decimal("119.00")
    assert document.totals.vat_total == Decimal("19.00")


def test_sample_invoice_is_valid(tmp_path) -> None:
    result = validate_file(write_sample(tmp_path))

    assert result.is_valid, [str(item) for item in result]


def test_reads_credit_notes() -> None:
    document = parse_invoice(CREDIT_NOTE.encode("utf-8"))

    assert document.type_code == "381"
    assert document.tax_currency_code == "RON"
    assert document.issue_date == "15.03.2024"
    assert document.lines[0].unit_code == "C62"
    assert document.lines[0].quantity == Decimal("-1")
    assert document.lines[0].net_amount == Decimal("-50.005")
    assert document.totals.vat_total == Decimal("-10.00")
    assert len(document.tax_breakdowns) == 1


def test_amount_scale_is_preserved() -> None:
    document = parse_invoice(CREDIT_NOTE)

    assert document.tax_breakdowns[0].taxable_amount.as_tuple().exponent == -3


def test_malformed_xml_raises_parse_error(tmp_path) -> None:
    path = write_sample(tmp_path, content="<Invoice><cbc:ID>")

    with pytest.raises(UblParseError):
        load_invoice(path)


def test_missing_file_raises_parse_error(tmp_path) -> None:
    with pytest.raises(UblParseError):
        load_invoice(tmp_path / "missing.xml")


def test_unsupported_root_raises_parse_error() -> None:
    with pytest.raises(UblParseError, match="Unsupported"):
        parse_invoice("<Order xmlns='urn:oasis:names:specification:ubl:schema:xsd:Order-2'/>")


def test_parse_error_is_a_value_error() -> None:
    assert issubclass(UblParseError, ValueError)
