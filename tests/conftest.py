from __future__ import annotations

import sys
from dataclasses import replace
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from roefactura.constants import RO_CIUS_CUSTOMIZATION_ID  # noqa: E402
from roefactura.models import (  # noqa: E402
    Address,
    InvoiceDocument,
    InvoiceLine,
    MonetaryTotals,
    Party,
    TaxBreakdown,
)


def build_line(**overrides) -> InvoiceLine:
    line = InvoiceLine(
        id="1",
        quantity=Decimal("1"),
        unit_code="H87",
        net_amount=Decimal("100.00"),
        unit_price=Decimal("100.00"),
        vat_category="S",
        vat_rate=Decimal("19"),
        item_name="Servicii consultanta",
    )
    return replace(line, **overrides)


def build_party(name: str, legal_id: str | None = "RO123456", **overrides) -> Party:
    party = Party(
        name=name,
        legal_registration_id=legal_id,
        vat_identifier=None,
        address=Address(country_code="RO", country_subdivision="CJ", city="Cluj-Napoca"),
    )
    return replace(party, **overrides)


def build_invoice(**overrides) -> InvoiceDocument:
    """Minimal valid RO_CIUS invoice: one line of 100.00 RON at 19% VAT."""

    document = InvoiceDocument(
        number="FCT-2024-0001",
        issue_date=date(2024, 3, 1),
        type_code="380",
        currency_code="RON",
        customization_id=RO_CIUS_CUSTOMIZATION_ID,
        seller=build_party("Furnizor SRL", legal_id="J12/345/2010"),
        buyer=build_party("Client SA", legal_id="RO987654"),
        lines=(build_line(),),
        tax_breakdowns=(
            TaxBreakdown(
                category="S",
                rate=Decimal("19"),
                taxable_amount=Decimal("100.00"),
                tax_amount=Decimal("19.00"),
            ),
        ),
        totals=MonetaryTotals(
            tax_exclusive_amount=Decimal("100.00"),
            tax_inclusive_amount=Decimal("119.00"),
            payable_amount=Decimal("119.00"),
        ),
    )
    return replace(document, **overrides)


@pytest.fixture()
def invoice() -> InvoiceDocument:
    return build_invoice()


SAMPLE_UBL = """<?xml version="1.0" encoding="UTF-8"?>
<Invoice xmlns="urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"
         xmlns:cac="urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
         xmlns:cbc="urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2">
  <cbc:CustomizationID>urn:cen.eu:en16931:2017#compliant#urn:efactura.mfinante.ro:RO_CIUS:1.0.0.2021</cbc:CustomizationID>
  <cbc:ID>FCT-2024-0001</cbc:ID>
  <cbc:IssueDate>2024-03-01</cbc:IssueDate>
  <cbc:DueDate>2024-03-31</cbc:DueDate>
  <cbc:InvoiceTypeCode>380</cbc:InvoiceTypeCode>
  <cbc:DocumentCurrencyCode>RON</cbc:DocumentCurrencyCode>
  <cac:InvoicePeriod>
    <cbc:StartDate>2024-02-01</cbc:StartDate>
    <cbc:EndDate>2024-02-29</cbc:EndDate>
  </cac:InvoicePeriod>
  <cac:AccountingSupplierParty>
    <cac:Party>
      <cac:PostalAddress>
        <cbc:CityName>Sector 1</cbc:CityName>
        <cbc:CountrySubentity>B</cbc:CountrySubentity>
        <cac:Country><cbc:IdentificationCode>RO</cbc:IdentificationCode></cac:Country>
      </cac:PostalAddress>
      <cac:PartyTaxScheme>
        <cbc:CompanyID>RO12345678</cbc:CompanyID>
        <cac:TaxScheme><cbc:ID>VAT</cbc:ID></cac:TaxScheme>
      </cac:PartyTaxScheme>
      <cac:PartyLegalEntity>
        <cbc:RegistrationName>Furnizor SRL</cbc:RegistrationName>
        <cbc:CompanyID>J40/1234/2010</cbc:CompanyID>
      </cac:PartyLegalEntity>
    </cac:Party>
  </cac:AccountingSupplierParty>
  <cac:AccountingCustomerParty>
    <cac:Party>
      <cac:PartyName><cbc:Name>Client SA</cbc:Name></cac:PartyName>
      <cac:PostalAddress>
        <cbc:CityName>Cluj-Napoca</cbc:CityName>
        <cbc:CountrySubentity>CJ</cbc:CountrySubentity>
        <cac:Country><cbc:IdentificationCode>RO</cbc:IdentificationCode></cac:Country>
      </cac:PostalAddress>
      <cac:PartyLegalEntity>
        <cbc:RegistrationName>Client SA</cbc:RegistrationName>
        <cbc:CompanyID>98765432</cbc:CompanyID>
      </cac:PartyLegalEntity>
    </cac:Party>
  </cac:AccountingCustomerParty>
  <cac:TaxTotal>
    <cbc:TaxAmount currencyID="RON">19.00</cbc:TaxAmount>
    <cac:TaxSubtotal>
      <cbc:TaxableAmount currencyID="RON">100.00</cbc:TaxableAmount>
      <cbc:TaxAmount currencyID="RON">19.00</cbc:TaxAmount>
      <cac:TaxCategory>
        <cbc:ID>S</cbc:ID>
        <cbc:Percent>19</cbc:Percent>
        <cac:TaxScheme><cbc:ID>VAT</cbc:ID></cac:TaxScheme>
      </cac:TaxCategory>
    </cac:TaxSubtotal>
  </cac:TaxTotal>
  <cac:LegalMonetaryTotal>
    <cbc:LineExtensionAmount currencyID="RON">100.00</cbc:LineExtensionAmount>
    <cbc:TaxExclusiveAmount currencyID="RON">100.00</cbc:TaxExclusiveAmount>
    <cbc:TaxInclusiveAmount currencyID="RON">119.00</cbc:TaxInclusiveAmount>
    <cbc:PayableAmount currencyID="RON">119.00</cbc:PayableAmount>
  </cac:LegalMonetaryTotal>
  <cac:InvoiceLine>
    <cbc:ID>1</cbc:ID>
    <cbc:Note>Servicii luna februarie</cbc:Note>
    <cbc:InvoicedQuantity unitCode="H87">2</cbc:InvoicedQuantity>
    <cbc:LineExtensionAmount currencyID="RON">100.00</cbc:LineExtensionAmount>
    <cac:Item>
      <cbc:Description>Consultanta fiscala</cbc:Description>
      <cbc:Name>Servicii consultanta</cbc:Name>
      <cac:ClassifiedTaxCategory>
        <cbc:ID>S</cbc:ID>
        <cbc:Percent>19</cbc:Percent>
        <cac:TaxScheme><cbc:ID>VAT</cbc:ID></cac:TaxScheme>
      </cac:ClassifiedTaxCategory>
    </cac:Item>
    <cac:Price>
      <cbc:PriceAmount currencyID="RON">50.00</cbc:PriceAmount>
    </cac:Price>
  </cac:InvoiceLine>
</Invoice>
"""


def write_sample(directory: Path, name: str = "invoice.xml", content: str = SAMPLE_UBL) -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path
