"""Read UBL 2.1 invoices and credit notes into :class:`InvoiceDocument`.

Only the elements the RO_CIUS rules look at are read. Amounts keep the scale
written in the XML (``100.005`` stays three decimals) and dates that are not
ISO formatted are kept as text, so the rules can judge the document exactly as
it was issued.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from lxml import etree

from .models import (
    Address,
    DateValue,
    InvoiceDocument,
    InvoiceLine,
    MonetaryTotals,
    Party,
    Period,
    TaxBreakdown,
)
from .utils import detect_namespace, parse_date, parse_decimal

LOGGER = logging.getLogger("roefactura.ubl")

INVOICE_NS = "urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"
CREDIT_NOTE_NS = "urn:oasis:names:specification:ubl:schema:xsd:CreditNote-2"
CAC_NS = "urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
CBC_NS = "urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2"

NS = {"cac": CAC_NS, "cbc": CBC_NS}

# root namespace -> (type code element, line element, quantity element)
_DOCUMENT_LAYOUTS = {
    INVOICE_NS: ("cbc:InvoiceTypeCode", "cac:InvoiceLine", "cbc:InvoicedQuantity"),
    CREDIT_NOTE_NS: ("cbc:CreditNoteTypeCode", "cac:CreditNoteLine", "cbc:CreditedQuantity"),
}


class UblParseError(ValueError):
    """Raised when the input is not a readable UBL invoice or credit note."""


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def load_invoice(path: Path) -> InvoiceDocument:
    """Parse the UBL file at ``path``."""

    try:
        tree = etree.parse(str(path), _parser())
    except (OSError, etree.XMLSyntaxError) as exc:
        raise UblParseError(f"Cannot read UBL document '{path}': {exc}") from exc
    LOGGER.debug("Parsed %s", path)
    return read_document(tree)


def parse_invoice(content: bytes | str) -> InvoiceDocument:
    """Parse UBL XML held in memory."""

    data = content.encode("utf-8") if isinstance(content, str) else content
    try:
        root = etree.fromstring(data, _parser())
    except etree.XMLSyntaxError as exc:
        raise UblParseError(f"Invalid UBL XML: {exc}") from exc
    return read_document(etree.ElementTree(root))


def read_document(tree: etree._ElementTree) -> InvoiceDocument:
    """Map an already parsed UBL tree to an :class:`InvoiceDocument`."""

    root = tree.getroot()
    namespace = detect_namespace(root)
    layout = _DOCUMENT_LAYOUTS.get(namespace)
    if layout is None or etree.QName(root).localname not in {"Invoice", "CreditNote"}:
        raise UblParseError(f"Unsupported UBL root element: {root.tag}")
    type_code_path, line_path, quantity_path = layout

    currency = _text(root, "cbc:DocumentCurrencyCode")
    period_el = root.find("cac:InvoicePeriod", namespaces=NS)
    breakdowns, vat_total = _read_tax_total(root, currency)

    return InvoiceDocument(
        number=_text(root, "cbc:ID"),
        issue_date=_date(root, "cbc:IssueDate"),
        type_code=_text(root, type_code_path),
        currency_code=currency,
        customization_id=_text(root, "cbc:CustomizationID"),
        due_date=_date(root, "cbc:DueDate"),
        tax_currency_code=_text(root, "cbc:TaxCurrencyCode"),
        tax_point_date_code=_text(period_el, "cbc:DescriptionCode"),
        period=_read_period(period_el),
        seller=_read_party(root.find("cac:AccountingSupplierParty/cac:Party", namespaces=NS)),
        buyer=_read_party(root.find("cac:AccountingCustomerParty/cac:Party", namespaces=NS)),
        payee=_read_party(root.find("cac:PayeeParty", namespaces=NS)),
        lines=tuple(
            _read_line(line, quantity_path)
            for line in root.findall(line_path, namespaces=NS)
        ),
        tax_breakdowns=breakdowns,
        totals=_read_totals(root.find("cac:LegalMonetaryTotal", namespaces=NS), vat_total),
    )


def _text(element: etree._Element | None, path: str) -> str | None:
    if element is None:
        return None
    node = element.find(path, namespaces=NS)
    if node is None:
        return None
    return (node.text or "").strip()


def _date(element: etree._Element | None, path: str) -> DateValue | None:
    text = _text(element, path)
    if not text:
        return None
    return parse_date(text) or text


def _amount(element: etree._Element | None, path: str) -> Decimal | None:
    return parse_decimal(_text(element, path))


def _read_period(period_el: etree._Element | None) -> Period | None:
    if period_el is None:
        return None
    return Period(start=_date(period_el, "cbc:StartDate"), end=_date(period_el, "cbc:EndDate"))


def _read_party(party_el: etree._Element | None) -> Party | None:
    if party_el is None:
        return None

    name = _text(party_el, "cac:PartyName/cbc:Name") or _text(
        party_el, "cac:PartyLegalEntity/cbc:RegistrationName"
    )
    address_el = party_el.find("cac:PostalAddress", namespaces=NS)
    address = None
    if address_el is not None:
        address = Address(
            country_code=_text(address_el, "cac:Country/cbc:IdentificationCode"),
            country_subdivision=_text(address_el, "cbc:CountrySubentity"),
            city=_text(address_el, "cbc:CityName"),
        )
    return Party(
        name=name,
        legal_registration_id=_text(party_el, "cac:PartyLegalEntity/cbc:CompanyID"),
        vat_identifier=_text(party_el, "cac:PartyTaxScheme/cbc:CompanyID"),
        address=address,
    )


def _read_line(line_el: etree._Element, quantity_path: str) -> InvoiceLine:
    quantity_el = line_el.find(quantity_path, namespaces=NS)
    unit_code = quantity_el.get("unitCode") if quantity_el is not None else None
    return InvoiceLine(
        id=_text(line_el, "cbc:ID"),
        quantity=_amount(line_el, quantity_path),
        unit_code=unit_code,
        net_amount=_amount(line_el, "cbc:LineExtensionAmount"),
        unit_price=_amount(line_el, "cac:Price/cbc:PriceAmount"),
        vat_category=_text(line_el, "cac:Item/cac:ClassifiedTaxCategory/cbc:ID"),
        vat_rate=_amount(line_el, "cac:Item/cac:ClassifiedTaxCategory/cbc:Percent"),
        item_name=_text(line_el, "cac:Item/cbc:Name"),
        item_description=_text(line_el, "cac:Item/cbc:Description"),
        note=_text(line_el, "cbc:Note"),
        period=_read_period(line_el.find("cac:InvoicePeriod", namespaces=NS)),
    )


def _select_tax_total(
    tax_totals: Iterable[etree._Element], currency: str | None
) -> etree._Element | None:
    candidates = list(tax_totals)
    for tax_total in candidates:
        amount = tax_total.find("cbc:TaxAmount", namespaces=NS)
        if amount is not None and amount.get("currencyID") == currency:
            return tax_total
    return candidates[0] if candidates else None


def _read_tax_total(
    root: etree._Element, currency: str | None
) -> tuple[tuple[TaxBreakdown, ...], Decimal | None]:
    tax_total = _select_tax_total(root.findall("cac:TaxTotal", namespaces=NS), currency)
    if tax_total is None:
        return (), None

    breakdowns = tuple(
        TaxBreakdown(
            category=_text(subtotal, "cac:TaxCategory/cbc:ID"),
            rate=_amount(subtotal, "cac:TaxCategory/cbc:Percent"),
            taxable_amount=_amount(subtotal, "cbc:TaxableAmount"),
            tax_amount=_amount(subtotal, "cbc:TaxAmount"),
            exemption_reason=_text(subtotal, "cac:TaxCategory/cbc:TaxExemptionReason"),
        )
        for subtotal in tax_total.findall("cac:TaxSubtotal", namespaces=NS)
    )
    return breakdowns, _amount(tax_total, "cbc:TaxAmount")


def _read_totals(
    totals_el: etree._Element | None, vat_total: Decimal | None
) -> MonetaryTotals | None:
    if totals_el is None:
        if vat_total is None:
            return None
        return MonetaryTotals(vat_total=vat_total)
    return MonetaryTotals(
        tax_exclusive_amount=_amount(totals_el, "cbc:TaxExclusiveAmount"),
        tax_inclusive_amount=_amount(totals_el, "cbc:TaxInclusiveAmount"),
        payable_amount=_amount(totals_el, "cbc:PayableAmount"),
        vat_total=vat_total,
    )


__all__ = [
    "CAC_NS",
    "CBC_NS",
    "CREDIT_NOTE_NS",
    "INVOICE_NS",
    "UblParseError",
    "load_invoice",
    "parse_invoice",
    "read_document",
]
