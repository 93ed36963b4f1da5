"""Code lists used by the EN16931 and RO_CIUS rules."""

from __future__ import annotations

RO_CIUS_CUSTOMIZATION_ID = (
    "urn:cen.eu:en16931:2017#compliant#urn:efactura.mfinante.ro:RO_CIUS:1.0.0.2021"
)

ROMANIA = "RO"
RON = "RON"
BUCHAREST = "B"

# ISO 3166-2:RO subdivisions: 41 counties plus the municipality of Bucharest.
ROMANIAN_COUNTY_CODES: frozenset[str] = frozenset(
    {
        "AB", "AR", "AG", "B", "BC", "BH", "BN", "BT", "BV", "BR", "BZ",
        "CS", "CL", "CJ", "CT", "CV", "DB", "DJ", "GL", "GR", "GJ",
        "HR", "HD", "IL", "IS", "IF", "MM", "MH", "MS", "NT", "OT",
        "PH", "SM", "SJ", "SB", "SV", "TR", "TM", "TL", "VS", "VL", "VN",
    }
)

# Invoice type codes accepted by the Romanian profile.
ROMANIAN_INVOICE_TYPE_CODES: tuple[str, ...] = ("380", "389", "384", "381", "751")

# UNTDID 1001 subset admitted by EN16931 for invoices and credit notes.
EN16931_INVOICE_TYPE_CODES: frozenset[str] = frozenset(
    {
        "71", "80", "81", "82", "83", "84", "102", "130", "202", "203", "204",
        "211", "218", "219", "261", "262", "295", "296", "308", "325", "326",
        "331", "380", "381", "382", "383", "384", "385", "386", "387", "388",
        "389", "390", "393", "394", "395", "396", "420", "456", "457", "458",
        "527", "532", "553", "575", "623", "633", "751", "780", "817", "870",
        "875", "876", "877", "935",
    }
)

# VAT point date codes (UNTDID 2005 subset). Listed for reference only; the
# BR-RO-040 check is not enforced yet.
VAT_POINT_DATE_CODES: tuple[str, ...] = ("3", "35", "432")

BUCHAREST_SECTOR_PATTERN = r"^Sector [1-6]$"


__all__ = [
    "BUCHAREST",
    "BUCHAREST_SECTOR_PATTERN",
    "EN16931_INVOICE_TYPE_CODES",
    "RON",
    "ROMANIA",
    "ROMANIAN_COUNTY_CODES",
    "ROMANIAN_INVOICE_TYPE_CODES",
    "RO_CIUS_CUSTOMIZATION_ID",
    "VAT_POINT_DATE_CODES",
]
