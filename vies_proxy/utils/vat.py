"""VAT number normalization.

Turns whatever a user typed ("fr 403 032 650 45", "EU-FR.40303265045", ...)
into a country prefix and a national number suitable for a VIES request.
No checksum validation: VIES is the authority on whether a number exists.
"""
import re
from typing import Optional

from vies_proxy.models import VatIdentifier

_STRIP_RE = re.compile(r"[\s.\-]")
_COUNTRY_RE = re.compile(r"^[A-Z]{2}$")
_NUMBER_RE = re.compile(r"^[0-9A-Z+*.]{2,}$")


def normalize_vat(raw: Optional[str]) -> Optional[VatIdentifier]:
    """Normalize a free-form VAT string.

    Returns:
        VatIdentifier, or None when the input cannot be a VAT number.

    Examples:
        >>> normalize_vat("fr 40303265045")
        VatIdentifier(country_code='FR', vat_number='40303265045')
        >>> normalize_vat("EU-FR.40303265045")
        VatIdentifier(country_code='FR', vat_number='40303265045')
        >>> normalize_vat("1234") is None
        True
    """
    if not raw:
        return None

    cleaned = _STRIP_RE.sub("", raw.upper())
    # Users often paste the "EU" of an "EU VAT" label
    if cleaned.startswith("EU"):
        cleaned = cleaned[2:]

    country_code, vat_number = cleaned[:2], cleaned[2:]
    if not _COUNTRY_RE.match(country_code) or not _NUMBER_RE.match(vat_number):
        return None
    return VatIdentifier(country_code=country_code, vat_number=vat_number)
