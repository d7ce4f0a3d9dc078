"""SOAP 1.1 request envelopes for the VIES checkVat service."""
from xml.sax.saxutils import escape

from vies_proxy.models import VatIdentifier

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
VIES_TYPES_NS = "urn:ec.europa.eu:taxud:vies:services:checkVat:types"

_ENVELOPE_TEMPLATE = """
<soapenv:Envelope xmlns:soapenv="{soap_ns}" xmlns:urn="{types_ns}">
  <soapenv:Header/>
  <soapenv:Body>
{operation}
  </soapenv:Body>
</soapenv:Envelope>
""".strip()


def _element(name: str, value: str) -> str:
    if not value:
        return f"      <urn:{name}/>"
    return f"      <urn:{name}>{escape(value)}</urn:{name}>"


def _envelope(operation: str, fields: list[tuple[str, str]]) -> str:
    inner = "\n".join(_element(name, value) for name, value in fields)
    body = f"    <urn:{operation}>\n{inner}\n    </urn:{operation}>"
    return _ENVELOPE_TEMPLATE.format(
        soap_ns=SOAP_ENV_NS,
        types_ns=VIES_TYPES_NS,
        operation=body,
    )


def build_check_vat_envelope(target: VatIdentifier) -> str:
    """Envelope for the exact checkVat operation."""
    return _envelope(
        "checkVat",
        [
            ("countryCode", target.country_code),
            ("vatNumber", target.vat_number),
        ],
    )


def build_check_vat_approx_envelope(target: VatIdentifier, requester: VatIdentifier) -> str:
    """
    Envelope for checkVatApprox.

    Trader details are sent empty: only the requester identity is needed to
    get validity plus the name/address VIES holds for the target.
    """
    return _envelope(
        "checkVatApprox",
        [
            ("countryCode", target.country_code),
            ("vatNumber", target.vat_number),
            ("traderName", ""),
            ("traderCompanyType", ""),
            ("traderStreet", ""),
            ("traderPostcode", ""),
            ("traderCity", ""),
            ("requesterCountryCode", requester.country_code),
            ("requesterVatNumber", requester.vat_number),
        ],
    )
