"""Pytest configuration and shared fixtures.

Set VIES env vars before any vies_proxy import so Settings is deterministic.
Provides SOAP body builders mirroring real VIES responses.
"""
import os
from typing import Optional

import pytest

# Force test configuration before any app import
os.environ["ALLOWED_ORIGINS"] = "https://shop.example.com,https://admin.example.com"
os.environ["VIES_ENDPOINT_URL"] = "https://vies.test/checkVatService"
os.environ["FETCH_TIMEOUT_MS"] = "5000"
os.environ["VIES_REQUESTER_VAT"] = ""
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from vies_proxy.connectors.vies.soap import SOAP_ENV_NS, VIES_TYPES_NS
from vies_proxy.models import VatIdentifier


# ── SOAP body builders ───────────────────────────────────────────────

def soap_envelope(payload: str, prefix: Optional[str] = "soap") -> str:
    """Wrap payload in a SOAP envelope using the given prefix (None = default namespace)."""
    if prefix:
        return (
            f'<{prefix}:Envelope xmlns:{prefix}="{SOAP_ENV_NS}">'
            f"<{prefix}:Body>{payload}</{prefix}:Body>"
            f"</{prefix}:Envelope>"
        )
    return f'<Envelope xmlns="{SOAP_ENV_NS}"><Body>{payload}</Body></Envelope>'


def _element(prefix: Optional[str], name: str, value: Optional[str]) -> str:
    if value is None:
        return ""
    tag = f"{prefix}:{name}" if prefix else name
    return f"<{tag}>{value}</{tag}>"


def check_vat_response(
    valid: str = "true",
    country_code: str = "FR",
    vat_number: str = "40303265045",
    name: Optional[str] = "ACME",
    address: Optional[str] = "1 Rue X\n75000 Paris",
    request_date: Optional[str] = "2024-05-14+02:00",
    prefix: Optional[str] = "ns2",
    envelope_prefix: Optional[str] = "soap",
) -> str:
    """checkVatResponse body as VIES sends it (ns2: prefix by default)."""
    tag = f"{prefix}:checkVatResponse" if prefix else "checkVatResponse"
    xmlns = f'xmlns:{prefix}="{VIES_TYPES_NS}"' if prefix else f'xmlns="{VIES_TYPES_NS}"'
    fields = "".join(
        [
            _element(prefix, "countryCode", country_code),
            _element(prefix, "vatNumber", vat_number),
            _element(prefix, "requestDate", request_date),
            _element(prefix, "valid", valid),
            _element(prefix, "name", name),
            _element(prefix, "address", address),
        ]
    )
    return soap_envelope(f"<{tag} {xmlns}>{fields}</{tag}>", prefix=envelope_prefix)


def check_vat_approx_response(
    valid: str = "true",
    country_code: str = "FR",
    vat_number: str = "40303265045",
    trader_name: Optional[str] = "ACME SAS",
    trader_address: Optional[str] = "1 RUE X\r\n\r\n75000 PARIS",
    name_match: Optional[str] = "1",
    address_match: Optional[str] = None,
    prefix: Optional[str] = "ns2",
) -> str:
    """checkVatApproxResponse body (trader* fields instead of name/address)."""
    tag = f"{prefix}:checkVatApproxResponse" if prefix else "checkVatApproxResponse"
    xmlns = f'xmlns:{prefix}="{VIES_TYPES_NS}"' if prefix else f'xmlns="{VIES_TYPES_NS}"'
    fields = "".join(
        [
            _element(prefix, "countryCode", country_code),
            _element(prefix, "vatNumber", vat_number),
            _element(prefix, "requestDate", "2024-05-14+02:00"),
            _element(prefix, "valid", valid),
            _element(prefix, "traderName", trader_name),
            _element(prefix, "traderAddress", trader_address),
            _element(prefix, "traderNameMatch", name_match),
            _element(prefix, "traderAddressMatch", address_match),
            _element(prefix, "requestIdentifier", "WAPIAAAAXyZ"),
        ]
    )
    return soap_envelope(f"<{tag} {xmlns}>{fields}</{tag}>")


def soap_fault(faultstring: Optional[str] = "MS_UNAVAILABLE", faultcode: str = "env:Server") -> str:
    """SOAP Fault body as VIES returns it (with HTTP 500)."""
    fault = f"<faultcode>{faultcode}</faultcode>"
    if faultstring is not None:
        fault += f"<faultstring>{faultstring}</faultstring>"
    return soap_envelope(f"<env:Fault xmlns:env=\"{SOAP_ENV_NS}\">{fault}</env:Fault>", prefix="env")


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture()
def fr_vat() -> VatIdentifier:
    return VatIdentifier(country_code="FR", vat_number="40303265045")


@pytest.fixture()
def be_requester() -> VatIdentifier:
    return VatIdentifier(country_code="BE", vat_number="0404616494")


# ── Markers ──────────────────────────────────────────────────────────

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: marks unit tests")
