"""VAT lookup value objects.

Every object here lives for a single request: built by the normalizer,
the VIES client or the response parser, then serialized and dropped.
"""
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

LookupSource = Literal["standard", "approx"]


@dataclass(frozen=True)
class VatIdentifier:
    """Normalized VAT number split into country prefix and national number."""

    country_code: str
    vat_number: str

    @property
    def vat_id(self) -> str:
        return f"{self.country_code}{self.vat_number}"

    def __str__(self) -> str:
        return self.vat_id


@dataclass(frozen=True)
class TraderMatch:
    """
    Approximate-match indicators returned by checkVatApprox.

    VIES uses "1" (match), "2" (no match) and "3" (not processed).
    """

    name: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class VatLookupResult:
    """Outcome of a VIES check, independent of the XML shape it came from."""

    valid: bool
    country_code: str
    vat_number: str
    request_date: Optional[str] = None
    name: str = ""
    address: str = ""
    trader_match: TraderMatch = field(default_factory=TraderMatch)
    source: LookupSource = "standard"

    def to_dict(self) -> dict[str, Any]:
        """camelCase JSON shape used by the HTTP layer."""
        return {
            "valid": self.valid,
            "countryCode": self.country_code,
            "vatNumber": self.vat_number,
            "requestDate": self.request_date,
            "name": self.name,
            "address": self.address,
            "traderMatch": {
                "name": self.trader_match.name,
                "address": self.trader_match.address,
            },
            "source": self.source,
        }


@dataclass(frozen=True)
class UpstreamFault:
    """SOAP Fault reported by VIES; code is the uppercased fault token."""

    code: str
    message: str


@dataclass(frozen=True)
class RawSoapResponse:
    http_status: int
    body_text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.http_status < 300
