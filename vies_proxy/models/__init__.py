"""Request-scoped value objects for VAT lookups.

Import from here:
    from vies_proxy.models import VatIdentifier, VatLookupResult, ...
"""
from vies_proxy.models.vat import (
    RawSoapResponse,
    TraderMatch,
    UpstreamFault,
    VatIdentifier,
    VatLookupResult,
)

__all__ = [
    "RawSoapResponse",
    "TraderMatch",
    "UpstreamFault",
    "VatIdentifier",
    "VatLookupResult",
]
