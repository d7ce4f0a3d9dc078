"""Exceptions for the VIES connector.

Each exception carries a ViesErrorKind; the HTTP layer maps kinds to
status codes and user-facing messages.
"""
from enum import Enum
from typing import Optional

from vies_proxy.models import UpstreamFault


class ViesErrorKind(str, Enum):
    """Classification of a failed lookup."""

    CLIENT_INPUT = "ClientInputError"
    UPSTREAM_INVALID_INPUT = "UpstreamInvalidInput"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"
    UPSTREAM_BUSY = "UpstreamBusy"
    PARSE_ERROR = "ParseError"
    UPSTREAM_UNKNOWN_FAULT = "UpstreamUnknownFault"
    NETWORK_OR_TIMEOUT = "NetworkOrTimeout"


# Fault token fragments, checked in this order
_FAULT_TOKENS: list[tuple[tuple[str, ...], ViesErrorKind]] = [
    (("INVALID_INPUT", "INVALID_REQUESTER_INFO"), ViesErrorKind.UPSTREAM_INVALID_INPUT),
    (("MS_UNAVAILABLE", "SERVICE_UNAVAILABLE", "TIMEOUT"), ViesErrorKind.UPSTREAM_UNAVAILABLE),
    (("GLOBAL_MAX_CONCURRENT_REQ", "MS_MAX_CONCURRENT_REQ", "BUSY"), ViesErrorKind.UPSTREAM_BUSY),
]


def classify_fault(code: str) -> ViesErrorKind:
    """Map a VIES fault token (e.g. "MS_UNAVAILABLE") to an error kind."""
    token = (code or "").upper()
    for fragments, kind in _FAULT_TOKENS:
        if any(fragment in token for fragment in fragments):
            return kind
    return ViesErrorKind.UPSTREAM_UNKNOWN_FAULT


class ViesError(Exception):
    """Base class for every classified lookup failure."""

    kind: ViesErrorKind = ViesErrorKind.UPSTREAM_UNKNOWN_FAULT

    def __init__(self, message: str, kind: Optional[ViesErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class ClientInputError(ViesError):
    """Raised when the supplied VAT string fails normalization. Never reaches VIES."""

    kind = ViesErrorKind.CLIENT_INPUT


class ViesFaultError(ViesError):
    """Raised when VIES answers with a SOAP Fault."""

    def __init__(self, fault: UpstreamFault):
        super().__init__(f"VIES Fault: {fault.message}", kind=classify_fault(fault.code))
        self.fault = fault


class ViesParseError(ViesError):
    """Raised when a response body cannot be interpreted."""

    kind = ViesErrorKind.PARSE_ERROR

    def __init__(self, message: str):
        super().__init__(f"ParseError: {message}")


class ViesNetworkError(ViesError):
    """Raised when the request fails at transport level or times out."""

    kind = ViesErrorKind.NETWORK_OR_TIMEOUT
