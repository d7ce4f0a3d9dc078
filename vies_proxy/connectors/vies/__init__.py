"""EU VIES (VAT Information Exchange System) connector."""
from vies_proxy.connectors.vies.client import ViesClient
from vies_proxy.connectors.vies.exceptions import (
    ClientInputError,
    ViesError,
    ViesErrorKind,
    ViesFaultError,
    ViesNetworkError,
    ViesParseError,
    classify_fault,
)
from vies_proxy.connectors.vies.parser import (
    interpret_response,
    parse_structured,
    parse_with_regex,
)

__all__ = [
    "ClientInputError",
    "ViesClient",
    "ViesError",
    "ViesErrorKind",
    "ViesFaultError",
    "ViesNetworkError",
    "ViesParseError",
    "classify_fault",
    "interpret_response",
    "parse_structured",
    "parse_with_regex",
]
