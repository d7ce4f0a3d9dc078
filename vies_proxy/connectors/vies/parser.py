"""
Interpret VIES SOAP responses.

VIES answers with envelopes whose namespace prefixes vary between response
variants (none, soap:, S:, ns2:, ...) and, under load, with truncated or
otherwise malformed bodies. Two strategies are provided:

  - parse_structured: ElementTree walk matching elements on their local name
  - parse_with_regex: tag-suffix tolerant regexes over the raw text

interpret_response() runs the structured strategy and falls back to the regex
one when the body cannot be interpreted structurally. Both build their result
through _build_result, so callers cannot tell which one answered.
"""
import html
import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Optional, Union

from vies_proxy.connectors.vies.exceptions import ViesFaultError, ViesParseError
from vies_proxy.models import TraderMatch, UpstreamFault, VatIdentifier, VatLookupResult

logger = logging.getLogger(__name__)

RESPONSE_TAG_SUFFIXES = ("checkvatresponse", "checkvatapproxresponse")

_VALID_RE = re.compile(r"<[\w:]*valid>\s*(true|false)\s*</[\w:]*valid>", re.IGNORECASE)
_COUNTRY_CODE_RE = re.compile(r"<[\w:]*countryCode>([^<]+)</[\w:]*countryCode>", re.IGNORECASE)
_VAT_NUMBER_RE = re.compile(r"<[\w:]*vatNumber>([^<]+)</[\w:]*vatNumber>", re.IGNORECASE)
_NAME_RE = re.compile(r"<[\w:]*name>([^<]*)</[\w:]*name>", re.IGNORECASE)
_ADDRESS_RE = re.compile(r"<[\w:]*address>([\s\S]*?)</[\w:]*address>", re.IGNORECASE)
_FAULTSTRING_RE = re.compile(r"<[\w:]*faultstring>([^<]+)</[\w:]*faultstring>", re.IGNORECASE)


# ── Local-name lookups ─────────────────────────────────────────────


def local_name(tag: Any) -> str:
    """
    Lowercased tag name without namespace.

    Handles both the ElementTree "{uri}local" form and a literal "prefix:local".
    Comments and processing instructions have non-string tags and yield "".
    """
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1].lower()


def find_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    """First direct child whose local name equals name (case-insensitive)."""
    wanted = name.lower()
    for child in element:
        if local_name(child.tag) == wanted:
            return child
    return None


def find_child_by_suffix(element: ET.Element, suffixes: tuple[str, ...]) -> Optional[ET.Element]:
    """First direct child whose local name ends with one of the suffixes."""
    for child in element:
        if local_name(child.tag).endswith(suffixes):
            return child
    return None


def find_descendant(element: ET.Element, name: str) -> Optional[ET.Element]:
    """Like find_child, but searches the whole subtree (element included)."""
    wanted = name.lower()
    for node in element.iter():
        if local_name(node.tag) == wanted:
            return node
    return None


def _field(parent: ET.Element, *names: str) -> Optional[str]:
    """Text of the first named child with non-blank content."""
    for name in names:
        child = find_child(parent, name)
        if child is not None and child.text and child.text.strip():
            return child.text
    return None


# ── Value cleanup ──────────────────────────────────────────────────


def _as_bool(value: Union[bool, str, None]) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token == "true":
            return True
        if token == "false":
            return False
    return None


def _clean_name(value: Optional[str]) -> str:
    return re.sub(r"\r\n?", "\n", value or "").strip()


def _clean_address(value: Optional[str]) -> str:
    return re.sub(r"[\r\n]+", "\n", value or "").strip()


def _clean_token(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _build_result(
    *,
    valid: bool,
    requested: Optional[VatIdentifier],
    country_code: Optional[str] = None,
    vat_number: Optional[str] = None,
    request_date: Optional[str] = None,
    name: Optional[str] = None,
    address: Optional[str] = None,
    name_match: Optional[str] = None,
    address_match: Optional[str] = None,
) -> VatLookupResult:
    """Single constructor for both strategies; missing identifiers echo the request."""
    return VatLookupResult(
        valid=valid,
        country_code=_clean_token(country_code) or (requested.country_code if requested else ""),
        vat_number=_clean_token(vat_number) or (requested.vat_number if requested else ""),
        request_date=_clean_token(request_date),
        name=_clean_name(name),
        address=_clean_address(address),
        trader_match=TraderMatch(
            name=_clean_token(name_match),
            address=_clean_token(address_match),
        ),
    )


def _scan_valid(body_text: str) -> Optional[bool]:
    match = _VALID_RE.search(body_text)
    if not match:
        return None
    return match.group(1).lower() == "true"


def _raise_fault(fault_string: str) -> None:
    message = fault_string.strip()
    raise ViesFaultError(UpstreamFault(code=message.upper(), message=message))


# ── Strategies ─────────────────────────────────────────────────────


def parse_structured(body_text: str, requested: Optional[VatIdentifier] = None) -> VatLookupResult:
    """
    Interpret a VIES response by walking its XML tree.

    Raises:
        ViesFaultError: the body carries a SOAP Fault (checked before any
            response element, so an ambiguous body is always a fault).
        ViesParseError: not well-formed, no Body, no checkVat*Response, or
            no usable `valid` flag.
    """
    try:
        root = ET.fromstring(body_text)
    except ET.ParseError as e:
        raise ViesParseError(f"XML not well-formed ({e})") from e

    envelope = find_descendant(root, "envelope")
    if envelope is None:
        envelope = root

    body = find_child(envelope, "body")
    if body is None:
        raise ViesParseError("Body not found")

    fault = find_child(body, "fault")
    if fault is not None:
        _raise_fault(_field(fault, "faultstring") or _field(fault, "faultcode") or "SOAP Fault")

    response = find_child_by_suffix(body, RESPONSE_TAG_SUFFIXES)
    if response is None:
        raise ViesParseError("checkVat*Response not found")

    valid = _as_bool(_field(response, "valid"))
    if valid is None:
        valid = _scan_valid(body_text)
    if valid is None:
        raise ViesParseError("valid not found")

    return _build_result(
        valid=valid,
        requested=requested,
        country_code=_field(response, "countryCode"),
        vat_number=_field(response, "vatNumber"),
        request_date=_field(response, "requestDate"),
        name=_field(response, "name", "traderName"),
        address=_field(response, "address", "traderAddress"),
        name_match=_field(response, "traderNameMatch"),
        address_match=_field(response, "traderAddressMatch"),
    )


def _scan(pattern: re.Pattern, body_text: str) -> Optional[str]:
    match = pattern.search(body_text)
    if not match:
        return None
    return html.unescape(match.group(1))


def parse_with_regex(body_text: str, requested: Optional[VatIdentifier] = None) -> VatLookupResult:
    """
    Interpret a VIES response without parsing it as XML.

    A faultstring anywhere in the text wins. Fields that cannot be found
    fall back to the requested identifier (country code, number) or "".
    """
    fault_string = _scan(_FAULTSTRING_RE, body_text)
    if fault_string:
        _raise_fault(fault_string)

    valid = _scan_valid(body_text)
    if valid is None:
        raise ViesParseError("neither structured nor regex parse worked")

    return _build_result(
        valid=valid,
        requested=requested,
        country_code=_scan(_COUNTRY_CODE_RE, body_text),
        vat_number=_scan(_VAT_NUMBER_RE, body_text),
        name=_scan(_NAME_RE, body_text),
        address=_scan(_ADDRESS_RE, body_text),
    )


def interpret_response(body_text: str, requested: Optional[VatIdentifier] = None) -> VatLookupResult:
    """Best-effort interpretation: structured first, regex on ParseError."""
    try:
        return parse_structured(body_text, requested)
    except ViesParseError as e:
        logger.debug("Structured parse failed (%s), falling back to regex", e)
    return parse_with_regex(body_text, requested)
