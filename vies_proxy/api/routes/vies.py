"""VIES check endpoint.

GET /api/vies-check?vat=FR40303265045                      → exact check
GET /api/vies-check?vat=FR40303265045&requester=BE0...     → exact, then approx if invalid
GET /api/vies-check?vat=...&debug=1                        → error payloads include kind/detail
"""
import logging
from functools import lru_cache
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from vies_proxy.api.schemas import ViesCheckResponse, ViesErrorResponse
from vies_proxy.connectors.vies.exceptions import ViesError, ViesErrorKind
from vies_proxy.core.config import settings
from vies_proxy.services.vat_lookup import LookupConfig, VatLookupService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["vies"])

# kind → (HTTP status, user message); None means "use the exception message"
ERROR_RESPONSES: dict[ViesErrorKind, tuple[int, Optional[str]]] = {
    ViesErrorKind.CLIENT_INPUT: (400, "VAT invalide (format)"),
    ViesErrorKind.UPSTREAM_INVALID_INPUT: (400, "VIES: INVALID_INPUT (format non conforme)"),
    ViesErrorKind.UPSTREAM_UNAVAILABLE: (503, "VIES indisponible (réessayer)"),
    ViesErrorKind.UPSTREAM_BUSY: (429, "VIES rate limit (trop de requêtes)"),
    ViesErrorKind.PARSE_ERROR: (502, "Erreur de parsing SOAP"),
    ViesErrorKind.UPSTREAM_UNKNOWN_FAULT: (502, None),
    ViesErrorKind.NETWORK_OR_TIMEOUT: (504, "VIES injoignable (délai dépassé ou erreur réseau)"),
}
FALLBACK_ERROR = (502, "Erreur VIES")
_TRUE_TOKENS = ("1", "true", "yes", "on")


def _flag(value: Optional[str]) -> bool:
    """Lenient boolean for query flags: unknown values read as False."""
    return (value or "").strip().lower() in _TRUE_TOKENS


@lru_cache
def get_lookup_service() -> VatLookupService:
    """Shared coordinator built from settings (override in tests)."""
    return VatLookupService(LookupConfig.from_settings(settings))


def error_response(
    kind: Optional[ViesErrorKind],
    detail: str,
    debug: bool = False,
) -> JSONResponse:
    """Build the {ok: false, error} payload and status code for a failure."""
    status_code, message = ERROR_RESPONSES.get(kind, FALLBACK_ERROR) if kind else FALLBACK_ERROR
    body = ViesErrorResponse(
        error=message or detail or FALLBACK_ERROR[1],
        kind=kind.value if (debug and kind) else None,
        detail=detail if debug else None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.get(
    "/vies-check",
    response_model=ViesCheckResponse,
    responses={
        400: {"model": ViesErrorResponse, "description": "Malformed VAT number"},
        429: {"model": ViesErrorResponse, "description": "VIES concurrency limit"},
        502: {"model": ViesErrorResponse, "description": "VIES fault or unreadable response"},
        503: {"model": ViesErrorResponse, "description": "VIES or member state unavailable"},
        504: {"model": ViesErrorResponse, "description": "VIES unreachable or timed out"},
    },
)
def vies_check(
    vat: Optional[str] = Query(None, description="VAT number to check, e.g. FR40303265045"),
    requester: Optional[str] = Query(
        None,
        description="Requester VAT number for the approximate check (defaults to VIES_REQUESTER_VAT)",
    ),
    debug_flag: Optional[str] = Query(
        None,
        alias="debug",
        description="1/true: log VIES traffic and include error details",
    ),
    service: VatLookupService = Depends(get_lookup_service),
) -> Union[ViesCheckResponse, JSONResponse]:
    """Validate an EU VAT number against VIES.

    Query values are validated by the lookup itself, so every failure
    answers with the {ok: false, error} payload.

    Example: /api/vies-check?vat=FR40303265045
    → {"ok": true, "valid": true, "countryCode": "FR", "vatNumber": "40303265045",
       "name": "...", "address": "...", "source": "standard", ...}
    """
    debug = _flag(debug_flag)
    try:
        result = service.lookup(vat, requester, debug=debug)
    except ViesError as e:
        if e.kind is ViesErrorKind.CLIENT_INPUT:
            logger.info("Rejected VAT input %r", vat)
        else:
            logger.warning("[VIES ERROR] %s: %s", e.kind.value, e)
        return error_response(e.kind, str(e), debug=debug)
    except Exception as e:
        logger.exception("[VIES ERROR] unexpected failure for %r", vat)
        return error_response(None, str(e), debug=debug)

    return ViesCheckResponse.from_result(result)
