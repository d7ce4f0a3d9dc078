"""VAT lookup coordinator: exact VIES check, then optional approximate check.

checkVatApprox can report a number as valid (with trader name/address)
where checkVat rejects it, but it needs a requester VAT number and is
flakier. It is therefore only tried when the exact check says "invalid",
and any failure there falls back to the exact result.
"""
import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from vies_proxy.connectors.vies.client import (
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    VIES_ENDPOINT_URL,
    ViesClient,
)
from vies_proxy.connectors.vies.exceptions import ClientInputError
from vies_proxy.models import VatIdentifier, VatLookupResult
from vies_proxy.utils.vat import normalize_vat

if TYPE_CHECKING:
    from vies_proxy.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupConfig:
    """Everything the coordinator needs from the process configuration."""

    endpoint_url: str = VIES_ENDPOINT_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    default_requester_vat: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LookupConfig":
        return cls(
            endpoint_url=settings.vies_endpoint_url,
            timeout_seconds=settings.fetch_timeout_seconds,
            default_requester_vat=settings.vies_requester_vat,
            user_agent=settings.vies_user_agent,
        )


class VatLookupService:
    """Runs one VAT lookup per call. Holds no per-request state."""

    def __init__(self, config: LookupConfig, client: Optional[ViesClient] = None):
        self.config = config
        self.client = client or ViesClient(
            endpoint_url=config.endpoint_url,
            timeout_seconds=config.timeout_seconds,
            user_agent=config.user_agent,
        )

    def lookup(
        self,
        raw_target_vat: Optional[str],
        raw_requester_vat: Optional[str] = None,
        debug: bool = False,
    ) -> VatLookupResult:
        """
        Validate a VAT number against VIES.

        Raises:
            ClientInputError: target VAT is not shaped like a VAT number.
            ViesError: any classified failure of the exact check.
        """
        target = normalize_vat(raw_target_vat)
        if target is None:
            raise ClientInputError("VAT invalide (format)")

        exact = self.client.check_vat(target, debug=debug)
        logger.info("VIES checkVat %s: valid=%s", target, exact.valid)
        if exact.valid:
            return dataclasses.replace(exact, source="standard")

        requester = self._resolve_requester(raw_requester_vat)
        if requester is None:
            return dataclasses.replace(exact, source="standard")

        approx = self._try_approx(target, requester, debug=debug)
        if approx is not None and approx.valid:
            return dataclasses.replace(approx, source="approx")
        return dataclasses.replace(exact, source="standard")

    def _resolve_requester(self, raw_requester_vat: Optional[str]) -> Optional[VatIdentifier]:
        raw = raw_requester_vat if raw_requester_vat and raw_requester_vat.strip() else None
        raw = raw or self.config.default_requester_vat
        if not raw:
            return None
        requester = normalize_vat(raw)
        if requester is None:
            logger.debug("Requester VAT %r is not a VAT number, skipping approx check", raw)
        return requester

    def _try_approx(
        self,
        target: VatIdentifier,
        requester: VatIdentifier,
        debug: bool = False,
    ) -> Optional[VatLookupResult]:
        """checkVatApprox; never raises, returns None on any failure."""
        try:
            approx = self.client.check_vat_approx(target, requester, debug=debug)
        except Exception as e:
            logger.warning("VIES checkVatApprox %s failed, keeping exact result: %s", target, e)
            return None
        logger.info("VIES checkVatApprox %s: valid=%s", target, approx.valid)
        return approx
