"""EU VIES checkVat SOAP client."""
import logging

import requests

from vies_proxy.connectors.vies.exceptions import ViesNetworkError
from vies_proxy.connectors.vies.parser import interpret_response
from vies_proxy.connectors.vies.soap import (
    build_check_vat_approx_envelope,
    build_check_vat_envelope,
)
from vies_proxy.models import RawSoapResponse, VatIdentifier, VatLookupResult

logger = logging.getLogger(__name__)

VIES_ENDPOINT_URL = "https://ec.europa.eu/taxation_customs/vies/services/checkVatService"
DEFAULT_TIMEOUT_SECONDS = 12.0
DEFAULT_USER_AGENT = "VIES-Proxy/1.1"
DEBUG_BODY_CHARS = 1000


class ViesClient:
    """
    VIES SOAP client.
    One POST per call, bounded by timeout_seconds, no retries: a failed call
    is classified once and surfaced to the caller.
    VIES reports faults with HTTP 500, so non-2xx bodies are still interpreted.
    """

    def __init__(
        self,
        endpoint_url: str = VIES_ENDPOINT_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.endpoint_url = endpoint_url
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self._session = requests.Session()

    def post_envelope(self, envelope: str, debug: bool = False) -> RawSoapResponse:
        """POST a SOAP envelope and return the raw status and body."""
        if debug:
            logger.info("[VIES debug] POST %s\n%s", self.endpoint_url, envelope)
        try:
            resp = self._session.post(
                self.endpoint_url,
                data=envelope.encode("utf-8"),
                headers={
                    "Content-Type": "text/xml; charset=utf-8",
                    "SOAPAction": '""',
                    "User-Agent": self.user_agent,
                },
                timeout=self.timeout_seconds,
            )
        except requests.Timeout as e:
            raise ViesNetworkError(f"VIES timeout after {self.timeout_seconds}s") from e
        except requests.RequestException as e:
            raise ViesNetworkError(f"VIES request failed: {e}") from e

        # requests assumes ISO-8859-1 for text/* without a charset
        if "charset" not in (resp.headers.get("Content-Type") or "").lower():
            resp.encoding = "utf-8"
        raw = RawSoapResponse(http_status=resp.status_code, body_text=resp.text or "")
        if not raw.ok:
            logger.warning("VIES returned HTTP %s", raw.http_status)
        if debug:
            logger.info(
                "[VIES debug] status=%s body (first %s chars): %s",
                raw.http_status,
                DEBUG_BODY_CHARS,
                raw.body_text[:DEBUG_BODY_CHARS],
            )
        return raw

    def check_vat(self, target: VatIdentifier, debug: bool = False) -> VatLookupResult:
        """Exact check (checkVat)."""
        raw = self.post_envelope(build_check_vat_envelope(target), debug=debug)
        return interpret_response(raw.body_text, requested=target)

    def check_vat_approx(
        self,
        target: VatIdentifier,
        requester: VatIdentifier,
        debug: bool = False,
    ) -> VatLookupResult:
        """Approximate check (checkVatApprox) on behalf of requester."""
        raw = self.post_envelope(
            build_check_vat_approx_envelope(target, requester),
            debug=debug,
        )
        return interpret_response(raw.body_text, requested=target)

    def close(self) -> None:
        self._session.close()

