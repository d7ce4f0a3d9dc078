"""VIES check response schemas (camelCase on the wire)."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from vies_proxy.models import VatLookupResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TraderMatchOut(_CamelModel):
    """checkVatApprox match indicators ("1" match, "2" no match, "3" not processed)."""

    name: Optional[str] = None
    address: Optional[str] = None


class ViesCheckResponse(_CamelModel):
    """Successful lookup."""

    ok: Literal[True] = True
    valid: bool
    country_code: str
    vat_number: str
    request_date: Optional[str] = None
    name: str = ""
    address: str = ""
    trader_match: TraderMatchOut = TraderMatchOut()
    source: Literal["standard", "approx"] = "standard"

    @classmethod
    def from_result(cls, result: VatLookupResult) -> "ViesCheckResponse":
        return cls(
            valid=result.valid,
            country_code=result.country_code,
            vat_number=result.vat_number,
            request_date=result.request_date,
            name=result.name,
            address=result.address,
            trader_match=TraderMatchOut(
                name=result.trader_match.name,
                address=result.trader_match.address,
            ),
            source=result.source,
        )


class ViesErrorResponse(_CamelModel):
    """Failed lookup. kind/detail are only filled when debug is requested."""

    ok: Literal[False] = False
    error: str
    kind: Optional[str] = None
    detail: Optional[str] = None
