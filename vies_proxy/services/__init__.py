"""Application services."""
from vies_proxy.services.vat_lookup import LookupConfig, VatLookupService

__all__ = ["LookupConfig", "VatLookupService"]
