"""API schemas."""
from vies_proxy.api.schemas.vies import TraderMatchOut, ViesCheckResponse, ViesErrorResponse

__all__ = ["TraderMatchOut", "ViesCheckResponse", "ViesErrorResponse"]
