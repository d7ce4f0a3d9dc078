"""Health check endpoint."""
from typing import Any

from fastapi import APIRouter

from vies_proxy import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Liveness only: VIES itself is not probed, a lookup would count against its quota."""
    return {"ok": True, "version": __version__}
