"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_osrm_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.osrm_client import check_health as osrm_health_check
    return osrm_health_check


@router.get("/health/osrm", status_code=status.HTTP_200_OK)
async def health_osrm() -> dict:
    """Check which OSRM mirrors answer a route request."""
    try:
        osrm_health_check = _get_osrm_health_check()
        mirrors = await osrm_health_check()
        return {"service": "osrm", "healthy": any(mirrors.values()), "mirrors": mirrors}
    except Exception as e:
        return {"service": "osrm", "healthy": False, "error": str(e)}
