"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from nutrition_resolver.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str | None = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not admin_token or not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/cache/stats", dependencies=[Depends(require_admin)])
async def cache_stats(request: Request) -> dict[str, int]:
    """Return cached entry counts, including expired but unswept ones."""
    container: AppContainer = request.app.state.container
    return container.nutrition_service.get_cache_stats()


@router.post("/cache/sweep", dependencies=[Depends(require_admin)])
async def cache_sweep(request: Request) -> dict[str, int]:
    """Remove expired cache entries."""
    container: AppContainer = request.app.state.container
    return {"removed": container.nutrition_service.clear_expired_cache()}
