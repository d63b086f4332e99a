"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from health_lover.domain.recommendations import PopularRequest, SimilarRequest

if TYPE_CHECKING:
    from health_lover.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/cache", dependencies=[Depends(require_admin)])
async def cache_stats(request: Request) -> dict[str, object]:
    """Return recommendation cache settings and size."""
    container: AppContainer = request.app.state.container
    return {
        "entries": len(container.cache),
        "ttl_seconds": container.cache.ttl_seconds,
        "max_entries": container.cache.max_entries,
    }


@router.delete("/cache", dependencies=[Depends(require_admin)])
async def clear_cache(request: Request) -> dict[str, str]:
    """Drop every cached recommendation."""
    container: AppContainer = request.app.state.container
    container.cache.clear_all()
    return {"status": "cleared"}


@router.delete("/cache/similar/{diet_id}", dependencies=[Depends(require_admin)])
async def clear_similar(
    diet_id: str, request: Request, num_recommendations: int = 4
) -> dict[str, str]:
    """Drop the cached similar diets for one diet."""
    container: AppContainer = request.app.state.container
    container.cache.clear(SimilarRequest(diet_id=diet_id, count=num_recommendations))
    return {"status": "cleared"}


@router.delete("/cache/popular", dependencies=[Depends(require_admin)])
async def clear_popular(request: Request, num_recommendations: int = 8) -> dict[str, str]:
    """Drop the cached popular diets."""
    container: AppContainer = request.app.state.container
    container.cache.clear(PopularRequest(count=num_recommendations))
    return {"status": "cleared"}
