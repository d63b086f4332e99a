"""Recommendation endpoints backed by the cached engine services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from health_lover.api.models import TrackViewRequest  # noqa: TC001
from health_lover.services.recommendations import UnknownStrategyError

if TYPE_CHECKING:
    from health_lover.containers import AppContainer

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])

_logger = logging.getLogger(__name__)


def _bad_gateway(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


@router.get("/similar/{diet_id}")
async def similar_diets(
    diet_id: str, request: Request, num_recommendations: int = 4
) -> dict[str, object]:
    """Return diets similar to the given one."""
    container: AppContainer = request.app.state.container
    diets = await container.recommendation_service.get_similar(
        diet_id, num_recommendations
    )
    return {"similar_diets": diets}


@router.get("/popular")
async def popular_diets(
    request: Request, num_recommendations: int = 8
) -> dict[str, object]:
    """Return trending diets."""
    container: AppContainer = request.app.state.container
    diets = await container.recommendation_service.get_popular(num_recommendations)
    return {"popular_diets": diets}


@router.get("/personalized")
async def personalized_diets(
    request: Request, email: str | None = None, num_recommendations: int = 8
) -> dict[str, object]:
    """Return diets tailored to the user's profile."""
    container: AppContainer = request.app.state.container
    diets = await container.personalization_service.get_recommendations(
        email or container.settings.default_user_email, num_recommendations
    )
    return {"recommendations": diets}


@router.post("/track-view", status_code=status.HTTP_202_ACCEPTED)
async def track_view(payload: TrackViewRequest, request: Request) -> dict[str, str]:
    """Queue a view event for the recommendation engine."""
    if not payload.user_id or not payload.diet_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing user_id or diet_id",
        )
    container: AppContainer = request.app.state.container
    container.recommendation_service.track_view(
        str(payload.user_id), str(payload.diet_id)
    )
    return {"status": "accepted"}


@router.get("/similar-recipes/{diet_id}")
async def similar_recipes(
    diet_id: str, request: Request, num_recommendations: int = 5
) -> object:
    """Return the engine's raw similar-recipes response."""
    container: AppContainer = request.app.state.container
    try:
        return await container.recommendation_service.get_similar_raw(
            diet_id, num_recommendations
        )
    except Exception as exc:
        _logger.exception("Failed to get similar recipes")
        raise _bad_gateway("Failed to get similar recipes") from exc


@router.get("/trending")
async def trending_recipes(request: Request, num_recommendations: int = 10) -> object:
    """Return the engine's raw trending response."""
    container: AppContainer = request.app.state.container
    try:
        return await container.recommendation_service.get_trending_raw(
            num_recommendations
        )
    except Exception as exc:
        _logger.exception("Failed to get trending recipes")
        raise _bad_gateway("Failed to get trending recipes") from exc


@router.get("/categories")
async def recommendation_categories(request: Request) -> object:
    """Return the engine's recommendation categories."""
    container: AppContainer = request.app.state.container
    try:
        return await container.recommendation_service.get_categories()
    except Exception as exc:
        _logger.exception("Failed to get recommendation categories")
        raise _bad_gateway("Failed to get recommendation categories") from exc


@router.get("/stats")
async def recommendation_stats(request: Request) -> object:
    """Return the engine's statistics."""
    container: AppContainer = request.app.state.container
    try:
        return await container.recommendation_service.get_stats()
    except Exception as exc:
        _logger.exception("Failed to get recommendation system stats")
        raise _bad_gateway("Failed to get recommendation system stats") from exc


@router.post("/{strategy}")
async def strategy_recommendations(
    strategy: str, payload: dict[str, object], request: Request
) -> object:
    """Proxy a content-based, collaborative, hybrid or personalized request."""
    container: AppContainer = request.app.state.container
    try:
        return await container.recommendation_service.recommend(strategy, payload)
    except UnknownStrategyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    except Exception as exc:
        _logger.exception("Failed to get %s recommendations", strategy)
        raise _bad_gateway(f"Failed to get {strategy} recommendations") from exc
