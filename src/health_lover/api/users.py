"""User profile endpoints keyed by email."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from health_lover.api.models import (  # noqa: TC001
    AddToFolderRequest,
    CategoriesPayload,
    CategoryCreateRequest,
    InteractionRequest,
    PreferencesPayload,
    SavedDietRequest,
)
from health_lover.domain.profiles import UserProfile  # noqa: TC001
from health_lover.services.profiles import ProfileNotFoundError

if TYPE_CHECKING:
    from health_lover.containers import AppContainer

router = APIRouter(prefix="/api/user", tags=["users"])

_logger = logging.getLogger(__name__)


def _require_email(email: str | None) -> str:
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email parameter is required",
        )
    return email


def _not_found(exc: ProfileNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("")
async def get_user(request: Request, email: str | None = None) -> UserProfile:
    """Return the profile, creating a default one on first access."""
    container: AppContainer = request.app.state.container
    return container.profile_service.ensure_profile(_require_email(email))


@router.put("/preferences")
async def update_preferences(
    payload: PreferencesPayload, request: Request, email: str | None = None
) -> UserProfile:
    """Replace the user's preferences."""
    container: AppContainer = request.app.state.container
    return container.profile_service.update_preferences(
        _require_email(email), payload.to_domain()
    )


@router.post("/saved-diets")
async def save_diet(
    payload: SavedDietRequest, request: Request, email: str | None = None
) -> UserProfile:
    """Add a diet to the saved list."""
    container: AppContainer = request.app.state.container
    try:
        return container.profile_service.save_diet(
            _require_email(email), str(payload.diet_id)
        )
    except ProfileNotFoundError as exc:
        raise _not_found(exc) from exc


@router.delete("/saved-diets")
async def remove_saved_diet(
    request: Request, email: str | None = None, diet_id: str | None = None
) -> UserProfile:
    """Remove a diet from the saved list."""
    if not diet_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Diet ID parameter is required",
        )
    container: AppContainer = request.app.state.container
    try:
        return container.profile_service.remove_saved_diet(
            _require_email(email), diet_id
        )
    except ProfileNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("/categories")
async def create_category(
    payload: CategoryCreateRequest, request: Request, email: str | None = None
) -> UserProfile:
    """Add an empty category."""
    container: AppContainer = request.app.state.container
    try:
        return container.profile_service.create_category(
            _require_email(email), payload.name
        )
    except ProfileNotFoundError as exc:
        raise _not_found(exc) from exc


@router.put("/categories")
async def replace_categories(
    payload: CategoriesPayload, request: Request, email: str | None = None
) -> UserProfile:
    """Replace every category."""
    container: AppContainer = request.app.state.container
    try:
        return container.profile_service.replace_categories(
            _require_email(email), payload.to_domain()
        )
    except ProfileNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("/categories/{category_id}/diets")
async def add_diet_to_category(
    category_id: str,
    payload: SavedDietRequest,
    request: Request,
    email: str | None = None,
) -> UserProfile:
    """File a saved diet into a category."""
    container: AppContainer = request.app.state.container
    try:
        return container.profile_service.add_diet_to_category(
            _require_email(email), category_id, str(payload.diet_id)
        )
    except ProfileNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("/like")
async def like_diet(payload: InteractionRequest, request: Request) -> dict[str, bool]:
    """Forward a like to the recommendation engine."""
    container: AppContainer = request.app.state.container
    try:
        await container.recommendation_service.track_like(
            payload.user_id, str(payload.diet_id)
        )
    except Exception as exc:
        _logger.exception("Failed to track user like")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to track user like",
        ) from exc
    return {"success": True}


@router.post("/add-to-folder")
async def add_to_folder(
    payload: AddToFolderRequest, request: Request
) -> dict[str, bool]:
    """Forward a folder addition to the recommendation engine."""
    container: AppContainer = request.app.state.container
    try:
        await container.recommendation_service.track_add_to_folder(
            payload.user_id, str(payload.diet_id), payload.folder_name
        )
    except Exception as exc:
        _logger.exception("Failed to track folder addition")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to track folder addition",
        ) from exc
    return {"success": True}
