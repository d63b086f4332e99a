"""Diet catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from health_lover.domain.diets import Diet, RecipeFilters  # noqa: TC001

if TYPE_CHECKING:
    from health_lover.containers import AppContainer

router = APIRouter(prefix="/api/diets", tags=["diets"])


@router.get("")
async def list_diets(  # noqa: PLR0913
    request: Request,
    protein_lt: float | None = None,
    protein_gt: float | None = None,
    carbs_lt: float | None = None,
    carbs_gt: float | None = None,
    calories_lt: float | None = None,
    calories_gt: float | None = None,
) -> dict[str, object]:
    """Return catalog diets within the optional macro bounds."""
    container: AppContainer = request.app.state.container
    filters = RecipeFilters(
        protein_lt=protein_lt,
        protein_gt=protein_gt,
        carbs_lt=carbs_lt,
        carbs_gt=carbs_gt,
        calories_lt=calories_lt,
        calories_gt=calories_gt,
    )
    return {"diets": await container.diet_service.search(filters)}


@router.get("/{diet_id}")
async def get_diet(
    diet_id: int, request: Request, user_id: str | None = None
) -> Diet:
    """Return one diet and record the view when a user is given."""
    container: AppContainer = request.app.state.container
    diet = await container.diet_service.get_diet(diet_id)
    if diet is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    if user_id:
        container.recommendation_service.track_view(user_id, str(diet_id))
    return diet
