"""Diet catalog browsing."""

from dataclasses import dataclass

from health_lover.adapters.recipe_client import RecipeCatalogClient, RecipeNotFoundError
from health_lover.domain.diets import Diet, RecipeFilters
from health_lover.services.mapping import to_diet


@dataclass
class DietCatalogService:
    """Service for listing and looking up catalog diets."""

    catalog_client: RecipeCatalogClient

    async def search(self, filters: RecipeFilters | None = None) -> list[Diet]:
        """Return catalog diets matching the optional bounds."""
        records = await self.catalog_client.list_recipes(filters)
        return [to_diet(record) for record in records]

    async def get_diet(self, diet_id: int) -> Diet | None:
        """Return one diet, or None when the catalog has no such id."""
        try:
            record = await self.catalog_client.get_recipe(diet_id)
        except RecipeNotFoundError:
            return None
        return to_diet(record)
