"""Recipe service - creating and reading recipes.

This service encapsulates business logic for:
- Validating the add-recipe form
- Storing a recipe with ingredients, instructions and tags
- Loading recipe details and listings
"""
import logging
from typing import Mapping

from fastapi import HTTPException
from pydantic import BaseModel, Field, ValidationError, field_validator

from ...config import (
    FORM_INGREDIENT_ROWS,
    FORM_INSTRUCTION_ROWS,
    RECIPE_CATEGORIES,
    RECIPE_DIFFICULTIES,
)
from ...infrastructure.repositories import RecipeRepository

logger = logging.getLogger(__name__)


class IngredientLine(BaseModel):
    quantity: str = ""
    unit: str = ""
    ingredient_name: str


class RecipeForm(BaseModel):
    """Validated add-recipe form."""

    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    category: str
    cook_time: int = Field(ge=1, le=24 * 60)
    difficulty: str
    tags: list[str] = []
    ingredients: list[IngredientLine] = []
    instructions: list[str] = []

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("category")
    @classmethod
    def check_category(cls, value: str) -> str:
        if value not in RECIPE_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(RECIPE_CATEGORIES)}")
        return value

    @field_validator("difficulty")
    @classmethod
    def check_difficulty(cls, value: str) -> str:
        if value not in RECIPE_DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(RECIPE_DIFFICULTIES)}")
        return value

    @classmethod
    def from_form(cls, form: Mapping) -> "RecipeForm":
        """Build from posted form fields.

        Field names follow the page: Recipe.Title, RecipeIngredients[0].Quantity,
        Instructions[0].InstructionText and so on. Rows with an empty
        ingredient name or instruction text are skipped.

        Raises:
            pydantic.ValidationError: If the form is invalid
        """
        ingredients = []
        for i in range(FORM_INGREDIENT_ROWS):
            name = (form.get(f"RecipeIngredients[{i}].IngredientName") or "").strip()
            if not name:
                continue
            ingredients.append({
                "quantity": (form.get(f"RecipeIngredients[{i}].Quantity") or "").strip(),
                "unit": (form.get(f"RecipeIngredients[{i}].Unit") or "").strip(),
                "ingredient_name": name,
            })

        instructions = []
        for i in range(FORM_INSTRUCTION_ROWS):
            text = (form.get(f"Instructions[{i}].InstructionText") or "").strip()
            if text:
                instructions.append(text)

        return cls(
            title=form.get("Recipe.Title") or "",
            description=form.get("Recipe.Description") or "",
            category=form.get("Recipe.Category") or "",
            cook_time=form.get("Recipe.CookTime") or 0,
            difficulty=form.get("Recipe.Difficulty") or "",
            tags=parse_tags(form.get("TagsInput") or ""),
            ingredients=ingredients,
            instructions=instructions,
        )


def parse_tags(raw: str) -> list[str]:
    """Split comma-separated tags, lower-cased and de-duplicated in order.

    Examples:
        >>> parse_tags("Test, automation,, e2e, TEST")
        ['test', 'automation', 'e2e']
    """
    tags = []
    for part in raw.split(","):
        tag = part.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def describe_validation_error(error: ValidationError) -> list[str]:
    """Turn a pydantic error into short messages for the form page."""
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "form"
        messages.append(f"{field}: {item['msg']}")
    return messages


class RecipeService:
    """Service for recipe operations."""

    def __init__(self, connection):
        self.recipe_repo = RecipeRepository(connection)

    async def create_recipe(self, user_id: str, data: RecipeForm) -> str:
        """Store a validated recipe for a user.

        Returns:
            New recipe ID
        """
        recipe_id = await self.recipe_repo.create(
            title=data.title,
            description=data.description,
            category=data.category,
            cook_time=data.cook_time,
            difficulty=data.difficulty,
            user_id=user_id,
            ingredients=[item.model_dump() for item in data.ingredients],
            instructions=data.instructions,
            tags=data.tags,
        )
        logger.info("User %s created recipe %s (%s)", user_id, recipe_id, data.title)
        return recipe_id

    async def get_recipe(self, recipe_id: str) -> dict:
        """Get recipe with ingredients, instructions and tags.

        Raises:
            HTTPException: 404 if the recipe does not exist
        """
        recipe = await self.recipe_repo.get_by_id(recipe_id)
        if not recipe:
            raise HTTPException(status_code=404, detail="Recipe not found")

        recipe["ingredients"] = await self.recipe_repo.get_ingredients(recipe_id)
        recipe["instructions"] = await self.recipe_repo.get_instructions(recipe_id)
        recipe["tags"] = await self.recipe_repo.get_tags(recipe_id)
        return recipe

    async def list_recent(self, limit: int = 20) -> list[dict]:
        """List newest recipes."""
        return await self.recipe_repo.list_recent(limit)

    async def list_for_user(self, user_id: str) -> list[dict]:
        """List recipes owned by a user."""
        return await self.recipe_repo.list_by_user(user_id)
