"""Recipe pages: homepage, add recipe form and recipe details."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from ..application.services import FavoriteService, RecipeForm, RecipeService
from ..application.services.recipe_service import describe_validation_error
from ..config import (
    FORM_INGREDIENT_ROWS, FORM_INSTRUCTION_ROWS,
    RECIPE_CATEGORIES, RECIPE_DIFFICULTIES, TEMPLATES_DIR
)
from ..dependencies import (
    get_csrf_token, get_favorite_service, get_recipe_service, get_root_path,
    require_user, template_globals
)

router = APIRouter()
templates = Jinja2Templates(directory=TEMPLATES_DIR, context_processors=[template_globals])


def render_recipe_form(request: Request, values: dict | None = None, errors: list[str] | None = None,
                       status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "add_recipe.html",
        {
            "user": request.state.user,
            "csrf_token": get_csrf_token(request),
            "categories": RECIPE_CATEGORIES,
            "difficulties": RECIPE_DIFFICULTIES,
            "ingredient_rows": range(FORM_INGREDIENT_ROWS),
            "instruction_rows": range(FORM_INSTRUCTION_ROWS),
            "values": values or {},
            "errors": errors or [],
        },
        status_code=status_code
    )


@router.get("/")
async def homepage(
    request: Request,
    recipe_service: RecipeService = Depends(get_recipe_service),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    """Show newest recipes."""
    user = require_user(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "user": user,
            "csrf_token": get_csrf_token(request),
            "recipes": await recipe_service.list_recent(),
            "favorite_ids": await favorite_service.get_favorite_ids(user["id"]),
            "empty_message": "No recipes yet.",
        }
    )


@router.get("/addrecipe")
async def add_recipe_page(request: Request):
    """Show the add recipe form."""
    require_user(request)
    return render_recipe_form(request)


@router.post("/addrecipe")
async def add_recipe(request: Request, recipe_service: RecipeService = Depends(get_recipe_service)):
    """Create a recipe from the posted form."""
    user = require_user(request)
    form = await request.form()

    try:
        data = RecipeForm.from_form(form)
    except ValidationError as e:
        return render_recipe_form(
            request,
            values=dict(form),
            errors=describe_validation_error(e),
            status_code=400
        )

    recipe_id = await recipe_service.create_recipe(user["id"], data)
    return RedirectResponse(url=f"{get_root_path(request)}/recipes/{recipe_id}", status_code=303)


@router.get("/recipes/{recipe_id}")
async def recipe_detail(
    request: Request,
    recipe_id: str,
    recipe_service: RecipeService = Depends(get_recipe_service),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    """Show a single recipe."""
    user = require_user(request)
    recipe = await recipe_service.get_recipe(recipe_id)
    return templates.TemplateResponse(
        request,
        "recipe_detail.html",
        {
            "user": user,
            "csrf_token": get_csrf_token(request),
            "recipe": recipe,
            "is_favorite": await favorite_service.is_recipe_favorited(user["id"], recipe_id),
        }
    )
