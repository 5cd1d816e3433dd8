from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from app.container import Container
from app.recipe.schema import RecipeCreateRequest, RecipeListResponse, RecipeResponse
from app.recipe.service import RecipeService

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("", response_model=RecipeListResponse, response_model_exclude_none=True)
@inject
async def list_recipes(
    recipe_service: RecipeService = Depends(Provide[Container.recipe_service]),
):
    return RecipeListResponse(data=await recipe_service.list_all())


@router.post(
    "",
    response_model=RecipeResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_recipe(
    request: RecipeCreateRequest,
    recipe_service: RecipeService = Depends(Provide[Container.recipe_service]),
):
    return RecipeResponse(data=await recipe_service.create(request))


@router.get("/{recipe_id}", response_model=RecipeResponse, response_model_exclude_none=True)
@inject
async def get_recipe(
    recipe_id: str,
    recipe_service: RecipeService = Depends(Provide[Container.recipe_service]),
):
    return RecipeResponse(data=await recipe_service.get(recipe_id))
