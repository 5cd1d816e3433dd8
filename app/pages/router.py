import asyncio
import logging
from itertools import zip_longest
from typing import Annotated, List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, Form, Header, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from app.constants import ClientConfig
from app.container import Container
from app.i18n.catalog import Translator
from app.pages.renderer import PageRenderer
from app.recipe.schema import Ingredient, LanguageType
from app.recipe.service import RecipeService
from app.submission.client import RecipeApiClient
from app.submission.schema import PendingFile, RecipeForm
from app.submission.service import RecipeSubmitter
from app.utils.language import negotiate_locale

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

# 저장하지 않고 폼 행만 바꾸는 버튼 (action 값: "<종류>" 또는 "<종류>:<행 번호>")
ROW_ACTIONS = ("add-ingredient", "remove-ingredient", "add-instruction", "remove-instruction")


def _blank_ingredient() -> Ingredient:
    return Ingredient(name="", quantity="", unit="")


def _parse_servings(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw.isdigit() or int(raw) < 1:
        return None
    return int(raw)


def _apply_row_action(form: RecipeForm, action: str) -> bool:
    """행 추가/삭제 버튼이면 폼만 고치고 True 를 돌려준다"""
    kind, _, index = action.partition(":")
    if kind not in ROW_ACTIONS:
        return False

    if kind == "add-ingredient":
        form.ingredients.append(_blank_ingredient())
    elif kind == "add-instruction":
        form.instructions.append("")
    elif index.isdigit():
        rows = form.ingredients if kind == "remove-ingredient" else form.instructions
        # 마지막 한 행은 남겨둔다
        if len(rows) > 1 and int(index) < len(rows):
            del rows[int(index)]
    return True


def _render_add_recipe(
    renderer: PageRenderer,
    translator: Translator,
    form: RecipeForm,
    message: Optional[str] = None,
    ok: bool = False,
    status_code: int = 200,
) -> HTMLResponse:
    # 빈 목록이면 입력할 행 하나는 보여준다
    shown = form.model_copy(
        update={
            "ingredients": form.ingredients or [_blank_ingredient()],
            "instructions": form.instructions or [""],
        }
    )
    html = renderer.render(
        "add_recipe.html",
        translator,
        path="/add-recipe",
        form=shown,
        message=message,
        ok=ok,
    )
    return HTMLResponse(html, status_code=status_code)


@router.get("/", include_in_schema=False)
async def index(
    accept_language: Annotated[str | None, Header(alias="Accept-Language")] = None,
):
    return RedirectResponse(url=f"/{negotiate_locale(accept_language)}", status_code=307)


@router.get("/{locale}", response_class=HTMLResponse)
@inject
async def home(
    locale: str,
    q: Optional[str] = None,
    renderer: PageRenderer = Depends(Provide[Container.page_renderer]),
    recipe_service: RecipeService = Depends(Provide[Container.recipe_service]),
):
    translator = renderer.translator(locale)

    # 전체 목록을 받아서 검색은 여기서 (API 는 필터링하지 않음)
    recipes = await recipe_service.list_all()
    results = RecipeService.search(recipes, q)

    return HTMLResponse(
        renderer.render(
            "home.html",
            translator,
            path="",
            recipes=results,
            query=(q or "").strip(),
        )
    )


@router.get("/{locale}/recipes/{recipe_id}", response_class=HTMLResponse)
@inject
async def recipe_detail(
    locale: str,
    recipe_id: str,
    renderer: PageRenderer = Depends(Provide[Container.page_renderer]),
    recipe_service: RecipeService = Depends(Provide[Container.recipe_service]),
):
    translator = renderer.translator(locale)
    recipe = await recipe_service.get(recipe_id)

    return HTMLResponse(
        renderer.render(
            "recipe_detail.html",
            translator,
            path=f"/recipes/{recipe_id}",
            recipe=recipe,
        )
    )


@router.get("/{locale}/add-recipe", response_class=HTMLResponse)
@inject
async def add_recipe(
    locale: str,
    renderer: PageRenderer = Depends(Provide[Container.page_renderer]),
):
    translator = renderer.translator(locale)
    return _render_add_recipe(renderer, translator, RecipeForm.initial(locale))


@router.post("/{locale}/add-recipe", response_class=HTMLResponse)
@inject
async def submit_recipe(
    locale: str,
    title: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    ingredient_names: Annotated[List[str], Form(alias="ingredientName")] = [],
    ingredient_quantities: Annotated[List[str], Form(alias="ingredientQuantity")] = [],
    ingredient_units: Annotated[List[str], Form(alias="ingredientUnit")] = [],
    instructions: Annotated[List[str], Form(alias="instruction")] = [],
    tags: Annotated[str, Form()] = "",
    prep_time: Annotated[str, Form(alias="prepTime")] = "",
    cook_time: Annotated[str, Form(alias="cookTime")] = "",
    servings: Annotated[str, Form()] = "",
    notes: Annotated[str, Form()] = "",
    images: Annotated[List[UploadFile], File()] = [],
    action: Annotated[str, Form()] = "submit",
    renderer: PageRenderer = Depends(Provide[Container.page_renderer]),
    api_client: RecipeApiClient = Depends(Provide[Container.recipe_api_client]),
    public_base_url: str = Depends(Provide[Container.storage_public_base_url]),
):
    translator = renderer.translator(locale)

    form = RecipeForm(
        title=title,
        description=description,
        ingredients=[
            Ingredient(name=name, quantity=quantity, unit=unit.strip() or None)
            for name, quantity, unit in zip_longest(
                ingredient_names, ingredient_quantities, ingredient_units, fillvalue=""
            )
        ],
        instructions=list(instructions),
        tags=[tag.strip() for tag in tags.split(",") if tag.strip()],
        prep_time=prep_time.strip() or None,
        cook_time=cook_time.strip() or None,
        servings=_parse_servings(servings),
        language=LanguageType(locale),
        notes=notes.strip() or None,
        # 파일을 고르지 않으면 브라우저가 이름 없는 빈 파트를 보낸다
        image_files=[
            PendingFile(
                filename=image.filename,
                content_type=image.content_type or ClientConfig.DEFAULT_CONTENT_TYPE,
                data=await image.read(),
            )
            for image in images
            if image.filename
        ],
    )

    if _apply_row_action(form, action):
        return _render_add_recipe(renderer, translator, form)

    # requests 기반 동기 클라이언트라 이벤트 루프 밖에서 돌린다 (같은 서버의 API 를 호출함)
    submitter = RecipeSubmitter(api_client, public_base_url, translator, form=form)
    result = await asyncio.to_thread(submitter.submit)

    if not result.ok:
        logger.info(
            f"레시피 폼 제출 실패: locale={locale}, failure={result.failure.code}, "
            f"orphaned={result.orphaned_keys}"
        )
        return _render_add_recipe(renderer, translator, submitter.form, result.message, status_code=400)

    # 성공 시 submitter 가 폼을 초기 상태로 되돌려 놓는다
    return _render_add_recipe(renderer, translator, submitter.form, result.message, ok=True)
