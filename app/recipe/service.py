import logging
from datetime import datetime, timezone
from typing import List, Optional

from app.constants import RecipeConfig
from app.recipe.exception import MissingFieldsException, RecipeErrorCode, RecipeException
from app.recipe.repository import RecipeRepository
from app.recipe.schema import Recipe, RecipeCreateRequest


class RecipeService:
    def __init__(self, repository: RecipeRepository, author_id: str = RecipeConfig.PLACEHOLDER_AUTHOR_ID):
        self.logger = logging.getLogger(__name__)
        self.repository = repository
        self.author_id = author_id

    def __missing_fields(self, request: RecipeCreateRequest) -> List[str]:
        # 존재 여부 + 빈 리스트/빈 문자열도 누락으로 본다
        missing: List[str] = []
        for field in RecipeConfig.REQUIRED_FIELDS:
            if not getattr(request, field):
                missing.append(field)
        return missing

    async def create(self, request: RecipeCreateRequest) -> Recipe:
        missing = self.__missing_fields(request)
        if missing:
            self.logger.info(f"필수 필드가 누락되었습니다. fields={missing}")
            raise MissingFieldsException(missing)

        now = datetime.now(timezone.utc)
        doc = request.model_dump(by_alias=True, exclude_none=True)
        doc.update(
            {
                "authorId": self.author_id,
                "language": request.language.value,
                "createdAt": now,
                "updatedAt": now,
            }
        )

        try:
            saved = await self.repository.insert(doc)
        except Exception as e:
            self.logger.error(f"레시피 저장 중 오류가 발생했습니다. error={e}")
            raise RecipeException(RecipeErrorCode.RECIPE_SAVE_FAILED, status_code=500, detail=str(e))

        recipe = Recipe.from_document(saved)
        self.logger.info(f"레시피 저장 완료: id={recipe.id}, images={len(recipe.image_urls)}")
        return recipe

    async def list_all(self) -> List[Recipe]:
        # 저장된 문서가 스키마와 맞지 않는 경우도 조회 실패로 본다
        try:
            docs = await self.repository.find_all()
            return [Recipe.from_document(doc) for doc in docs]
        except Exception as e:
            self.logger.error(f"레시피 목록 조회 중 오류가 발생했습니다. error={e}")
            raise RecipeException(RecipeErrorCode.RECIPE_FETCH_FAILED, status_code=500, detail=str(e))

    async def get(self, recipe_id: str) -> Recipe:
        try:
            doc: Optional[dict] = await self.repository.find_by_id(recipe_id)
            recipe = Recipe.from_document(doc) if doc is not None else None
        except Exception as e:
            self.logger.error(f"레시피 조회 중 오류가 발생했습니다. id={recipe_id}, error={e}")
            raise RecipeException(RecipeErrorCode.RECIPE_FETCH_FAILED, status_code=500, detail=str(e))

        if recipe is None:
            raise RecipeException(RecipeErrorCode.RECIPE_NOT_FOUND, status_code=404)
        return recipe

    @staticmethod
    def search(recipes: List[Recipe], term: Optional[str]) -> List[Recipe]:
        """제목/설명/태그/재료명에 대한 대소문자 무시 부분일치 검색"""
        needle = (term or "").strip().lower()
        if not needle:
            return list(recipes)

        def matches(recipe: Recipe) -> bool:
            if needle in recipe.title.lower() or needle in recipe.description.lower():
                return True
            if any(needle in tag.lower() for tag in recipe.tags or []):
                return True
            return any(needle in ing.name.lower() for ing in recipe.ingredients)

        return [r for r in recipes if matches(r)]
