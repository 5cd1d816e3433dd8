from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class LanguageType(str, Enum):
    EN = "en"
    ES = "es"


class CamelModel(BaseModel):
    """wire/저장 필드명은 camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Ingredient(CamelModel):
    name: str = Field(..., description="재료명")
    quantity: str = Field(..., description="수량 (자유 텍스트, 파싱하지 않음)")
    unit: Optional[str] = Field(None, description="단위")


class RecipeCreateRequest(CamelModel):
    """레시피 생성 요청 (필수 필드 존재 여부는 서비스에서 검사)"""
    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[Ingredient]] = None
    instructions: Optional[List[str]] = None
    image_urls: List[str] = Field(default_factory=list)
    tags: Optional[List[str]] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[int] = Field(None, ge=1)
    language: LanguageType = LanguageType.EN
    notes: Optional[str] = None

    @field_validator("title", "description", "notes", "prep_time", "cook_time")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [tag.strip() for tag in v if tag and tag.strip()]


class Recipe(CamelModel):
    id: str = Field(..., alias="_id", description="스토어가 부여한 식별자")
    title: str
    description: str
    ingredients: List[Ingredient]
    instructions: List[str]
    image_urls: List[str] = Field(default_factory=list)
    tags: Optional[List[str]] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[int] = None
    author_id: str
    language: LanguageType
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        # ObjectId → str
        return str(v)

    @classmethod
    def from_document(cls, doc: dict) -> "Recipe":
        return cls.model_validate(doc)


class RecipeResponse(BaseModel):
    success: bool = True
    data: Recipe


class RecipeListResponse(BaseModel):
    success: bool = True
    data: List[Recipe]
