from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from app.constants import ClientConfig
from app.recipe.schema import CamelModel, Ingredient, LanguageType
from app.submission.exception import SubmissionErrorCode


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


IN_FLIGHT_STATES = (SubmissionState.VALIDATING, SubmissionState.UPLOADING, SubmissionState.PERSISTING)


class PendingFile(BaseModel):
    """업로드 대기 파일"""
    filename: str
    content_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path, content_type: Optional[str] = None) -> "PendingFile":
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content_type=content_type or guessed or ClientConfig.DEFAULT_CONTENT_TYPE,
            data=path.read_bytes(),
        )


class RecipeForm(CamelModel):
    """제출 폼 상태 (한 번의 제출 시도 범위)"""
    title: str = ""
    description: str = ""
    ingredients: List[Ingredient] = Field(
        default_factory=lambda: [Ingredient(name="", quantity="", unit="")]
    )
    instructions: List[str] = Field(default_factory=lambda: [""])
    tags: List[str] = Field(default_factory=list)
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[int] = None
    language: LanguageType = LanguageType.EN
    notes: Optional[str] = None
    image_files: List[PendingFile] = Field(default_factory=list)

    @classmethod
    def initial(cls, language: str = LanguageType.EN.value) -> "RecipeForm":
        return cls(language=LanguageType(language))

    def filled_ingredients(self) -> List[Ingredient]:
        return [ing for ing in self.ingredients if ing.name.strip()]

    def filled_instructions(self) -> List[str]:
        return [step for step in self.instructions if step.strip()]

    def to_payload(self, image_urls: List[str]) -> Dict[str, Any]:
        # 파일 핸들은 빼고 업로드된 URL 을 채운다
        payload = self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"image_files", "ingredients", "instructions"},
            exclude_none=True,
        )
        payload["ingredients"] = [
            ing.model_dump(mode="json", by_alias=True, exclude_none=True)
            for ing in self.filled_ingredients()
        ]
        payload["instructions"] = self.filled_instructions()
        payload["imageUrls"] = list(image_urls)
        return payload


@dataclass
class SubmissionResult:
    state: SubmissionState
    message: Optional[str] = None
    failure: Optional[SubmissionErrorCode] = None
    recipe: Optional[Dict[str, Any]] = None
    image_urls: List[str] = field(default_factory=list)
    # 실패 시 어떤 레코드에도 연결되지 않은 채 남은 업로드 키
    orphaned_keys: List[str] = field(default_factory=list)
    progress: Tuple[int, int] = (0, 0)

    @property
    def ok(self) -> bool:
        return self.state == SubmissionState.DONE
