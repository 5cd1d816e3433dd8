from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UploadRequest(BaseModel):
    """업로드 자격 증명 요청 (필드 존재 여부는 서비스에서 검사)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    filename: Optional[str] = Field(None, description="원본 파일명")
    content_type: Optional[str] = Field(None, description="서명에 사용할 Content-Type")
    recipe_id: Optional[str] = Field(None, description="제출 단위 그룹 식별자")


class UploadResponse(BaseModel):
    """업로드 자격 증명 응답"""
    success: bool = True
    url: str = Field(..., description="PUT 1회용 pre-signed URL")
    key: str = Field(..., description="최종 스토리지 키")
