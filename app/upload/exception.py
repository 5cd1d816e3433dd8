from enum import Enum
from typing import Optional

from app.exception import ErrorCode, RecipeAppException


class UploadErrorCode(ErrorCode):
    INVALID_REQUEST = ("UPLOAD_001", "Missing filename, contentType, or recipeId")
    PRESIGN_FAILED = ("UPLOAD_002", "Could not create pre-signed URL.")


class UploadException(RecipeAppException):
    def __init__(self, code: Enum, *, status_code: int = 400, detail: Optional[str] = None):
        super().__init__(code, status_code=status_code, detail=detail)
        self.code = code
