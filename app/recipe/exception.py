from enum import Enum
from typing import List, Optional

from app.exception import ErrorCode, RecipeAppException


class RecipeErrorCode(ErrorCode):
    MISSING_FIELDS = ("RECIPE_001", "Missing required fields")
    RECIPE_SAVE_FAILED = ("RECIPE_002", "Server Error: Could not save recipe.")
    RECIPE_FETCH_FAILED = ("RECIPE_003", "Server Error: Could not fetch recipes.")
    RECIPE_NOT_FOUND = ("RECIPE_004", "Recipe not found.")


class RecipeException(RecipeAppException):
    def __init__(self, code: Enum, *, status_code: int = 400, detail: Optional[str] = None):
        super().__init__(code, status_code=status_code, detail=detail)
        self.code = code


class MissingFieldsException(RecipeException):
    def __init__(self, fields: List[str]):
        super().__init__(RecipeErrorCode.MISSING_FIELDS, status_code=400)
        self.fields = fields

    @property
    def error_message(self) -> str:
        return f"{self.code.message}: {', '.join(self.fields)}"

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["fields"] = self.fields
        return body
