from enum import Enum
from typing import Any, Optional


class BusinessException(Exception):
    def __init__(self, code: Enum, *, status_code: int = 400, detail: Optional[Any] = None):
        super().__init__(getattr(code, "message", str(code)))
        self.code = code
        self.status_code = status_code
        self.detail = detail

    @property
    def error_code(self) -> str:
        return getattr(self.code, "code", getattr(self.code, "name", "UNKNOWN"))

    @property
    def error_message(self) -> str:
        return getattr(self.code, "message", str(self.code))

    def to_dict(self) -> dict:
        body = {
            "success": False,
            "error": self.error_message,
            "error_code": self.error_code,
        }
        if self.detail is not None:
            body["details"] = self.detail
        return body


class RecipeAppException(BusinessException):
    def __init__(self, code: Enum, *, status_code: int = 400, detail: Optional[Any] = None):
        super().__init__(code, status_code=status_code, detail=detail)


class ErrorCode(Enum):
    """(code, message) 쌍을 갖는 에러 코드 베이스"""

    def __init__(self, code: str, message: str):
        self._code = code
        self._message = message

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message
