from enum import Enum

from app.exception import ErrorCode, RecipeAppException


class LocaleErrorCode(ErrorCode):
    LOCALE_NOT_FOUND = ("LOCALE_001", "Not Found")
    MESSAGES_INVALID = ("LOCALE_002", "Not Found")


class LocaleException(RecipeAppException):
    def __init__(self, code: Enum, locale: str):
        super().__init__(code, status_code=404)
        self.code = code
        self.locale = locale
