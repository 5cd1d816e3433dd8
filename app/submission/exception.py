from enum import Enum
from typing import Optional

from app.exception import ErrorCode, RecipeAppException


class SubmissionErrorCode(ErrorCode):
    VALIDATION_ERROR = ("SUBMIT_001", "Title, description, ingredients and instructions are required.")
    CREDENTIAL_REQUEST_FAILED = ("SUBMIT_002", "Failed to get pre-signed URL.")
    UPLOAD_FAILED = ("SUBMIT_003", "Failed to upload file.")
    PERSISTENCE_REJECTED = ("SUBMIT_004", "The server rejected the recipe.")
    TRANSPORT_ERROR = ("SUBMIT_005", "Could not reach the server.")
    SUBMISSION_IN_PROGRESS = ("SUBMIT_006", "A submission is already in progress.")
    UNEXPECTED_ERROR = ("SUBMIT_007", "Something went wrong while submitting the recipe.")


class SubmissionException(RecipeAppException):
    """클라이언트 측 제출 실패. server_message 는 서버 응답의 error 값"""

    def __init__(
        self,
        code: Enum,
        *,
        server_message: Optional[str] = None,
        filename: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(code, status_code=status_code or 0, detail=server_message)
        self.code = code
        self.server_message = server_message
        self.filename = filename
