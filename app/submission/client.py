import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from app.constants import ClientConfig
from app.submission.exception import SubmissionErrorCode, SubmissionException
from app.submission.schema import PendingFile
from app.upload.schema import UploadResponse


def _is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300


class RecipeApiClient:
    """레시피 API 와 스토리지에 직접 붙는 HTTP 클라이언트"""

    def __init__(
        self,
        base_url: str,
        timeout: float = ClientConfig.DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def __url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def __json(self, resp: requests.Response) -> Dict[str, Any]:
        try:
            body = resp.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def request_upload_credential(self, filename: str, content_type: str, group_id: str) -> UploadResponse:
        try:
            resp = self.session.post(
                self.__url(ClientConfig.UPLOAD_ENDPOINT),
                json={"filename": filename, "contentType": content_type, "recipeId": group_id},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"업로드 자격 증명 요청 중 네트워크 오류가 발생했습니다. error={e}")
            raise SubmissionException(SubmissionErrorCode.TRANSPORT_ERROR, server_message=None)

        body = self.__json(resp)
        if not _is_success(resp):
            self.logger.error(f"업로드 자격 증명 요청 실패: status={resp.status_code}, file={filename}")
            raise SubmissionException(
                SubmissionErrorCode.CREDENTIAL_REQUEST_FAILED,
                server_message=body.get("error"),
                status_code=resp.status_code,
            )

        try:
            return UploadResponse.model_validate(body)
        except ValidationError:
            self.logger.error(f"업로드 자격 증명 응답 형식이 올바르지 않습니다. body={body}")
            raise SubmissionException(
                SubmissionErrorCode.CREDENTIAL_REQUEST_FAILED,
                status_code=resp.status_code,
            )

    def upload_file(self, url: str, file: PendingFile) -> None:
        try:
            resp = self.session.put(
                url,
                data=file.data,
                headers={"Content-Type": file.content_type},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"파일 업로드 중 네트워크 오류가 발생했습니다. file={file.filename}, error={e}")
            raise SubmissionException(SubmissionErrorCode.TRANSPORT_ERROR, filename=file.filename)

        if not _is_success(resp):
            self.logger.error(f"파일 업로드 실패: status={resp.status_code}, file={file.filename}")
            raise SubmissionException(
                SubmissionErrorCode.UPLOAD_FAILED,
                filename=file.filename,
                status_code=resp.status_code,
            )

    def create_recipe(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self.session.post(
                self.__url(ClientConfig.RECIPES_ENDPOINT),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"레시피 저장 요청 중 네트워크 오류가 발생했습니다. error={e}")
            raise SubmissionException(SubmissionErrorCode.TRANSPORT_ERROR)

        body = self.__json(resp)
        if not _is_success(resp) or not body.get("success"):
            self.logger.error(f"레시피 저장 거부: status={resp.status_code}, error={body.get('error')}")
            raise SubmissionException(
                SubmissionErrorCode.PERSISTENCE_REJECTED,
                server_message=body.get("error"),
                status_code=resp.status_code,
            )

        return body.get("data") or {}
