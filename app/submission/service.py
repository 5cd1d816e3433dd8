import logging
import threading
import uuid
from typing import Callable, List, Optional

from app.i18n.catalog import Translator
from app.submission.client import RecipeApiClient
from app.submission.exception import SubmissionErrorCode, SubmissionException
from app.submission.schema import (
    IN_FLIGHT_STATES,
    RecipeForm,
    SubmissionResult,
    SubmissionState,
)

StateListener = Callable[[SubmissionState, "RecipeSubmitter"], None]


def s3_public_base_url(bucket: str, region: str) -> str:
    return f"https://{bucket}.s3.{region}.amazonaws.com"


class RecipeSubmitter:
    """
    레시피 제출 오케스트레이터 (클라이언트 측)

    IDLE → VALIDATING → UPLOADING → PERSISTING → DONE | FAILED

    파일은 한 개씩 순서대로 자격 증명 요청 → 업로드 하고, 전부 끝난 뒤에만
    레코드 저장을 호출한다. 중간 실패 시 앞서 올라간 파일은 그대로 남는다(정리하지 않음).
    자동 재시도는 없다.
    """

    def __init__(
        self,
        client: RecipeApiClient,
        public_base_url: str,
        translator: Translator,
        form: Optional[RecipeForm] = None,
        listener: Optional[StateListener] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.public_base_url = public_base_url.rstrip("/")
        self.translator = translator
        self.form = form or RecipeForm.initial(translator.locale)
        self.listener = listener

        self.state = SubmissionState.IDLE
        self.progress = (0, 0)
        self.message: Optional[str] = None
        self.failure: Optional[SubmissionErrorCode] = None
        self.history: List[SubmissionState] = [SubmissionState.IDLE]
        self.__lock = threading.Lock()

    def __transition(self, state: SubmissionState, message: Optional[str] = None) -> None:
        self.state = state
        self.message = message
        self.history.append(state)
        self.logger.info(f"제출 상태 변경: {state.value} progress={self.progress}")
        if self.listener:
            self.listener(state, self)

    def __fail(
        self,
        code: SubmissionErrorCode,
        message: str,
        image_urls: Optional[List[str]] = None,
        orphaned_keys: Optional[List[str]] = None,
    ) -> SubmissionResult:
        self.failure = code
        self.__transition(SubmissionState.FAILED, message)
        return SubmissionResult(
            state=self.state,
            message=message,
            failure=code,
            image_urls=list(image_urls or []),
            orphaned_keys=list(orphaned_keys or []),
            progress=self.progress,
        )

    def __failure_message(self, e: SubmissionException) -> str:
        forms = self.translator.namespace("Forms")
        if e.code == SubmissionErrorCode.TRANSPORT_ERROR:
            return forms("networkError")
        if e.code == SubmissionErrorCode.UPLOAD_FAILED:
            return forms("uploadError", filename=e.filename or "")
        if e.code == SubmissionErrorCode.CREDENTIAL_REQUEST_FAILED:
            return e.server_message or forms("credentialError")
        return e.server_message or forms("submissionError")

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def __in_progress(self) -> SubmissionResult:
        return SubmissionResult(
            state=self.state,
            message=self.translator.t("Forms", "inProgress"),
            failure=SubmissionErrorCode.SUBMISSION_IN_PROGRESS,
            progress=self.progress,
        )

    def submit(self, form: Optional[RecipeForm] = None) -> SubmissionResult:
        # 진행 중인 제출이 있으면 거절 (네트워크 호출 없음). 다른 스레드에서 동시에 불러도 하나만 통과
        if not self.__lock.acquire(blocking=False):
            return self.__in_progress()
        try:
            if self.state in IN_FLIGHT_STATES:
                return self.__in_progress()

            if form is not None:
                self.form = form
            self.failure = None
            self.progress = (0, len(self.form.image_files))

            try:
                return self.__run()
            except Exception as e:
                # 예상하지 못한 오류도 진행 상태에 머물지 않고 FAILED 로 끝낸다
                self.logger.exception(f"제출 중 예상하지 못한 오류가 발생했습니다. state={self.state.value}, error={e}")
                return self.__fail(
                    SubmissionErrorCode.UNEXPECTED_ERROR,
                    self.translator.t("Forms", "submissionError"),
                )
        finally:
            self.__lock.release()

    def __run(self) -> SubmissionResult:
        # 1) 사전 검증
        self.__transition(SubmissionState.VALIDATING)
        if (
            not self.form.title.strip()
            or not self.form.description.strip()
            or not self.form.filled_ingredients()
            or not self.form.filled_instructions()
        ):
            return self.__fail(
                SubmissionErrorCode.VALIDATION_ERROR,
                self.translator.t("Forms", "errorMessage"),
            )

        # 2) 파일 업로드 (순차)
        group_id = str(uuid.uuid4())
        uploaded_keys: List[str] = []
        image_urls: List[str] = []
        files = list(self.form.image_files)

        if files:
            self.__transition(SubmissionState.UPLOADING, self.translator.t("Forms", "uploadingMessage"))
            for file in files:
                try:
                    credential = self.client.request_upload_credential(
                        file.filename, file.content_type, group_id
                    )
                    self.client.upload_file(credential.url, file)
                except SubmissionException as e:
                    self.logger.error(
                        f"업로드 단계 실패: code={e.error_code}, file={file.filename}, "
                        f"orphaned={len(uploaded_keys)}"
                    )
                    return self.__fail(e.code, self.__failure_message(e), image_urls, uploaded_keys)

                uploaded_keys.append(credential.key)
                image_urls.append(self.public_url(credential.key))
                self.progress = (len(uploaded_keys), len(files))

        # 3) 레코드 저장
        self.__transition(SubmissionState.PERSISTING, self.translator.t("Forms", "savingMessage"))
        try:
            recipe = self.client.create_recipe(self.form.to_payload(image_urls))
        except SubmissionException as e:
            return self.__fail(e.code, self.__failure_message(e), image_urls, uploaded_keys)

        # 4) 성공 → 폼 초기화
        message = self.translator.t("AddRecipePage", "successMessage")
        self.form = RecipeForm.initial(self.translator.locale)
        self.__transition(SubmissionState.DONE, message)
        self.logger.info(f"레시피 제출 완료: id={recipe.get('_id')}, images={len(image_urls)}")
        return SubmissionResult(
            state=self.state,
            message=message,
            recipe=recipe,
            image_urls=image_urls,
            progress=self.progress,
        )
