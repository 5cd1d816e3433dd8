import asyncio
import logging
import re
import uuid

from app.constants import StorageConfig
from app.upload.client import UploadClient
from app.upload.exception import UploadErrorCode, UploadException
from app.upload.schema import UploadRequest, UploadResponse

WHITESPACE_RE = re.compile(r"\s")


class UploadService:
    def __init__(self, client: UploadClient, key_prefix: str = StorageConfig.KEY_PREFIX):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.key_prefix = key_prefix

    def build_key(self, recipe_id: str, filename: str) -> str:
        # recipes/<그룹 id>/<uuid>-<파일명(공백 → _)>
        safe_name = WHITESPACE_RE.sub("_", filename)
        return f"{self.key_prefix}/{recipe_id}/{uuid.uuid4()}-{safe_name}"

    async def issue(self, request: UploadRequest) -> UploadResponse:
        if not request.filename or not request.content_type or not request.recipe_id:
            raise UploadException(UploadErrorCode.INVALID_REQUEST)

        key = self.build_key(request.recipe_id, request.filename)

        try:
            url = await asyncio.to_thread(
                self.client.generate_put_url, key, request.content_type
            )
        except Exception as e:
            self.logger.error(f"pre-signed URL 생성에 실패했습니다. key={key}, error={e}")
            raise UploadException(UploadErrorCode.PRESIGN_FAILED, status_code=500, detail=str(e))

        self.logger.info(f"업로드 자격 증명 발급: key={key}")
        return UploadResponse(url=url, key=key)
