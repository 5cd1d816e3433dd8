import logging

from botocore.exceptions import BotoCoreError, ClientError

from app.constants import StorageConfig


class UploadClient:
    def __init__(self, s3_client, bucket: str, expires_in: int = StorageConfig.PRESIGNED_URL_EXPIRES_SECONDS):
        self.logger = logging.getLogger(__name__)
        self.s3_client = s3_client
        self.bucket = bucket
        self.expires_in = expires_in

    def generate_put_url(self, key: str, content_type: str) -> str:
        """key 에 대한 PUT 1회를 허용하는 pre-signed URL 생성 (네트워크 호출 없음)"""
        if not self.bucket:
            raise ValueError("AWS_S3_BUCKET_NAME is not configured")

        try:
            return self.s3_client.generate_presigned_url(
                ClientMethod="put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": key,
                    "ContentType": content_type,
                },
                ExpiresIn=self.expires_in,
                HttpMethod="PUT",
            )
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"pre-signed URL 서명 중 오류가 발생했습니다. key={key}, error={e}")
            raise
