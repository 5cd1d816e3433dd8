"""
애플리케이션 전역 상수 정의
"""


class StorageConfig:
    """오브젝트 스토리지(S3) 업로드 관련 설정"""
    KEY_PREFIX = "recipes"
    PRESIGNED_URL_EXPIRES_SECONDS = 600  # 10분
    SIGNATURE_VERSION = "s3v4"


class LocaleConfig:
    """지원 로케일 설정"""
    LOCALES = ("en", "es")
    DEFAULT_LOCALE = "en"


class RecipeConfig:
    """레시피 저장 관련 설정"""
    COLLECTION_NAME = "recipes"
    # 인증이 붙기 전까지 사용하는 작성자 식별자
    PLACEHOLDER_AUTHOR_ID = "family-member-placeholder"
    REQUIRED_FIELDS = ("title", "description", "ingredients", "instructions")


class ClientConfig:
    """제출 클라이언트 관련 설정"""
    DEFAULT_TIMEOUT_SECONDS = 30.0
    UPLOAD_ENDPOINT = "/api/s3/upload"
    RECIPES_ENDPOINT = "/api/recipes"
    # 페이지 폼 제출이 호출하는 API 주소 (APP_BASE_URL 로 덮어씀)
    DEFAULT_API_BASE_URL = "http://localhost:8000"
    DEFAULT_CONTENT_TYPE = "application/octet-stream"


# Accept-Language 값 → 지원 로케일 매핑
LANGUAGE_MAPPING = {
    # 영어
    'english': 'en',
    'en-us': 'en',
    'en-gb': 'en',
    'en-au': 'en',
    'en-ca': 'en',

    # 스페인어
    'spanish': 'es',
    'español': 'es',
    'es-es': 'es',
    'es-mx': 'es',
    'es-ar': 'es',
    'es-co': 'es',
    'es-419': 'es',
}
