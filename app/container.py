from dotenv import load_dotenv

load_dotenv()

import boto3
from botocore.config import Config
from dependency_injector import containers, providers

from app.constants import ClientConfig, RecipeConfig, StorageConfig
from app.db.connection import MongoConnection
from app.i18n.catalog import MessageCatalog
from app.pages.renderer import PageRenderer
from app.recipe.repository import RecipeRepository
from app.recipe.service import RecipeService
from app.submission.client import RecipeApiClient
from app.submission.service import s3_public_base_url
from app.upload.client import UploadClient
from app.upload.service import UploadService


class Container(containers.DeclarativeContainer):
    """의존성 주입 컨테이너"""

    # Configuration
    wiring_config = containers.WiringConfiguration(
        packages=[
            "app.recipe",
            "app.upload",
            "app.pages",
        ]
    )
    config = providers.Configuration()
    config.mongo.uri.from_env("MONGODB_URI", default="mongodb://localhost:27017")
    config.mongo.db.from_env("MONGODB_DB", default="recetas")

    config.aws.access_key.from_env("AWS_ACCESS_KEY_ID")
    config.aws.secret_key.from_env("AWS_SECRET_ACCESS_KEY")
    config.aws.region.from_env("AWS_S3_REGION", default="us-east-1")
    config.aws.bucket.from_env("AWS_S3_BUCKET_NAME")

    config.app.base_url.from_env("APP_BASE_URL", default=ClientConfig.DEFAULT_API_BASE_URL)

    # Store
    mongo_connection = providers.Singleton(
        MongoConnection,
        uri=config.mongo.uri,
        db_name=config.mongo.db,
    )

    # Recipe
    recipe_repository = providers.Singleton(
        RecipeRepository,
        connection=mongo_connection,
        collection_name=RecipeConfig.COLLECTION_NAME,
    )
    recipe_service = providers.Factory(
        RecipeService,
        repository=recipe_repository,
    )

    # Upload
    s3_client = providers.Singleton(
        boto3.client,
        "s3",
        region_name=config.aws.region,
        aws_access_key_id=config.aws.access_key,
        aws_secret_access_key=config.aws.secret_key,
        config=providers.Object(Config(signature_version=StorageConfig.SIGNATURE_VERSION)),
    )
    upload_client = providers.Singleton(
        UploadClient,
        s3_client=s3_client,
        bucket=config.aws.bucket,
        expires_in=StorageConfig.PRESIGNED_URL_EXPIRES_SECONDS,
    )
    upload_service = providers.Factory(
        UploadService,
        client=upload_client,
    )

    # Submission (add-recipe 페이지 폼 → 같은 API 로 업로드/저장)
    recipe_api_client = providers.Singleton(
        RecipeApiClient,
        base_url=config.app.base_url,
        timeout=ClientConfig.DEFAULT_TIMEOUT_SECONDS,
    )
    storage_public_base_url = providers.Callable(
        s3_public_base_url,
        bucket=config.aws.bucket,
        region=config.aws.region,
    )

    # Pages
    message_catalog = providers.Singleton(MessageCatalog)
    page_renderer = providers.Singleton(
        PageRenderer,
        catalog=message_catalog,
    )


# 전역 컨테이너 인스턴스
container = Container()
