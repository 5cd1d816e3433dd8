from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from dependency_injector import providers

from app.container import container
from app.submission.client import RecipeApiClient


class FakeRecipeRepository:
    """메모리 기반 레시피 저장소 (motor 컬렉션 대체)"""

    def __init__(self):
        self.docs: List[Dict[str, Any]] = []

    async def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        saved = {**doc, "_id": ObjectId()}
        self.docs.append(saved)
        return saved

    async def find_all(self) -> List[Dict[str, Any]]:
        return sorted(self.docs, key=lambda d: (d["updatedAt"], d["_id"]), reverse=True)

    async def find_by_id(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        if not ObjectId.is_valid(recipe_id):
            return None
        return next((d for d in self.docs if d["_id"] == ObjectId(recipe_id)), None)

    async def ensure_indexes(self) -> None:
        return None


class FailingRecipeRepository(FakeRecipeRepository):
    async def insert(self, doc):
        raise RuntimeError("connection refused")

    async def find_all(self):
        raise RuntimeError("connection refused")


class FakeUploadClient:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[tuple] = []

    def generate_put_url(self, key: str, content_type: str) -> str:
        self.calls.append((key, content_type))
        if self.fail:
            raise RuntimeError("signer unavailable")
        return f"https://family-recipes.s3.amazonaws.com/{key}?X-Amz-Expires=600&X-Amz-Signature=fake"


@pytest.fixture
def recipe_repository():
    repo = FakeRecipeRepository()
    with container.recipe_repository.override(providers.Object(repo)):
        yield repo


@pytest.fixture
def failing_recipe_repository():
    repo = FailingRecipeRepository()
    with container.recipe_repository.override(providers.Object(repo)):
        yield repo


@pytest.fixture
def upload_client():
    client = FakeUploadClient()
    with container.upload_client.override(providers.Object(client)):
        yield client


@pytest.fixture
def failing_upload_client():
    client = FakeUploadClient(fail=True)
    with container.upload_client.override(providers.Object(client)):
        yield client


PUBLIC_BASE_URL = "https://family-recipes.s3.us-east-1.amazonaws.com"


def make_response(status_code: int, body: Optional[Dict[str, Any]] = None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body if body is not None else {}
    return resp


class FakeApiSession:
    """RecipeApiClient 가 쓰는 requests.Session 대체 (자격 증명 API / 스토리지 / 레시피 API)"""

    def __init__(self):
        self.calls: List[tuple] = []
        self.keys: List[str] = []
        self.payloads: List[Dict[str, Any]] = []
        self.fail_uploads = False

    def post(self, url, json=None, timeout=None):
        if url.endswith("/api/s3/upload"):
            self.calls.append(("credential", json["filename"], json["contentType"]))
            key = f"recipes/{json['recipeId']}/{len(self.keys)}-{json['filename'].replace(' ', '_')}"
            self.keys.append(key)
            return make_response(200, {"success": True, "url": f"https://signed.test/{key}?sig=1", "key": key})

        self.calls.append(("persist", json["title"]))
        self.payloads.append(json)
        return make_response(201, {"success": True, "data": {"_id": "65f0c0ffee", **json}})

    def put(self, url, data=None, headers=None, timeout=None):
        self.calls.append(("upload", headers["Content-Type"], data))
        return make_response(403 if self.fail_uploads else 200)


@pytest.fixture
def api_session():
    session = FakeApiSession()
    client = RecipeApiClient("http://recipes.test", session=session)
    with container.recipe_api_client.override(providers.Object(client)), \
            container.storage_public_base_url.override(providers.Object(PUBLIC_BASE_URL)):
        yield session
