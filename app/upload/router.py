from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from app.container import Container
from app.upload.schema import UploadRequest, UploadResponse
from app.upload.service import UploadService

router = APIRouter(prefix="/api/s3", tags=["upload"])


@router.post("/upload", response_model=UploadResponse)
@inject
async def issue_upload_url(
    request: UploadRequest,
    upload_service: UploadService = Depends(Provide[Container.upload_service]),
):
    return await upload_service.issue(request)
