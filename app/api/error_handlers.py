"""API 에러 처리 공통 함수들"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exception import BusinessException

logger = logging.getLogger(__name__)


async def business_exception_handler(request: Request, exc: BusinessException):
    logger.info("business_exception", extra={"path": str(request.url), "error_code": exc.error_code})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 요청 본문 형식 오류도 400 + 공통 에러 바디로
    logger.info("request_validation_error", extra={"path": str(request.url)})
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request body.",
            "error_code": "REQUEST_001",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    # 스택 트레이스는 로그에만 남긴다
    logger.exception(f"처리되지 않은 오류: path={request.url.path}, error={exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Server Error",
            "error_code": "SERVER_001",
            "details": str(exc),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
