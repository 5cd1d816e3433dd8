import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

# 컨테이너를 라우터보다 먼저 로드해야 wiring 이 완성된 모듈에 적용된다
from app.container import container
from app.api.error_handlers import register_error_handlers
from app.pages.router import router as pages_router
from app.recipe.router import router as recipe_router
from app.upload.router import router as upload_router

# 로거 설정
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 라이프사이클 관리"""
    # Startup
    logger.info("🚀 Recetas del Corazón API 시작 중...")
    # 의존성 주입 컨테이너 설정
    container.wire(modules=[__name__])

    # 인덱스 보장 (DB 가 아직 없으면 첫 요청에서 다시 연결 시도)
    try:
        await container.recipe_repository().ensure_indexes()
        logger.info("[startup] indexes ensured")
    except Exception as e:
        logger.error(f"[startup] ensure_indexes failed: {e}")

    yield

    # Shutdown
    logger.info("🔄 Recetas del Corazón API 종료 중...")
    await container.mongo_connection().close()


# FastAPI 앱 생성 (lifespan 이벤트 핸들러 포함)
app = FastAPI(
    title="Recetas del Corazón",
    version="1.0.0",
    lifespan=lifespan
)

Instrumentator().instrument(app).expose(app)

register_error_handlers(app)


@app.get("/health")
async def health():
    # 간단한 헬스체크 + MongoDB ping
    ok = {"status": "ok", "db": "ok"}
    try:
        await container.mongo_connection().ping()
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok


# 라우터 등록 (API 먼저, /{locale} 페이지는 마지막)
app.include_router(upload_router)
app.include_router(recipe_router)
app.include_router(pages_router)
