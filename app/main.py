"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and
router registration.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from app.api import api_router
from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.utils.exceptions import StoreUnavailableError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# 요청 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# Registered before CORS to capture all requests
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(DBAPIError)
async def store_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    """DB 드라이버 오류를 503으로 변환합니다 (재시도 없음).

    Map database driver failures (connection loss, timeout) to 503.
    The query layer never retries; the error is only translated here.
    """
    logger.error("store failure on %s %s: %s", request.method, request.url.path, exc.orig)
    error = StoreUnavailableError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")
