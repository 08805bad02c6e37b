"""API 요청 로깅 미들웨어 — 로컬 로거 + Axiom 전송.

API request logging middleware.
Writes one log line per request to the module logger and, when Axiom is
configured, ships the same structured event to the Axiom dataset.
Logged fields: method, path, query params (sensitive keys masked), status code,
duration, error detail.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 마스킹 대상 파라미터 패턴 — Query parameter names whose values are never logged
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

_MAX_DETAIL_LEN = 500


def _mask_params(params: dict[str, str]) -> dict[str, str]:
    """민감 파라미터 마스킹 — Replace values of sensitive query parameters."""
    return {k: "***" if _SENSITIVE_KEYS.search(k) else v for k, v in params.items()}


def _error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유 추출 — Extract the error reason from a response body."""
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        text = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    return text[:_MAX_DETAIL_LEN]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs every API request and response.
    Axiom ingestion is skipped when AXIOM_API_TOKEN/AXIOM_DATASET are unset.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _ship(self, event: dict[str, Any]) -> None:
        if self._client is None:
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:  # noqa: BLE001 — 로깅 실패가 요청 처리에 영향주지 않도록
            logger.warning("axiom ingest failed", exc_info=True)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            event["query_params"] = _mask_params(dict(request.query_params))

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if response.status_code >= 400:
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = _error_detail(body)

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            logger.info(
                "%s %s -> %s (%.2f ms)",
                event["method"], event["path"], event["status_code"], event["duration_ms"],
            )
            self._ship(event)

        return response
