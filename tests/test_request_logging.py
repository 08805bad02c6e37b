"""요청 로깅 미들웨어 테스트 — 민감 파라미터 마스킹.

Request logging middleware tests — events shipped to Axiom never carry
the values of sensitive query parameters.
"""

import pytest
from httpx import AsyncClient

from app.middleware.axiom_logging import AxiomLoggingMiddleware, _mask_params


@pytest.fixture
def shipped(monkeypatch) -> list[dict]:
    """Axiom으로 전송될 이벤트를 수집합니다 (Capture events instead of ingesting)."""
    events: list[dict] = []
    monkeypatch.setattr(AxiomLoggingMiddleware, "_ship", lambda self, event: events.append(event))
    return events


def test_mask_params():
    masked = _mask_params({"name": "member1", "access_token": "abc", "API_KEY": "k"})
    assert masked == {"name": "member1", "access_token": "***", "API_KEY": "***"}


async def test_sensitive_query_params_are_masked(client: AsyncClient, members, shipped):
    res = await client.get("/api/v1/members", params={"name": "member1", "token": "s3cr3t"})
    assert res.status_code == 200

    [event] = shipped
    assert event["query_params"] == {"name": "member1", "token": "***"}
    assert "s3cr3t" not in repr(event)


async def test_error_detail_is_logged(client: AsyncClient, members, shipped):
    res = await client.get("/api/v1/members", params={"sort": "secret"})
    assert res.status_code == 400

    [event] = shipped
    assert event["status_code"] == 400
    assert "Unknown sort field" in event["error"]
