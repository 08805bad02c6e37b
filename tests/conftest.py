"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite engine, session, and httpx client fixtures.
Each test gets a fresh database; the schema is created from ORM metadata.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Member, Team

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성합니다."""
    eng = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        if session.in_transaction():
            await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    result = {}
    for name in ("teamA", "teamB"):
        team = Team(name=name)
        db.add(team)
        result[name] = team
    await db.flush()
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams: dict[str, Team]) -> dict[str, Member]:
    """member1~4 (10/20 teamA, 30/40 teamB)를 생성합니다."""
    result = {}
    for name, age, team in [
        ("member1", 10, "teamA"),
        ("member2", 20, "teamA"),
        ("member3", 30, "teamB"),
        ("member4", 40, "teamB"),
    ]:
        member = Member(name=name, age=age, team_id=teams[team].id)
        db.add(member)
        result[name] = member
    await db.flush()
    return result


class SqlLog:
    """실행된 SQL 문 기록기 (Records every statement sent to the database)."""

    def __init__(self) -> None:
        self.statements: list[str] = []

    def __call__(self, conn, cursor, statement, parameters, context, executemany) -> None:
        self.statements.append(statement)

    @property
    def selects(self) -> list[str]:
        return [s for s in self.statements if s.lstrip().upper().startswith("SELECT")]

    @property
    def counts(self) -> list[str]:
        return [s for s in self.selects if "count(" in s.lower()]

    def clear(self) -> None:
        self.statements.clear()


@pytest.fixture
def sql_log(engine: AsyncEngine, members) -> SqlLog:
    """시드 이후에 실행되는 SQL 문을 기록합니다."""
    log = SqlLog()
    event.listen(engine.sync_engine, "before_cursor_execute", log)
    yield log
    event.remove(engine.sync_engine, "before_cursor_execute", log)
