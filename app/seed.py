"""초기 데이터 시드 스크립트 — 팀과 회원 생성.

Seed script — Creates sample teams and members for local development.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 100명 회원: member0 ~ member99, 나이 = 번호, 팀 번갈아 배정
      (100 members, age equals the index, alternating teams)
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session, engine, Base
from app.models import Member, Team

logger = logging.getLogger(__name__)

MEMBER_COUNT = 100


async def seed_members(db: AsyncSession, member_count: int = MEMBER_COUNT) -> bool:
    """팀과 회원을 생성합니다. 이미 데이터가 있으면 건너뜁니다.

    Insert teamA/teamB and the sample members into the given session.

    Returns:
        bool: 새로 시드했는지 여부 (False when data already existed)
    """
    result = await db.execute(select(Team.id).limit(1))
    if result.scalar_one_or_none() is not None:
        return False

    team_a: Team = Team(name="teamA")
    team_b: Team = Team(name="teamB")
    db.add_all([team_a, team_b])
    await db.flush()  # flush로 team.id 생성 (Flush to generate team ids)

    db.add_all(
        Member(name=f"member{i}", age=i, team_id=(team_a if i % 2 == 0 else team_b).id)
        for i in range(member_count)
    )
    await db.flush()
    return True


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create tables if missing and insert the sample data. Idempotent.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if not await seed_members(db):
            logger.info("Already seeded. Skipping.")
            return
        await db.commit()
        logger.info("Seeded %d members into teamA/teamB", MEMBER_COUNT)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
