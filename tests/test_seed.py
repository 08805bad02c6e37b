"""시드 스크립트 테스트."""

from sqlalchemy import func, select

from app.models import Member, Team
from app.seed import seed_members


async def test_seed_creates_teams_and_members(db):
    assert await seed_members(db, member_count=10) is True

    teams = (await db.execute(select(Team.name).order_by(Team.name))).scalars().all()
    assert teams == ["teamA", "teamB"]
    total = (await db.execute(select(func.count(Member.id)))).scalar()
    assert total == 10


async def test_seed_is_idempotent(db):
    await seed_members(db, member_count=4)
    assert await seed_members(db, member_count=4) is False
    total = (await db.execute(select(func.count(Member.id)))).scalar()
    assert total == 4
