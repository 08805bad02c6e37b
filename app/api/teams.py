"""팀 통계 라우터.

Team Statistics Router — Per-team member count and age aggregates.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AgeRange, get_age_range
from app.database import get_db
from app.schemas.member import TeamStatsResponse
from app.services.member_service import member_service

router: APIRouter = APIRouter()


@router.get("/v1/teams/stats", response_model=list[TeamStatsResponse])
async def team_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    age_range: Annotated[AgeRange, Depends(get_age_range)],
) -> list[TeamStatsResponse]:
    """팀별 회원 수와 평균/최소/최대 나이를 조회합니다.

    Member count and average/min/max age per team, ordered by team name.
    Accepts only the ageFrom/ageGoe and ageTo/ageLoe filters.
    """
    age_from, age_to = age_range
    return await member_service.team_stats(db, age_from, age_to)
