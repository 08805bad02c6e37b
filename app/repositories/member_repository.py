"""회원 레포지토리 — 회원-팀 조인 검색 및 카운트 쿼리.

Member Repository — Search and count queries over the member/team join.
All queries are read-only projections; members without a team are kept
through a LEFT OUTER JOIN. Database errors propagate unchanged.
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from functools import partial
from decimal import Decimal
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member, Team
from app.utils.exceptions import InvalidParameterError
from app.utils.pagination import (
    NullsPlacement,
    OrderSpec,
    Page,
    PaginationMode,
    SortDirection,
    paginate,
)


@dataclass(frozen=True)
class MemberRecord:
    """회원-팀 조인 결과 한 행 (One row of the member/team join)."""

    id: uuid.UUID
    name: str | None
    age: int
    team_id: uuid.UUID | None
    team_name: str | None


@dataclass(frozen=True)
class TeamStatsRecord:
    """팀별 회원 집계 한 행 (One row of per-team aggregation)."""

    team_id: uuid.UUID
    team_name: str
    member_count: int
    avg_age: Decimal | float | None
    min_age: int | None
    max_age: int | None


class MemberRepository:
    """회원-팀 조인에 대한 조회 쿼리를 담당하는 레포지토리.

    Repository handling read queries for members joined with their team.
    Unlike the CRUD repositories it exposes no writes.
    """

    # 정렬 가능한 논리 필드 → 컬럼 (Sortable logical fields → columns)
    SORT_COLUMNS: dict[str, Any] = {
        "id": Member.id,
        "name": Member.name,
        "age": Member.age,
        "teamName": Team.name,
    }

    def _base_query(self) -> Select:
        """회원 LEFT JOIN 팀 프로젝션 쿼리 (Projected member LEFT JOIN team query)."""
        return (
            select(
                Member.id,
                Member.name,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
        )

    def _order_by(self, ordering: Sequence[OrderSpec]) -> list[ColumnElement[Any]]:
        """정렬 조건을 ORDER BY 절로 변환하고 id 타이브레이커를 붙입니다.

        Convert ordering specs to ORDER BY terms, appending Member.id ascending
        so the ordering is total and offset paging never skips or repeats rows.

        Raises:
            InvalidParameterError: 알 수 없는 정렬 필드 (Unknown sort field)
        """
        terms: list[ColumnElement[Any]] = []
        for spec in ordering:
            column = self.SORT_COLUMNS.get(spec.field)
            if column is None:
                raise InvalidParameterError(f"Unknown sort field: {spec.field}")
            term = column.asc() if spec.direction is SortDirection.ASC else column.desc()
            if spec.effective_nulls is NullsPlacement.LAST:
                term = term.nulls_last()
            else:
                term = term.nulls_first()
            terms.append(term)

        if not any(spec.field == "id" for spec in ordering):
            terms.append(Member.id.asc())
        return terms

    async def search(
        self,
        db: AsyncSession,
        predicate: ColumnElement[bool],
        ordering: Sequence[OrderSpec] = (),
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[MemberRecord]:
        """조건에 맞는 회원-팀 행을 조회합니다.

        Retrieve member/team rows matching the predicate in the given order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            predicate: WHERE 절 (Filter from build_member_predicate)
            ordering: 정렬 조건 목록 (Ordering specs, id tiebreaker appended)
            offset: 시작 위치, None이면 미적용 (Row offset, None for no offset)
            limit: 최대 행 수, None이면 미적용 (Row limit, None for all rows)

        Returns:
            list[MemberRecord]: 조회된 행 목록 (Matching rows)
        """
        query: Select = self._base_query().where(predicate).order_by(*self._order_by(ordering))
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return [
            MemberRecord(
                id=row.id,
                name=row.name,
                age=row.age,
                team_id=row.team_id,
                team_name=row.team_name,
            )
            for row in result.all()
        ]

    async def count(
        self,
        db: AsyncSession,
        predicate: ColumnElement[bool],
    ) -> int:
        """조건에 맞는 전체 회원 수를 조회합니다.

        Count all members matching the predicate over the same join.
        """
        query: Select = (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(predicate)
        )
        return (await db.execute(query)).scalar() or 0

    async def search_page(
        self,
        db: AsyncSession,
        predicate: ColumnElement[bool],
        ordering: Sequence[OrderSpec],
        offset: int,
        limit: int,
        mode: PaginationMode = PaginationMode.SIMPLE,
    ) -> Page[MemberRecord]:
        """페이지 단위로 회원-팀 행을 조회합니다.

        Paginated search; the count query strategy is chosen by mode.

        Raises:
            InvalidParameterError: 잘못된 offset/limit 또는 정렬 필드
                                   (Invalid window or sort field, before any query)
        """
        # 정렬 필드를 먼저 검증 — Validate sort fields before any query
        self._order_by(ordering)

        async def fetch_rows(page_offset: int, page_limit: int) -> list[MemberRecord]:
            return await self.search(db, predicate, ordering, page_offset, page_limit)

        return await paginate(
            fetch_rows,
            partial(self.count, db, predicate),
            offset,
            limit,
            mode,
        )

    async def team_stats(
        self,
        db: AsyncSession,
        member_predicate: ColumnElement[bool],
    ) -> list[TeamStatsRecord]:
        """팀별 회원 수와 나이 통계를 조회합니다.

        Aggregate member count and age statistics per team.
        The member predicate sits in the join condition, so teams whose
        members are all filtered out still appear with a zero count.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member_predicate: 집계 대상 회원 조건 (Member-only filter)

        Returns:
            list[TeamStatsRecord]: 팀 이름 순 집계 (Aggregates ordered by team name)
        """
        query: Select = (
            select(
                Team.id,
                Team.name,
                func.count(Member.id).label("member_count"),
                func.avg(Member.age).label("avg_age"),
                func.min(Member.age).label("min_age"),
                func.max(Member.age).label("max_age"),
            )
            .select_from(Team)
            .outerjoin(Member, and_(Member.team_id == Team.id, member_predicate))
            .group_by(Team.id, Team.name)
            .order_by(Team.name, Team.id)
        )
        result = await db.execute(query)
        return [
            TeamStatsRecord(
                team_id=row.id,
                team_name=row.name,
                member_count=row.member_count,
                avg_age=row.avg_age,
                min_age=row.min_age,
                max_age=row.max_age,
            )
            for row in result.all()
        ]


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
