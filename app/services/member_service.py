"""회원 검색 서비스 — 동적 검색 조건과 페이지네이션 비즈니스 로직.

Member Search Service — Business logic for dynamic member/team search.
Validates the search condition, builds the predicate, delegates the
query to the repository, and assembles response DTOs.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.member_predicates import build_member_predicate
from app.repositories.member_repository import MemberRecord, TeamStatsRecord, member_repository
from app.schemas.member import (
    MemberSearchCondition,
    MemberTeamResponse,
    PageResponse,
    TeamStatsResponse,
)
from app.utils.exceptions import InternalInvariantError, InvalidParameterError
from app.utils.pagination import OrderSpec, Page, PaginationMode

logger = logging.getLogger(__name__)

# members.age 컬럼은 32비트 INTEGER — Upper bound of the members.age column type
MAX_AGE: int = 2**31 - 1


class MemberService:
    """회원 검색 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member search business logic.
    Stateless; a single instance is shared across requests.
    """

    def _validate_condition(self, condition: MemberSearchCondition) -> None:
        """나이 조건 범위를 검증합니다 (Reject age bounds outside the column range)."""
        for label, value in (("ageFrom", condition.age_from), ("ageTo", condition.age_to)):
            if value is not None and value < 0:
                raise InvalidParameterError(f"{label} must not be negative (got {value})")
            if value is not None and value > MAX_AGE:
                raise InvalidParameterError(f"{label} must not exceed {MAX_AGE} (got {value})")

    def _to_response(self, record: MemberRecord) -> MemberTeamResponse:
        """조인 행을 응답 스키마로 변환합니다.

        Convert one join row to a MemberTeamResponse, field for field.

        Raises:
            InternalInvariantError: 행이 조인 계약을 위반한 경우
                                    (Row violates the join contract)
        """
        if record.id is None or record.age is None:
            logger.error("member row without id or age: %r", record)
            raise InternalInvariantError()
        if (record.team_id is None) != (record.team_name is None):
            logger.error("member row with a partial team reference: %r", record)
            raise InternalInvariantError()

        return MemberTeamResponse(
            member_id=str(record.id),
            name=record.name,
            age=record.age,
            team_id=str(record.team_id) if record.team_id is not None else None,
            team_name=record.team_name,
        )

    def assemble(self, records: Sequence[MemberRecord]) -> list[MemberTeamResponse]:
        """조인 행 목록을 순서 그대로 응답 목록으로 변환합니다.

        Project rows to response DTOs without filtering or reordering.
        """
        return [self._to_response(r) for r in records]

    def _to_page_response(self, page: Page[MemberRecord]) -> PageResponse[MemberTeamResponse]:
        return PageResponse[MemberTeamResponse](
            content=self.assemble(page.items),
            total_elements=page.total_count,
            size=page.limit,
            number=page.offset // page.limit,
            offset=page.offset,
        )

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        ordering: Sequence[OrderSpec] = (),
    ) -> list[MemberTeamResponse]:
        """조건에 맞는 모든 회원을 조회합니다 (페이지네이션 없음).

        Search all members matching the condition, without pagination.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            ordering: 정렬 조건 (Ordering specs)

        Returns:
            list[MemberTeamResponse]: 회원-팀 목록 (Member/team list)
        """
        self._validate_condition(condition)
        records: list[MemberRecord] = await member_repository.search(
            db, build_member_predicate(condition), ordering
        )
        return self.assemble(records)

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        ordering: Sequence[OrderSpec],
        offset: int,
        limit: int,
        mode: PaginationMode,
    ) -> PageResponse[MemberTeamResponse]:
        """조건에 맞는 회원을 페이지 단위로 조회합니다.

        Paginated member search. SIMPLE mode always counts; OPTIMIZED mode
        skips the count query when the returned page is provably the last.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            ordering: 정렬 조건 (Ordering specs)
            offset: 시작 위치 (Zero-based row offset)
            limit: 페이지 크기 (Page size)
            mode: 카운트 쿼리 전략 (Count query strategy)

        Returns:
            PageResponse[MemberTeamResponse]: 페이지 응답 (Page envelope)

        Raises:
            InvalidParameterError: 잘못된 검색/페이지 파라미터 (Invalid input, before any query)
        """
        self._validate_condition(condition)
        page: Page[MemberRecord] = await member_repository.search_page(
            db, build_member_predicate(condition), ordering, offset, limit, mode
        )
        return self._to_page_response(page)

    def _to_stats_response(self, record: TeamStatsRecord) -> TeamStatsResponse:
        return TeamStatsResponse(
            team_id=str(record.team_id),
            team_name=record.team_name,
            member_count=record.member_count,
            avg_age=float(record.avg_age) if record.avg_age is not None else None,
            min_age=record.min_age,
            max_age=record.max_age,
        )

    async def team_stats(
        self,
        db: AsyncSession,
        age_from: int | None = None,
        age_to: int | None = None,
    ) -> list[TeamStatsResponse]:
        """팀별 회원 수와 나이 통계를 조회합니다.

        Per-team member statistics, optionally restricted to an age range.
        """
        # 나이 조건만 사용 — Only member-side clauses apply to the aggregation
        condition = MemberSearchCondition(age_from=age_from, age_to=age_to)
        self._validate_condition(condition)
        records: list[TeamStatsRecord] = await member_repository.team_stats(
            db, build_member_predicate(condition)
        )
        return [self._to_stats_response(r) for r in records]


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
