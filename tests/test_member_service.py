"""회원 서비스 테스트 — 응답 변환 및 입력 검증.

Member service tests — row projection, invariant violations and
condition validation.
"""

import logging
import uuid

import pytest

from app.repositories.member_repository import MemberRecord
from app.schemas.member import MemberSearchCondition
from app.services.member_service import MAX_AGE, member_service
from app.utils.exceptions import InternalInvariantError, InvalidParameterError
from app.utils.pagination import PaginationMode


def _record(**overrides) -> MemberRecord:
    fields = {
        "id": uuid.uuid4(),
        "name": "member1",
        "age": 10,
        "team_id": uuid.uuid4(),
        "team_name": "teamA",
    }
    fields.update(overrides)
    return MemberRecord(**fields)


class TestAssemble:
    """조인 행 → 응답 변환 테스트."""

    def test_field_for_field(self):
        record = _record()
        [response] = member_service.assemble([record])
        assert response.member_id == str(record.id)
        assert response.name == "member1"
        assert response.age == 10
        assert response.team_id == str(record.team_id)
        assert response.team_name == "teamA"

    def test_preserves_order(self):
        records = [_record(name=f"m{i}") for i in (3, 1, 2)]
        assert [r.name for r in member_service.assemble(records)] == ["m3", "m1", "m2"]

    def test_member_without_team(self):
        [response] = member_service.assemble([_record(team_id=None, team_name=None)])
        assert response.team_id is None
        assert response.team_name is None

    def test_null_name_is_kept(self):
        [response] = member_service.assemble([_record(name=None)])
        assert response.name is None

    def test_partial_team_reference_is_invariant_violation(self, caplog):
        with caplog.at_level(logging.ERROR, logger="app.services.member_service"):
            with pytest.raises(InternalInvariantError) as exc_info:
                member_service.assemble([_record(team_name=None)])
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Internal server error"
        assert "partial team reference" in caplog.text

    def test_missing_age_is_invariant_violation(self):
        with pytest.raises(InternalInvariantError):
            member_service.assemble([_record(age=None)])


class TestValidation:
    """검색 조건 검증 테스트."""

    async def test_negative_age_rejected(self, db, sql_log):
        with pytest.raises(InvalidParameterError):
            await member_service.search(db, MemberSearchCondition(age_from=-1))
        assert sql_log.statements == []

    async def test_negative_age_rejected_for_page(self, db, sql_log):
        with pytest.raises(InvalidParameterError):
            await member_service.search_page(
                db, MemberSearchCondition(age_to=-5), [], 0, 2, PaginationMode.SIMPLE
            )
        assert sql_log.statements == []

    async def test_age_above_column_range_rejected(self, db, sql_log):
        with pytest.raises(InvalidParameterError):
            await member_service.search(db, MemberSearchCondition(age_from=MAX_AGE + 1))
        assert sql_log.statements == []

    async def test_age_at_column_limit_accepted(self, db, members):
        assert await member_service.search(db, MemberSearchCondition(age_to=MAX_AGE)) != []


class TestSearchPage:
    """페이지 응답 변환 테스트."""

    async def test_page_response_shape(self, db, members):
        page = await member_service.search_page(
            db, MemberSearchCondition(team_name="teamA"), [], 0, 1, PaginationMode.OPTIMIZED
        )
        assert page.total_elements == 2
        assert page.size == 1
        assert page.number == 0
        assert len(page.content) == 1

    async def test_page_number_from_offset(self, db, members):
        page = await member_service.search_page(
            db, MemberSearchCondition(), [], 2, 2, PaginationMode.SIMPLE
        )
        assert page.number == 1
        assert page.offset == 2


class TestTeamStats:
    async def test_average_is_float(self, db, members):
        stats = await member_service.team_stats(db)
        assert [(s.team_name, s.avg_age) for s in stats] == [("teamA", 15.0), ("teamB", 35.0)]
