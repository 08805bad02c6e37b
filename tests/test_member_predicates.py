"""검색 조건 → WHERE 절 변환 테스트.

Predicate builder tests — clause emission, absence handling and purity.
Clause order is never assumed.
"""

import pydantic
import pytest
from sqlalchemy.sql.elements import True_

from app.repositories.member_predicates import build_member_predicate, member_clauses
from app.schemas.member import MemberSearchCondition


def _sql(clause) -> str:
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


def _clause_set(condition: MemberSearchCondition) -> set[str]:
    return {_sql(c) for c in member_clauses(condition)}


class TestPredicateBuilder:
    """WHERE 절 생성 테스트."""

    def test_empty_condition_matches_everything(self):
        """조건이 없으면 true()."""
        predicate = build_member_predicate(MemberSearchCondition())
        assert isinstance(predicate, True_)
        assert member_clauses(MemberSearchCondition()) == []

    def test_each_present_field_emits_one_clause(self):
        """존재하는 필드마다 절 하나."""
        condition = MemberSearchCondition(
            name="member1", team_name="teamA", age_from=10, age_to=40
        )
        assert _clause_set(condition) == {
            "members.name = 'member1'",
            "teams.name = 'teamA'",
            "members.age >= 10",
            "members.age <= 40",
        }

    def test_absent_fields_emit_nothing(self):
        """없는 필드는 IS NULL 같은 절을 만들지 않음."""
        condition = MemberSearchCondition(age_from=25)
        assert _clause_set(condition) == {"members.age >= 25"}
        assert "NULL" not in _sql(build_member_predicate(condition)).upper()

    def test_empty_string_is_a_present_value(self):
        """빈 문자열은 부재가 아니라 실제 값."""
        condition = MemberSearchCondition(name="")
        assert _clause_set(condition) == {"members.name = ''"}

    def test_conjunction_contains_all_clauses(self):
        """여러 절은 AND로 결합."""
        predicate = build_member_predicate(
            MemberSearchCondition(team_name="teamB", age_to=35)
        )
        sql = _sql(predicate)
        assert " AND " in sql
        assert "teams.name = 'teamB'" in sql
        assert "members.age <= 35" in sql

    def test_same_condition_gives_structurally_equal_predicate(self):
        """같은 조건이면 구조적으로 같은 절."""
        condition = MemberSearchCondition(name="member1", age_from=10)
        first = build_member_predicate(condition)
        second = build_member_predicate(MemberSearchCondition(name="member1", age_from=10))
        assert first.compare(second)

    def test_condition_is_immutable(self):
        """검색 조건은 불변."""
        condition = MemberSearchCondition(name="member1")
        with pytest.raises(pydantic.ValidationError):
            condition.name = "other"  # type: ignore[misc]
