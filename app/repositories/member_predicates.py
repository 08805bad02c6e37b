"""회원 검색 조건 → SQLAlchemy WHERE 절 변환.

Translates a MemberSearchCondition into a single conjunction over the
member/team join. Each present field adds exactly one clause; absent
fields add nothing, so the database only sees constrained columns.
"""

from sqlalchemy import ColumnElement, and_, true

from app.models.member import Member, Team
from app.schemas.member import MemberSearchCondition


def name_eq(name: str | None) -> ColumnElement[bool] | None:
    return Member.name == name if name is not None else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if team_name is not None else None


def age_goe(age_from: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age_from if age_from is not None else None


def age_loe(age_to: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age_to if age_to is not None else None


def member_clauses(condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
    """조건에 존재하는 필드별 절 목록 (One clause per present field)."""
    candidates = (
        name_eq(condition.name),
        team_name_eq(condition.team_name),
        age_goe(condition.age_from),
        age_loe(condition.age_to),
    )
    return [clause for clause in candidates if clause is not None]


def build_member_predicate(condition: MemberSearchCondition) -> ColumnElement[bool]:
    """검색 조건을 AND 결합된 WHERE 절로 변환합니다.

    Build the conjunction of all present-field clauses.

    Args:
        condition: 회원 검색 조건 (Search condition)

    Returns:
        ColumnElement[bool]: AND 결합 절, 조건이 없으면 true()
                             (Conjunction, or true() when no field is present)
    """
    clauses: list[ColumnElement[bool]] = member_clauses(condition)
    if not clauses:
        return true()
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)
