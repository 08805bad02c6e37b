"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 파라미터 바인딩.

FastAPI dependency injection module — Binds query parameters to the
search condition, the pagination window, and the ordering.

Parameter spellings:
    - name, teamName: 이름 일치 조건 (Exact-match filters)
    - ageFrom | ageGoe, ageTo | ageLoe: 나이 범위 (Inclusive age bounds, two spellings each)
    - page | offset, size | limit: 페이지 범위 (Pagination window, two spellings each)
    - sort: field[,asc|desc], 반복 가능 (Repeatable ordering terms)
"""

from typing import Annotated

from fastapi import Depends, Query

from app.schemas.member import MemberSearchCondition
from app.utils.exceptions import InvalidParameterError
from app.utils.pagination import OrderSpec, parse_sort, resolve_window

AgeRange = tuple[int | None, int | None]


def _either(label: str, primary: int | None, alternate: int | None) -> int | None:
    """두 표기 중 하나를 선택합니다 (Pick one of two spellings; both must agree)."""
    if primary is not None and alternate is not None and primary != alternate:
        raise InvalidParameterError(f"Conflicting values for {label}")
    return primary if primary is not None else alternate


def get_age_range(
    age_from: Annotated[int | None, Query(alias="ageFrom", description="최소 나이")] = None,
    age_goe: Annotated[int | None, Query(alias="ageGoe", description="최소 나이 (ageFrom 별칭)")] = None,
    age_to: Annotated[int | None, Query(alias="ageTo", description="최대 나이")] = None,
    age_loe: Annotated[int | None, Query(alias="ageLoe", description="최대 나이 (ageTo 별칭)")] = None,
) -> AgeRange:
    """나이 범위 파라미터를 바인딩합니다 (Bind the inclusive age bounds)."""
    return _either("ageFrom/ageGoe", age_from, age_goe), _either("ageTo/ageLoe", age_to, age_loe)


def get_search_condition(
    age_range: Annotated[AgeRange, Depends(get_age_range)],
    name: Annotated[str | None, Query(description="회원 이름")] = None,
    team_name: Annotated[str | None, Query(alias="teamName", description="팀 이름")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터를 검색 조건으로 변환합니다.

    Build a MemberSearchCondition from query parameters.
    Omitted parameters stay None and contribute no filter.
    """
    age_from, age_to = age_range
    return MemberSearchCondition(name=name, team_name=team_name, age_from=age_from, age_to=age_to)


def get_page_window(
    page: Annotated[int | None, Query(description="페이지 번호, 0부터")] = None,
    offset: Annotated[int | None, Query(description="시작 위치")] = None,
    size: Annotated[int | None, Query(description="페이지 크기")] = None,
    limit: Annotated[int | None, Query(description="페이지 크기 (size 별칭)")] = None,
) -> tuple[int, int]:
    """페이지 파라미터를 (offset, limit)으로 변환합니다.

    Resolve the pagination window. Validation runs here, before the
    handler touches the database.
    """
    return resolve_window(page, offset, size, limit)


def get_ordering(
    sort: Annotated[list[str] | None, Query(description="정렬: field[,asc|desc]")] = None,
) -> list[OrderSpec]:
    """sort 파라미터를 정렬 조건으로 변환합니다 (Parse sort parameters)."""
    return parse_sort(sort)
