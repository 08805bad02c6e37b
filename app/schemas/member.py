"""회원 검색 Pydantic 요청/응답 스키마 정의.

Member search Pydantic request/response schema definitions.
Includes the search condition, the member-team projection,
the page envelope, and team statistics.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 (불변).

    Member search condition (immutable).
    Every field is optional; None means "no filter on this field" and
    contributes no clause. An empty string is a real value, not absence.

    Attributes:
        name: 회원 이름 일치 (Exact member name)
        team_name: 팀 이름 일치 (Exact team name)
        age_from: 최소 나이, 포함 (Minimum age, inclusive)
        age_to: 최대 나이, 포함 (Maximum age, inclusive)
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    team_name: str | None = None
    age_from: int | None = None
    age_to: int | None = None


class MemberTeamResponse(BaseModel):
    """회원-팀 조회 결과 응답 스키마.

    Member with its team, one row of the member/team join.

    Attributes:
        member_id: 회원 UUID (Member identifier)
        name: 회원 이름 (Member name, may be null)
        age: 나이 (Age)
        team_id: 팀 UUID (Team identifier, null for ungrouped members)
        team_name: 팀 이름 (Team name, null for ungrouped members)
    """

    model_config = ConfigDict(populate_by_name=True)

    member_id: str = Field(alias="memberId")
    name: str | None
    age: int
    team_id: str | None = Field(alias="teamId")
    team_name: str | None = Field(alias="teamName")


class PageResponse(BaseModel, Generic[T]):
    """페이지 응답 스키마.

    Page envelope for paginated endpoints.

    Attributes:
        content: 현재 페이지 항목 (Items of the current page)
        total_elements: 전체 항목 수, 생략될 수 있음 (Total count, may be null)
        size: 요청한 페이지 크기 (Requested page size)
        number: 페이지 번호, 0부터 (Zero-based page number, offset // size)
        offset: 시작 위치 (Zero-based row offset)
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[T]
    total_elements: int | None = Field(alias="totalElements")
    size: int
    number: int
    offset: int


class JsonResult(BaseModel, Generic[T]):
    """검색 응답 래퍼 — {count, data}.

    Response wrapper for the member search endpoints.
    count is the number of listed items for the plain search, and the
    requested page size for paginated searches.
    """

    count: int
    data: T


class TeamStatsResponse(BaseModel):
    """팀별 회원 통계 응답 스키마.

    Per-team member statistics.

    Attributes:
        team_id: 팀 UUID (Team identifier)
        team_name: 팀 이름 (Team name)
        member_count: 회원 수 (Number of members)
        avg_age: 평균 나이 (Average age, null when the team has no members)
        min_age: 최소 나이 (Youngest member age)
        max_age: 최대 나이 (Oldest member age)
    """

    model_config = ConfigDict(populate_by_name=True)

    team_id: str = Field(alias="teamId")
    team_name: str = Field(alias="teamName")
    member_count: int = Field(alias="memberCount")
    avg_age: float | None = Field(alias="avgAge")
    min_age: int | None = Field(alias="minAge")
    max_age: int | None = Field(alias="maxAge")
