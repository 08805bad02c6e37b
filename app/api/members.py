"""회원 검색 라우터 — 동적 조건 검색 및 페이지네이션 엔드포인트.

Member Search Router — Dynamic-condition search endpoints.
    - v1: 전체 조회 (No pagination)
    - v2: 단순 페이지네이션, 카운트 쿼리 항상 실행 (Always counts)
    - v3: 최적화 페이지네이션, 마지막 페이지면 카운트 생략 (Elides the count on the last page)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_ordering, get_page_window, get_search_condition
from app.database import get_db
from app.schemas.member import (
    JsonResult,
    MemberSearchCondition,
    MemberTeamResponse,
    PageResponse,
)
from app.services.member_service import member_service
from app.utils.pagination import OrderSpec, PaginationMode

router: APIRouter = APIRouter()


@router.get("/v1/members", response_model=JsonResult[list[MemberTeamResponse]])
async def search_members_v1(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    ordering: Annotated[list[OrderSpec], Depends(get_ordering)],
) -> JsonResult[list[MemberTeamResponse]]:
    """조건에 맞는 전체 회원을 조회합니다.

    Search all matching members. count is the number of returned items.
    """
    data: list[MemberTeamResponse] = await member_service.search(db, condition, ordering)
    return JsonResult[list[MemberTeamResponse]](count=len(data), data=data)


async def _search_page(
    db: AsyncSession,
    condition: MemberSearchCondition,
    window: tuple[int, int],
    ordering: list[OrderSpec],
    mode: PaginationMode,
) -> JsonResult[PageResponse[MemberTeamResponse]]:
    offset, limit = window
    page: PageResponse[MemberTeamResponse] = await member_service.search_page(
        db, condition, ordering, offset, limit, mode
    )
    return JsonResult[PageResponse[MemberTeamResponse]](count=page.size, data=page)


@router.get("/v2/members", response_model=JsonResult[PageResponse[MemberTeamResponse]])
async def search_members_v2(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    window: Annotated[tuple[int, int], Depends(get_page_window)],
    ordering: Annotated[list[OrderSpec], Depends(get_ordering)],
) -> JsonResult[PageResponse[MemberTeamResponse]]:
    """페이지 단위 검색 — 카운트 쿼리를 항상 실행합니다.

    Paginated search; always issues the total-count query.
    """
    return await _search_page(db, condition, window, ordering, PaginationMode.SIMPLE)


@router.get("/v3/members", response_model=JsonResult[PageResponse[MemberTeamResponse]])
async def search_members_v3(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    window: Annotated[tuple[int, int], Depends(get_page_window)],
    ordering: Annotated[list[OrderSpec], Depends(get_ordering)],
) -> JsonResult[PageResponse[MemberTeamResponse]]:
    """페이지 단위 검색 — 마지막 페이지가 확실하면 카운트 쿼리를 생략합니다.

    Paginated search; skips the count query when the page is provably the last.
    """
    return await _search_page(db, condition, window, ordering, PaginationMode.OPTIMIZED)
