"""페이지네이션 유틸리티 모듈.

Pagination utility module for offset/limit queries.
Provides the Page value, ordering specs, parameter validation and the
paginate function shared by every paginated search.

Two modes are supported:
    - SIMPLE: 데이터 쿼리 + 카운트 쿼리를 항상 실행 (Always runs data and count queries)
    - OPTIMIZED: 데이터 쿼리 결과가 limit보다 적으면 카운트 쿼리 생략
                 (Skips the count query when the page is provably the last one)
"""

import enum
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from app.config import settings
from app.utils.exceptions import InvalidParameterError

T = TypeVar("T")

logger = logging.getLogger(__name__)

# LIMIT/OFFSET은 64비트 정수 — LIMIT and OFFSET are bound as signed 64-bit integers
MAX_OFFSET: int = 2**63 - 1


class PaginationMode(str, enum.Enum):
    """카운트 쿼리 실행 전략 (Count query strategy)."""

    SIMPLE = "simple"
    OPTIMIZED = "optimized"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class NullsPlacement(str, enum.Enum):
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class OrderSpec:
    """정렬 조건 하나 — (필드, 방향, NULL 위치).

    A single ordering term. When nulls is not given, NULLs sort last
    for ascending and first for descending order, i.e. NULL is treated
    as the largest value on every backend.

    Attributes:
        field: 정렬 필드 이름 (Logical field name, e.g. "name")
        direction: 정렬 방향 (Sort direction)
        nulls: NULL 위치 (NULL placement, derived from direction when None)
    """

    field: str
    direction: SortDirection = SortDirection.ASC
    nulls: NullsPlacement | None = None

    @property
    def effective_nulls(self) -> NullsPlacement:
        if self.nulls is not None:
            return self.nulls
        return NullsPlacement.LAST if self.direction is SortDirection.ASC else NullsPlacement.FIRST


@dataclass(frozen=True)
class Page(Generic[T]):
    """페이지네이션 결과 값.

    Immutable pagination result.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total_count: 전체 항목 수, 없을 수 있음 (Total count across all pages, may be None)
        offset: 시작 위치 (Zero-based row offset)
        limit: 페이지당 항목 수 (Requested page size)
    """

    items: tuple[T, ...]
    total_count: int | None
    offset: int
    limit: int


def validate_window(offset: int, limit: int) -> None:
    """offset/limit 값을 검증합니다.

    Reject pagination windows the database must never see.

    Raises:
        InvalidParameterError: offset < 0, limit <= 0, limit > MAX_PAGE_SIZE,
                               or offset + limit beyond MAX_OFFSET
    """
    if offset < 0:
        raise InvalidParameterError(f"offset must not be negative (got {offset})")
    if limit == 0:
        raise InvalidParameterError("limit must not be zero")
    if limit < 0:
        raise InvalidParameterError(f"limit must not be negative (got {limit})")
    if limit > settings.MAX_PAGE_SIZE:
        raise InvalidParameterError(
            f"limit must not exceed {settings.MAX_PAGE_SIZE} (got {limit})"
        )
    if offset > MAX_OFFSET - limit:
        raise InvalidParameterError(f"offset out of range (got {offset})")


async def paginate(
    fetch_rows: Callable[[int, int], Awaitable[Sequence[T]]],
    count_rows: Callable[[], Awaitable[int]],
    offset: int,
    limit: int,
    mode: PaginationMode = PaginationMode.SIMPLE,
) -> Page[T]:
    """offset/limit 페이지를 조회하고 전체 개수를 결정합니다.

    Fetch one page of rows and determine the total count.

    The data query always runs first. In OPTIMIZED mode the count query
    runs only when the page came back full (len(rows) == limit); a short
    page proves it is the last one, so the total is offset + len(rows).
    An exact last page is indistinguishable from a fuller result set and
    is still counted, as is an empty page past offset 0.

    Args:
        fetch_rows: (offset, limit) -> 페이지 행 (Coroutine fetching one page of rows)
        count_rows: () -> 전체 개수 (Coroutine counting all matching rows)
        offset: 시작 위치, 0부터 (Zero-based row offset)
        limit: 페이지 크기 (Page size)
        mode: 카운트 쿼리 전략 (Count query strategy)

    Returns:
        Page[T]: 페이지 결과 (Page of rows with total count)

    Raises:
        InvalidParameterError: 잘못된 offset/limit (Invalid window, raised before any query)
    """
    validate_window(offset, limit)

    rows: Sequence[T] = await fetch_rows(offset, limit)

    # 빈 페이지는 offset이 0일 때만 전체 개수를 증명함
    # An empty page proves the total only at offset 0; past the end it must be counted
    provably_last: bool = len(rows) < limit and (len(rows) > 0 or offset == 0)

    total: int
    if mode is PaginationMode.OPTIMIZED and provably_last:
        total = offset + len(rows)
        logger.debug(
            "count query elided: offset=%d limit=%d rows=%d total=%d",
            offset, limit, len(rows), total,
        )
    else:
        total = await count_rows()

    return Page(items=tuple(rows), total_count=total, offset=offset, limit=limit)


def parse_sort(values: Sequence[str] | None) -> list[OrderSpec]:
    """sort 쿼리 파라미터를 정렬 조건으로 변환합니다.

    Parse repeated ``sort`` parameters of the form ``field[,asc|desc]``.
    Field names are resolved later by the repository.

    Raises:
        InvalidParameterError: 형식 또는 방향이 잘못된 경우 (Malformed term or direction)
    """
    ordering: list[OrderSpec] = []
    for value in values or ():
        parts = [part.strip() for part in value.split(",")]
        if not parts[0] or len(parts) > 2:
            raise InvalidParameterError(f"Malformed sort parameter: {value!r}")
        direction = SortDirection.ASC
        if len(parts) == 2:
            try:
                direction = SortDirection(parts[1].lower())
            except ValueError:
                raise InvalidParameterError(f"Unknown sort direction: {parts[1]!r}") from None
        ordering.append(OrderSpec(field=parts[0], direction=direction))
    return ordering


def resolve_window(
    page: int | None,
    offset: int | None,
    size: int | None,
    limit: int | None,
) -> tuple[int, int]:
    """page/size 또는 offset/limit 파라미터를 (offset, limit)으로 정규화합니다.

    Normalize either spelling of the pagination window to (offset, limit).
    ``page`` is zero-based and scaled by the page size.

    Raises:
        InvalidParameterError: 두 표기를 함께 쓰거나 값이 범위를 벗어난 경우
                               (Conflicting spellings or out-of-range values)
    """
    if page is not None and offset is not None:
        raise InvalidParameterError("Use either page or offset, not both")
    if size is not None and limit is not None and size != limit:
        raise InvalidParameterError("size and limit disagree")

    page_size: int = next((v for v in (size, limit) if v is not None), settings.DEFAULT_PAGE_SIZE)
    if page is not None:
        if page < 0:
            raise InvalidParameterError(f"page must not be negative (got {page})")
        start: int = page * page_size
    else:
        start = offset if offset is not None else 0

    validate_window(start, page_size)
    return start, page_size
