"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error categories
of the search layer, so call sites never specify status codes.

Usage:
    from app.utils.exceptions import InvalidParameterError
    raise InvalidParameterError("limit must be positive")
"""

from fastapi import HTTPException, status


class InvalidParameterError(HTTPException):
    """400 Bad Request 예외 — 잘못된 검색/페이지 파라미터.

    400 Bad Request exception.
    Raised for malformed or out-of-range filter or pagination input
    (e.g. limit=0, negative offset, unknown sort field), always before
    any query reaches the database.

    Args:
        detail: 오류 메시지 (Error message, default: "Invalid parameter")
    """

    def __init__(self, detail: str = "Invalid parameter") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class StoreUnavailableError(HTTPException):
    """503 Service Unavailable 예외 — 데이터베이스 접근 실패.

    503 Service Unavailable exception.
    Built by the API exception handler when a SQLAlchemy DBAPIError
    (connection loss, timeout) escapes a request. Never retried here.

    Args:
        detail: 오류 메시지 (Error message, default: "Data store unavailable")
    """

    def __init__(self, detail: str = "Data store unavailable") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class InternalInvariantError(HTTPException):
    """500 Internal Server Error 예외 — 내부 불변식 위반.

    500 Internal Server Error exception.
    Raised when a row violates the shape the query promised
    (e.g. a team id without a team name). The detail stays generic;
    the specifics go to the log.

    Args:
        detail: 오류 메시지 (Error message, default: "Internal server error")
    """

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
