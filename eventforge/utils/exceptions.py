"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Each subclass carries its own status code so services can raise them
directly without specifying status codes at each call site.

Usage:
    from eventforge.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("Събитието не е намерено.")
    raise ConflictError("Файл с това име вече съществува.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested resource (user, event, image, ...) does not exist.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 범용 검증 실패 예외.

    Generic conflict exception used for most validation failures:
    duplicate image names, image I/O failures, duplicate accounts.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class InvalidPasswordError(HTTPException):
    """400 예외 — 기존 비밀번호 불일치 또는 새 비밀번호 확인 불일치.

    Raised when the stored password does not match, or when the new
    password and its confirmation differ.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidEmailConfirmationLinkError(HTTPException):
    """400 예외 — 유효하지 않거나 만료된 인증 링크.

    Raised when a verification token is unknown, expired, or of the wrong type.
    """

    def __init__(self, detail: str = "Невалиден или изтекъл линк за потвърждение.") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Raised when the authenticated user lacks the required role, or the
    account is not enabled, locked, or not yet approved.
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when authentication is missing, invalid, or expired.
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. event bounds, unsupported file types).
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
