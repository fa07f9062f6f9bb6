"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns
so services can raise domain errors without spelling out status codes.

Usage:
    from rate_review.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Store not found")
    raise DuplicateError("Email already registered. Please login instead.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    Raised when attempting to create a resource that violates a uniqueness
    constraint (e.g. an email already registered under the same role).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ValidationFailedError(HTTPException):
    """422 예외 — 필드 형식 규칙 위반.

    422 Unprocessable Entity exception carrying per-field messages.
    Raised before any database or email work when form fields break the
    format rules in ``rate_review.utils.validation``.

    Args:
        errors: 필드별 오류 메시지 (Mapping of field name to error message)
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors: dict[str, str] = errors
        super().__init__(status_code=422, detail=errors)


class ExternalServiceError(HTTPException):
    """502 Bad Gateway 예외 — 외부 서비스(SMTP 등) 실패.

    Raised when a collaborator such as the mail relay fails. The upstream
    message is passed through verbatim.
    """

    def __init__(self, detail: str = "External service error") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class InvalidPasswordError(UnauthorizedError):
    """계정은 존재하지만 비밀번호가 일치하지 않음 (Account exists, password mismatch)."""

    def __init__(self, detail: str = "Invalid password") -> None:
        super().__init__(detail=detail)


class NotRegisteredError(NotFoundError):
    """해당 역할에 가입된 계정이 없음 (No account under this role)."""

    def __init__(self, detail: str = "Please register") -> None:
        super().__init__(detail=detail)
