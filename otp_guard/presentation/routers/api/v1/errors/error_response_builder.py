"""Error response builder for RFC 7807 Problem Details.

Maps every DomainError the OTP flows return to an HTTP status and a
problem type, copying the error's telemetry into extension members.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from otp_guard.core.config import settings
from otp_guard.core.enums import ErrorCode
from otp_guard.core.errors import DomainError
from otp_guard.domain.errors import (
    OtpCooldownError,
    OtpInvalidError,
    OtpRateLimitError,
)
from otp_guard.presentation.api.middleware.trace_middleware import get_trace_id
from otp_guard.presentation.routers.api.v1.errors.problem_details import (
    ProblemDetails,
)

# ErrorCode -> (HTTP status, title)
_ERROR_STATUS_INFO: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.INVALID_EMAIL: (status.HTTP_400_BAD_REQUEST, "Invalid Email"),
    ErrorCode.VALIDATION_FAILED: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorCode.OTP_COOLDOWN: (status.HTTP_429_TOO_MANY_REQUESTS, "OTP Cooldown"),
    ErrorCode.OTP_RATE_LIMIT_EXCEEDED: (
        status.HTTP_429_TOO_MANY_REQUESTS,
        "OTP Send Limit Reached",
    ),
    ErrorCode.OTP_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "OTP Not Found"),
    ErrorCode.OTP_EXPIRED: (status.HTTP_410_GONE, "OTP Expired"),
    ErrorCode.OTP_INVALID: (status.HTTP_400_BAD_REQUEST, "Invalid OTP"),
    ErrorCode.OTP_ATTEMPTS_EXHAUSTED: (status.HTTP_423_LOCKED, "OTP Attempts Exhausted"),
    ErrorCode.OTP_STORE_UNAVAILABLE: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Service Unavailable",
    ),
    ErrorCode.RESET_TOKEN_INVALID: (status.HTTP_400_BAD_REQUEST, "Invalid Reset Token"),
    ErrorCode.IDENTITY_PROVIDER_FAILED: (
        status.HTTP_502_BAD_GATEWAY,
        "Identity Provider Error",
    ),
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses from domain errors.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(error, request)
    """

    @staticmethod
    def get_status_code(code: ErrorCode) -> int:
        """Map a domain error code to its HTTP status (500 if unmapped)."""
        return _ERROR_STATUS_INFO.get(
            code, (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
        )[0]

    @staticmethod
    def get_title(code: ErrorCode) -> str:
        """Map a domain error code to its problem title."""
        return _ERROR_STATUS_INFO.get(code, (500, "Error"))[1]

    @staticmethod
    def build_problem(error: DomainError, request: Request) -> ProblemDetails:
        """Build the ProblemDetails body for a domain error.

        Args:
            error: Domain error returned inside a Failure.
            request: FastAPI Request object (for the instance URI).

        Returns:
            ProblemDetails with extension members populated from the error.
        """
        status_code = ErrorResponseBuilder.get_status_code(error.code)
        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value.replace('_', '-')}",
            title=ErrorResponseBuilder.get_title(error.code),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            code=error.code.value,
            trace_id=get_trace_id(),
        )

        if isinstance(error, (OtpCooldownError, OtpRateLimitError)):
            problem.retry_after_seconds = error.retry_after_seconds
            problem.send_count = error.send_count
            problem.max_sends = error.max_sends
        elif isinstance(error, OtpInvalidError):
            problem.attempts_remaining = error.attempts_remaining
            problem.max_attempts = error.max_attempts

        if error.details and error.details.get("reset_token"):
            problem.reset_token = error.details["reset_token"]

        return problem

    @staticmethod
    def from_domain_error(error: DomainError, request: Request) -> JSONResponse:
        """Convert a DomainError to an RFC 7807 JSON response.

        429 responses carry a Retry-After header.

        Args:
            error: Domain error returned inside a Failure.
            request: FastAPI Request object.

        Returns:
            JSONResponse with RFC 7807 ProblemDetails content.
        """
        problem = ErrorResponseBuilder.build_problem(error, request)

        headers: dict[str, str] = {}
        if problem.retry_after_seconds is not None:
            headers["Retry-After"] = str(problem.retry_after_seconds)
        if problem.trace_id:
            headers["X-Trace-Id"] = problem.trace_id

        return JSONResponse(
            status_code=problem.status,
            content=problem.model_dump(exclude_none=True),
            headers=headers or None,
        )
