"""Password resets resource router.

Endpoints:
    POST /api/v1/password-resets - Redeem a reset token and set a new password
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from otp_guard.application.commands import ResetPassword
from otp_guard.application.commands.handlers.reset_password_handler import (
    ResetPasswordHandler,
)
from otp_guard.core.container import get_reset_password_handler
from otp_guard.core.result import Failure, Success
from otp_guard.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from otp_guard.schemas.otp_schemas import (
    PasswordResetCreateRequest,
    PasswordResetCreateResponse,
)

router = APIRouter(
    prefix="/password-resets",
    tags=["Password Resets"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PasswordResetCreateResponse,
    responses={
        201: {
            "description": "Password reset successfully",
            "model": PasswordResetCreateResponse,
        },
        400: {"description": "Invalid or expired token", "model": ProblemDetails},
        502: {
            "description": "Identity provider failed (may carry a replacement token)",
            "model": ProblemDetails,
        },
    },
    summary="Create password reset",
    description="Redeem a reset token and set the new password.",
)
async def create_password_reset(
    request: Request,
    data: PasswordResetCreateRequest,
    handler: ResetPasswordHandler = Depends(get_reset_password_handler),
) -> PasswordResetCreateResponse | JSONResponse:
    """Create password reset (execute reset).

    POST /api/v1/password-resets → 201 Created

    Args:
        request: FastAPI request object.
        data: Reset token and new password.
        handler: Reset password handler (injected).

    Returns:
        PasswordResetCreateResponse on success (201 Created).
        JSONResponse with problem details on failure (400/502/503).
    """
    command = ResetPassword(
        reset_token=data.reset_token,
        new_password=data.new_password,
    )

    result = await handler.handle(command)

    match result:
        case Success(value=_):
            return PasswordResetCreateResponse()
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
