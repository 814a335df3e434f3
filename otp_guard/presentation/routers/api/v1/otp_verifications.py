"""OTP verifications resource router.

Endpoints:
    POST /api/v1/otp-verifications - Check a code
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from otp_guard.application.commands import VerifyOtp
from otp_guard.application.commands.handlers.verify_otp_handler import (
    VerifyOtpHandler,
)
from otp_guard.core.container import get_verify_otp_handler
from otp_guard.core.result import Failure, Success
from otp_guard.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from otp_guard.schemas.otp_schemas import (
    OtpVerificationCreateRequest,
    OtpVerificationCreateResponse,
)

router = APIRouter(
    prefix="/otp-verifications",
    tags=["OTP Verifications"],
)


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=OtpVerificationCreateResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Code accepted", "model": OtpVerificationCreateResponse},
        400: {"description": "Incorrect code", "model": ProblemDetails},
        404: {"description": "No active code", "model": ProblemDetails},
        410: {"description": "Code expired", "model": ProblemDetails},
        423: {"description": "Attempts exhausted", "model": ProblemDetails},
        503: {"description": "Challenge store unavailable", "model": ProblemDetails},
    },
    summary="Create OTP verification",
    description="Check a code. Password reset codes return a single-use reset token.",
)
async def create_otp_verification(
    request: Request,
    data: OtpVerificationCreateRequest,
    handler: VerifyOtpHandler = Depends(get_verify_otp_handler),
) -> OtpVerificationCreateResponse | JSONResponse:
    """Create OTP verification (check a code).

    POST /api/v1/otp-verifications → 200 OK

    Args:
        request: FastAPI request object.
        data: Email, purpose and candidate code.
        handler: Verify OTP handler (injected).

    Returns:
        OtpVerificationCreateResponse on success.
        JSONResponse with problem details on failure.
    """
    command = VerifyOtp(email=data.email, purpose=data.purpose, code=data.code)

    result = await handler.handle(command)

    match result:
        case Success(value=verification):
            return OtpVerificationCreateResponse(
                status=verification.status,
                reset_token=verification.reset_token,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
