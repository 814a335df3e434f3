"""OTP challenges resource router.

Endpoints:
    POST /api/v1/otp-challenges - Send a code by email
    GET  /api/v1/otp-challenges - Resend telemetry for a challenge
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from otp_guard.application.commands import SendOtp
from otp_guard.application.commands.handlers.send_otp_handler import SendOtpHandler
from otp_guard.application.services import OtpEngine
from otp_guard.core.constants import IDENTITY_MAX_LENGTH
from otp_guard.core.container import get_otp_engine, get_send_otp_handler
from otp_guard.core.result import Failure, Success
from otp_guard.domain.enums import OtpPurpose
from otp_guard.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from otp_guard.schemas.otp_schemas import (
    OtpChallengeCreateRequest,
    OtpChallengeCreateResponse,
    OtpChallengeStatusResponse,
)

router = APIRouter(
    prefix="/otp-challenges",
    tags=["OTP Challenges"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=OtpChallengeCreateResponse,
    responses={
        201: {"description": "Code sent", "model": OtpChallengeCreateResponse},
        429: {"description": "Cooldown or send quota", "model": ProblemDetails},
        503: {"description": "Challenge store unavailable", "model": ProblemDetails},
    },
    summary="Create OTP challenge",
    description="Issue a one-time code and send it by email.",
)
async def create_otp_challenge(
    request: Request,
    data: OtpChallengeCreateRequest,
    handler: SendOtpHandler = Depends(get_send_otp_handler),
) -> OtpChallengeCreateResponse | JSONResponse:
    """Create OTP challenge (send a code).

    POST /api/v1/otp-challenges → 201 Created

    Args:
        request: FastAPI request object.
        data: Email, purpose and optional greeting name.
        handler: Send OTP handler (injected).

    Returns:
        OtpChallengeCreateResponse on success.
        JSONResponse with problem details on failure (429/503).
    """
    command = SendOtp(
        email=data.email,
        purpose=data.purpose,
        first_name=data.first_name,
    )

    result = await handler.handle(command)

    match result:
        case Success(value=receipt):
            return OtpChallengeCreateResponse(
                send_count=receipt.send_count,
                max_sends=receipt.max_sends,
                window_reset_in_seconds=receipt.window_reset_in_seconds,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@router.get(
    "",
    response_model=OtpChallengeStatusResponse,
    responses={
        503: {"description": "Challenge store unavailable", "model": ProblemDetails},
    },
    summary="Get OTP challenge status",
    description="Resend telemetry (send count, cooldown) without sending a code.",
)
async def get_otp_challenge(
    request: Request,
    email: str = Query(..., min_length=3, max_length=IDENTITY_MAX_LENGTH),
    purpose: OtpPurpose = Query(...),
    engine: OtpEngine = Depends(get_otp_engine),
) -> OtpChallengeStatusResponse | JSONResponse:
    """Get OTP challenge status.

    GET /api/v1/otp-challenges?email=...&purpose=... → 200 OK
    """
    match await engine.get_status(email, purpose):
        case Success(value=otp_status):
            return OtpChallengeStatusResponse(
                has_active_otp=otp_status.has_active_otp,
                send_count=otp_status.send_count,
                max_sends=otp_status.max_sends,
                cooldown_remaining_seconds=otp_status.cooldown_remaining_seconds,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
