"""API v1 routers.

RESTful resource-based endpoints. All endpoints use resource nouns,
not action verbs.

Resources:
    /api/v1/otp-challenges     - Send a code / resend telemetry
    /api/v1/otp-verifications  - Check a code
    /api/v1/password-resets    - Password reset execution
"""

from fastapi import APIRouter

from otp_guard.presentation.routers.api.v1.otp_challenges import (
    router as otp_challenges_router,
)
from otp_guard.presentation.routers.api.v1.otp_verifications import (
    router as otp_verifications_router,
)
from otp_guard.presentation.routers.api.v1.password_resets import (
    router as password_resets_router,
)

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(otp_challenges_router)
v1_router.include_router(otp_verifications_router)
v1_router.include_router(password_resets_router)

__all__ = [
    "v1_router",
]
