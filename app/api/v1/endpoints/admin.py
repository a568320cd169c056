"""Admin API: shared-secret check used by the dashboard login."""

from fastapi import APIRouter, Request

from app.api.v1.dependencies import admin_password_matches
from app.core.limiter import limit_admin_verify
from app.domain.exceptions import AuthenticationException
from app.schemas.admin import AdminVerifyRequest
from app.schemas.audit import SuccessResponse
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/verify", response_model=SuccessResponse)
@limit_admin_verify
async def verify_admin(request: Request, body: AdminVerifyRequest) -> SuccessResponse:
    """Return success when the password matches ADMIN_PASSWORD; 401 otherwise."""
    if not admin_password_matches(body.password):
        client = request.client.host if request.client else "unknown"
        logger.warning("Rejected admin login from %s", client)
        raise AuthenticationException("Invalid password")
    return SuccessResponse()
