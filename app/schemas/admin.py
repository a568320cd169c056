"""Admin API schemas."""

from pydantic import BaseModel


class AdminVerifyRequest(BaseModel):
    """Payload for POST /api/admin/verify."""

    password: str = ""
