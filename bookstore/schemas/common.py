"""Response envelopes shared by all routers."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation body for successful mutations."""

    message: str = Field(..., examples=["user registered"])


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., examples=["user not found"])
