from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str = Field(..., examples=["Blog liked successfully"])


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint."""

    error: str = Field(..., examples=["Blog not found"])
