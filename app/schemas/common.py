"""Response envelope shared by every endpoint."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Success envelope: {"status": "success", "data": ..., "message": ...}."""

    status: Literal["success"] = "success"
    data: DataT
    message: str


class ErrorEnvelope(BaseModel):
    """Error envelope produced by app.core.exception_handlers."""

    status: Literal["error"] = "error"
    message: str
    error: str
    code: str | None = None
    details: Any = None


class EmptyData(BaseModel):
    """Placeholder for envelopes whose data is {}."""


class AccessTokenData(BaseModel):
    """Data carrying a (re-)issued access token."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = "bearer"
