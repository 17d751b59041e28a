"""
Shared response bodies.
"""

from typing import Any, List, Optional

from pydantic import BaseModel


class FieldError(BaseModel):
    """One request validation failure."""

    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response produced by the app's handlers."""

    detail: Any
    errors: Optional[List[FieldError]] = None
    request_id: Optional[str] = None
    type: Optional[str] = None


class SuccessResponse(BaseModel):
    """Acknowledgement for mutations that return no resource."""

    message: str
    data: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str
    database: str
