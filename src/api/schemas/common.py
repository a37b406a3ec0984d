"""
Common API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class BaseResponse(BaseModel):
    """Base response schema."""

    success: bool = True
    message: Optional[str] = None


class FieldErrorSchema(BaseModel):
    """A single field-level validation failure."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str
    message: str
    type: str
    details: Optional[List[FieldErrorSchema]] = None


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime
    updated_at: datetime
