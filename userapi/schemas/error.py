"""
userapi/schemas/error.py

Error bodies returned by the exception handlers. Field names on the wire are
camelCase ('fieldName') to stay stable for existing clients.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """One violated constraint on one request field."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    field_name: str = Field(alias="fieldName")
    message: str


class StandardError(BaseModel):
    """
    Body for every handled error. 'errors' is only present on validation
    failures.
    """
    timestamp: datetime
    path: str
    status: int
    error: str
    message: str
    errors: Optional[List[FieldError]] = None
