"""
userapi/schemas/user.py

Defines the Pydantic schemas for the User wire shapes.

UserRequest is the single input shape for both create (POST) and partial
update (PATCH). Every field is optional at the wire level; whether a missing
field is an error depends on the validation mode (see userapi/validators.py).
Unknown keys, including a client-supplied 'id', are ignored.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class UserRequest(BaseModel):
    """
    Incoming user payload. Constraint checks (blank, length, e-mail shape,
    surrounding whitespace) run in the validation pipeline, not here, so
    that every violation can be reported at once.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """
    Schema for returning user data to clients. A direct projection of the
    stored document.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    password: str
