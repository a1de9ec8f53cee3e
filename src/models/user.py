"""
User account Pydantic models
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ROLE = "user"

class Password(BaseModel):
    """
    Password of a user account.

    Only ``hash`` is persisted (column ``password_hash``). ``plaintext`` lives as
    long as the object does and is excluded from serialization. Hashing and
    comparison are done by the caller.
    """
    plaintext: Optional[str] = Field(default=None, exclude=True, repr=False)
    hash: bytes = Field(default=b"", repr=False)


class User(BaseModel):
    """Disconnected copy of a row in the user_info table"""
    model_config = ConfigDict(validate_assignment=True)

    id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    name: str = Field(..., min_length=1, max_length=500)
    surname: str = Field(..., min_length=1, max_length=500)
    email: str
    password: Password = Field(default_factory=Password)
    role: str = Field(default=DEFAULT_ROLE, min_length=1)
    activated: bool = False
    version: int = 0

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('email must be provided')
        if '@' not in v:
            raise ValueError('email must be a valid email address')
        return v
