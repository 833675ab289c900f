"""Auth Schemas — registration, login and public user payloads.

Invariants:
    - RegisterRequest.name: >= 2 chars after strip
    - RegisterRequest.password: >= 6 chars and at most 72 UTF-8 bytes (bcrypt input limit),
      never echoed back
    - Emails are lower-cased before they reach the credential store

Design Decisions:
    - EmailStr (email-validator) over a hand-written regex
    - UserPublic never carries password_hash
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.domain_types import UserRole

BCRYPT_MAX_BYTES = 72


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class RegisterRequest(_CamelModel):
    """Registration body — validates name, email and password length."""
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=BCRYPT_MAX_BYTES)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return v


class LoginRequest(_CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class UserPublic(_CamelModel):
    """Public-facing user data (registration and login responses)."""
    id: UUID
    name: str
    email: str
    role: UserRole
    tokens_balance: int
    created_at: datetime


class IdentityOut(_CamelModel):
    """Resolved identity of the calling user (profile page)."""
    id: UUID
    name: str
    email: str
    role: UserRole
    tokens_balance: int


class RegisterResponse(BaseModel):
    message: str
    user: UserPublic


class LoginResponse(BaseModel):
    message: str
    user: UserPublic


class MeResponse(BaseModel):
    user: IdentityOut


class MessageResponse(BaseModel):
    message: str
