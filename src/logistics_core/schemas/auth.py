"""Authentication request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import Role, TokenClaims, User


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, description="Compared case-sensitively.")
    password: str = Field(..., min_length=1)


class UserCreate(RegisterRequest):
    """Account created by an administrator, who may choose the role."""

    role: Optional[Role] = Field(default=None, description="Defaults to the configured default role when omitted.")


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserModel(BaseModel):
    id: str
    name: str
    email: str
    role: Role

    @classmethod
    def from_domain(cls, user: User) -> "UserModel":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role)


class ClaimsModel(BaseModel):
    user_id: str
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_domain(cls, claims: TokenClaims) -> "ClaimsModel":
        return cls(
            user_id=claims.user_id,
            email=claims.email,
            role=claims.role,
            issued_at=claims.issued_at,
            expires_at=claims.expires_at,
        )
