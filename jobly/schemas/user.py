"""
Pydantic schemas for users, authentication and applications.
"""

from pydantic import ConfigDict, EmailStr, Field
from typing import List, Optional

from jobly.schemas.company import CamelModel


class UserRegisterRequest(CamelModel):
    """Request schema for self-registration (never an admin)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins creating users."""
    is_admin: bool = False


class UserUpdateRequest(CamelModel):
    """Partial user update; isAdmin is deliberately not accepted here."""
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None


class UserLoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    """JWT token response."""
    token: str


class UserRecord(CamelModel):
    """User as returned by create and update, without applications."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserResponse(UserRecord):
    """User with the ids of the jobs they applied to."""
    jobs: List[int] = []


class UserEnvelope(CamelModel):
    user: UserRecord


class UserDetailEnvelope(CamelModel):
    user: UserResponse


class UserListResponse(CamelModel):
    users: List[UserResponse]


class UserCreateResponse(CamelModel):
    user: UserRecord
    token: str


class ApplicationResponse(CamelModel):
    applied: int
