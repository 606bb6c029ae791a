# 📄 File: plantdaddy/modules/user_management/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of sign-up and sign-in forms and what the app gets back.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for registration, login, the current-user endpoint and the
# admin user listing.
#
# 🔗 Dependencies:
# - pydantic, plantdaddy.shared.core.schemas
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.modules.user_management.presentation.api.v1.auth
# - plantdaddy.modules.user_management.presentation.api.v1.admin

from datetime import datetime

from pydantic import Field, field_validator

from plantdaddy.modules.user_management.domain.models.user import User, UserStats
from plantdaddy.shared.core.schemas import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class RegisterRequest(LoginRequest):
    password: str = Field(..., min_length=6, max_length=128, description="At least 6 characters")

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be blank")
        return v


class UserResponse(CamelModel):
    id: int
    username: str
    is_admin: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(**user.model_dump())


class AuthResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

    @classmethod
    def build(cls, user: User, token: str) -> "AuthResponse":
        return cls(access_token=token, user=UserResponse.from_domain(user))


class AdminUserResponse(UserResponse):
    plant_count: int
    household_count: int
    care_activity_count: int

    @classmethod
    def from_domain(cls, user: UserStats) -> "AdminUserResponse":
        return cls(**user.model_dump())
