# 📄 File: plantdaddy/modules/user_management/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for signing up, signing in, and "who am I".
#
# 🧪 Purpose (Technical Summary):
# FastAPI authentication endpoints issuing JWT bearer tokens, rate limited per client
# address with slowapi.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - AuthService, auth schemas
# - plantdaddy.shared.core.rate_limiter
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router (router inclusion under /api/v1/auth)

"""
Authentication API Endpoints

Endpoints:
- POST /register: Create an account (with a default household) and return a token
- POST /login: Username/password authentication
- GET /me: Current user
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.user_management.domain.services.auth_service import AuthService
from plantdaddy.modules.user_management.presentation.api.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from plantdaddy.shared.core.dependencies import CurrentUser, get_current_user
from plantdaddy.shared.core.rate_limiter import limiter
from plantdaddy.shared.infrastructure.database import get_db_session

logger = logging.getLogger(__name__)

auth_router = APIRouter()


def get_auth_service(db: AsyncSession = Depends(get_db_session)) -> AuthService:
    return AuthService(db)


@auth_router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account",
    responses={
        409: {"description": "Username already exists"},
        422: {"description": "Validation error"},
        429: {"description": "Too many registration attempts"},
    }
)
@limiter.limit("5/minute")
async def register(
    request: Request,
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = await auth_service.register(payload.username, payload.password)
    return AuthResponse.build(user, token)


@auth_router.post(
    "/login",
    response_model=AuthResponse,
    summary="User authentication",
    responses={
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many login attempts"},
    }
)
@limiter.limit("10/minute")
async def login(
    request: Request,
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = await auth_service.login(payload.username, payload.password)
    return AuthResponse.build(user, token)


@auth_router.get("/me", response_model=UserResponse, summary="Get current user information")
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    return UserResponse.from_domain(await auth_service.get_user(current_user.user_id))
