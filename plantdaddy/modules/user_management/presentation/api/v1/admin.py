# 📄 File: plantdaddy/modules/user_management/presentation/api/v1/admin.py
# 🧭 Purpose (Layman Explanation):
# Administrator pages: see every account and remove one with all of its data.
#
# 🧪 Purpose (Technical Summary):
# FastAPI admin endpoints guarded by get_current_admin_user; every action is logged
# with the acting admin.
#
# 🔗 Dependencies:
# - FastAPI router
# - AdminService, auth schemas
# - plantdaddy.shared.core.dependencies (admin guard)
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router (router inclusion under /api/v1/admin)

"""
Admin API Endpoints

Endpoints:
- GET /users: All accounts with plant, household and care activity counts
- DELETE /users/{user_id}: Delete an account and its data (not your own)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.user_management.domain.services.admin_service import AdminService
from plantdaddy.modules.user_management.presentation.api.schemas.auth_schemas import AdminUserResponse
from plantdaddy.shared.core.dependencies import CurrentUser, get_current_admin_user
from plantdaddy.shared.core.schemas import MessageResponse
from plantdaddy.shared.infrastructure.database import get_db_session

logger = logging.getLogger(__name__)

admin_router = APIRouter()


def get_admin_service(db: AsyncSession = Depends(get_db_session)) -> AdminService:
    return AdminService(db)


@admin_router.get("/users", response_model=List[AdminUserResponse], summary="List users (admin only)")
async def list_users(
    current_admin: CurrentUser = Depends(get_current_admin_user),
    admin_service: AdminService = Depends(get_admin_service),
) -> List[AdminUserResponse]:
    logger.info(f"Admin user list requested by {current_admin.user_id}")
    return [AdminUserResponse.from_domain(user) for user in await admin_service.list_users()]


@admin_router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user and all their data (admin only)",
    responses={
        403: {"description": "Admin privileges required"},
        404: {"description": "User not found"},
        422: {"description": "Cannot delete your own account"},
    }
)
async def delete_user(
    user_id: int,
    current_admin: CurrentUser = Depends(get_current_admin_user),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    user = await admin_service.delete_user(current_admin.user_id, user_id)
    return MessageResponse(message=f'User "{user.username}" and all associated data deleted')
