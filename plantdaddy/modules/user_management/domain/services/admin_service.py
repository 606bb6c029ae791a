# 📄 File: plantdaddy/modules/user_management/domain/services/admin_service.py
# 🧭 Purpose (Layman Explanation):
# What an administrator may do with other people's accounts: look them over and
# remove one completely.
# 🧪 Purpose (Technical Summary):
# Domain service for admin account management on top of AdminRepositoryImpl,
# guarding against self-deletion and unknown accounts.
# 🔗 Dependencies:
# admin repository, plantdaddy.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# user_management admin API

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.user_management.domain.models.user import User, UserStats
from plantdaddy.modules.user_management.infrastructure.database.admin_repository_impl import AdminRepositoryImpl
from plantdaddy.shared.core.exceptions import BusinessRuleViolationError, NotFoundError

logger = logging.getLogger(__name__)


class AdminService:
    """Account administration for users with the admin flag."""

    def __init__(self, session: AsyncSession):
        self.repository = AdminRepositoryImpl(session)

    async def list_users(self) -> List[UserStats]:
        return await self.repository.list_with_stats()

    async def delete_user(self, admin_id: int, user_id: int) -> User:
        """
        Delete an account and all of its data.

        Args:
            admin_id: Admin performing the deletion
            user_id: Account to delete

        Returns:
            User: The deleted account

        Raises:
            BusinessRuleViolationError: Admin tried to delete their own account
            NotFoundError: No such account
        """
        if admin_id == user_id:
            raise BusinessRuleViolationError(
                "Cannot delete your own account",
                rule="no_self_delete",
            )

        user = await self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)

        await self.repository.delete_user_completely(user_id)
        logger.warning(f"Admin {admin_id} deleted user {user_id} ({user.username})")
        return user
