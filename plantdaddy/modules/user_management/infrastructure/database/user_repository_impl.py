# 📄 File: plantdaddy/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves new accounts and finds existing ones by name or number.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for user accounts with case-insensitive username lookup and
# IntegrityError translation for duplicate usernames.
#
# 🔗 Dependencies:
# - UserModel, User domain model
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - auth_service.py (registration, login, current user)

import logging
from typing import Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.user_management.domain.models.user import User
from plantdaddy.modules.user_management.infrastructure.database.models import UserModel
from plantdaddy.shared.core.exceptions import DuplicateResourceError

logger = logging.getLogger(__name__)


class UserRepositoryImpl:
    """
    SQLAlchemy repository for user accounts.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> User:
        """
        Create a new user.

        Raises:
            DuplicateResourceError: If the username is taken
        """
        model = UserModel(username=username, password_hash=password_hash, is_admin=is_admin)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            logger.warning(f"Duplicate username on registration: {username}")
            raise DuplicateResourceError(
                "Username already exists",
                resource_type="user",
                field="username",
                value=username,
            ) from e

        logger.info(f"Created user {model.id} ({username})")
        return User.model_validate(model)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)
        return User.model_validate(model) if model else None

    async def get_credentials(self, username: str) -> Optional[Tuple[User, str]]:
        """User and stored password hash for ``username`` (case-insensitive)."""
        stmt = select(UserModel).where(func.lower(UserModel.username) == username.strip().lower())
        model = (await self._session.execute(stmt)).scalars().first()
        if model is None:
            return None
        return User.model_validate(model), model.password_hash

    async def username_exists(self, username: str) -> bool:
        stmt = select(UserModel.id).where(func.lower(UserModel.username) == username.strip().lower())
        return (await self._session.execute(stmt)).first() is not None
