# 📄 File: plantdaddy/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Signs people up and in. A new account also gets its own home, a starter list of rooms,
# and reminder settings so the app works right away.
# 🧪 Purpose (Technical Summary):
# Domain service for registration (account provisioning: default household with owner
# membership, default locations, default notification settings) and password login
# issuing JWT access tokens.
# 🔗 Dependencies:
# user repository, HouseholdService, location and notification settings repositories,
# plantdaddy.shared.core.security
# 🔄 Connected Modules / Calls From:
# user_management auth API

import logging
from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.services.household_service import HouseholdService
from plantdaddy.modules.households.infrastructure.database.household_repository_impl import HouseholdRepositoryImpl
from plantdaddy.modules.notifications.infrastructure.database.notification_repository_impl import (
    NotificationSettingsRepositoryImpl,
)
from plantdaddy.modules.plant_care.infrastructure.database.location_repository_impl import LocationRepositoryImpl
from plantdaddy.modules.user_management.domain.models.user import User
from plantdaddy.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from plantdaddy.shared.core.exceptions import AuthenticationError, DuplicateResourceError, ValidationError
from plantdaddy.shared.core.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Domain service for authentication.

    Business rules:
    - Usernames are unique, compared case-insensitively
    - Registration provisions "{username}'s Home" with the new user as owner
    - Login failures do not reveal whether the username exists
    """

    def __init__(self, session: AsyncSession):
        self._session = session
        self.user_repository = UserRepositoryImpl(session)
        self.household_service = HouseholdService(HouseholdRepositoryImpl(session))

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token({
            "sub": str(user.id),
            "username": user.username,
            "is_admin": user.is_admin,
        })

    async def register(self, username: str, password: str) -> Tuple[User, str]:
        """
        Register a user and provision their account.

        Returns:
            Tuple[User, str]: New user and access token

        Raises:
            ValidationError: Blank username or short password
            DuplicateResourceError: Username taken
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required", field="username")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
                constraint=f"min_length:{MIN_PASSWORD_LENGTH}",
            )
        if await self.user_repository.username_exists(username):
            raise DuplicateResourceError(
                "Username already exists", resource_type="user", field="username", value=username
            )

        user = await self.user_repository.create_user(username, get_password_hash(password))
        await self._provision(user)

        logger.info(f"Registered user {user.id} ({user.username})")
        return user, self.issue_token(user)

    async def _provision(self, user: User) -> None:
        membership = await self.household_service.create_household(user.id, f"{user.username}'s Home")
        context = HouseholdContext(
            user_id=user.id,
            household_id=membership.household.id,
            role=membership.role,
        )
        await LocationRepositoryImpl(self._session, context).seed_defaults()
        await NotificationSettingsRepositoryImpl(self._session).create_defaults(user.id)

    async def login(self, username: str, password: str) -> Tuple[User, str]:
        credentials = await self.user_repository.get_credentials(username or "")
        if credentials is None or not verify_password(password or "", credentials[1]):
            logger.info(f"Failed login for username '{username}'")
            raise AuthenticationError("Invalid username or password")

        user = credentials[0]
        logger.info(f"User {user.id} logged in")
        return user, self.issue_token(user)

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User account no longer exists")
        return user
