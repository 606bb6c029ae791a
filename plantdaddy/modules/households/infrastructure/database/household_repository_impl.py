# 📄 File: plantdaddy/modules/households/infrastructure/database/household_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and writes households and their member lists in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of HouseholdRepository with async queries, IntegrityError
# translation for duplicate memberships, and ORM-to-domain mapping.
#
# 🔗 Dependencies:
# - households.domain.repositories.household_repository (interface)
# - households.infrastructure.database.models, user_management models (username join)
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - household_service.py
# - households.presentation.dependencies (scoping resolution)
# - notifications reminder sweep (memberships per user)

import logging
from typing import List, Optional

from sqlalchemy import case, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.households.domain.models.household import (
    Household,
    HouseholdMember,
    HouseholdMembership,
    HouseholdRole,
)
from plantdaddy.modules.households.domain.repositories.household_repository import HouseholdRepository
from plantdaddy.modules.households.infrastructure.database.models import (
    HouseholdMemberModel,
    HouseholdModel,
)
from plantdaddy.modules.user_management.infrastructure.database.models import UserModel
from plantdaddy.shared.core.exceptions import DuplicateResourceError, NotFoundError

logger = logging.getLogger(__name__)


class HouseholdRepositoryImpl(HouseholdRepository):
    """
    SQLAlchemy implementation of the HouseholdRepository interface.
    """

    def __init__(self, session: AsyncSession):
        """
        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session

    async def create_household(self, name: str, invite_code: str, created_by: int) -> Household:
        model = HouseholdModel(name=name, invite_code=invite_code, created_by=created_by)
        self._session.add(model)
        await self._session.flush()

        logger.info(f"Created household {model.id} for user {created_by}")
        return Household.model_validate(model)

    async def get_household(self, household_id: int) -> Optional[Household]:
        model = await self._session.get(HouseholdModel, household_id)
        return Household.model_validate(model) if model else None

    async def get_by_invite_code(self, invite_code: str) -> Optional[Household]:
        stmt = select(HouseholdModel).where(HouseholdModel.invite_code == invite_code)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return Household.model_validate(model) if model else None

    async def invite_code_exists(self, invite_code: str) -> bool:
        stmt = select(HouseholdModel.id).where(HouseholdModel.invite_code == invite_code)
        return (await self._session.execute(stmt)).first() is not None

    async def update_household(
        self,
        household_id: int,
        name: Optional[str] = None,
        invite_code: Optional[str] = None
    ) -> Household:
        model = await self._session.get(HouseholdModel, household_id)
        if model is None:
            raise NotFoundError("Household not found", resource_type="household", resource_id=household_id)

        if name is not None:
            model.name = name
        if invite_code is not None:
            model.invite_code = invite_code
        await self._session.flush()

        logger.debug(f"Updated household {household_id}")
        return Household.model_validate(model)

    async def add_member(self, household_id: int, user_id: int, role: HouseholdRole) -> HouseholdMember:
        model = HouseholdMemberModel(household_id=household_id, user_id=user_id, role=role.value)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            logger.warning(f"User {user_id} is already a member of household {household_id}")
            raise DuplicateResourceError(
                "You are already a member of this household",
                resource_type="household_member",
            ) from e

        logger.info(f"User {user_id} joined household {household_id} as {role.value}")
        return HouseholdMember.model_validate(model)

    async def get_membership(self, household_id: int, user_id: int) -> Optional[HouseholdMember]:
        stmt = select(HouseholdMemberModel).where(
            HouseholdMemberModel.household_id == household_id,
            HouseholdMemberModel.user_id == user_id,
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return HouseholdMember.model_validate(model) if model else None

    async def list_memberships_for_user(self, user_id: int) -> List[HouseholdMembership]:
        owner_first = case((HouseholdMemberModel.role == HouseholdRole.OWNER.value, 0), else_=1)
        stmt = (
            select(HouseholdModel, HouseholdMemberModel.role)
            .join(HouseholdMemberModel, HouseholdMemberModel.household_id == HouseholdModel.id)
            .where(HouseholdMemberModel.user_id == user_id)
            .order_by(owner_first, HouseholdMemberModel.joined_at, HouseholdModel.id)
        )
        rows = (await self._session.execute(stmt)).all()
        return [
            HouseholdMembership(household=Household.model_validate(household), role=HouseholdRole(role))
            for household, role in rows
        ]

    async def list_members(self, household_id: int) -> List[HouseholdMember]:
        stmt = (
            select(HouseholdMemberModel, UserModel.username)
            .join(UserModel, UserModel.id == HouseholdMemberModel.user_id)
            .where(HouseholdMemberModel.household_id == household_id)
            .order_by(HouseholdMemberModel.joined_at, HouseholdMemberModel.id)
        )
        rows = (await self._session.execute(stmt)).all()
        members = []
        for model, username in rows:
            member = HouseholdMember.model_validate(model)
            member.username = username
            members.append(member)
        return members

    async def update_member_role(
        self,
        household_id: int,
        user_id: int,
        role: HouseholdRole
    ) -> Optional[HouseholdMember]:
        stmt = select(HouseholdMemberModel).where(
            HouseholdMemberModel.household_id == household_id,
            HouseholdMemberModel.user_id == user_id,
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        if model is None:
            return None

        model.role = role.value
        await self._session.flush()
        logger.info(f"User {user_id} is now {role.value} in household {household_id}")
        return HouseholdMember.model_validate(model)

    async def remove_member(self, household_id: int, user_id: int) -> bool:
        stmt = delete(HouseholdMemberModel).where(
            HouseholdMemberModel.household_id == household_id,
            HouseholdMemberModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        removed = result.rowcount > 0
        if removed:
            logger.info(f"Removed user {user_id} from household {household_id}")
        return removed
