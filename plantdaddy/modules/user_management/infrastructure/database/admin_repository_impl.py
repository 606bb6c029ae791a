# 📄 File: plantdaddy/modules/user_management/infrastructure/database/admin_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Lets an administrator see every account with how much it holds, and remove an
# account together with the homes, plants and history that belong to it.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for admin account management: user listing with per-user
# counts and a full account purge spanning households, plant care and notifications.
#
# 🔗 Dependencies:
# - ORM models from user_management, households, plant_care and notifications
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - admin_service.py (admin API)

import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.households.domain.models.household import HouseholdRole
from plantdaddy.modules.households.infrastructure.database.models import HouseholdMemberModel, HouseholdModel
from plantdaddy.modules.notifications.infrastructure.database.models import (
    NotificationLogModel,
    NotificationSettingsModel,
)
from plantdaddy.modules.plant_care.infrastructure.database.models import (
    CareActivityModel,
    LocationModel,
    PlantHealthRecordModel,
    PlantJournalEntryModel,
    PlantModel,
    PlantSpeciesModel,
)
from plantdaddy.modules.user_management.domain.models.user import User, UserStats
from plantdaddy.modules.user_management.infrastructure.database.models import UserModel

logger = logging.getLogger(__name__)

PLANT_HISTORY_MODELS = (CareActivityModel, PlantHealthRecordModel, PlantJournalEntryModel)


class AdminRepositoryImpl:
    """
    Cross-module account administration.

    Deletion rules:
    - Households the user owns are removed with everything in them
    - Plants and locations the user added to other households stay there and are
      handed to that household's owner
    - Care activities, health records and journal entries the user wrote are removed
    - Memberships, notification settings and the notification log go with the user
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_with_stats(self) -> List[UserStats]:
        plant_count = (
            select(func.count(PlantModel.id))
            .where(PlantModel.user_id == UserModel.id)
            .correlate(UserModel)
            .scalar_subquery()
        )
        household_count = (
            select(func.count(HouseholdMemberModel.id))
            .where(HouseholdMemberModel.user_id == UserModel.id)
            .correlate(UserModel)
            .scalar_subquery()
        )
        care_activity_count = (
            select(func.count(CareActivityModel.id))
            .where(CareActivityModel.user_id == UserModel.id)
            .correlate(UserModel)
            .scalar_subquery()
        )
        stmt = select(
            UserModel,
            plant_count.label("plant_count"),
            household_count.label("household_count"),
            care_activity_count.label("care_activity_count"),
        ).order_by(UserModel.id)

        return [
            UserStats(
                **User.model_validate(model).model_dump(),
                plant_count=plants,
                household_count=households,
                care_activity_count=activities,
            )
            for model, plants, households, activities in (await self._session.execute(stmt)).all()
        ]

    async def get_user(self, user_id: int) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)
        return User.model_validate(model) if model else None

    async def delete_user_completely(self, user_id: int) -> None:
        owned_stmt = select(HouseholdMemberModel.household_id).where(
            HouseholdMemberModel.user_id == user_id,
            HouseholdMemberModel.role == HouseholdRole.OWNER.value,
        )
        owned = list((await self._session.execute(owned_stmt)).scalars().all())

        if owned:
            await self._delete_households(owned)

        # Plants outside any household cannot be handed over
        orphan_stmt = select(PlantModel.id).where(
            PlantModel.user_id == user_id,
            PlantModel.household_id.is_(None),
        )
        await self._delete_plants(list((await self._session.execute(orphan_stmt)).scalars().all()))

        for model in PLANT_HISTORY_MODELS:
            await self._session.execute(delete(model).where(model.user_id == user_id))

        for model in (PlantModel, LocationModel):
            owner = (
                select(HouseholdMemberModel.user_id)
                .where(
                    HouseholdMemberModel.household_id == model.household_id,
                    HouseholdMemberModel.role == HouseholdRole.OWNER.value,
                )
                .scalar_subquery()
            )
            await self._session.execute(
                update(model).where(model.user_id == user_id).values(user_id=owner)
            )
        await self._session.execute(
            update(PlantSpeciesModel).where(PlantSpeciesModel.user_id == user_id).values(user_id=None)
        )

        for model in (HouseholdMemberModel, NotificationLogModel, NotificationSettingsModel):
            await self._session.execute(delete(model).where(model.user_id == user_id))
        await self._session.execute(delete(UserModel).where(UserModel.id == user_id))
        await self._session.flush()

        logger.info(f"Deleted user {user_id} with {len(owned)} owned households")

    async def _delete_households(self, household_ids: Sequence[int]) -> None:
        plant_stmt = select(PlantModel.id).where(PlantModel.household_id.in_(household_ids))
        await self._delete_plants(list((await self._session.execute(plant_stmt)).scalars().all()))

        for model in (LocationModel, PlantSpeciesModel):
            await self._session.execute(delete(model).where(model.household_id.in_(household_ids)))
        await self._session.execute(
            delete(HouseholdMemberModel).where(HouseholdMemberModel.household_id.in_(household_ids))
        )
        await self._session.execute(delete(HouseholdModel).where(HouseholdModel.id.in_(household_ids)))

    async def _delete_plants(self, plant_ids: Sequence[int]) -> None:
        if not plant_ids:
            return
        for model in PLANT_HISTORY_MODELS:
            await self._session.execute(delete(model).where(model.plant_id.in_(plant_ids)))
        await self._session.execute(
            update(NotificationLogModel)
            .where(NotificationLogModel.plant_id.in_(plant_ids))
            .values(plant_id=None)
        )
        await self._session.execute(delete(PlantModel).where(PlantModel.id.in_(plant_ids)))
