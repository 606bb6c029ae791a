# 📄 File: plantdaddy/modules/plant_care/infrastructure/database/history_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores everything that happens to a plant over time: waterings and other care, health
# check-ins, and journal photos.
#
# 🧪 Purpose (Technical Summary):
# Household-scoped SQLAlchemy repositories for plant-owned child rows (care activities,
# health records, journal entries). Scoping goes through a join to the owning plant's
# household; rows of other households resolve as NotFoundError.
#
# 🔗 Dependencies:
# - HouseholdScopedRepository base, plant_care ORM models, UserModel (member names)
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - plant_service.py (watering and snooze activities)
# - care_service.py, care_stats_service.py

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select

from plantdaddy.modules.plant_care.domain.models.plant import (
    CareActivity,
    CareActivityType,
    HealthRecord,
    HealthStatus,
    JournalEntry,
)
from plantdaddy.modules.plant_care.infrastructure.database.base_repository import HouseholdScopedRepository
from plantdaddy.modules.plant_care.infrastructure.database.models import (
    CareActivityModel,
    PlantHealthRecordModel,
    PlantJournalEntryModel,
    PlantModel,
)
from plantdaddy.modules.user_management.infrastructure.database.models import UserModel
from plantdaddy.shared.core.exceptions import NotFoundError
from plantdaddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class _PlantChildRepository(HouseholdScopedRepository):
    """Shared plumbing for rows that hang off a plant."""

    model = None

    async def _require_plant(self, plant_id: int) -> None:
        stmt = select(PlantModel.id).where(
            PlantModel.id == plant_id,
            PlantModel.household_id == self.household_id,
        )
        if (await self._session.execute(stmt)).first() is None:
            raise NotFoundError("Plant not found", resource_type="plant", resource_id=plant_id)

    def _scoped_select(self):
        return self._plant_scoped(select(self.model), self.model.plant_id)

    async def _get_model(self, row_id: int):
        stmt = self._scoped_select().where(self.model.id == row_id)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        if model is None:
            raise self._not_found(row_id)
        return model

    async def _add(self, plant_id: int, **values):
        await self._require_plant(plant_id)
        row = self.model(plant_id=plant_id, user_id=self.user_id, **values)
        self._session.add(row)
        await self._session.flush()
        return row

    async def _delete(self, row_id: int) -> None:
        model = await self._get_model(row_id)
        await self._session.delete(model)
        await self._session.flush()


# =============================================================================
# CARE ACTIVITIES
# =============================================================================

class CareActivityRepositoryImpl(_PlantChildRepository):
    """Append-only care log of a household's plants."""

    model = CareActivityModel
    resource_type = "care_activity"

    async def list_for_plant(self, plant_id: int) -> List[CareActivity]:
        await self._require_plant(plant_id)
        stmt = self._scoped_select().where(CareActivityModel.plant_id == plant_id).order_by(
            CareActivityModel.performed_at.desc(), CareActivityModel.id.desc()
        )
        models = (await self._session.execute(stmt)).scalars().all()
        return [CareActivity.model_validate(m) for m in models]

    async def log_activity(
        self,
        plant_id: int,
        activity_type: CareActivityType,
        notes: Optional[str] = None,
        performed_at: Optional[datetime] = None
    ) -> CareActivity:
        row = await self._add(
            plant_id,
            activity_type=CareActivityType(activity_type).value,
            notes=notes,
            performed_at=performed_at or utcnow(),
        )
        logger.debug(f"Logged {row.activity_type} for plant {plant_id}")
        return CareActivity.model_validate(row)

    async def activity_days(self, since: datetime) -> List[datetime]:
        """Timestamps of all activities since ``since`` (newest first)."""
        stmt = self._plant_scoped(
            select(CareActivityModel.performed_at), CareActivityModel.plant_id
        ).where(CareActivityModel.performed_at >= since).order_by(CareActivityModel.performed_at.desc())
        return list((await self._session.execute(stmt)).scalars().all())

    async def counts_by_member(self, since: datetime) -> List[Tuple[int, str, int]]:
        """(user_id, username, count) for activities since ``since``, busiest first."""
        stmt = (
            self._plant_scoped(
                select(CareActivityModel.user_id, UserModel.username, func.count(CareActivityModel.id)),
                CareActivityModel.plant_id,
            )
            .join(UserModel, UserModel.id == CareActivityModel.user_id)
            .where(CareActivityModel.performed_at >= since)
            .group_by(CareActivityModel.user_id, UserModel.username)
            .order_by(func.count(CareActivityModel.id).desc(), CareActivityModel.user_id)
        )
        return [tuple(row) for row in (await self._session.execute(stmt)).all()]

    async def counts_by_type(self, since: datetime) -> List[Tuple[str, int]]:
        stmt = (
            self._plant_scoped(
                select(CareActivityModel.activity_type, func.count(CareActivityModel.id)),
                CareActivityModel.plant_id,
            )
            .where(CareActivityModel.performed_at >= since)
            .group_by(CareActivityModel.activity_type)
        )
        return [tuple(row) for row in (await self._session.execute(stmt)).all()]


# =============================================================================
# HEALTH RECORDS
# =============================================================================

class HealthRecordRepositoryImpl(_PlantChildRepository):
    model = PlantHealthRecordModel
    resource_type = "health_record"

    async def list_for_plant(self, plant_id: int) -> List[HealthRecord]:
        await self._require_plant(plant_id)
        stmt = self._scoped_select().where(PlantHealthRecordModel.plant_id == plant_id).order_by(
            PlantHealthRecordModel.recorded_at.desc(), PlantHealthRecordModel.id.desc()
        )
        models = (await self._session.execute(stmt)).scalars().all()
        return [HealthRecord.model_validate(m) for m in models]

    async def add_record(
        self,
        plant_id: int,
        status: HealthStatus,
        notes: Optional[str] = None,
        image_url: Optional[str] = None,
        recorded_at: Optional[datetime] = None
    ) -> HealthRecord:
        row = await self._add(
            plant_id,
            status=HealthStatus(status).value,
            notes=notes,
            image_url=image_url,
            recorded_at=recorded_at or utcnow(),
        )
        return HealthRecord.model_validate(row)

    async def update_record(self, record_id: int, values: dict) -> HealthRecord:
        model = await self._get_model(record_id)
        for field in ("status", "notes", "image_url"):
            if field in values:
                value = values[field]
                setattr(model, field, HealthStatus(value).value if field == "status" else value)
        await self._session.flush()
        return HealthRecord.model_validate(model)

    async def delete_record(self, record_id: int) -> None:
        await self._delete(record_id)


# =============================================================================
# JOURNAL ENTRIES
# =============================================================================

class JournalRepositoryImpl(_PlantChildRepository):
    model = PlantJournalEntryModel
    resource_type = "journal_entry"

    async def list_for_plant(self, plant_id: int) -> List[JournalEntry]:
        await self._require_plant(plant_id)
        stmt = self._scoped_select().where(PlantJournalEntryModel.plant_id == plant_id).order_by(
            PlantJournalEntryModel.created_at.desc(), PlantJournalEntryModel.id.desc()
        )
        models = (await self._session.execute(stmt)).scalars().all()
        return [JournalEntry.model_validate(m) for m in models]

    async def add_entry(self, plant_id: int, image_url: str, caption: Optional[str] = None) -> JournalEntry:
        row = await self._add(plant_id, image_url=image_url, caption=caption, created_at=utcnow())
        return JournalEntry.model_validate(row)

    async def delete_entry(self, entry_id: int) -> None:
        await self._delete(entry_id)
