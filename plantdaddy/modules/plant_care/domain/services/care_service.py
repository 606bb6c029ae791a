# 📄 File: plantdaddy/modules/plant_care/domain/services/care_service.py
# 🧭 Purpose (Layman Explanation):
# Keeps each plant's diary: care you did (fertilizing, pruning...), health check-ins and
# journal photos.
# 🧪 Purpose (Technical Summary):
# Domain service over the plant-owned history repositories with capability checks. Care
# activities are append-only; "checked" entries are written only by the snooze flow.
# 🔗 Dependencies:
# history repositories, HouseholdContext, plant domain enums, exceptions
# 🔄 Connected Modules / Calls From:
# plant_care care router (activities, health records, journal)

import logging
from typing import List, Optional

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.models.household import HouseholdAction
from plantdaddy.modules.plant_care.domain.models.plant import (
    CareActivity,
    CareActivityType,
    HealthRecord,
    HealthStatus,
    JournalEntry,
)
from plantdaddy.shared.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class CareService:
    def __init__(
        self,
        context: HouseholdContext,
        care_activity_repository,
        health_record_repository,
        journal_repository,
    ):
        self.context = context
        self.care_activity_repository = care_activity_repository
        self.health_record_repository = health_record_repository
        self.journal_repository = journal_repository

    # =========================================================================
    # CARE ACTIVITIES
    # =========================================================================

    async def list_activities(self, plant_id: int) -> List[CareActivity]:
        return await self.care_activity_repository.list_for_plant(plant_id)

    async def log_activity(
        self,
        plant_id: int,
        activity_type: CareActivityType,
        notes: Optional[str] = None
    ) -> CareActivity:
        """
        Log a manual care activity.

        Watering through this path only records history; the watering
        endpoint is what resets the schedule.
        """
        self.context.require(HouseholdAction.LOG_CARE)
        activity_type = CareActivityType(activity_type)
        if activity_type not in CareActivityType.user_loggable():
            raise ValidationError(
                f"Activity type '{activity_type.value}' cannot be logged manually",
                field="activityType",
                value=activity_type.value,
            )
        return await self.care_activity_repository.log_activity(plant_id, activity_type, notes=notes)

    # =========================================================================
    # HEALTH RECORDS
    # =========================================================================

    async def list_health_records(self, plant_id: int) -> List[HealthRecord]:
        return await self.health_record_repository.list_for_plant(plant_id)

    async def add_health_record(
        self,
        plant_id: int,
        status: HealthStatus,
        notes: Optional[str] = None,
        image_url: Optional[str] = None
    ) -> HealthRecord:
        self.context.require(HouseholdAction.LOG_CARE)
        return await self.health_record_repository.add_record(
            plant_id, HealthStatus(status), notes=notes, image_url=image_url
        )

    async def update_health_record(self, record_id: int, values: dict) -> HealthRecord:
        self.context.require(HouseholdAction.LOG_CARE)
        if values.get("status") is None:
            values.pop("status", None)
        return await self.health_record_repository.update_record(record_id, values)

    async def delete_health_record(self, record_id: int) -> None:
        self.context.require(HouseholdAction.EDIT_PLANT)
        await self.health_record_repository.delete_record(record_id)

    # =========================================================================
    # JOURNAL
    # =========================================================================

    async def list_journal(self, plant_id: int) -> List[JournalEntry]:
        return await self.journal_repository.list_for_plant(plant_id)

    async def add_journal_entry(self, plant_id: int, image_url: str, caption: Optional[str] = None) -> JournalEntry:
        self.context.require(HouseholdAction.LOG_CARE)
        if not (image_url or "").strip():
            raise ValidationError("Image URL is required", field="imageUrl")
        return await self.journal_repository.add_entry(plant_id, image_url.strip(), caption=caption)

    async def delete_journal_entry(self, entry_id: int) -> None:
        self.context.require(HouseholdAction.EDIT_PLANT)
        await self.journal_repository.delete_entry(entry_id)
