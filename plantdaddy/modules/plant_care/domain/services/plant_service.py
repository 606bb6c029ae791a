# 📄 File: plantdaddy/modules/plant_care/domain/services/plant_service.py
# 🧭 Purpose (Layman Explanation):
# Everything you can do with a plant: add it, change it, water it, snooze its reminder,
# see which plants need water today, or remove it.
# 🧪 Purpose (Technical Summary):
# Domain service for the plant aggregate within one household. Enforces role capabilities
# through the HouseholdContext, validates schedule input, records care activities for
# watering and snoozing, and attaches watering snapshots for read assembly.
# 🔗 Dependencies:
# plant/location/care activity repositories, watering_status, HouseholdContext, exceptions
# 🔄 Connected Modules / Calls From:
# plant_care plants router, notifications reminder sweep (read only)

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.models.household import HouseholdAction
from plantdaddy.modules.plant_care.domain.models.plant import CareActivityType, Plant
from plantdaddy.modules.plant_care.domain.repositories.plant_repository import PlantRepository
from plantdaddy.modules.plant_care.domain.services import watering_status
from plantdaddy.modules.plant_care.domain.services.watering_status import WateringSnapshot
from plantdaddy.shared.core.exceptions import ValidationError
from plantdaddy.shared.utils.helpers import ensure_utc, snake_to_camel, utcnow

logger = logging.getLogger(__name__)

# Columns an update may change but never clear
REQUIRED_PLANT_FIELDS = ("name", "location", "watering_frequency", "last_watered")


@dataclass
class PlantView:
    """A plant together with its watering snapshot at read time."""
    plant: Plant
    watering: WateringSnapshot


@dataclass
class PlantDashboard:
    due_today: List[PlantView]
    upcoming: List[PlantView]
    recently_watered: List[PlantView]


class PlantService:
    """
    Domain service for plants of the context household.

    Business rules:
    - Watering frequency is at least one day
    - Last watered time may not be in the future
    - Updates may clear optional fields (species, notes, image) but not required ones
    - Watering logs a care activity, resets the schedule and clears any snooze
    - A snooze must end in the future and logs a "checked" activity
    """

    def __init__(
        self,
        context: HouseholdContext,
        plant_repository: PlantRepository,
        care_activity_repository,
        location_repository=None,
    ):
        self.context = context
        self.plant_repository = plant_repository
        self.care_activity_repository = care_activity_repository
        self.location_repository = location_repository

    # =========================================================================
    # READS
    # =========================================================================

    def _view(self, plant: Plant, now: datetime) -> PlantView:
        return PlantView(plant=plant, watering=watering_status.describe(plant, now))

    async def list_plants(self, now: Optional[datetime] = None) -> List[PlantView]:
        now = now or utcnow()
        plants = await self.plant_repository.list_plants()
        return [self._view(plant, now) for plant in plants]

    async def get_plant(self, plant_id: int, now: Optional[datetime] = None) -> PlantView:
        plant = await self.plant_repository.get_plant(plant_id)
        return self._view(plant, now or utcnow())

    async def dashboard(self, now: Optional[datetime] = None) -> PlantDashboard:
        """Group the household's plants into due today, upcoming and recently watered."""
        now = now or utcnow()
        views = await self.list_plants(now)
        by_id = {view.plant.id: view for view in views}
        groups = watering_status.group_by_status([view.plant for view in views], now)
        return PlantDashboard(
            due_today=[by_id[p.id] for p in groups.due_today],
            upcoming=[by_id[p.id] for p in groups.upcoming],
            recently_watered=[by_id[p.id] for p in groups.recently_watered],
        )

    # =========================================================================
    # WRITES
    # =========================================================================

    def _validate_schedule(self, values: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        values = dict(values)

        frequency = values.get("watering_frequency")
        if frequency is not None and (not isinstance(frequency, int) or frequency < 1):
            raise ValidationError(
                "Watering frequency must be at least 1 day",
                field="wateringFrequency",
                value=frequency,
                constraint="min:1",
            )

        last_watered = values.get("last_watered")
        if last_watered is not None:
            last_watered = ensure_utc(last_watered)
            if last_watered > now:
                raise ValidationError(
                    "Last watered date cannot be in the future",
                    field="lastWatered",
                    value=last_watered.isoformat(),
                )
            values["last_watered"] = last_watered

        if "location" in values and values["location"] is not None:
            location = values["location"].strip()
            if not location:
                raise ValidationError("Location is required", field="location")
            values["location"] = location

        return values

    async def _ensure_location(self, name: Optional[str]) -> None:
        if name and self.location_repository is not None:
            await self.location_repository.upsert_location(name)

    async def create_plant(self, values: Dict[str, Any]) -> PlantView:
        self.context.require(HouseholdAction.CREATE_PLANT)
        now = utcnow()
        values = self._validate_schedule(values, now)
        values.setdefault("last_watered", now)
        if values.get("watering_frequency") is None:
            raise ValidationError("Watering frequency is required", field="wateringFrequency")

        await self._ensure_location(values.get("location"))
        plant = await self.plant_repository.create_plant(values)
        return self._view(plant, now)

    async def update_plant(self, plant_id: int, values: Dict[str, Any]) -> PlantView:
        self.context.require(HouseholdAction.EDIT_PLANT)
        cleared = [field for field in REQUIRED_PLANT_FIELDS if field in values and values[field] is None]
        if cleared:
            raise ValidationError(
                f"{snake_to_camel(cleared[0])} cannot be cleared",
                field=snake_to_camel(cleared[0]),
                constraint="required",
            )

        now = utcnow()
        values = self._validate_schedule(values, now)

        await self.plant_repository.get_plant(plant_id)
        await self._ensure_location(values.get("location"))
        plant = await self.plant_repository.update_plant(plant_id, values)
        return self._view(plant, now)

    async def delete_plant(self, plant_id: int) -> None:
        """Delete a plant and its care, health and journal history."""
        self.context.require(HouseholdAction.DELETE_PLANT)
        await self.plant_repository.delete_plant(plant_id)

    # =========================================================================
    # WATERING & SNOOZE
    # =========================================================================

    async def water_plant(self, plant_id: int, notes: Optional[str] = None) -> PlantView:
        self.context.require(HouseholdAction.WATER)
        now = utcnow()

        await self.plant_repository.get_plant(plant_id)
        await self.care_activity_repository.log_activity(
            plant_id, CareActivityType.WATERING, notes=notes, performed_at=now
        )
        plant = await self.plant_repository.mark_watered(plant_id, now)

        logger.info(f"Plant {plant_id} watered by user {self.context.user_id}")
        return self._view(plant, now)

    async def water_overdue(self, plant_ids: Optional[List[int]] = None) -> List[PlantView]:
        """
        Water several plants at once.

        With ``plant_ids`` only those (visible) plants are watered; without,
        every currently overdue plant of the household is.
        """
        self.context.require(HouseholdAction.WATER)
        now = utcnow()

        if plant_ids:
            targets = await self.plant_repository.get_plants(list(dict.fromkeys(plant_ids)))
        else:
            targets = [p for p in await self.plant_repository.list_plants() if watering_status.describe(p, now).is_overdue]

        watered = []
        for plant in targets:
            await self.care_activity_repository.log_activity(
                plant.id, CareActivityType.WATERING, performed_at=now
            )
            updated = await self.plant_repository.mark_watered(plant.id, now)
            watered.append(self._view(updated, now))

        logger.info(f"Bulk watered {len(watered)} plants in household {self.context.household_id}")
        return watered

    async def snooze(self, plant_id: int, snoozed_until: datetime) -> PlantView:
        self.context.require(HouseholdAction.WATER)
        now = utcnow()
        snoozed_until = ensure_utc(snoozed_until)
        if snoozed_until <= now:
            raise ValidationError(
                "Snooze must end in the future",
                field="snoozedUntil",
                value=snoozed_until.isoformat(),
            )

        await self.plant_repository.get_plant(plant_id)
        await self.care_activity_repository.log_activity(
            plant_id,
            CareActivityType.CHECKED,
            notes=f"Snoozed until {snoozed_until.date().isoformat()}",
            performed_at=now,
        )
        plant = await self.plant_repository.set_snooze(plant_id, snoozed_until)
        return self._view(plant, now)

    async def clear_snooze(self, plant_id: int) -> PlantView:
        self.context.require(HouseholdAction.WATER)
        plant = await self.plant_repository.set_snooze(plant_id, None)
        return self._view(plant, utcnow())
