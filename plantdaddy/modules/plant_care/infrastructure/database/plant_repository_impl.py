# 📄 File: plantdaddy/modules/plant_care/infrastructure/database/plant_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and writes a household's plants in the database, and cleans up a plant's history
# when the plant is deleted.
#
# 🧪 Purpose (Technical Summary):
# Household-scoped SQLAlchemy implementation of PlantRepository. Reads filter on the
# context household, creates are stamped from the context, deletes cascade explicitly to
# care activities, health records and journal entries in the same transaction.
#
# 🔗 Dependencies:
# - plant_care.domain.repositories.plant_repository (interface)
# - HouseholdScopedRepository base, plant_care ORM models
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - plant_service.py, care_stats_service.py
# - notifications reminder sweep

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select

from plantdaddy.modules.plant_care.domain.models.plant import Plant
from plantdaddy.modules.plant_care.domain.repositories.plant_repository import PlantRepository
from plantdaddy.modules.plant_care.infrastructure.database.base_repository import HouseholdScopedRepository
from plantdaddy.modules.plant_care.infrastructure.database.models import (
    CareActivityModel,
    PlantHealthRecordModel,
    PlantJournalEntryModel,
    PlantModel,
)

logger = logging.getLogger(__name__)

# Columns a client may change on an existing plant
UPDATABLE_FIELDS = frozenset({
    "name",
    "species",
    "location",
    "watering_frequency",
    "last_watered",
    "notes",
    "image_url",
})


class PlantRepositoryImpl(HouseholdScopedRepository, PlantRepository):
    """
    SQLAlchemy implementation of the PlantRepository interface.
    """

    resource_type = "plant"

    def _scoped_select(self):
        return select(PlantModel).where(PlantModel.household_id == self.household_id)

    async def _get_model(self, plant_id: int) -> PlantModel:
        stmt = self._scoped_select().where(PlantModel.id == plant_id)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        if model is None:
            raise self._not_found(plant_id)
        return model

    async def list_plants(self) -> List[Plant]:
        stmt = self._scoped_select().order_by(PlantModel.name, PlantModel.id)
        models = (await self._session.execute(stmt)).scalars().all()
        return [Plant.model_validate(m) for m in models]

    async def get_plant(self, plant_id: int) -> Plant:
        return Plant.model_validate(await self._get_model(plant_id))

    async def get_plants(self, plant_ids: List[int]) -> List[Plant]:
        if not plant_ids:
            return []
        stmt = self._scoped_select().where(PlantModel.id.in_(plant_ids)).order_by(PlantModel.id)
        models = (await self._session.execute(stmt)).scalars().all()
        return [Plant.model_validate(m) for m in models]

    async def create_plant(self, values: Dict[str, Any]) -> Plant:
        model = PlantModel(**self._stamp(values))
        self._session.add(model)
        await self._session.flush()

        logger.info(f"Created plant {model.id} in household {self.household_id}")
        return Plant.model_validate(model)

    async def update_plant(self, plant_id: int, values: Dict[str, Any]) -> Plant:
        model = await self._get_model(plant_id)
        for field, value in values.items():
            if field in UPDATABLE_FIELDS:
                setattr(model, field, value)
        await self._session.flush()

        logger.debug(f"Updated plant {plant_id}: {sorted(values)}")
        return Plant.model_validate(model)

    async def delete_plant(self, plant_id: int) -> None:
        model = await self._get_model(plant_id)

        for child in (CareActivityModel, PlantHealthRecordModel, PlantJournalEntryModel):
            await self._session.execute(delete(child).where(child.plant_id == plant_id))
        await self._session.delete(model)
        await self._session.flush()

        logger.info(f"Deleted plant {plant_id} with its history from household {self.household_id}")

    async def mark_watered(self, plant_id: int, watered_at: datetime) -> Plant:
        model = await self._get_model(plant_id)
        model.last_watered = watered_at
        model.snoozed_until = None
        await self._session.flush()
        return Plant.model_validate(model)

    async def set_snooze(self, plant_id: int, snoozed_until: Optional[datetime]) -> Plant:
        model = await self._get_model(plant_id)
        model.snoozed_until = snoozed_until
        await self._session.flush()
        return Plant.model_validate(model)

    async def count_by_location(self, location_name: str) -> int:
        stmt = select(func.count(PlantModel.id)).where(
            PlantModel.household_id == self.household_id,
            func.lower(PlantModel.location) == location_name.lower(),
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def count_by_species(self, species_name: str) -> int:
        stmt = select(func.count(PlantModel.id)).where(
            PlantModel.household_id == self.household_id,
            func.lower(PlantModel.species) == species_name.lower(),
        )
        return (await self._session.execute(stmt)).scalar_one()
