# 📄 File: plantdaddy/modules/plant_care/infrastructure/database/location_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Keeps the list of rooms and spots (Kitchen, Balcony...) each household puts plants in.
#
# 🧪 Purpose (Technical Summary):
# Household-scoped SQLAlchemy repository for locations with case-insensitive upsert,
# duplicate-name protection and default-location seeding.
#
# 🔗 Dependencies:
# - HouseholdScopedRepository base, LocationModel
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - location_service.py
# - user_management registration provisioning (default locations)

import logging
from typing import Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from plantdaddy.modules.plant_care.domain.models.plant import Location
from plantdaddy.modules.plant_care.infrastructure.database.base_repository import HouseholdScopedRepository
from plantdaddy.modules.plant_care.infrastructure.database.models import LocationModel
from plantdaddy.shared.core.exceptions import DuplicateResourceError

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = (
    "Living Room",
    "Bedroom",
    "Kitchen",
    "Bathroom",
    "Office",
    "Balcony",
    "Dining Room",
    "Hallway",
    "Porch",
    "Patio",
)


class LocationRepositoryImpl(HouseholdScopedRepository):
    """Locations of one household."""

    resource_type = "location"

    def _scoped_select(self):
        return select(LocationModel).where(LocationModel.household_id == self.household_id)

    async def _get_model(self, location_id: int) -> LocationModel:
        stmt = self._scoped_select().where(LocationModel.id == location_id)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        if model is None:
            raise self._not_found(location_id)
        return model

    async def _find_by_name(self, name: str) -> Optional[LocationModel]:
        stmt = self._scoped_select().where(func.lower(LocationModel.name) == name.strip().lower())
        return (await self._session.execute(stmt)).scalars().first()

    async def list_locations(self) -> List[Location]:
        stmt = self._scoped_select().order_by(LocationModel.name)
        models = (await self._session.execute(stmt)).scalars().all()
        return [Location.model_validate(m) for m in models]

    async def get_location(self, location_id: int) -> Location:
        return Location.model_validate(await self._get_model(location_id))

    async def upsert_location(self, name: str, is_default: bool = False) -> Location:
        """
        Return the household's location with this name, creating it if needed.

        Names compare case-insensitively, so "kitchen" finds "Kitchen".
        """
        existing = await self._find_by_name(name)
        if existing is not None:
            return Location.model_validate(existing)

        model = LocationModel(**self._stamp({"name": name.strip(), "is_default": is_default}))
        self._session.add(model)
        await self._session.flush()

        logger.debug(f"Created location '{model.name}' in household {self.household_id}")
        return Location.model_validate(model)

    async def rename_location(self, location_id: int, name: str) -> Location:
        model = await self._get_model(location_id)
        clash = await self._find_by_name(name)
        if clash is not None and clash.id != model.id:
            raise DuplicateResourceError(
                f"Location with name '{name}' already exists",
                resource_type="location",
                field="name",
                value=name,
            )

        model.name = name.strip()
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise DuplicateResourceError(
                f"Location with name '{name}' already exists",
                resource_type="location",
                field="name",
                value=name,
            ) from e
        return Location.model_validate(model)

    async def delete_location(self, location_id: int) -> None:
        model = await self._get_model(location_id)
        await self._session.delete(model)
        await self._session.flush()
        logger.info(f"Deleted location {location_id} from household {self.household_id}")

    async def seed_defaults(self, names: Iterable[str] = DEFAULT_LOCATIONS) -> List[Location]:
        """Create the default locations that the household does not have yet."""
        return [await self.upsert_location(name, is_default=True) for name in names]
