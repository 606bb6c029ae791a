# 📄 File: plantdaddy/modules/plant_care/domain/services/location_service.py
# 🧭 Purpose (Layman Explanation):
# Manages the household's list of places for plants, and refuses to delete a place that
# still has plants in it.
# 🧪 Purpose (Technical Summary):
# Domain service for household locations: capability checks, name validation, and the
# in-use guard on delete.
# 🔗 Dependencies:
# location and plant repositories, HouseholdContext, exceptions
# 🔄 Connected Modules / Calls From:
# plant_care locations router

import logging
from typing import List

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.models.household import HouseholdAction
from plantdaddy.modules.plant_care.domain.models.plant import Location
from plantdaddy.shared.core.exceptions import BusinessRuleViolationError, ValidationError

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Location name is required", field="name")
    return name


class LocationService:
    def __init__(self, context: HouseholdContext, location_repository, plant_repository):
        self.context = context
        self.location_repository = location_repository
        self.plant_repository = plant_repository

    async def list_locations(self) -> List[Location]:
        return await self.location_repository.list_locations()

    async def create_location(self, name: str) -> Location:
        """Create a location, or return the existing one with the same name (any case)."""
        self.context.require(HouseholdAction.MANAGE_LOCATIONS)
        return await self.location_repository.upsert_location(_clean_name(name))

    async def rename_location(self, location_id: int, name: str) -> Location:
        self.context.require(HouseholdAction.MANAGE_LOCATIONS)
        return await self.location_repository.rename_location(location_id, _clean_name(name))

    async def delete_location(self, location_id: int) -> None:
        """
        Delete a location.

        Raises:
            BusinessRuleViolationError: If any plant of the household still uses it
        """
        self.context.require(HouseholdAction.MANAGE_LOCATIONS)
        location = await self.location_repository.get_location(location_id)

        in_use = await self.plant_repository.count_by_location(location.name)
        if in_use:
            raise BusinessRuleViolationError(
                "Cannot delete location that is being used by plants",
                rule="location_in_use",
                context={"location": location.name, "plants": in_use},
            )

        await self.location_repository.delete_location(location_id)
