# 📄 File: plantdaddy/modules/plant_care/domain/services/species_service.py
# 🧭 Purpose (Layman Explanation):
# Looks things up in the plant encyclopedia and lets a household add, fix or remove its
# own entries (the shared entries are read-only).
# 🧪 Purpose (Technical Summary):
# Domain service for the species catalog: search, custom species management with a
# read-only guard for global rows and an in-use guard on delete, plus admin creation of
# global species.
# 🔗 Dependencies:
# species and plant repositories, HouseholdContext, exceptions
# 🔄 Connected Modules / Calls From:
# plant_care species router

import logging
from typing import Any, Dict, List, Optional

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.models.household import HouseholdAction
from plantdaddy.modules.plant_care.domain.models.plant import PlantSpecies
from plantdaddy.shared.core.exceptions import AuthorizationError, BusinessRuleViolationError, ValidationError
from plantdaddy.shared.utils.helpers import snake_to_camel

logger = logging.getLogger(__name__)

REQUIRED_SPECIES_FIELDS = (
    "name",
    "scientific_name",
    "description",
    "care_level",
    "light_requirements",
    "watering_frequency",
)


class SpeciesService:
    """
    Domain service for the species catalog.

    Business rules:
    - Global species are visible to everyone and cannot be changed from a household
    - Custom species belong to the household that created them
    - A species still referenced by a plant cannot be deleted
    - Updates may clear optional details but not the required catalog fields
    """

    def __init__(self, context: Optional[HouseholdContext], species_repository, plant_repository=None):
        self.context = context
        self.species_repository = species_repository
        self.plant_repository = plant_repository

    async def list_species(self, query: Optional[str] = None) -> List[PlantSpecies]:
        if query and query.strip():
            return await self.species_repository.search_species(query)
        return await self.species_repository.list_species()

    async def get_species(self, species_id: int) -> PlantSpecies:
        return await self.species_repository.get_species(species_id)

    async def create_custom_species(self, values: Dict[str, Any]) -> PlantSpecies:
        self.context.require(HouseholdAction.MANAGE_SPECIES)
        return await self.species_repository.create_custom_species(values)

    async def create_global_species(self, values: Dict[str, Any], admin_user_id: int) -> PlantSpecies:
        """Admin-only catalog addition; the caller checks admin rights."""
        return await self.species_repository.create_global_species(values, created_by=admin_user_id)

    async def _get_custom(self, species_id: int) -> PlantSpecies:
        species = await self.species_repository.get_species(species_id)
        if species.is_global:
            raise AuthorizationError(
                "Global species cannot be modified",
                resource_type="species",
                resource_id=str(species_id),
                required_action=HouseholdAction.MANAGE_SPECIES.value,
            )
        return species

    async def update_species(self, species_id: int, values: Dict[str, Any]) -> PlantSpecies:
        self.context.require(HouseholdAction.MANAGE_SPECIES)
        cleared = [field for field in REQUIRED_SPECIES_FIELDS if field in values and values[field] is None]
        if cleared:
            raise ValidationError(
                f"{snake_to_camel(cleared[0])} cannot be cleared",
                field=snake_to_camel(cleared[0]),
                constraint="required",
            )
        await self._get_custom(species_id)
        return await self.species_repository.update_species(species_id, values)

    async def delete_species(self, species_id: int) -> None:
        self.context.require(HouseholdAction.MANAGE_SPECIES)
        species = await self._get_custom(species_id)

        in_use = await self.plant_repository.count_by_species(species.name)
        if in_use:
            raise BusinessRuleViolationError(
                "Cannot delete species that is used by plants",
                rule="species_in_use",
                context={"species": species.name, "plants": in_use},
            )

        await self.species_repository.delete_species(species_id)
