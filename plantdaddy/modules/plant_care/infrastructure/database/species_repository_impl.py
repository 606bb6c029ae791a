# 📄 File: plantdaddy/modules/plant_care/infrastructure/database/species_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The plant encyclopedia: shared species everyone can read, plus the custom species a
# household adds for itself.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy species catalog repository. Visibility is global rows (no household) plus
# the context household's custom rows; writes through the household path only touch
# custom rows. Global entries are created through the admin path.
#
# 🔗 Dependencies:
# - HouseholdScopedRepository base, PlantSpeciesModel
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - species_service.py

import logging
from typing import Any, Dict, List

from sqlalchemy import func, or_, select

from plantdaddy.modules.plant_care.domain.models.plant import PlantSpecies
from plantdaddy.modules.plant_care.infrastructure.database.base_repository import HouseholdScopedRepository
from plantdaddy.modules.plant_care.infrastructure.database.models import PlantSpeciesModel

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (
    PlantSpeciesModel.name,
    PlantSpeciesModel.scientific_name,
    PlantSpeciesModel.description,
    PlantSpeciesModel.care_level,
    PlantSpeciesModel.family,
)

UPDATABLE_FIELDS = frozenset({
    "name",
    "scientific_name",
    "family",
    "origin",
    "description",
    "care_level",
    "light_requirements",
    "watering_frequency",
    "humidity",
    "soil_type",
    "propagation",
    "toxicity",
    "common_issues",
    "image_url",
})


class SpeciesRepositoryImpl(HouseholdScopedRepository):
    """Species catalog as seen from one household."""

    resource_type = "species"

    def _visible_select(self):
        return select(PlantSpeciesModel).where(
            or_(
                PlantSpeciesModel.household_id.is_(None),
                PlantSpeciesModel.household_id == self.household_id,
            )
        )

    async def _get_visible_model(self, species_id: int) -> PlantSpeciesModel:
        stmt = self._visible_select().where(PlantSpeciesModel.id == species_id)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        if model is None:
            raise self._not_found(species_id)
        return model

    async def list_species(self) -> List[PlantSpecies]:
        stmt = self._visible_select().order_by(PlantSpeciesModel.name, PlantSpeciesModel.id)
        models = (await self._session.execute(stmt)).scalars().all()
        return [PlantSpecies.model_validate(m) for m in models]

    async def search_species(self, query: str) -> List[PlantSpecies]:
        """Case-insensitive substring search over the catalog text columns."""
        pattern = f"%{query.strip().lower()}%"
        stmt = (
            self._visible_select()
            .where(or_(*(func.lower(column).like(pattern) for column in SEARCH_COLUMNS)))
            .order_by(PlantSpeciesModel.name, PlantSpeciesModel.id)
        )
        models = (await self._session.execute(stmt)).scalars().all()
        return [PlantSpecies.model_validate(m) for m in models]

    async def get_species(self, species_id: int) -> PlantSpecies:
        return PlantSpecies.model_validate(await self._get_visible_model(species_id))

    async def create_custom_species(self, values: Dict[str, Any]) -> PlantSpecies:
        model = PlantSpeciesModel(**self._stamp(values))
        self._session.add(model)
        await self._session.flush()

        logger.info(f"Created custom species {model.id} in household {self.household_id}")
        return PlantSpecies.model_validate(model)

    async def create_global_species(self, values: Dict[str, Any], created_by: int) -> PlantSpecies:
        """Add a catalog entry visible to every household."""
        values = dict(values)
        values["household_id"] = None
        values["user_id"] = created_by
        model = PlantSpeciesModel(**values)
        self._session.add(model)
        await self._session.flush()

        logger.info(f"Created global species {model.id}")
        return PlantSpecies.model_validate(model)

    async def update_species(self, species_id: int, values: Dict[str, Any]) -> PlantSpecies:
        model = await self._get_visible_model(species_id)
        for field, value in values.items():
            if field in UPDATABLE_FIELDS:
                setattr(model, field, value)
        await self._session.flush()
        return PlantSpecies.model_validate(model)

    async def delete_species(self, species_id: int) -> None:
        model = await self._get_visible_model(species_id)
        await self._session.delete(model)
        await self._session.flush()
        logger.info(f"Deleted species {species_id} from household {self.household_id}")
