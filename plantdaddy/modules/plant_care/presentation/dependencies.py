# 📄 File: plantdaddy/modules/plant_care/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands each plant endpoint the tools it needs, already locked to the household of the
# current request.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers that bind household-scoped repositories and plant-care
# services to the request session and the resolved HouseholdContext.
# 🔗 Dependencies:
# FastAPI Depends, households.presentation.dependencies, plant_care repositories/services
# 🔄 Connected Modules / Calls From:
# plant_care API routers

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.presentation.dependencies import get_household_context
from plantdaddy.modules.plant_care.domain.services.care_service import CareService
from plantdaddy.modules.plant_care.domain.services.care_stats_service import CareStatsService
from plantdaddy.modules.plant_care.domain.services.location_service import LocationService
from plantdaddy.modules.plant_care.domain.services.plant_service import PlantService
from plantdaddy.modules.plant_care.domain.services.species_service import SpeciesService
from plantdaddy.modules.plant_care.infrastructure.database.history_repository_impl import (
    CareActivityRepositoryImpl,
    HealthRecordRepositoryImpl,
    JournalRepositoryImpl,
)
from plantdaddy.modules.plant_care.infrastructure.database.location_repository_impl import LocationRepositoryImpl
from plantdaddy.modules.plant_care.infrastructure.database.plant_repository_impl import PlantRepositoryImpl
from plantdaddy.modules.plant_care.infrastructure.database.species_repository_impl import SpeciesRepositoryImpl
from plantdaddy.shared.infrastructure.database import get_db_session


def get_plant_service(
    context: HouseholdContext = Depends(get_household_context),
    db: AsyncSession = Depends(get_db_session),
) -> PlantService:
    return PlantService(
        context,
        PlantRepositoryImpl(db, context),
        CareActivityRepositoryImpl(db, context),
        LocationRepositoryImpl(db, context),
    )


def get_location_service(
    context: HouseholdContext = Depends(get_household_context),
    db: AsyncSession = Depends(get_db_session),
) -> LocationService:
    return LocationService(context, LocationRepositoryImpl(db, context), PlantRepositoryImpl(db, context))


def get_species_service(
    context: HouseholdContext = Depends(get_household_context),
    db: AsyncSession = Depends(get_db_session),
) -> SpeciesService:
    return SpeciesService(context, SpeciesRepositoryImpl(db, context), PlantRepositoryImpl(db, context))


def get_admin_species_service(db: AsyncSession = Depends(get_db_session)) -> SpeciesService:
    """Species service without a household, for global catalog administration."""
    return SpeciesService(None, SpeciesRepositoryImpl(db, None))


def get_care_service(
    context: HouseholdContext = Depends(get_household_context),
    db: AsyncSession = Depends(get_db_session),
) -> CareService:
    return CareService(
        context,
        CareActivityRepositoryImpl(db, context),
        HealthRecordRepositoryImpl(db, context),
        JournalRepositoryImpl(db, context),
    )


def get_care_stats_service(
    context: HouseholdContext = Depends(get_household_context),
    db: AsyncSession = Depends(get_db_session),
) -> CareStatsService:
    return CareStatsService(PlantRepositoryImpl(db, context), CareActivityRepositoryImpl(db, context))
