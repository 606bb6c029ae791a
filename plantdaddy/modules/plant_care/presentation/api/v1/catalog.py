# 📄 File: plantdaddy/modules/plant_care/presentation/api/v1/catalog.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints for the household's list of places and for the plant encyclopedia.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints for household locations and the species catalog (global plus
# household custom species), including the admin route for global species.
#
# 🔗 Dependencies:
# - FastAPI router, Query
# - LocationService, SpeciesService, plant schemas
# - shared admin dependency
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router (/api/v1/locations, /api/v1/plant-species)

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from plantdaddy.modules.plant_care.domain.services.location_service import LocationService
from plantdaddy.modules.plant_care.domain.services.species_service import SpeciesService
from plantdaddy.modules.plant_care.presentation.api.schemas.plant_schemas import (
    LocationRequest,
    LocationResponse,
    SpeciesCreateRequest,
    SpeciesResponse,
    SpeciesUpdateRequest,
)
from plantdaddy.modules.plant_care.presentation.dependencies import (
    get_admin_species_service,
    get_location_service,
    get_species_service,
)
from plantdaddy.shared.core.dependencies import CurrentUser, get_current_admin_user
from plantdaddy.shared.core.schemas import MessageResponse

logger = logging.getLogger(__name__)

locations_router = APIRouter()
species_router = APIRouter()


# =============================================================================
# LOCATIONS
# =============================================================================

@locations_router.get("", response_model=List[LocationResponse], summary="List locations")
async def list_locations(service: LocationService = Depends(get_location_service)) -> List[LocationResponse]:
    return [LocationResponse.from_domain(loc) for loc in await service.list_locations()]


@locations_router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a location (returns the existing one if the name is taken)",
)
async def create_location(
    payload: LocationRequest,
    service: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return LocationResponse.from_domain(await service.create_location(payload.name))


@locations_router.patch("/{location_id}", response_model=LocationResponse, summary="Rename a location")
async def rename_location(
    location_id: int,
    payload: LocationRequest,
    service: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return LocationResponse.from_domain(await service.rename_location(location_id, payload.name))


@locations_router.delete("/{location_id}", response_model=MessageResponse, summary="Delete an unused location")
async def delete_location(
    location_id: int,
    service: LocationService = Depends(get_location_service),
) -> MessageResponse:
    await service.delete_location(location_id)
    return MessageResponse(message="Location deleted")


# =============================================================================
# SPECIES CATALOG
# =============================================================================

@species_router.get("", response_model=List[SpeciesResponse], summary="List or search species")
async def list_species(
    q: Optional[str] = Query(None, description="Search name, scientific name, description, care level, family"),
    service: SpeciesService = Depends(get_species_service),
) -> List[SpeciesResponse]:
    return [SpeciesResponse.from_domain(s) for s in await service.list_species(q)]


@species_router.post(
    "",
    response_model=SpeciesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a custom species to the household",
)
async def create_species(
    payload: SpeciesCreateRequest,
    service: SpeciesService = Depends(get_species_service),
) -> SpeciesResponse:
    return SpeciesResponse.from_domain(await service.create_custom_species(payload.model_dump()))


@species_router.post(
    "/global",
    response_model=SpeciesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a global species (admin only)",
)
async def create_global_species(
    payload: SpeciesCreateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    service: SpeciesService = Depends(get_admin_species_service),
) -> SpeciesResponse:
    logger.info(f"Admin {admin.user_id} adding global species '{payload.name}'")
    species = await service.create_global_species(payload.model_dump(), admin_user_id=admin.user_id)
    return SpeciesResponse.from_domain(species)


@species_router.get("/{species_id}", response_model=SpeciesResponse, summary="Get a species")
async def get_species(species_id: int, service: SpeciesService = Depends(get_species_service)) -> SpeciesResponse:
    return SpeciesResponse.from_domain(await service.get_species(species_id))


@species_router.patch("/{species_id}", response_model=SpeciesResponse, summary="Update a custom species")
async def update_species(
    species_id: int,
    payload: SpeciesUpdateRequest,
    service: SpeciesService = Depends(get_species_service),
) -> SpeciesResponse:
    species = await service.update_species(species_id, payload.model_dump(exclude_unset=True))
    return SpeciesResponse.from_domain(species)


@species_router.delete("/{species_id}", response_model=MessageResponse, summary="Delete a custom species")
async def delete_species(species_id: int, service: SpeciesService = Depends(get_species_service)) -> MessageResponse:
    await service.delete_species(species_id)
    return MessageResponse(message="Species deleted")
