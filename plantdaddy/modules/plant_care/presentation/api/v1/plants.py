# 📄 File: plantdaddy/modules/plant_care/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for plants: list them with their watering status, see what needs
# water today, add, edit, water, snooze and delete plants.
#
# 🧪 Purpose (Technical Summary):
# FastAPI plant endpoints scoped to the request's household. Every handler receives a
# PlantService already bound to the resolved HouseholdContext.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - plant_care PlantService, plant schemas, presentation dependencies
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router (router inclusion under /api/v1/plants)

"""
Plants API Endpoints

Endpoints:
- GET /: Plants with derived watering status
- GET /dashboard: Plants grouped into dueToday, upcoming and recentlyWatered
- POST /: Create a plant
- POST /water-overdue: Water the given plants, or every overdue plant
- GET /{plant_id}: Get a plant
- PATCH /{plant_id}: Update a plant
- DELETE /{plant_id}: Delete a plant with its history
- POST /{plant_id}/water: Water a plant
- POST /{plant_id}/snooze: Snooze reminders until a future time
- DELETE /{plant_id}/snooze: Clear a snooze
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from plantdaddy.modules.plant_care.domain.services.plant_service import PlantService
from plantdaddy.modules.plant_care.presentation.api.schemas.plant_schemas import (
    DashboardResponse,
    PlantCreateRequest,
    PlantResponse,
    PlantUpdateRequest,
    SnoozeRequest,
    WaterOverdueRequest,
    WaterOverdueResponse,
    WaterRequest,
)
from plantdaddy.modules.plant_care.presentation.dependencies import get_plant_service
from plantdaddy.shared.core.schemas import MessageResponse

logger = logging.getLogger(__name__)

plants_router = APIRouter()


@plants_router.get("", response_model=List[PlantResponse], summary="List plants")
async def list_plants(service: PlantService = Depends(get_plant_service)) -> List[PlantResponse]:
    return [PlantResponse.from_view(view) for view in await service.list_plants()]


@plants_router.get("/dashboard", response_model=DashboardResponse, summary="Plants grouped by watering status")
async def plant_dashboard(service: PlantService = Depends(get_plant_service)) -> DashboardResponse:
    return DashboardResponse.from_dashboard(await service.dashboard())


@plants_router.post(
    "",
    response_model=PlantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a plant",
)
async def create_plant(
    payload: PlantCreateRequest,
    service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    view = await service.create_plant(payload.model_dump(exclude_unset=True))
    return PlantResponse.from_view(view)


@plants_router.post(
    "/water-overdue",
    response_model=WaterOverdueResponse,
    summary="Water several plants at once",
)
async def water_overdue(
    payload: Optional[WaterOverdueRequest] = Body(None),
    service: PlantService = Depends(get_plant_service),
) -> WaterOverdueResponse:
    plant_ids = payload.plant_ids if payload else None
    views = await service.water_overdue(plant_ids)
    return WaterOverdueResponse(watered=len(views), plants=[PlantResponse.from_view(v) for v in views])


@plants_router.get("/{plant_id}", response_model=PlantResponse, summary="Get a plant")
async def get_plant(plant_id: int, service: PlantService = Depends(get_plant_service)) -> PlantResponse:
    return PlantResponse.from_view(await service.get_plant(plant_id))


@plants_router.patch("/{plant_id}", response_model=PlantResponse, summary="Update a plant")
async def update_plant(
    plant_id: int,
    payload: PlantUpdateRequest,
    service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    view = await service.update_plant(plant_id, payload.model_dump(exclude_unset=True))
    return PlantResponse.from_view(view)


@plants_router.delete("/{plant_id}", response_model=MessageResponse, summary="Delete a plant")
async def delete_plant(plant_id: int, service: PlantService = Depends(get_plant_service)) -> MessageResponse:
    """Delete a plant together with its care activities, health records and journal entries."""
    await service.delete_plant(plant_id)
    return MessageResponse(message="Plant deleted")


@plants_router.post("/{plant_id}/water", response_model=PlantResponse, summary="Water a plant")
async def water_plant(
    plant_id: int,
    payload: Optional[WaterRequest] = Body(None),
    service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    view = await service.water_plant(plant_id, notes=payload.notes if payload else None)
    return PlantResponse.from_view(view)


@plants_router.post("/{plant_id}/snooze", response_model=PlantResponse, summary="Snooze watering reminders")
async def snooze_plant(
    plant_id: int,
    payload: SnoozeRequest,
    service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    return PlantResponse.from_view(await service.snooze(plant_id, payload.snoozed_until))


@plants_router.delete("/{plant_id}/snooze", response_model=PlantResponse, summary="Clear a snooze")
async def clear_snooze(plant_id: int, service: PlantService = Depends(get_plant_service)) -> PlantResponse:
    return PlantResponse.from_view(await service.clear_snooze(plant_id))
