# 📄 File: plantdaddy/modules/plant_care/presentation/api/v1/care.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints for a plant's diary (care log, health check-ins, photo journal) and the
# household's care statistics.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints over CareService and CareStatsService, all scoped to the request's
# household. Child rows addressed by their own ID resolve through their plant's household.
#
# 🔗 Dependencies:
# - FastAPI router
# - CareService, CareStatsService, care schemas
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router (mounted at /api/v1)

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from plantdaddy.modules.plant_care.domain.services.care_service import CareService
from plantdaddy.modules.plant_care.domain.services.care_stats_service import CareStatsService
from plantdaddy.modules.plant_care.presentation.api.schemas.care_schemas import (
    CareActivityRequest,
    CareActivityResponse,
    CareStatsResponse,
    HealthRecordRequest,
    HealthRecordResponse,
    HealthRecordUpdateRequest,
    JournalEntryRequest,
    JournalEntryResponse,
)
from plantdaddy.modules.plant_care.presentation.dependencies import get_care_service, get_care_stats_service
from plantdaddy.shared.core.schemas import MessageResponse

logger = logging.getLogger(__name__)

care_router = APIRouter()


# =============================================================================
# CARE ACTIVITIES
# =============================================================================

@care_router.get(
    "/plants/{plant_id}/care-activities",
    response_model=List[CareActivityResponse],
    summary="Care history of a plant",
)
async def list_care_activities(
    plant_id: int,
    service: CareService = Depends(get_care_service),
) -> List[CareActivityResponse]:
    return [CareActivityResponse(**a.model_dump()) for a in await service.list_activities(plant_id)]


@care_router.post(
    "/plants/{plant_id}/care-activities",
    response_model=CareActivityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a care activity",
)
async def log_care_activity(
    plant_id: int,
    payload: CareActivityRequest,
    service: CareService = Depends(get_care_service),
) -> CareActivityResponse:
    activity = await service.log_activity(plant_id, payload.activity_type, notes=payload.notes)
    return CareActivityResponse(**activity.model_dump())


# =============================================================================
# HEALTH RECORDS
# =============================================================================

@care_router.get(
    "/plants/{plant_id}/health-records",
    response_model=List[HealthRecordResponse],
    summary="Health history of a plant",
)
async def list_health_records(
    plant_id: int,
    service: CareService = Depends(get_care_service),
) -> List[HealthRecordResponse]:
    return [HealthRecordResponse(**r.model_dump()) for r in await service.list_health_records(plant_id)]


@care_router.post(
    "/plants/{plant_id}/health-records",
    response_model=HealthRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record plant health",
)
async def add_health_record(
    plant_id: int,
    payload: HealthRecordRequest,
    service: CareService = Depends(get_care_service),
) -> HealthRecordResponse:
    record = await service.add_health_record(
        plant_id, payload.status, notes=payload.notes, image_url=payload.image_url
    )
    return HealthRecordResponse(**record.model_dump())


@care_router.patch(
    "/health-records/{record_id}",
    response_model=HealthRecordResponse,
    summary="Update a health record",
)
async def update_health_record(
    record_id: int,
    payload: HealthRecordUpdateRequest,
    service: CareService = Depends(get_care_service),
) -> HealthRecordResponse:
    record = await service.update_health_record(record_id, payload.model_dump(exclude_unset=True))
    return HealthRecordResponse(**record.model_dump())


@care_router.delete("/health-records/{record_id}", response_model=MessageResponse, summary="Delete a health record")
async def delete_health_record(
    record_id: int,
    service: CareService = Depends(get_care_service),
) -> MessageResponse:
    await service.delete_health_record(record_id)
    return MessageResponse(message="Health record deleted")


# =============================================================================
# JOURNAL
# =============================================================================

@care_router.get(
    "/plants/{plant_id}/journal",
    response_model=List[JournalEntryResponse],
    summary="Photo journal of a plant",
)
async def list_journal(
    plant_id: int,
    service: CareService = Depends(get_care_service),
) -> List[JournalEntryResponse]:
    return [JournalEntryResponse(**e.model_dump()) for e in await service.list_journal(plant_id)]


@care_router.post(
    "/plants/{plant_id}/journal",
    response_model=JournalEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a journal entry",
)
async def add_journal_entry(
    plant_id: int,
    payload: JournalEntryRequest,
    service: CareService = Depends(get_care_service),
) -> JournalEntryResponse:
    entry = await service.add_journal_entry(plant_id, payload.image_url, caption=payload.caption)
    return JournalEntryResponse(**entry.model_dump())


@care_router.delete("/journal/{entry_id}", response_model=MessageResponse, summary="Delete a journal entry")
async def delete_journal_entry(
    entry_id: int,
    service: CareService = Depends(get_care_service),
) -> MessageResponse:
    await service.delete_journal_entry(entry_id)
    return MessageResponse(message="Journal entry deleted")


# =============================================================================
# STATS
# =============================================================================

@care_router.get("/care-stats", response_model=CareStatsResponse, summary="Household care statistics")
async def care_stats(service: CareStatsService = Depends(get_care_stats_service)) -> CareStatsResponse:
    return CareStatsResponse.from_stats(await service.get_stats())
