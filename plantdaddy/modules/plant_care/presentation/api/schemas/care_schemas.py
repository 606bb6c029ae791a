# 📄 File: plantdaddy/modules/plant_care/presentation/api/schemas/care_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of a plant's diary entries (care, health, photos) and of the household care
# statistics.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for care activities, health records, journal entries
# and care statistics, with camelCase aliases.
#
# 🔗 Dependencies:
# - pydantic, plantdaddy.shared.core.schemas
# - plant_care domain models, care_stats_service.CareStats
#
# 🔄 Connected Modules / Calls From:
# - plant_care care router

from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from plantdaddy.modules.plant_care.domain.models.plant import CareActivityType, HealthStatus
from plantdaddy.modules.plant_care.domain.services.care_stats_service import CareStats
from plantdaddy.shared.core.schemas import CamelModel


class CareActivityRequest(CamelModel):
    activity_type: CareActivityType
    notes: Optional[str] = None


class CareActivityResponse(CamelModel):
    id: int
    plant_id: int
    activity_type: CareActivityType
    notes: Optional[str] = None
    performed_at: datetime
    user_id: int


class HealthRecordRequest(CamelModel):
    status: HealthStatus
    notes: Optional[str] = None
    image_url: Optional[str] = None


class HealthRecordUpdateRequest(CamelModel):
    status: Optional[HealthStatus] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None


class HealthRecordResponse(CamelModel):
    id: int
    plant_id: int
    status: HealthStatus
    notes: Optional[str] = None
    image_url: Optional[str] = None
    recorded_at: datetime
    user_id: int


class JournalEntryRequest(CamelModel):
    image_url: str = Field(..., min_length=1)
    caption: Optional[str] = None


class JournalEntryResponse(CamelModel):
    id: int
    plant_id: int
    image_url: str
    caption: Optional[str] = None
    created_at: datetime
    user_id: int


class MemberCountResponse(CamelModel):
    user_id: int
    username: str
    count: int


class TypeCountResponse(CamelModel):
    type: str
    count: int


class CareStatsResponse(CamelModel):
    streak: int
    monthly_total: int
    monthly_by_member: List[MemberCountResponse]
    monthly_by_type: List[TypeCountResponse]
    total_plants: int
    plants_needing_water: int

    @classmethod
    def from_stats(cls, stats: CareStats) -> "CareStatsResponse":
        return cls(**asdict(stats))
