# 📄 File: plantdaddy/modules/plant_care/presentation/api/schemas/plant_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of plant data the app sends and gets back, including the "needs water in N
# days" information computed for each plant.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for plants, watering, snooze, locations and the
# species catalog. Ownership fields are never accepted from clients.
#
# 🔗 Dependencies:
# - pydantic, plantdaddy.shared.core.schemas
# - plant_care domain models and services (PlantView, PlantDashboard)
#
# 🔄 Connected Modules / Calls From:
# - plant_care plants, locations and species routers

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from plantdaddy.modules.plant_care.domain.models.plant import Location, PlantSpecies
from plantdaddy.modules.plant_care.domain.services.plant_service import PlantDashboard, PlantView
from plantdaddy.modules.plant_care.domain.services.watering_status import WateringStatus
from plantdaddy.shared.core.schemas import CamelModel


# =============================================================================
# PLANTS
# =============================================================================

class PlantCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    species: Optional[str] = Field(None, max_length=200)
    location: str = Field(..., min_length=1, max_length=100)
    watering_frequency: int = Field(..., ge=1, description="Days between waterings")
    last_watered: Optional[datetime] = Field(None, description="Defaults to now")
    notes: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Plant name cannot be blank")
        return v


class PlantUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    species: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, min_length=1, max_length=100)
    watering_frequency: Optional[int] = Field(None, ge=1)
    last_watered: Optional[datetime] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None


class WaterRequest(CamelModel):
    notes: Optional[str] = None


class WaterOverdueRequest(CamelModel):
    plant_ids: Optional[List[int]] = Field(None, description="Plants to water; all overdue plants when omitted")


class SnoozeRequest(CamelModel):
    snoozed_until: datetime


class PlantResponse(CamelModel):
    id: int
    name: str
    species: Optional[str] = None
    location: str
    watering_frequency: int
    last_watered: datetime
    snoozed_until: Optional[datetime] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    user_id: int
    household_id: Optional[int] = None

    status: WateringStatus
    days_until_watering: Optional[int] = None
    next_watering_date: Optional[datetime] = None
    is_snoozed: bool = False
    is_overdue: bool = False

    @classmethod
    def from_view(cls, view: PlantView) -> "PlantResponse":
        watering = view.watering
        return cls(
            **view.plant.model_dump(),
            status=watering.status,
            days_until_watering=watering.days_until_watering,
            next_watering_date=watering.next_watering_date,
            is_snoozed=watering.is_snoozed,
            is_overdue=watering.is_overdue,
        )


class DashboardResponse(CamelModel):
    due_today: List[PlantResponse]
    upcoming: List[PlantResponse]
    recently_watered: List[PlantResponse]

    @classmethod
    def from_dashboard(cls, dashboard: PlantDashboard) -> "DashboardResponse":
        return cls(
            due_today=[PlantResponse.from_view(v) for v in dashboard.due_today],
            upcoming=[PlantResponse.from_view(v) for v in dashboard.upcoming],
            recently_watered=[PlantResponse.from_view(v) for v in dashboard.recently_watered],
        )


class WaterOverdueResponse(CamelModel):
    watered: int
    plants: List[PlantResponse]


# =============================================================================
# LOCATIONS
# =============================================================================

class LocationRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class LocationResponse(CamelModel):
    id: int
    name: str
    is_default: bool
    household_id: Optional[int] = None

    @classmethod
    def from_domain(cls, location: Location) -> "LocationResponse":
        return cls(**location.model_dump(exclude={"user_id"}))


# =============================================================================
# SPECIES
# =============================================================================

class SpeciesCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    scientific_name: str = Field(..., min_length=1, max_length=200)
    family: Optional[str] = None
    origin: Optional[str] = None
    description: str = Field(..., min_length=1)
    care_level: str = Field(..., pattern="^(easy|moderate|difficult)$")
    light_requirements: str
    watering_frequency: int = Field(..., ge=1)
    humidity: Optional[str] = None
    soil_type: Optional[str] = None
    propagation: Optional[str] = None
    toxicity: Optional[str] = None
    common_issues: Optional[str] = None
    image_url: Optional[str] = None


class SpeciesUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    scientific_name: Optional[str] = Field(None, min_length=1, max_length=200)
    family: Optional[str] = None
    origin: Optional[str] = None
    description: Optional[str] = None
    care_level: Optional[str] = Field(None, pattern="^(easy|moderate|difficult)$")
    light_requirements: Optional[str] = None
    watering_frequency: Optional[int] = Field(None, ge=1)
    humidity: Optional[str] = None
    soil_type: Optional[str] = None
    propagation: Optional[str] = None
    toxicity: Optional[str] = None
    common_issues: Optional[str] = None
    image_url: Optional[str] = None


class SpeciesResponse(CamelModel):
    id: int
    name: str
    scientific_name: str
    family: Optional[str] = None
    origin: Optional[str] = None
    description: str
    care_level: str
    light_requirements: str
    watering_frequency: int
    humidity: Optional[str] = None
    soil_type: Optional[str] = None
    propagation: Optional[str] = None
    toxicity: Optional[str] = None
    common_issues: Optional[str] = None
    image_url: Optional[str] = None
    household_id: Optional[int] = None
    is_global: bool

    @classmethod
    def from_domain(cls, species: PlantSpecies) -> "SpeciesResponse":
        return cls(**species.model_dump(exclude={"user_id"}), is_global=species.is_global)
