# 📄 File: plantdaddy/modules/plant_care/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# Describes the things we keep track of for each household: plants, the rooms they
# live in, the species catalog, and the history of care, health and photos.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for the plant-care aggregate plus the enumerations for care
# activity kinds and health statuses. Models load directly from ORM rows.
# 🔗 Dependencies:
# pydantic, enum, shared UTC datetime type
# 🔄 Connected Modules / Calls From:
# plant_care repositories, services and API schemas; notifications dispatcher

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from plantdaddy.shared.utils.helpers import UTCDateTime


class CareActivityType(str, Enum):
    """Kinds of care that can be logged."""
    WATERING = "watering"
    FERTILIZING = "fertilizing"
    REPOTTING = "repotting"
    PRUNING = "pruning"
    MISTING = "misting"
    ROTATING = "rotating"
    CHECKED = "checked"  # written by the system when a plant is snoozed

    @classmethod
    def user_loggable(cls) -> frozenset:
        return frozenset(member for member in cls if member is not cls.CHECKED)


class HealthStatus(str, Enum):
    """Observed health of a plant."""
    THRIVING = "thriving"
    STRUGGLING = "struggling"
    SICK = "sick"


class Plant(BaseModel):
    """A plant owned by a household."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    species: Optional[str] = None
    location: str
    watering_frequency: int
    last_watered: UTCDateTime
    snoozed_until: Optional[UTCDateTime] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    user_id: int
    household_id: Optional[int] = None


class Location(BaseModel):
    """A named place in the home."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_default: bool = False
    user_id: int
    household_id: Optional[int] = None


class PlantSpecies(BaseModel):
    """Catalog entry; ``household_id`` is None for global species."""
    model_config = ConfigDict(from_attributes=True)

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
    user_id: Optional[int] = None
    household_id: Optional[int] = None

    @property
    def is_global(self) -> bool:
        return self.household_id is None


class CareActivity(BaseModel):
    """Immutable care log entry."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    plant_id: int
    activity_type: CareActivityType
    notes: Optional[str] = None
    performed_at: UTCDateTime
    user_id: int


class HealthRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plant_id: int
    status: HealthStatus
    notes: Optional[str] = None
    image_url: Optional[str] = None
    recorded_at: UTCDateTime
    user_id: int


class JournalEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plant_id: int
    image_url: str
    caption: Optional[str] = None
    created_at: UTCDateTime
    user_id: int
