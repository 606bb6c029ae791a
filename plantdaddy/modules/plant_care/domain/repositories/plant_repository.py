# 📄 File: plantdaddy/modules/plant_care/domain/repositories/plant_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what we need to be able to do with stored plants in one household.
# 🧪 Purpose (Technical Summary):
# Repository interface for household-scoped Plant persistence. Implementations are bound
# to a HouseholdContext at construction and never see rows of other households.
# 🔗 Dependencies:
# abc, datetime, plant domain models
# 🔄 Connected Modules / Calls From:
# plant_service.py, care_stats_service.py, notifications reminder sweep

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models.plant import Plant


class PlantRepository(ABC):
    """
    Repository interface for plants of one household.

    Lookups by ID raise NotFoundError both when the plant does not exist and
    when it belongs to another household.
    """

    @abstractmethod
    async def list_plants(self) -> List[Plant]:
        """All plants of the household, ordered by name."""

    @abstractmethod
    async def get_plant(self, plant_id: int) -> Plant:
        """
        Get one plant.

        Raises:
            NotFoundError: If no such plant is visible in the household
        """

    @abstractmethod
    async def get_plants(self, plant_ids: List[int]) -> List[Plant]:
        """Plants among ``plant_ids`` that are visible in the household."""

    @abstractmethod
    async def create_plant(self, values: Dict[str, Any]) -> Plant:
        """
        Create a plant.

        ``household_id`` and ``user_id`` are always taken from the context,
        whatever ``values`` contains.
        """

    @abstractmethod
    async def update_plant(self, plant_id: int, values: Dict[str, Any]) -> Plant:
        """Update mutable fields of a plant."""

    @abstractmethod
    async def delete_plant(self, plant_id: int) -> None:
        """Delete a plant with its care, health and journal history."""

    @abstractmethod
    async def mark_watered(self, plant_id: int, watered_at: datetime) -> Plant:
        """Set last watered time and clear any snooze."""

    @abstractmethod
    async def set_snooze(self, plant_id: int, snoozed_until: Optional[datetime]) -> Plant:
        """Set or clear (None) the reminder snooze."""

    @abstractmethod
    async def count_by_location(self, location_name: str) -> int:
        """Plants whose location label matches (case-insensitive)."""

    @abstractmethod
    async def count_by_species(self, species_name: str) -> int:
        """Plants whose species label matches (case-insensitive)."""

