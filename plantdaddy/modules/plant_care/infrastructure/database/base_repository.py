# 📄 File: plantdaddy/modules/plant_care/infrastructure/database/base_repository.py
# 🧭 Purpose (Layman Explanation):
# The shared starting point for every plant-care data store: it remembers which household
# the request belongs to so no query ever looks outside it.
# 🧪 Purpose (Technical Summary):
# Base class for household-scoped SQLAlchemy repositories. Holds the AsyncSession and the
# immutable HouseholdContext, exposes the household filter for root rows and a join
# filter for plant-owned child rows, and the NotFound raised for invisible rows.
# 🔗 Dependencies:
# SQLAlchemy, HouseholdContext, plant_care ORM models, shared exceptions
# 🔄 Connected Modules / Calls From:
# plant, location, species, care activity, health record and journal repositories

import logging
from typing import Any, Optional

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.plant_care.infrastructure.database.models import PlantModel
from plantdaddy.shared.core.exceptions import NotFoundError, NotScopedError

logger = logging.getLogger(__name__)


class HouseholdScopedRepository:
    """
    Base class for repositories whose rows belong to one household.

    Every read filters on the context household and every create stamps the
    context's household and acting user. A row from another household is
    indistinguishable from a missing row.
    """

    resource_type = "resource"

    def __init__(self, session: AsyncSession, context: Optional[HouseholdContext]):
        """
        Args:
            session: SQLAlchemy async session for the current unit of work
            context: Resolved household context of the caller
        """
        self._session = session
        self._context = context

    @property
    def context(self) -> HouseholdContext:
        if self._context is None:
            raise NotScopedError()
        return self._context

    @property
    def household_id(self) -> int:
        return self.context.household_id

    @property
    def user_id(self) -> int:
        return self.context.user_id

    def _stamp(self, values: dict) -> dict:
        """Overwrite ownership fields with the context's values."""
        stamped = dict(values)
        stamped["household_id"] = self.household_id
        stamped["user_id"] = self.user_id
        return stamped

    def _plant_scoped(self, stmt: Select, child_plant_id_column) -> Select:
        """Restrict a child-row query to plants of the context household."""
        return stmt.join(PlantModel, PlantModel.id == child_plant_id_column).where(
            PlantModel.household_id == self.household_id
        )

    def _not_found(self, resource_id: Any) -> NotFoundError:
        name = self.resource_type.replace("_", " ").capitalize()
        return NotFoundError(f"{name} not found", resource_type=self.resource_type, resource_id=resource_id)
