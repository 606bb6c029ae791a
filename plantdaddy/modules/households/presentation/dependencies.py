# 📄 File: plantdaddy/modules/households/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Figures out, for each incoming request, which household the person is working in
# and hands the household tools to the endpoints.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies wiring the household repository/service to the request session and
# resolving the per-request HouseholdContext from the authenticated user and the
# X-Household-Id header.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy AsyncSession, households domain services, shared core dependencies
# 🔄 Connected Modules / Calls From:
# households, plant_care and notifications API routers

import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.services.household_service import HouseholdService
from plantdaddy.modules.households.domain.services.scoping import resolve_household_context
from plantdaddy.modules.households.infrastructure.database.household_repository_impl import HouseholdRepositoryImpl
from plantdaddy.shared.core.dependencies import CurrentUser, get_current_user
from plantdaddy.shared.infrastructure.database import get_db_session
from plantdaddy.shared.utils.logging import household_id_var

logger = logging.getLogger(__name__)

HOUSEHOLD_HEADER = "X-Household-Id"


def get_household_repository(db: AsyncSession = Depends(get_db_session)) -> HouseholdRepositoryImpl:
    return HouseholdRepositoryImpl(db)


def get_household_service(
    repository: HouseholdRepositoryImpl = Depends(get_household_repository)
) -> HouseholdService:
    return HouseholdService(repository)


async def get_household_context(
    current_user: CurrentUser = Depends(get_current_user),
    repository: HouseholdRepositoryImpl = Depends(get_household_repository),
    x_household_id: Optional[str] = Header(default=None, alias=HOUSEHOLD_HEADER),
) -> HouseholdContext:
    """
    Resolve the active household for this request.

    A fresh, frozen context is built per request; nothing is cached between
    requests.

    Raises:
        AuthenticationError: No authenticated user
        NotFoundError: Selected household the user does not belong to
        NotScopedError: The user belongs to no household
    """
    context = await resolve_household_context(repository, current_user.user_id, x_household_id)
    household_id_var.set(str(context.household_id))
    logger.debug(f"Request scoped to household {context.household_id} as {context.role.value}")
    return context


async def get_path_household_context(
    household_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    repository: HouseholdRepositoryImpl = Depends(get_household_repository),
) -> HouseholdContext:
    """Context for routes that name the household in the path (``/households/{household_id}``)."""
    context = await resolve_household_context(repository, current_user.user_id, household_id)
    household_id_var.set(str(context.household_id))
    return context
