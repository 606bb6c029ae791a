# 📄 File: plantdaddy/modules/households/domain/services/scoping.py
# 🧭 Purpose (Layman Explanation):
# Works out which household a request is acting on: the one the app asked for, or the
# person's own home when none (or gibberish) was given.
# 🧪 Purpose (Technical Summary):
# Resolves a HouseholdContext from an authenticated user ID and an optional raw household
# selector. Fails closed with NotScopedError when the user belongs to no household.
# 🔗 Dependencies:
# HouseholdRepository, HouseholdContext, shared exceptions
# 🔄 Connected Modules / Calls From:
# households.presentation.dependencies.get_household_context, reminder sweep

import logging
from typing import Optional, Union

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.models.household import HouseholdRole
from plantdaddy.modules.households.domain.repositories.household_repository import HouseholdRepository
from plantdaddy.shared.core.exceptions import NotFoundError, NotScopedError

logger = logging.getLogger(__name__)


def parse_household_selector(raw: Union[str, int, None]) -> Optional[int]:
    """
    Parse a household selector (usually the X-Household-Id header).

    Anything that is not a positive integer is treated as "no selection".
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None

    value = str(raw).strip()
    if not value.isdigit():
        return None
    parsed = int(value)
    return parsed if parsed > 0 else None


async def resolve_household_context(
    repository: HouseholdRepository,
    user_id: int,
    selector: Union[str, int, None] = None,
) -> HouseholdContext:
    """
    Build the household context for one request.

    Args:
        repository: Household repository bound to the request session
        user_id: Authenticated user ID
        selector: Raw household selector supplied by the caller

    Returns:
        HouseholdContext: Immutable context for the rest of the request

    Raises:
        NotFoundError: A valid household was selected but the user is not a member
        NotScopedError: No selection and the user belongs to no household
    """
    household_id = parse_household_selector(selector)

    if household_id is not None:
        membership = await repository.get_membership(household_id, user_id)
        if membership is None:
            # Same answer as a missing household so membership is not disclosed
            logger.warning(f"User {user_id} selected household {household_id} without membership")
            raise NotFoundError("Household not found", resource_type="household", resource_id=household_id)
        return HouseholdContext(user_id=user_id, household_id=household_id, role=HouseholdRole(membership.role))

    if selector is not None:
        logger.debug(f"Ignoring invalid household selector {selector!r} for user {user_id}")

    memberships = await repository.list_memberships_for_user(user_id)
    if not memberships:
        raise NotScopedError("No household found. Create or join a household first.")

    default = memberships[0]
    return HouseholdContext(user_id=user_id, household_id=default.household.id, role=default.role)
