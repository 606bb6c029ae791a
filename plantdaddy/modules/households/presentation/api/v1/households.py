# 📄 File: plantdaddy/modules/households/presentation/api/v1/households.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for households: see yours, make a new one, invite people with a code,
# rename it, and manage who is in it.
#
# 🧪 Purpose (Technical Summary):
# FastAPI household endpoints. Routes addressing a specific household resolve a
# HouseholdContext from the path ID (non-members get 404), then delegate to
# HouseholdService which enforces the role capability table.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - households domain service and presentation dependencies
# - plantdaddy.shared.core.rate_limiter (join endpoint)
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router (router inclusion under /api/v1/households)

"""
Households API Endpoints

Endpoints:
- GET /: Households the current user belongs to (with role)
- POST /: Create a household; the creator becomes owner
- POST /join: Join by invite code (rate limited)
- GET /{household_id}: Household details with members
- PATCH /{household_id}: Rename (owner)
- POST /{household_id}/invite-code: Regenerate invite code (owner)
- PATCH /{household_id}/members/{user_id}: Change a member's role (owner)
- DELETE /{household_id}/members/{user_id}: Remove a member, or leave
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.services.household_service import HouseholdService
from plantdaddy.modules.households.presentation.api.schemas.household_schemas import (
    HouseholdCreateRequest,
    HouseholdDetailsResponse,
    HouseholdMemberResponse,
    HouseholdResponse,
    HouseholdUpdateRequest,
    JoinHouseholdRequest,
    RoleUpdateRequest,
)
from plantdaddy.modules.households.presentation.dependencies import (
    get_household_service,
    get_path_household_context,
)
from plantdaddy.shared.config import get_settings
from plantdaddy.shared.core.dependencies import CurrentUser, get_current_user
from plantdaddy.shared.core.rate_limiter import limiter
from plantdaddy.shared.core.schemas import MessageResponse

logger = logging.getLogger(__name__)
settings = get_settings()

households_router = APIRouter()


@households_router.get(
    "",
    response_model=List[HouseholdResponse],
    summary="List my households",
)
async def list_households(
    current_user: CurrentUser = Depends(get_current_user),
    service: HouseholdService = Depends(get_household_service),
) -> List[HouseholdResponse]:
    memberships = await service.list_households(current_user.user_id)
    return [HouseholdResponse.from_membership(m) for m in memberships]


@households_router.post(
    "",
    response_model=HouseholdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a household",
)
async def create_household(
    payload: HouseholdCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdResponse:
    membership = await service.create_household(current_user.user_id, payload.name)
    return HouseholdResponse.from_membership(membership)


@households_router.post(
    "/join",
    response_model=HouseholdResponse,
    summary="Join a household with an invite code",
    responses={
        422: {"description": "Unknown invite code"},
        409: {"description": "Already a member"},
        429: {"description": "Too many attempts"},
    },
)
@limiter.limit(settings.INVITE_JOIN_RATE_LIMIT)
async def join_household(
    request: Request,
    payload: JoinHouseholdRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdResponse:
    """
    Join a household as a member.

    Rate limited per client address to slow down invite code guessing.
    """
    membership = await service.join(current_user.user_id, payload.invite_code)
    return HouseholdResponse.from_membership(membership)


@households_router.get(
    "/{household_id}",
    response_model=HouseholdDetailsResponse,
    summary="Household details with members",
)
async def get_household(
    context: HouseholdContext = Depends(get_path_household_context),
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdDetailsResponse:
    details = await service.get_details(context)
    return HouseholdDetailsResponse.from_details(details, context.role)


@households_router.patch(
    "/{household_id}",
    response_model=HouseholdResponse,
    summary="Rename a household (owner only)",
)
async def rename_household(
    payload: HouseholdUpdateRequest,
    context: HouseholdContext = Depends(get_path_household_context),
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdResponse:
    household = await service.rename(context, payload.name)
    return HouseholdResponse.from_domain(household, context.role)


@households_router.post(
    "/{household_id}/invite-code",
    response_model=HouseholdResponse,
    summary="Regenerate the invite code (owner only)",
)
async def regenerate_invite_code(
    context: HouseholdContext = Depends(get_path_household_context),
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdResponse:
    household = await service.regenerate_invite_code(context)
    return HouseholdResponse.from_domain(household, context.role)


@households_router.patch(
    "/{household_id}/members/{user_id}",
    response_model=HouseholdMemberResponse,
    summary="Change a member's role (owner only)",
)
async def change_member_role(
    user_id: int,
    payload: RoleUpdateRequest,
    context: HouseholdContext = Depends(get_path_household_context),
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdMemberResponse:
    member = await service.change_role(context, user_id, payload.role)
    return HouseholdMemberResponse.from_domain(member)


@households_router.delete(
    "/{household_id}/members/{user_id}",
    response_model=MessageResponse,
    summary="Remove a member or leave the household",
)
async def remove_member(
    user_id: int,
    context: HouseholdContext = Depends(get_path_household_context),
    service: HouseholdService = Depends(get_household_service),
) -> MessageResponse:
    await service.remove_member(context, user_id)
    if user_id == context.user_id:
        return MessageResponse(message="You left the household")
    return MessageResponse(message="Member removed")
