# 📄 File: plantdaddy/modules/households/domain/models/household.py
# 🧭 Purpose (Layman Explanation):
# Describes a household (a group of people sharing plants), who belongs to it, and what
# each kind of member (owner, member, caretaker) is allowed to do.
# 🧪 Purpose (Technical Summary):
# Household and membership domain models, the HouseholdRole tagged variant, the action
# enumeration, and the single capability table consulted through can().
# 🔗 Dependencies:
# pydantic, enum, datetime
# 🔄 Connected Modules / Calls From:
# household_service.py, scoping context, household repository, plant_care services

from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from plantdaddy.shared.utils.helpers import UTCDateTime


class HouseholdRole(str, Enum):
    """Role of a user within one household."""
    OWNER = "owner"
    MEMBER = "member"
    CARETAKER = "caretaker"


class HouseholdAction(str, Enum):
    """Actions gated by household role."""
    VIEW = "view"
    WATER = "water"
    LOG_CARE = "log_care"
    CREATE_PLANT = "create_plant"
    EDIT_PLANT = "edit_plant"
    DELETE_PLANT = "delete_plant"
    MANAGE_LOCATIONS = "manage_locations"
    MANAGE_SPECIES = "manage_species"
    RENAME_HOUSEHOLD = "rename_household"
    REGENERATE_INVITE = "regenerate_invite"
    MANAGE_MEMBERS = "manage_members"


_CARETAKER_ACTIONS = frozenset({
    HouseholdAction.VIEW,
    HouseholdAction.WATER,
    HouseholdAction.LOG_CARE,
})

_MEMBER_ACTIONS = _CARETAKER_ACTIONS | frozenset({
    HouseholdAction.CREATE_PLANT,
    HouseholdAction.EDIT_PLANT,
    HouseholdAction.DELETE_PLANT,
    HouseholdAction.MANAGE_LOCATIONS,
    HouseholdAction.MANAGE_SPECIES,
})

CAPABILITIES: Dict[HouseholdRole, FrozenSet[HouseholdAction]] = {
    HouseholdRole.OWNER: frozenset(HouseholdAction),
    HouseholdRole.MEMBER: _MEMBER_ACTIONS,
    HouseholdRole.CARETAKER: _CARETAKER_ACTIONS,
}

# Roles the owner may hand out through a role change
ASSIGNABLE_ROLES = frozenset({HouseholdRole.MEMBER, HouseholdRole.CARETAKER})


def can(role: HouseholdRole, action: HouseholdAction) -> bool:
    """
    Check whether ``role`` may perform ``action``.

    Args:
        role: Membership role of the acting user
        action: Action being attempted

    Returns:
        bool: True if the capability table grants the action
    """
    return action in CAPABILITIES.get(HouseholdRole(role), frozenset())


class Household(BaseModel):
    """A sharing boundary grouping users and their plants."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    invite_code: str
    created_by: int
    created_at: UTCDateTime


class HouseholdMember(BaseModel):
    """Membership of one user in one household."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    household_id: int
    user_id: int
    role: HouseholdRole
    joined_at: UTCDateTime
    username: Optional[str] = None


class HouseholdMembership(BaseModel):
    """A household as seen by one of its members."""
    household: Household
    role: HouseholdRole


class HouseholdDetails(BaseModel):
    """Household with its member list."""
    household: Household
    members: List[HouseholdMember] = Field(default_factory=list)
