# 📄 File: plantdaddy/modules/households/presentation/api/schemas/household_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of household data going in and out of the API: creating, renaming, joining
# with a code, and changing someone's role.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for household endpoints with camelCase aliases and
# conversion helpers from domain models.
#
# 🔗 Dependencies:
# - pydantic, plantdaddy.shared.core.schemas
# - households domain models
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.modules.households.presentation.api.v1.households

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from plantdaddy.modules.households.domain.models.household import (
    Household,
    HouseholdDetails,
    HouseholdMember,
    HouseholdMembership,
    HouseholdRole,
)
from plantdaddy.shared.core.schemas import CamelModel


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class HouseholdCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, description="Household display name")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Household name cannot be blank")
        return v


class HouseholdUpdateRequest(HouseholdCreateRequest):
    """Rename a household."""


class JoinHouseholdRequest(CamelModel):
    invite_code: str = Field(..., min_length=1, max_length=16, description="Code shared by a member")


class RoleUpdateRequest(CamelModel):
    role: HouseholdRole = Field(..., description="New role: member or caretaker")


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class HouseholdResponse(CamelModel):
    id: int
    name: str
    invite_code: str
    created_by: int
    created_at: datetime
    role: Optional[HouseholdRole] = None

    @classmethod
    def from_domain(cls, household: Household, role: Optional[HouseholdRole] = None) -> "HouseholdResponse":
        return cls(**household.model_dump(), role=role)

    @classmethod
    def from_membership(cls, membership: HouseholdMembership) -> "HouseholdResponse":
        return cls.from_domain(membership.household, membership.role)


class HouseholdMemberResponse(CamelModel):
    id: int
    household_id: int
    user_id: int
    username: Optional[str] = None
    role: HouseholdRole
    joined_at: datetime

    @classmethod
    def from_domain(cls, member: HouseholdMember) -> "HouseholdMemberResponse":
        return cls(**member.model_dump())


class HouseholdDetailsResponse(HouseholdResponse):
    members: List[HouseholdMemberResponse] = Field(default_factory=list)

    @classmethod
    def from_details(cls, details: HouseholdDetails, role: HouseholdRole) -> "HouseholdDetailsResponse":
        return cls(
            **details.household.model_dump(),
            role=role,
            members=[HouseholdMemberResponse.from_domain(m) for m in details.members],
        )
