# 📄 File: plantdaddy/modules/households/domain/repositories/household_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what we need to be able to do with stored households and memberships,
# without tying it to a particular database.
# 🧪 Purpose (Technical Summary):
# Repository interface for Household and HouseholdMember persistence.
# 🔗 Dependencies:
# abc, household domain models
# 🔄 Connected Modules / Calls From:
# household_service.py, scoping resolution, infrastructure implementation

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.household import Household, HouseholdMember, HouseholdMembership, HouseholdRole


class HouseholdRepository(ABC):
    """
    Repository interface for households and their memberships.

    Households are not themselves household-scoped; callers (the service
    layer) check membership before exposing a household.
    """

    @abstractmethod
    async def create_household(self, name: str, invite_code: str, created_by: int) -> Household:
        """Persist a new household."""

    @abstractmethod
    async def get_household(self, household_id: int) -> Optional[Household]:
        """Get household by ID."""

    @abstractmethod
    async def get_by_invite_code(self, invite_code: str) -> Optional[Household]:
        """Get household by its (normalized) invite code."""

    @abstractmethod
    async def invite_code_exists(self, invite_code: str) -> bool:
        """True if any household already uses ``invite_code``."""

    @abstractmethod
    async def update_household(
        self,
        household_id: int,
        name: Optional[str] = None,
        invite_code: Optional[str] = None
    ) -> Household:
        """Update household name and/or invite code."""

    @abstractmethod
    async def add_member(self, household_id: int, user_id: int, role: HouseholdRole) -> HouseholdMember:
        """
        Add a user to a household.

        Raises:
            DuplicateResourceError: If the user is already a member
        """

    @abstractmethod
    async def get_membership(self, household_id: int, user_id: int) -> Optional[HouseholdMember]:
        """Get one user's membership in one household."""

    @abstractmethod
    async def list_memberships_for_user(self, user_id: int) -> List[HouseholdMembership]:
        """
        List the households a user belongs to.

        Households the user owns come first, then by join date.
        """

    @abstractmethod
    async def list_members(self, household_id: int) -> List[HouseholdMember]:
        """List members of a household with their usernames."""

    @abstractmethod
    async def update_member_role(
        self,
        household_id: int,
        user_id: int,
        role: HouseholdRole
    ) -> Optional[HouseholdMember]:
        """Change a member's role; None if not a member."""

    @abstractmethod
    async def remove_member(self, household_id: int, user_id: int) -> bool:
        """Remove a membership; False if there was none."""
