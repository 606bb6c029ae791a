# 📄 File: plantdaddy/modules/households/domain/services/household_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for households: creating one, inviting people with a code, renaming it,
# changing what members may do, and removing or leaving.
# 🧪 Purpose (Technical Summary):
# Domain service implementing household lifecycle and membership management. Every
# mutating operation runs against a resolved HouseholdContext and checks the capability
# table before touching the repository.
# 🔗 Dependencies:
# HouseholdRepository, HouseholdContext, invite code generation, shared exceptions, settings
# 🔄 Connected Modules / Calls From:
# households API router, user_management registration provisioning

import logging
from typing import List, Optional

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.models.household import (
    ASSIGNABLE_ROLES,
    Household,
    HouseholdAction,
    HouseholdDetails,
    HouseholdMember,
    HouseholdMembership,
    HouseholdRole,
)
from plantdaddy.modules.households.domain.repositories.household_repository import HouseholdRepository
from plantdaddy.modules.households.domain.services.invite_codes import (
    generate_unique_invite_code,
    normalize_invite_code,
)
from plantdaddy.shared.config import get_settings
from plantdaddy.shared.core.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class HouseholdService:
    """
    Domain service for households and memberships.

    Business rules:
    - The creator of a household is its owner
    - Only the owner renames, regenerates the invite code or changes roles
    - Roles handed out by the owner are member or caretaker; the owner role is fixed
    - The owner may remove anyone but themselves; any member may remove themselves
    - The owner cannot leave their own household
    """

    def __init__(self, household_repository: HouseholdRepository):
        self.household_repository = household_repository
        self.settings = get_settings()

    async def _new_invite_code(self) -> str:
        return await generate_unique_invite_code(
            self.household_repository.invite_code_exists,
            length=self.settings.INVITE_CODE_LENGTH,
            max_attempts=self.settings.INVITE_CODE_MAX_ATTEMPTS,
        )

    # =========================================================================
    # HOUSEHOLD LIFECYCLE
    # =========================================================================

    async def create_household(self, user_id: int, name: str) -> HouseholdMembership:
        """
        Create a household owned by ``user_id``.

        Args:
            user_id: Creating user
            name: Display name of the household

        Returns:
            HouseholdMembership: The new household with the owner role

        Raises:
            ValidationError: If the name is blank
            InviteCodeExhaustedError: If no unique invite code could be drawn
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Household name is required", field="name")

        invite_code = await self._new_invite_code()
        household = await self.household_repository.create_household(
            name=name, invite_code=invite_code, created_by=user_id
        )
        await self.household_repository.add_member(household.id, user_id, HouseholdRole.OWNER)

        logger.info(f"User {user_id} created household {household.id}")
        return HouseholdMembership(household=household, role=HouseholdRole.OWNER)

    async def list_households(self, user_id: int) -> List[HouseholdMembership]:
        return await self.household_repository.list_memberships_for_user(user_id)

    async def get_details(self, context: HouseholdContext) -> HouseholdDetails:
        """Household plus member list for a member of it."""
        household = await self._get_household(context.household_id)
        members = await self.household_repository.list_members(context.household_id)
        return HouseholdDetails(household=household, members=members)

    async def rename(self, context: HouseholdContext, name: str) -> Household:
        context.require(HouseholdAction.RENAME_HOUSEHOLD)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Household name is required", field="name")

        return await self.household_repository.update_household(context.household_id, name=name)

    async def regenerate_invite_code(self, context: HouseholdContext) -> Household:
        """Replace the invite code; the old code stops working immediately."""
        context.require(HouseholdAction.REGENERATE_INVITE)
        invite_code = await self._new_invite_code()
        household = await self.household_repository.update_household(
            context.household_id, invite_code=invite_code
        )
        logger.info(f"Invite code regenerated for household {context.household_id}")
        return household

    async def join(self, user_id: int, invite_code: str) -> HouseholdMembership:
        """
        Join a household by invite code as a member.

        Raises:
            ValidationError: If the code matches no household
            DuplicateResourceError: If the user already belongs to it
        """
        code = normalize_invite_code(invite_code or "")
        household = await self.household_repository.get_by_invite_code(code) if code else None
        if household is None:
            logger.info(f"User {user_id} tried an unknown invite code")
            raise ValidationError("Invalid invite code", field="inviteCode")

        await self.household_repository.add_member(household.id, user_id, HouseholdRole.MEMBER)
        return HouseholdMembership(household=household, role=HouseholdRole.MEMBER)

    # =========================================================================
    # MEMBERSHIP MANAGEMENT
    # =========================================================================

    async def change_role(
        self,
        context: HouseholdContext,
        target_user_id: int,
        role: HouseholdRole
    ) -> HouseholdMember:
        context.require(HouseholdAction.MANAGE_MEMBERS)

        role = HouseholdRole(role)
        if role not in ASSIGNABLE_ROLES:
            raise ValidationError(
                "Role must be member or caretaker",
                field="role",
                value=role.value,
            )

        target = await self._get_member(context.household_id, target_user_id)
        if target.role == HouseholdRole.OWNER:
            raise BusinessRuleViolationError(
                "The owner's role cannot be changed",
                rule="owner_role_immutable",
            )

        updated = await self.household_repository.update_member_role(context.household_id, target_user_id, role)
        return updated

    async def remove_member(self, context: HouseholdContext, target_user_id: int) -> None:
        """
        Remove ``target_user_id`` from the context household.

        Removing yourself is leaving; the owner can do neither to themselves.
        """
        if target_user_id == context.user_id:
            if context.role == HouseholdRole.OWNER:
                raise BusinessRuleViolationError(
                    "The owner cannot leave the household",
                    rule="owner_cannot_leave",
                )
        elif not context.can(HouseholdAction.MANAGE_MEMBERS):
            raise AuthorizationError(
                "Only the household owner can remove other members",
                required_action=HouseholdAction.MANAGE_MEMBERS.value,
                role=context.role.value,
            )

        await self._get_member(context.household_id, target_user_id)
        await self.household_repository.remove_member(context.household_id, target_user_id)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_household(self, household_id: int) -> Household:
        household = await self.household_repository.get_household(household_id)
        if household is None:
            raise NotFoundError("Household not found", resource_type="household", resource_id=household_id)
        return household

    async def _get_member(self, household_id: int, user_id: int) -> HouseholdMember:
        member: Optional[HouseholdMember] = await self.household_repository.get_membership(household_id, user_id)
        if member is None:
            raise NotFoundError("Member not found", resource_type="household_member", resource_id=user_id)
        return member
