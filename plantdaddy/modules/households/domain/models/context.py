# 📄 File: plantdaddy/modules/households/domain/models/context.py
# 🧭 Purpose (Layman Explanation):
# The "who is asking and for which household" note that travels with every request,
# so data from one household never shows up for another.
# 🧪 Purpose (Technical Summary):
# Immutable per-request scoping context (acting user, active household, role) with a
# capability guard. Built once per request by a FastAPI dependency and passed explicitly
# into household-scoped repositories; never stored in module-level state.
# 🔗 Dependencies:
# dataclasses, household role/capability table, shared exceptions
# 🔄 Connected Modules / Calls From:
# households.presentation.dependencies, plant_care repositories and services,
# notifications reminder sweep

from dataclasses import dataclass

from plantdaddy.shared.core.exceptions import AuthorizationError

from .household import HouseholdAction, HouseholdRole, can


@dataclass(frozen=True)
class HouseholdContext:
    """Resolved (user, household) pair gating all household data access."""
    user_id: int
    household_id: int
    role: HouseholdRole

    def can(self, action: HouseholdAction) -> bool:
        return can(self.role, action)

    def require(self, action: HouseholdAction) -> None:
        """
        Raise unless the acting member's role allows ``action``.

        Raises:
            AuthorizationError: If the role lacks the capability
        """
        if not self.can(action):
            raise AuthorizationError(
                f"Your role in this household does not allow: {action.value}",
                required_action=action.value,
                role=self.role.value,
            )
