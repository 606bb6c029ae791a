# 📄 File: plantdaddy/modules/households/domain/services/invite_codes.py
# 🧭 Purpose (Layman Explanation):
# Makes the short codes people type in to join a household, avoiding letters and digits
# that are easy to mix up (like 0 and O, or 1, I and L).
# 🧪 Purpose (Technical Summary):
# Cryptographically random invite-code generation over an unambiguous alphabet with a
# uniqueness check, bounded retries on collision, and a hard failure when exhausted.
# 🔗 Dependencies:
# secrets, shared exceptions
# 🔄 Connected Modules / Calls From:
# household_service.py (household creation and invite regeneration)

import logging
import secrets
from typing import Awaitable, Callable

from plantdaddy.shared.core.exceptions import InviteCodeExhaustedError

logger = logging.getLogger(__name__)

# Upper-case letters and digits without 0, O, 1, I and L
INVITE_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
AMBIGUOUS_CHARACTERS = frozenset("0O1IL")

DEFAULT_CODE_LENGTH = 8
DEFAULT_MAX_ATTEMPTS = 10


def random_invite_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """Draw one invite code from the unambiguous alphabet."""
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def normalize_invite_code(code: str) -> str:
    """Upper-case and strip user-typed codes before lookup."""
    return code.strip().upper()


async def generate_unique_invite_code(
    is_taken: Callable[[str], Awaitable[bool]],
    length: int = DEFAULT_CODE_LENGTH,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    generate: Callable[[int], str] = random_invite_code,
) -> str:
    """
    Generate an invite code that no household uses yet.

    Args:
        is_taken: Async predicate returning True when a code is already in use
        length: Number of characters per code
        max_attempts: Candidates to try before giving up
        generate: Candidate generator (replaceable in tests)

    Returns:
        str: An unused invite code

    Raises:
        InviteCodeExhaustedError: If every candidate collided
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate(length)
        if not await is_taken(candidate):
            return candidate
        logger.warning(f"Invite code collision on attempt {attempt}/{max_attempts}")

    logger.error(f"Failed to generate a unique invite code after {max_attempts} attempts")
    raise InviteCodeExhaustedError(attempts=max_attempts)
