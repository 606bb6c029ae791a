import pytest

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.domain.models.household import HouseholdAction, HouseholdRole, can
from plantdaddy.modules.households.domain.services.invite_codes import (
    AMBIGUOUS_CHARACTERS,
    INVITE_CODE_ALPHABET,
    generate_unique_invite_code,
    normalize_invite_code,
    random_invite_code,
)
from plantdaddy.modules.households.domain.services.scoping import parse_household_selector
from plantdaddy.shared.core.exceptions import AuthorizationError, InviteCodeExhaustedError


# =============================================================================
# INVITE CODES
# =============================================================================

def test_invite_code_uses_unambiguous_alphabet():
    assert not AMBIGUOUS_CHARACTERS & set(INVITE_CODE_ALPHABET)
    for _ in range(50):
        code = random_invite_code()
        assert len(code) == 8
        assert set(code) <= set(INVITE_CODE_ALPHABET)


def test_invite_codes_are_distinct_and_unambiguous():
    codes = [random_invite_code() for _ in range(1000)]

    assert len(set(codes)) == len(codes)
    assert not AMBIGUOUS_CHARACTERS & set("".join(codes))


def test_normalize_invite_code():
    assert normalize_invite_code("  abcd2345 ") == "ABCD2345"


async def test_generate_retries_on_collision():
    candidates = iter(["TAKEN234", "TAKEN567", "FREE2345"])
    checked = []

    async def is_taken(code):
        checked.append(code)
        return code.startswith("TAKEN")

    code = await generate_unique_invite_code(is_taken, generate=lambda length: next(candidates))

    assert code == "FREE2345"
    assert checked == ["TAKEN234", "TAKEN567", "FREE2345"]


async def test_generate_fails_after_max_attempts():
    attempts = []

    async def always_taken(code):
        attempts.append(code)
        return True

    with pytest.raises(InviteCodeExhaustedError) as exc_info:
        await generate_unique_invite_code(always_taken, max_attempts=4)

    assert len(attempts) == 4
    assert exc_info.value.details["attempts"] == 4


# =============================================================================
# CAPABILITIES
# =============================================================================

@pytest.mark.parametrize("action", list(HouseholdAction))
def test_owner_can_do_everything(action):
    assert can(HouseholdRole.OWNER, action)


def test_member_manages_plants_but_not_household():
    assert can(HouseholdRole.MEMBER, HouseholdAction.CREATE_PLANT)
    assert can(HouseholdRole.MEMBER, HouseholdAction.DELETE_PLANT)
    assert can(HouseholdRole.MEMBER, HouseholdAction.MANAGE_LOCATIONS)
    assert not can(HouseholdRole.MEMBER, HouseholdAction.RENAME_HOUSEHOLD)
    assert not can(HouseholdRole.MEMBER, HouseholdAction.REGENERATE_INVITE)
    assert not can(HouseholdRole.MEMBER, HouseholdAction.MANAGE_MEMBERS)


def test_caretaker_can_only_view_water_and_log_care():
    allowed = {a for a in HouseholdAction if can(HouseholdRole.CARETAKER, a)}
    assert allowed == {HouseholdAction.VIEW, HouseholdAction.WATER, HouseholdAction.LOG_CARE}


def test_context_require_raises_for_missing_capability():
    context = HouseholdContext(user_id=1, household_id=2, role=HouseholdRole.CARETAKER)
    context.require(HouseholdAction.WATER)

    with pytest.raises(AuthorizationError) as exc_info:
        context.require(HouseholdAction.DELETE_PLANT)
    assert exc_info.value.status_code == 403


# =============================================================================
# SELECTOR PARSING
# =============================================================================

@pytest.mark.parametrize("raw, expected", [
    ("12", 12),
    (" 7 ", 7),
    (5, 5),
    (None, None),
    ("", None),
    ("abc", None),
    ("-3", None),
    ("0", None),
    (0, None),
])
def test_parse_household_selector(raw, expected):
    assert parse_household_selector(raw) == expected
