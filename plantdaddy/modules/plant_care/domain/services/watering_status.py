# 📄 File: plantdaddy/modules/plant_care/domain/services/watering_status.py
# 🧭 Purpose (Layman Explanation):
# Works out whether a plant needs water: when it is next due, whether it is snoozed,
# how many days are left (or how late it is) and which bucket it belongs in on the dashboard.
# 🧪 Purpose (Technical Summary):
# Pure, deterministic watering-status derivation on UTC calendar-day boundaries. Invalid
# timestamps or frequencies never raise; they classify as UNKNOWN and are logged as warnings.
# 🔗 Dependencies:
# datetime, dataclasses, enum, logging
# 🔄 Connected Modules / Calls From:
# plant_service.py (dashboard and list responses), care_stats_service.py,
# notifications reminder sweep (overdue selection)

"""
Watering status derivation.

All day arithmetic happens in UTC. Naive datetimes are taken to be UTC,
ISO-8601 strings are parsed, and anything else is treated as unknown.

Example:
    >>> now = datetime(2024, 5, 10, 12, tzinfo=timezone.utc)
    >>> days_until_watering(now - timedelta(days=10), 7, None, now)
    -3
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any, Iterable, List, Optional, Protocol

logger = logging.getLogger(__name__)

# Plants due within this many days are shown as "soon".
SOON_THRESHOLD_DAYS = 3


class WateringStatus(str, Enum):
    """Dashboard status of a plant."""
    WATERED = "watered"
    SOON = "soon"
    OVERDUE = "overdue"
    UNKNOWN = "unknown"  # unusable schedule data


class WateringSchedule(Protocol):
    """Anything carrying a watering schedule (domain model or ORM row)."""
    last_watered: Any
    watering_frequency: Any
    snoozed_until: Any


# =============================================================================
# INPUT NORMALISATION
# =============================================================================

def to_utc(value: Any) -> Optional[datetime]:
    """
    Normalise a timestamp to an aware UTC datetime.

    Args:
        value: datetime, date, ISO-8601 string or None

    Returns:
        Aware UTC datetime, or None when the value is missing or unusable
    """
    if value is None:
        return None

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    return None


def _valid_frequency(frequency: Any) -> Optional[int]:
    if isinstance(frequency, bool) or not isinstance(frequency, int):
        return None
    return frequency if frequency >= 1 else None


def start_of_day(moment: datetime) -> datetime:
    """Midnight UTC of the calendar day containing ``moment``."""
    moment = moment.astimezone(timezone.utc)
    return datetime.combine(moment.date(), time.min, tzinfo=timezone.utc)


# =============================================================================
# CORE OPERATIONS
# =============================================================================

def next_watering_date(
    last_watered: Any,
    frequency: Any,
    snoozed_until: Any = None
) -> Optional[datetime]:
    """
    Compute when the plant is next due.

    ``last_watered + frequency days``, unless a snooze ends strictly later,
    in which case the snooze end wins.

    Returns:
        Aware UTC datetime, or None when the schedule is unusable
    """
    watered = to_utc(last_watered)
    days = _valid_frequency(frequency)
    if watered is None or days is None:
        return None

    due = watered + timedelta(days=days)
    snooze_end = to_utc(snoozed_until)
    if snooze_end is not None and snooze_end > due:
        return snooze_end
    return due


def is_snoozed(snoozed_until: Any, now: datetime) -> bool:
    """True iff a snooze is set and ends strictly after ``now``."""
    snooze_end = to_utc(snoozed_until)
    return snooze_end is not None and snooze_end > to_utc(now)


def days_until_watering(
    last_watered: Any,
    frequency: Any,
    snoozed_until: Any,
    now: datetime
) -> Optional[int]:
    """
    Whole calendar days from today until the next watering date.

    Counts midnight-to-midnight, so a plant due at 01:00 tomorrow reports 1
    even when asked at 23:00 today. Negative values are days overdue.

    Returns:
        Day difference, or None when the schedule is unusable
    """
    due = next_watering_date(last_watered, frequency, snoozed_until)
    if due is None:
        return None
    return (start_of_day(due) - start_of_day(to_utc(now))).days


def is_overdue(
    last_watered: Any,
    frequency: Any,
    snoozed_until: Any,
    now: datetime
) -> bool:
    """True iff the due day has passed and the plant is not snoozed."""
    days = days_until_watering(last_watered, frequency, snoozed_until, now)
    if days is None:
        return False
    return days < 0 and not is_snoozed(snoozed_until, now)


# =============================================================================
# CLASSIFICATION
# =============================================================================

@dataclass(frozen=True)
class WateringSnapshot:
    """Everything the API and the reminder sweep need to know about one plant."""
    status: WateringStatus
    days_until_watering: Optional[int]
    next_watering_date: Optional[datetime]
    is_snoozed: bool
    is_overdue: bool

    @property
    def days_overdue(self) -> int:
        if self.days_until_watering is None or self.days_until_watering >= 0:
            return 0
        return -self.days_until_watering

    @property
    def is_due_today(self) -> bool:
        return self.status == WateringStatus.OVERDUE or (
            self.status == WateringStatus.SOON and self.days_until_watering == 0
        )


def describe(plant: WateringSchedule, now: datetime) -> WateringSnapshot:
    """
    Derive the full watering snapshot for ``plant`` at ``now``.

    Never raises on bad schedule data; such plants get ``UNKNOWN`` and a
    warning is logged.
    """
    now = to_utc(now)
    last_watered = getattr(plant, "last_watered", None)
    frequency = getattr(plant, "watering_frequency", None)
    snoozed_until = getattr(plant, "snoozed_until", None)

    due = next_watering_date(last_watered, frequency, snoozed_until)
    snoozed = is_snoozed(snoozed_until, now)

    if due is None:
        logger.warning(
            f"Unusable watering schedule for plant {getattr(plant, 'id', '?')}: "
            f"last_watered={last_watered!r}, frequency={frequency!r}"
        )
        return WateringSnapshot(
            status=WateringStatus.UNKNOWN,
            days_until_watering=None,
            next_watering_date=None,
            is_snoozed=snoozed,
            is_overdue=False,
        )

    days = (start_of_day(due) - start_of_day(now)).days
    overdue = days < 0 and not snoozed
    watered_today = start_of_day(to_utc(last_watered)) == start_of_day(now)

    if watered_today or days > SOON_THRESHOLD_DAYS:
        status = WateringStatus.WATERED
    elif overdue:
        status = WateringStatus.OVERDUE
    else:
        status = WateringStatus.SOON

    return WateringSnapshot(
        status=status,
        days_until_watering=days,
        next_watering_date=due,
        is_snoozed=snoozed,
        is_overdue=overdue,
    )


def classify(plant: WateringSchedule, now: datetime) -> WateringStatus:
    """Return the dashboard status of ``plant`` at ``now``."""
    return describe(plant, now).status


@dataclass
class WateringGroups:
    """Disjoint dashboard partition of a plant collection."""
    due_today: List[Any] = field(default_factory=list)
    upcoming: List[Any] = field(default_factory=list)
    recently_watered: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.due_today) + len(self.upcoming) + len(self.recently_watered)


def group_by_status(plants: Iterable[WateringSchedule], now: datetime) -> WateringGroups:
    """
    Partition plants into due today, upcoming and recently watered.

    Overdue plants and "soon" plants due today go to ``due_today``; other
    "soon" plants go to ``upcoming``; everything else, including plants with
    unknown status, goes to ``recently_watered``.
    """
    groups = WateringGroups()
    for plant in plants:
        snapshot = describe(plant, now)
        if snapshot.is_due_today:
            groups.due_today.append(plant)
        elif snapshot.status == WateringStatus.SOON:
            groups.upcoming.append(plant)
        else:
            groups.recently_watered.append(plant)
    return groups
