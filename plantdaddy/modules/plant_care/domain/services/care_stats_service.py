# 📄 File: plantdaddy/modules/plant_care/domain/services/care_stats_service.py
# 🧭 Purpose (Layman Explanation):
# Adds up how well the household has been looking after its plants: how many days in a
# row someone did something, and who did what this month.
# 🧪 Purpose (Technical Summary):
# Computes household care statistics (UTC day streak, month-to-date totals by member and
# by activity type, plant counts) from the scoped repositories and watering_status.
# 🔗 Dependencies:
# plant and care activity repositories, watering_status, shared datetime helpers
# 🔄 Connected Modules / Calls From:
# plant_care care-stats endpoint

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional

from plantdaddy.modules.plant_care.domain.services import watering_status
from plantdaddy.shared.utils.helpers import ensure_utc, utcnow

logger = logging.getLogger(__name__)

# How far back the streak looks; longer streaks are reported as this many days
STREAK_LOOKBACK_DAYS = 366


@dataclass
class MemberCount:
    user_id: int
    username: str
    count: int


@dataclass
class TypeCount:
    type: str
    count: int


@dataclass
class CareStats:
    streak: int = 0
    monthly_total: int = 0
    monthly_by_member: List[MemberCount] = field(default_factory=list)
    monthly_by_type: List[TypeCount] = field(default_factory=list)
    total_plants: int = 0
    plants_needing_water: int = 0


def calculate_streak(activity_times: Iterable[datetime], now: datetime) -> int:
    """
    Count consecutive UTC days with at least one activity.

    The streak ends today, or yesterday if nothing has been logged yet today,
    so it does not reset first thing in the morning.
    """
    days = {ensure_utc(moment).date() for moment in activity_times}
    today = ensure_utc(now).date()

    cursor: date = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def start_of_month(now: datetime) -> datetime:
    now = ensure_utc(now)
    return datetime(now.year, now.month, 1, tzinfo=timezone.utc)


class CareStatsService:
    def __init__(self, plant_repository, care_activity_repository):
        self.plant_repository = plant_repository
        self.care_activity_repository = care_activity_repository

    async def get_stats(self, now: Optional[datetime] = None) -> CareStats:
        now = now or utcnow()
        month_start = start_of_month(now)

        activity_times = await self.care_activity_repository.activity_days(
            watering_status.start_of_day(now) - timedelta(days=STREAK_LOOKBACK_DAYS)
        )
        by_member = await self.care_activity_repository.counts_by_member(month_start)
        by_type = await self.care_activity_repository.counts_by_type(month_start)

        plants = await self.plant_repository.list_plants()
        groups = watering_status.group_by_status(plants, now)

        return CareStats(
            streak=calculate_streak(activity_times, now),
            monthly_total=sum(count for _, _, count in by_member),
            monthly_by_member=[MemberCount(user_id=u, username=n, count=c) for u, n, c in by_member],
            monthly_by_type=sorted(
                (TypeCount(type=t, count=c) for t, c in by_type),
                key=lambda item: (-item.count, item.type),
            ),
            total_plants=len(plants),
            plants_needing_water=len(groups.due_today),
        )
