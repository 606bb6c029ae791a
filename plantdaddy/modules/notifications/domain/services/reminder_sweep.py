# 📄 File: plantdaddy/modules/notifications/domain/services/reminder_sweep.py
# 🧭 Purpose (Layman Explanation):
# The alarm clock of the app: every hour it looks at every household for thirsty
# plants and reminds their people, and once a day it sends a short round-up.
#
# 🧪 Purpose (Technical Summary):
# Background reminder sweep over all users with notifications enabled. For every
# household a user belongs to, overdue plants are read through a household-scoped
# repository and classified with watering_status (same day-math as the API). Plants
# already reminded inside the debounce window are skipped using the notification log.
# Failures are isolated per user (own transaction) and per plant (own savepoint)
# and aggregated into a SweepResult.
#
# 🔗 Dependencies:
# - SQLAlchemy async_sessionmaker, session_scope (one transaction per user)
# - Household/plant/notification repositories, NotificationDispatcher
# - watering_status, reminder builders, settings
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.modules.notifications.tasks (Celery beat)
# - notifications API (manual check for the current user)

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from plantdaddy.modules.households.domain.models.context import HouseholdContext
from plantdaddy.modules.households.infrastructure.database.household_repository_impl import HouseholdRepositoryImpl
from plantdaddy.modules.notifications.domain.models.notification import NotificationKind, NotificationSettings
from plantdaddy.modules.notifications.domain.services.dispatcher import NotificationDispatcher
from plantdaddy.modules.notifications.domain.services.reminders import build_digest, build_reminder, build_summary
from plantdaddy.modules.notifications.infrastructure.channels.base import NotificationChannel
from plantdaddy.modules.notifications.infrastructure.database.notification_repository_impl import (
    NotificationLogRepositoryImpl,
    NotificationSettingsRepositoryImpl,
)
from plantdaddy.modules.plant_care.domain.models.plant import Plant
from plantdaddy.modules.plant_care.domain.services import watering_status
from plantdaddy.modules.plant_care.domain.services.watering_status import WateringSnapshot
from plantdaddy.modules.plant_care.infrastructure.database.plant_repository_impl import PlantRepositoryImpl
from plantdaddy.shared.config import get_settings
from plantdaddy.shared.infrastructure.database.session import session_scope
from plantdaddy.shared.utils.helpers import ensure_utc, utcnow
from plantdaddy.shared.utils.logging import log_context

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Counters of one sweep run."""
    users: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0

    def merge(self, other: "SweepResult") -> None:
        self.users += other.users
        self.sent += other.sent
        self.failed += other.failed
        self.skipped += other.skipped

    def to_dict(self) -> dict:
        return {"users": self.users, "sent": self.sent, "failed": self.failed, "skipped": self.skipped}


class PlantReminder:
    """
    Reminder logic for a single user, bound to one database session.

    Used by ReminderSweep with a fresh session per user, and directly by the API
    to check the current user's plants on demand.
    """

    def __init__(self, session, channels: Optional[Sequence[NotificationChannel]] = None):
        self.settings = get_settings()
        self.session = session
        self.household_repository = HouseholdRepositoryImpl(session)
        self.log_repository = NotificationLogRepositoryImpl(session)
        self.dispatcher = NotificationDispatcher(
            NotificationSettingsRepositoryImpl(session),
            self.log_repository,
            channels,
        )

    async def overdue_plants(self, user_id: int, now: datetime) -> List[Tuple[Plant, WateringSnapshot]]:
        """Overdue, unsnoozed plants across every household of ``user_id``."""
        overdue = []
        for membership in await self.household_repository.list_memberships_for_user(user_id):
            context = HouseholdContext(
                user_id=user_id,
                household_id=membership.household.id,
                role=membership.role,
            )
            for plant in await PlantRepositoryImpl(self.session, context).list_plants():
                snapshot = watering_status.describe(plant, now)
                if snapshot.is_overdue:
                    overdue.append((plant, snapshot))
        return overdue

    async def remind(self, user: NotificationSettings, now: datetime) -> SweepResult:
        """
        Send a reminder for each overdue plant not reminded within the debounce window.

        A summary follows when more than one plant was reminded.
        """
        result = SweepResult(users=1)
        since = now - timedelta(hours=self.settings.REMINDER_DEBOUNCE_HOURS)
        reminded = 0

        for plant, snapshot in await self.overdue_plants(user.user_id, now):
            try:
                # Savepoint per plant: a failed log write must not poison the session
                async with self.session.begin_nested():
                    if await self.log_repository.sent_since(user.user_id, NotificationKind.REMINDER, since, plant.id):
                        result.skipped += 1
                        continue

                    reminder = build_reminder(plant, snapshot, self.settings.URGENT_OVERDUE_DAYS)
                    sent = await self.dispatcher.dispatch(
                        user.user_id,
                        plant,
                        reminder.title,
                        reminder.message,
                        reminder.urgency,
                        kind=NotificationKind.REMINDER,
                        extra=reminder.extra,
                    )
            except Exception:
                logger.exception(f"Reminder for plant {plant.id} of user {user.user_id} failed")
                result.failed += 1
                continue

            if sent:
                result.sent += 1
                reminded += 1
            else:
                result.failed += 1

        if reminded > 1:
            summary = build_summary(reminded)
            try:
                async with self.session.begin_nested():
                    await self.dispatcher.dispatch(
                        user.user_id, None, summary.title, summary.message, summary.urgency,
                        kind=NotificationKind.REMINDER,
                    )
            except Exception:
                logger.exception(f"Summary for user {user.user_id} failed")

        return result

    async def digest(self, user: NotificationSettings, now: datetime) -> SweepResult:
        """Send at most one digest per UTC day listing every overdue plant."""
        result = SweepResult(users=1)
        today = watering_status.start_of_day(now)

        if await self.log_repository.sent_since(user.user_id, NotificationKind.DIGEST, today):
            result.skipped += 1
            return result

        overdue = await self.overdue_plants(user.user_id, now)
        if not overdue:
            return result

        digest = build_digest([plant.name for plant, _ in overdue])
        sent = await self.dispatcher.dispatch(
            user.user_id, None, digest.title, digest.message, digest.urgency,
            kind=NotificationKind.DIGEST,
            extra=digest.extra,
        )
        if sent:
            result.sent += 1
        else:
            result.failed += 1
        return result


class ReminderSweep:
    """
    Runs reminders for every user with notifications enabled.

    Each user is handled in its own session and transaction so one user's failure
    never rolls back or aborts the others.

    Args:
        session_factory: async_sessionmaker used to open sessions
        channels: Delivery channels override (tests)
    """

    def __init__(self, session_factory, channels: Optional[Sequence[NotificationChannel]] = None):
        self.session_factory = session_factory
        self.channels = channels

    async def _enabled_users(self) -> List[NotificationSettings]:
        async with session_scope(self.session_factory) as session:
            return await NotificationSettingsRepositoryImpl(session).list_enabled()

    async def _run(self, job: str, now: Optional[datetime]) -> SweepResult:
        now = ensure_utc(now) if now else utcnow()
        total = SweepResult()

        users = await self._enabled_users()
        logger.info(f"Starting {job} for {len(users)} users at {now.isoformat()}")

        for user in users:
            with log_context(user_id=str(user.user_id)):
                try:
                    async with session_scope(self.session_factory) as session:
                        reminder = PlantReminder(session, self.channels)
                        run = reminder.remind if job == "sweep" else reminder.digest
                        total.merge(await run(user, now))
                except Exception:
                    logger.exception(f"{job} failed for user {user.user_id}")
                    total.users += 1
                    total.failed += 1

        logger.info(f"Finished {job}: {total.to_dict()}")
        return total

    async def run_sweep(self, now: Optional[datetime] = None) -> SweepResult:
        """Hourly sweep of overdue plants."""
        return await self._run("sweep", now)

    async def run_daily_digest(self, now: Optional[datetime] = None) -> SweepResult:
        """Once-daily digest."""
        return await self._run("digest", now)
