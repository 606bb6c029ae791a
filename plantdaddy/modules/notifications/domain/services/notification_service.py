# 📄 File: plantdaddy/modules/notifications/domain/services/notification_service.py
# 🧭 Purpose (Layman Explanation):
# What a person can do with their own reminders: change how they are reached, send a
# test, see what was sent, and ask for a reminder right now.
# 🧪 Purpose (Technical Summary):
# Per-user notification use cases behind the notifications API. Settings and history
# are user scoped; a manual plant reminder goes through the household-scoped plant read.
# 🔗 Dependencies:
# notification repositories, dispatcher, PlantReminder, reminder builders, settings
# 🔄 Connected Modules / Calls From:
# notifications API router

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from plantdaddy.modules.notifications.domain.models.notification import (
    NotificationKind,
    NotificationLogEntry,
    NotificationSettings,
    NotificationUrgency,
)
from plantdaddy.modules.notifications.domain.services.dispatcher import NotificationDispatcher
from plantdaddy.modules.notifications.domain.services.reminder_sweep import PlantReminder, SweepResult
from plantdaddy.modules.notifications.domain.services.reminders import TEST_MESSAGE, TEST_TITLE, build_reminder
from plantdaddy.modules.plant_care.domain.services.plant_service import PlantView
from plantdaddy.shared.config import get_settings
from plantdaddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class NotificationService:
    """Notification settings, history and on-demand delivery for one user."""

    def __init__(self, settings_repository, log_repository, dispatcher: NotificationDispatcher, reminder: PlantReminder):
        self.settings = get_settings()
        self.settings_repository = settings_repository
        self.log_repository = log_repository
        self.dispatcher = dispatcher
        self.reminder = reminder

    async def get_settings(self, user_id: int) -> NotificationSettings:
        return await self.settings_repository.get_or_default(user_id)

    async def update_settings(self, user_id: int, values: Dict[str, Any]) -> NotificationSettings:
        # Blank strings clear a stored credential
        cleaned = {k: (v.strip() or None) if isinstance(v, str) else v for k, v in values.items()}
        return await self.settings_repository.update(user_id, cleaned)

    async def history(self, user_id: int) -> List[NotificationLogEntry]:
        return await self.log_repository.recent(user_id)

    async def send_test(self, user_id: int) -> bool:
        return await self.dispatcher.dispatch(
            user_id, None, TEST_TITLE, TEST_MESSAGE, NotificationUrgency.NORMAL,
            kind=NotificationKind.TEST,
        )

    async def notify_plant(self, user_id: int, view: PlantView) -> bool:
        """Send a watering reminder for one plant immediately, overdue or not."""
        reminder = build_reminder(view.plant, view.watering, self.settings.URGENT_OVERDUE_DAYS)
        return await self.dispatcher.dispatch(
            user_id,
            view.plant,
            reminder.title,
            reminder.message,
            reminder.urgency,
            kind=NotificationKind.REMINDER,
            extra=reminder.extra,
        )

    async def check_plants(self, user_id: int, now: Optional[datetime] = None) -> SweepResult:
        """Run the reminder sweep for ``user_id`` only."""
        settings = await self.settings_repository.get_or_default(user_id)
        return await self.reminder.remind(settings, now or utcnow())
