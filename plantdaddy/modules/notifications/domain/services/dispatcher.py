# 📄 File: plantdaddy/modules/notifications/domain/services/dispatcher.py
# 🧭 Purpose (Layman Explanation):
# Takes one reminder and sends it every way the person asked to be reached (push,
# email), writing down whether each attempt worked.
# 🧪 Purpose (Technical Summary):
# Fan-out of a notification over the user's configured channels. Vendor failures
# (UpstreamUnavailableError) are logged and counted as not sent; every attempt is
# appended to the notification log. Returns True when at least one channel succeeded.
# 🔗 Dependencies:
# notification settings/log repositories, channel implementations, exceptions
# 🔄 Connected Modules / Calls From:
# reminder sweep, notifications API (test message, manual plant reminder)

import logging
from typing import Any, Dict, List, Optional, Sequence

from plantdaddy.modules.notifications.domain.models.notification import (
    NotificationKind,
    NotificationUrgency,
)
from plantdaddy.modules.notifications.infrastructure.channels.base import NotificationChannel, NotificationMessage
from plantdaddy.modules.notifications.infrastructure.channels.email import EmailChannel
from plantdaddy.modules.notifications.infrastructure.channels.pushover import PushoverChannel
from plantdaddy.shared.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


def default_channels() -> List[NotificationChannel]:
    return [PushoverChannel(), EmailChannel()]


class NotificationDispatcher:
    """
    Sends notifications to one user over all of their enabled channels.

    Args:
        settings_repository: Per-user notification settings
        log_repository: Delivery log, one row per channel attempt
        channels: Delivery channels; defaults to Pushover and email
    """

    def __init__(
        self,
        settings_repository,
        log_repository,
        channels: Optional[Sequence[NotificationChannel]] = None,
    ):
        self.settings_repository = settings_repository
        self.log_repository = log_repository
        self.channels = list(channels) if channels is not None else default_channels()

    async def dispatch(
        self,
        user_id: int,
        plant: Optional[Any],
        title: str,
        message: str,
        urgency: NotificationUrgency = NotificationUrgency.NORMAL,
        kind: NotificationKind = NotificationKind.REMINDER,
        extra: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Deliver a notification to ``user_id``.

        Args:
            user_id: Recipient
            plant: Plant the notification is about, if any
            title: Short title
            message: Body text
            urgency: Normal or urgent (urgent raises push priority)
            kind: Reminder, digest or test; recorded in the log
            extra: Channel hints such as ``days_overdue``

        Returns:
            bool: True if at least one channel delivered the message
        """
        settings = await self.settings_repository.get_or_default(user_id)
        if not settings.enabled:
            logger.info(f"Notifications disabled for user {user_id}, skipping")
            return False

        channels = [channel for channel in self.channels if channel.is_enabled(settings)]
        if not channels:
            logger.warning(f"No notification channel configured for user {user_id}")
            return False

        outgoing = NotificationMessage(
            title=title,
            message=message,
            urgency=NotificationUrgency(urgency),
            plant=plant,
            extra=extra or {},
        )
        plant_id = getattr(plant, "id", None)

        sent = False
        for channel in channels:
            try:
                await channel.send(settings, outgoing)
                success = True
            except UpstreamUnavailableError as e:
                logger.warning(f"{channel.name} delivery failed for user {user_id}: {e.message}")
                success = False

            await self.log_repository.record(
                user_id=user_id,
                kind=kind,
                title=title,
                message=message,
                channel=channel.name,
                success=success,
                plant_id=plant_id,
            )
            sent = sent or success

        if sent:
            logger.info(f"Notification '{title}' delivered to user {user_id}")
        return sent
