# 📄 File: plantdaddy/modules/notifications/infrastructure/channels/base.py
# 🧭 Purpose (Layman Explanation):
# The common shape of every way we can reach someone (phone push, email), so the
# reminder code does not care which one it is using.
# 🧪 Purpose (Technical Summary):
# Outgoing message value object and the NotificationChannel interface. Channels raise
# UpstreamUnavailableError on vendor failure; the dispatcher recovers.
# 🔗 Dependencies:
# abc, dataclasses, tenacity, httpx, notification domain models
# 🔄 Connected Modules / Calls From:
# pushover.py, email.py, notification dispatcher

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from plantdaddy.modules.notifications.domain.models.notification import NotificationSettings, NotificationUrgency

logger = logging.getLogger(__name__)

# Network-level retry for vendor calls; HTTP error statuses are not retried
vendor_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type(httpx.TransportError),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


@dataclass(frozen=True)
class NotificationMessage:
    title: str
    message: str
    urgency: NotificationUrgency = NotificationUrgency.NORMAL
    plant: Optional[Any] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_urgent(self) -> bool:
        return self.urgency == NotificationUrgency.URGENT


class NotificationChannel(ABC):
    """A delivery channel (push service, email provider...)."""

    name: str = "channel"

    @abstractmethod
    def is_enabled(self, settings: NotificationSettings) -> bool:
        """True if the user wants and has configured this channel."""

    @abstractmethod
    async def send(self, settings: NotificationSettings, message: NotificationMessage) -> None:
        """
        Deliver one message.

        Raises:
            UpstreamUnavailableError: The vendor rejected the message or could not be reached
        """
