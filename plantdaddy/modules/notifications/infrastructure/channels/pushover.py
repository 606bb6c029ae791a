# 📄 File: plantdaddy/modules/notifications/infrastructure/channels/pushover.py
# 🧭 Purpose (Layman Explanation):
# Sends watering reminders to people's phones through the Pushover app.
# 🧪 Purpose (Technical Summary):
# Pushover channel posting to the messages endpoint with httpx. User credentials win over
# server-wide credentials from settings; urgent messages use priority 1.
# 🔗 Dependencies:
# httpx, channel base (NotificationChannel, vendor_retry), settings, exceptions
# 🔄 Connected Modules / Calls From:
# notification dispatcher

import logging
from typing import Optional, Tuple

import httpx

from plantdaddy.modules.notifications.domain.models.notification import (
    NotificationChannelName,
    NotificationSettings,
)
from plantdaddy.modules.notifications.infrastructure.channels.base import (
    NotificationChannel,
    NotificationMessage,
    vendor_retry,
)
from plantdaddy.shared.config import get_settings
from plantdaddy.shared.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class PushoverChannel(NotificationChannel):
    name = NotificationChannelName.PUSHOVER.value

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.settings = get_settings()
        self._client = client

    def _credentials(self, settings: NotificationSettings) -> Tuple[Optional[str], Optional[str]]:
        app_token = settings.pushover_app_token or self.settings.PUSHOVER_APP_TOKEN
        user_key = settings.pushover_user_key or self.settings.PUSHOVER_USER_KEY
        return app_token, user_key

    def is_enabled(self, settings: NotificationSettings) -> bool:
        app_token, user_key = self._credentials(settings)
        return bool(settings.pushover_enabled and app_token and user_key)

    @vendor_retry
    async def _post(self, payload: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.settings.PUSHOVER_API_URL, json=payload)
        async with httpx.AsyncClient(timeout=self.settings.NOTIFICATION_HTTP_TIMEOUT) as client:
            return await client.post(self.settings.PUSHOVER_API_URL, json=payload)

    async def send(self, settings: NotificationSettings, message: NotificationMessage) -> None:
        app_token, user_key = self._credentials(settings)
        payload = {
            "token": app_token,
            "user": user_key,
            "title": message.title,
            "message": message.message,
            "priority": 1 if message.is_urgent else 0,
        }

        try:
            response = await self._post(payload)
        except httpx.HTTPError as e:
            logger.error(f"Pushover unreachable: {e}")
            raise UpstreamUnavailableError("Pushover unreachable", service="pushover") from e

        body = {}
        try:
            body = response.json()
        except ValueError:
            pass

        if response.status_code != 200 or body.get("status") != 1:
            logger.error(f"Pushover rejected notification: {response.status_code} {body}")
            raise UpstreamUnavailableError(
                "Pushover rejected the notification",
                service="pushover",
                service_response=str(body or response.text)[:500],
            )

        logger.debug(f"Pushover notification sent: {message.title}")
