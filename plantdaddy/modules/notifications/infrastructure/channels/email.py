# 📄 File: plantdaddy/modules/notifications/infrastructure/channels/email.py
# 🧭 Purpose (Layman Explanation):
# Sends watering reminders by email through SendGrid.
# 🧪 Purpose (Technical Summary):
# SendGrid v3 mail/send channel over httpx using the user's own API key. Builds a small
# HTML body; urgent reminders get an urgent subject line.
# 🔗 Dependencies:
# httpx, channel base, settings, exceptions
# 🔄 Connected Modules / Calls From:
# notification dispatcher

import html
import logging
from typing import Optional

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


def render_email_html(message: NotificationMessage) -> str:
    """Minimal HTML body for a reminder email."""
    plant = message.plant
    colour = "#d73a49" if message.is_urgent else "#24292e"
    parts = [
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">',
        '<h2 style="color: #2c974b;">Plant Watering Reminder</h2>',
        f'<p style="font-size: 16px; color: {colour};">{html.escape(message.message)}</p>',
    ]
    if plant is not None:
        parts.append("<ul>")
        parts.append(f"<li><strong>Name:</strong> {html.escape(str(plant.name))}</li>")
        if getattr(plant, "species", None):
            parts.append(f"<li><strong>Species:</strong> {html.escape(str(plant.species))}</li>")
        parts.append(f"<li><strong>Location:</strong> {html.escape(str(plant.location))}</li>")
        parts.append(f"<li><strong>Watering Frequency:</strong> Every {plant.watering_frequency} days</li>")
        parts.append("</ul>")
    parts.append("</div>")
    return "".join(parts)


class EmailChannel(NotificationChannel):
    name = NotificationChannelName.EMAIL.value

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.settings = get_settings()
        self._client = client

    def is_enabled(self, settings: NotificationSettings) -> bool:
        return bool(settings.email_enabled and settings.email_address and settings.sendgrid_api_key)

    def _subject(self, message: NotificationMessage) -> str:
        plant = message.plant
        if plant is None:
            return message.title
        if message.is_urgent:
            days = message.extra.get("days_overdue", 0)
            return f"🚨 PlantDaddy: {plant.name} urgently needs water ({days} days overdue)!"
        return f"🪴 PlantDaddy: Time to water your {plant.name}"

    @vendor_retry
    async def _post(self, api_key: str, payload: dict) -> httpx.Response:
        headers = {"Authorization": f"Bearer {api_key}"}
        if self._client is not None:
            return await self._client.post(self.settings.SENDGRID_API_URL, json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.settings.NOTIFICATION_HTTP_TIMEOUT) as client:
            return await client.post(self.settings.SENDGRID_API_URL, json=payload, headers=headers)

    async def send(self, settings: NotificationSettings, message: NotificationMessage) -> None:
        payload = {
            "personalizations": [{"to": [{"email": settings.email_address}]}],
            "from": {"email": self.settings.SENDGRID_FROM_EMAIL, "name": self.settings.SENDGRID_FROM_NAME},
            "subject": self._subject(message),
            "content": [
                {"type": "text/plain", "value": message.message},
                {"type": "text/html", "value": render_email_html(message)},
            ],
        }

        try:
            response = await self._post(settings.sendgrid_api_key, payload)
        except httpx.HTTPError as e:
            logger.error(f"SendGrid unreachable: {e}")
            raise UpstreamUnavailableError("SendGrid unreachable", service="sendgrid") from e

        # SendGrid answers 202 Accepted
        if response.status_code >= 300:
            logger.error(f"SendGrid rejected email: {response.status_code}")
            raise UpstreamUnavailableError(
                "SendGrid rejected the email",
                service="sendgrid",
                service_response=response.text[:500],
            )

        logger.debug(f"Email notification sent to user {settings.user_id}")
