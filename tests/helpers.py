"""Test doubles and request helpers shared by the API and sweep tests."""

from datetime import timedelta
from typing import List, Optional

from plantdaddy.modules.notifications.infrastructure.channels.base import (
    NotificationChannel,
    NotificationMessage,
)
from plantdaddy.shared.core.exceptions import UpstreamUnavailableError
from plantdaddy.shared.core.security import create_access_token
from plantdaddy.shared.utils.helpers import utcnow

API = "/api/v1"


class FakeChannel(NotificationChannel):
    """
    Records messages instead of calling a vendor.

    Plants named in ``fail_for`` are rejected like a vendor outage; plants
    named in ``crash_for`` raise an unexpected error.
    """

    name = "pushover"

    def __init__(self, fail_for=(), crash_for=()):
        self.fail_for = set(fail_for)
        self.crash_for = set(crash_for)
        self.sent: List[NotificationMessage] = []

    def is_enabled(self, settings) -> bool:
        return settings.pushover_enabled

    async def send(self, settings, message: NotificationMessage) -> None:
        plant_name: Optional[str] = getattr(message.plant, "name", None)
        if plant_name in self.crash_for:
            raise RuntimeError(f"channel crashed on {plant_name}")
        if plant_name in self.fail_for:
            raise UpstreamUnavailableError("Pushover rejected the message", service="pushover")
        self.sent.append(message)

    @property
    def titles(self) -> List[str]:
        return [message.title for message in self.sent]


async def register(client, username: str, password: str = "secret123") -> dict:
    """Register ``username`` and return the auth response body."""
    response = await client.post(f"{API}/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def bearer(auth: dict, household_id: Optional[int] = None) -> dict:
    headers = {"Authorization": f"Bearer {auth['accessToken']}"}
    if household_id is not None:
        headers["X-Household-Id"] = str(household_id)
    return headers


def admin_bearer(auth: dict) -> dict:
    """Bearer headers for ``auth``'s user with the admin claim set."""
    token = create_access_token({
        "sub": str(auth["user"]["id"]),
        "username": auth["user"]["username"],
        "is_admin": True,
    })
    return {"Authorization": f"Bearer {token}"}


async def create_plant(client, headers: dict, name: str, days_ago: int = 0, frequency: int = 7, **fields) -> dict:
    """Create a plant last watered ``days_ago`` days ago and return its body."""
    payload = {
        "name": name,
        "location": fields.pop("location", "Living Room"),
        "wateringFrequency": frequency,
        "lastWatered": (utcnow() - timedelta(days=days_ago)).isoformat(),
        **fields,
    }
    response = await client.post(f"{API}/plants", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def household_of(client, auth: dict) -> dict:
    """The first household listed for ``auth``'s user."""
    response = await client.get(f"{API}/households", headers=bearer(auth))
    assert response.status_code == 200, response.text
    return response.json()[0]
