import json
from types import SimpleNamespace

import httpx
import pytest

from plantdaddy.modules.notifications.domain.models.notification import NotificationSettings, NotificationUrgency
from plantdaddy.modules.notifications.infrastructure.channels.base import NotificationMessage
from plantdaddy.modules.notifications.infrastructure.channels.email import EmailChannel
from plantdaddy.modules.notifications.infrastructure.channels.pushover import PushoverChannel
from plantdaddy.shared.core.exceptions import UpstreamUnavailableError

FERN = SimpleNamespace(id=7, name="Fern", location="Office", watering_frequency=5)


def mock_client(handler, requests):
    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(record))


def pushover_settings(**overrides) -> NotificationSettings:
    values = {"user_id": 1, "pushover_app_token": "app-token", "pushover_user_key": "user-key"}
    values.update(overrides)
    return NotificationSettings(**values)


def email_settings(**overrides) -> NotificationSettings:
    values = {
        "user_id": 1,
        "email_enabled": True,
        "email_address": "alice@example.com",
        "sendgrid_api_key": "sg-key",
    }
    values.update(overrides)
    return NotificationSettings(**values)


# =============================================================================
# PUSHOVER
# =============================================================================

def test_pushover_needs_both_credentials():
    channel = PushoverChannel()

    assert channel.is_enabled(pushover_settings())
    assert not channel.is_enabled(pushover_settings(pushover_user_key=None))
    assert not channel.is_enabled(pushover_settings(pushover_enabled=False))


async def test_pushover_posts_message_with_priority():
    requests = []
    client = mock_client(lambda request: httpx.Response(200, json={"status": 1}), requests)
    message = NotificationMessage(title="Water!", message="Fern is thirsty", urgency=NotificationUrgency.URGENT, plant=FERN)

    await PushoverChannel(client).send(pushover_settings(), message)

    payload = json.loads(requests[0].content)
    assert payload == {
        "token": "app-token",
        "user": "user-key",
        "title": "Water!",
        "message": "Fern is thirsty",
        "priority": 1,
    }


async def test_pushover_rejection_raises_upstream_error():
    client = mock_client(lambda request: httpx.Response(400, json={"status": 0, "errors": ["user invalid"]}), [])
    message = NotificationMessage(title="Water!", message="Fern is thirsty")

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await PushoverChannel(client).send(pushover_settings(), message)

    assert exc_info.value.details["service"] == "pushover"


async def test_pushover_retries_transport_errors_then_gives_up():
    requests = []

    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = mock_client(unreachable, requests)

    with pytest.raises(UpstreamUnavailableError):
        await PushoverChannel(client).send(pushover_settings(), NotificationMessage(title="t", message="m"))

    assert len(requests) == 3


# =============================================================================
# EMAIL
# =============================================================================

def test_email_needs_address_and_key():
    channel = EmailChannel()

    assert channel.is_enabled(email_settings())
    assert not channel.is_enabled(email_settings(sendgrid_api_key=None))
    assert not channel.is_enabled(email_settings(email_enabled=False))


async def test_email_urgent_subject_and_auth_header():
    requests = []
    client = mock_client(lambda request: httpx.Response(202), requests)
    message = NotificationMessage(
        title="Water!",
        message="Your Fern in Office is 4 days overdue for watering!",
        urgency=NotificationUrgency.URGENT,
        plant=FERN,
        extra={"days_overdue": 4},
    )

    await EmailChannel(client).send(email_settings(), message)

    request = requests[0]
    payload = json.loads(request.content)
    assert request.headers["Authorization"] == "Bearer sg-key"
    assert payload["subject"] == "🚨 PlantDaddy: Fern urgently needs water (4 days overdue)!"
    assert payload["personalizations"] == [{"to": [{"email": "alice@example.com"}]}]
    assert [part["type"] for part in payload["content"]] == ["text/plain", "text/html"]


async def test_email_subject_without_plant_uses_title():
    requests = []
    client = mock_client(lambda request: httpx.Response(202), requests)

    await EmailChannel(client).send(email_settings(), NotificationMessage(title="Daily Summary", message="m"))

    assert json.loads(requests[0].content)["subject"] == "Daily Summary"


async def test_email_rejection_raises_upstream_error():
    client = mock_client(lambda request: httpx.Response(401, text="bad key"), [])

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await EmailChannel(client).send(email_settings(), NotificationMessage(title="t", message="m", plant=FERN))

    assert exc_info.value.details["service"] == "sendgrid"
