from types import SimpleNamespace

from plantdaddy.modules.notifications.domain.models.notification import NotificationUrgency
from plantdaddy.modules.notifications.domain.services.reminders import (
    TEST_TITLE,
    build_digest,
    build_reminder,
)
from plantdaddy.modules.plant_care.domain.services.watering_status import WateringSnapshot, WateringStatus
from tests.helpers import API, bearer, create_plant


def snapshot(days_until: int) -> WateringSnapshot:
    return WateringSnapshot(
        status=WateringStatus.OVERDUE,
        days_until_watering=days_until,
        next_watering_date=None,
        is_snoozed=False,
        is_overdue=days_until < 0,
    )


# =============================================================================
# MESSAGE BUILDING
# =============================================================================

def test_reminder_is_urgent_past_threshold():
    plant = SimpleNamespace(name="Monstera", location="Kitchen")

    normal = build_reminder(plant, snapshot(-2), urgent_after_days=2)
    urgent = build_reminder(plant, snapshot(-3), urgent_after_days=2)

    assert normal.urgency == NotificationUrgency.NORMAL
    assert normal.message == "Time to water your Monstera in Kitchen"
    assert urgent.urgency == NotificationUrgency.URGENT
    assert urgent.message == "Your Monstera in Kitchen is 3 days overdue for watering!"
    assert urgent.extra == {"days_overdue": 3}
    assert urgent.title == "🪴 PlantDaddy: Monstera needs water!"


def test_digest_lists_plants():
    assert build_digest(["Fern"]).message == "1 plant needs watering today: Fern"
    assert build_digest(["Fern", "Pothos"]).message == "2 plants need watering today: Fern, Pothos"


# =============================================================================
# SETTINGS
# =============================================================================

async def test_registration_creates_default_settings(client, alice):
    response = await client.get(f"{API}/notification-settings", headers=bearer(alice))

    assert response.status_code == 200
    body = response.json()
    assert body["enabled"] is True
    assert body["pushoverEnabled"] is True
    assert body["emailEnabled"] is False
    assert body["pushoverUserKeySet"] is False


async def test_update_settings_hides_credentials(client, alice):
    response = await client.put(
        f"{API}/notification-settings",
        json={"pushoverUserKey": " user-key ", "emailEnabled": True, "emailAddress": "alice@example.com"},
        headers=bearer(alice),
    )

    body = response.json()
    assert response.status_code == 200
    assert body["pushoverUserKeySet"] is True
    assert "pushoverUserKey" not in body
    assert body["emailAddress"] == "alice@example.com"

    cleared = await client.put(f"{API}/notification-settings", json={"pushoverUserKey": ""}, headers=bearer(alice))
    assert cleared.json()["pushoverUserKeySet"] is False
    assert cleared.json()["emailEnabled"] is True


async def test_update_settings_rejects_bad_email(client, alice):
    response = await client.put(f"{API}/notification-settings", json={"emailAddress": "not-an-email"}, headers=bearer(alice))

    assert response.status_code == 422


# =============================================================================
# ON-DEMAND DELIVERY
# =============================================================================

async def test_send_test_notification_is_logged(client, alice, channel):
    response = await client.post(f"{API}/notification-settings/test", headers=bearer(alice))
    log = await client.get(f"{API}/notification-log", headers=bearer(alice))

    assert response.json()["sent"] is True
    assert channel.titles == [TEST_TITLE]
    assert [(e["kind"], e["channel"], e["success"]) for e in log.json()] == [("test", "pushover", True)]


async def test_nothing_sent_when_notifications_disabled(client, alice, channel):
    await client.put(f"{API}/notification-settings", json={"enabled": False}, headers=bearer(alice))

    response = await client.post(f"{API}/notification-settings/test", headers=bearer(alice))
    log = await client.get(f"{API}/notification-log", headers=bearer(alice))

    assert response.json()["sent"] is False
    assert channel.sent == []
    assert log.json() == []


async def test_vendor_failure_is_reported_not_raised(client, alice, channel):
    plant = await create_plant(client, bearer(alice), "Fern", days_ago=10)
    channel.fail_for.add("Fern")

    response = await client.post(f"{API}/plants/{plant['id']}/notify", headers=bearer(alice))
    log = await client.get(f"{API}/notification-log", headers=bearer(alice))

    assert response.status_code == 200
    assert response.json()["sent"] is False
    entry = log.json()[0]
    assert entry["success"] is False
    assert entry["plantName"] == "Fern"


async def test_notify_plant_sends_reminder(client, alice, channel):
    plant = await create_plant(client, bearer(alice), "Monstera", days_ago=1)

    response = await client.post(f"{API}/plants/{plant['id']}/notify", headers=bearer(alice))

    assert response.json()["sent"] is True
    assert channel.sent[0].plant.id == plant["id"]
    assert channel.sent[0].message == "Time to water your Monstera in Living Room"


async def test_notify_foreign_plant_is_not_found(client, alice, bob, channel):
    plant = await create_plant(client, bearer(alice), "Monstera")

    response = await client.post(f"{API}/plants/{plant['id']}/notify", headers=bearer(bob))

    assert response.status_code == 404
    assert channel.sent == []


async def test_check_plants_reminds_then_debounces(client, alice, channel):
    await create_plant(client, bearer(alice), "Monstera", days_ago=10)
    await create_plant(client, bearer(alice), "Fresh", days_ago=1)

    first = await client.post(f"{API}/notifications/check-plants", headers=bearer(alice))
    second = await client.post(f"{API}/notifications/check-plants", headers=bearer(alice))

    assert first.json() == {"users": 1, "sent": 1, "failed": 0, "skipped": 0}
    assert second.json() == {"users": 1, "sent": 0, "failed": 0, "skipped": 1}
    assert len(channel.sent) == 1
    assert channel.sent[0].urgency == NotificationUrgency.URGENT
    assert channel.sent[0].extra == {"days_overdue": 3}


async def test_notification_routes_require_authentication(client):
    response = await client.get(f"{API}/notification-settings")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"
