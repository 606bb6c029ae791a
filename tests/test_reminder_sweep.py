from datetime import timedelta

from plantdaddy.modules.notifications.domain.models.notification import NotificationKind
from plantdaddy.modules.notifications.domain.services.reminder_sweep import ReminderSweep
from plantdaddy.modules.notifications.domain.services.reminders import SUMMARY_TITLE
from plantdaddy.modules.notifications.infrastructure.database.notification_repository_impl import (
    NotificationLogRepositoryImpl,
)
from plantdaddy.modules.notifications.infrastructure.database.models import NotificationLogModel
from plantdaddy.shared.utils.helpers import utcnow
from tests.helpers import API, FakeChannel, bearer, create_plant


async def log_for(session_factory, user_id):
    async with session_factory() as session:
        return await NotificationLogRepositoryImpl(session).recent(user_id)


async def test_sweep_reminds_overdue_plants_and_sends_summary(client, alice, session_factory):
    headers = bearer(alice)
    await create_plant(client, headers, "Monstera", days_ago=10)
    await create_plant(client, headers, "Pothos", days_ago=8)
    await create_plant(client, headers, "Fresh", days_ago=1)
    channel = FakeChannel()

    result = await ReminderSweep(session_factory, channels=[channel]).run_sweep()

    assert result.to_dict() == {"users": 1, "sent": 2, "failed": 0, "skipped": 0}
    assert sorted(m.plant.name for m in channel.sent if m.plant) == ["Monstera", "Pothos"]
    assert channel.titles[-1] == SUMMARY_TITLE
    assert channel.sent[-1].message == "You have 2 plants that need watering today."


async def test_sweep_skips_snoozed_plants(client, alice, session_factory):
    headers = bearer(alice)
    plant = await create_plant(client, headers, "Monstera", days_ago=10)
    until = (utcnow() + timedelta(days=1)).isoformat()
    await client.post(f"{API}/plants/{plant['id']}/snooze", json={"snoozedUntil": until}, headers=headers)
    channel = FakeChannel()

    result = await ReminderSweep(session_factory, channels=[channel]).run_sweep()

    assert result.sent == 0
    assert channel.sent == []


async def test_one_failing_plant_does_not_stop_the_others(client, alice, session_factory):
    headers = bearer(alice)
    for name in ("Cactus", "Fern", "Monstera"):
        await create_plant(client, headers, name, days_ago=10)
    channel = FakeChannel(fail_for={"Fern"}, crash_for={"Cactus"})

    result = await ReminderSweep(session_factory, channels=[channel]).run_sweep()

    assert result.to_dict() == {"users": 1, "sent": 1, "failed": 2, "skipped": 0}
    assert [m.plant.name for m in channel.sent] == ["Monstera"]

    log = await log_for(session_factory, alice["user"]["id"])
    outcomes = {entry.plant_name: entry.success for entry in log}
    assert outcomes == {"Fern": False, "Monstera": True}


async def test_failed_log_write_rolls_back_only_that_plant(client, alice, session_factory, monkeypatch):
    headers = bearer(alice)
    plants = {name: await create_plant(client, headers, name, days_ago=10) for name in ("Cactus", "Fern", "Monstera")}
    original_record = NotificationLogRepositoryImpl.record

    async def broken_for_fern(self, user_id, *args, plant_id=None, **kwargs):
        if plant_id == plants["Fern"]["id"]:
            # Missing NOT NULL columns make the flush fail inside the database
            self._session.add(NotificationLogModel(user_id=user_id, plant_id=plant_id))
            await self._session.flush()
        await original_record(self, user_id, *args, plant_id=plant_id, **kwargs)

    monkeypatch.setattr(NotificationLogRepositoryImpl, "record", broken_for_fern)
    result = await ReminderSweep(session_factory, channels=[FakeChannel()]).run_sweep()

    assert result.to_dict() == {"users": 1, "sent": 2, "failed": 1, "skipped": 0}
    log = await log_for(session_factory, alice["user"]["id"])
    assert sorted(entry.plant_name for entry in log if entry.plant_name) == ["Cactus", "Monstera"]

    monkeypatch.undo()
    retry_channel = FakeChannel()
    retried = await ReminderSweep(session_factory, channels=[retry_channel]).run_sweep()

    assert retried.to_dict() == {"users": 1, "sent": 1, "failed": 0, "skipped": 2}
    assert [m.plant.name for m in retry_channel.sent] == ["Fern"]


async def test_failed_delivery_is_retried_on_next_sweep(client, alice, session_factory):
    headers = bearer(alice)
    await create_plant(client, headers, "Fern", days_ago=10)
    await create_plant(client, headers, "Monstera", days_ago=10)
    sweep = ReminderSweep(session_factory, channels=[FakeChannel(fail_for={"Fern"})])
    await sweep.run_sweep()

    retry_channel = FakeChannel()
    result = await ReminderSweep(session_factory, channels=[retry_channel]).run_sweep()

    assert result.to_dict() == {"users": 1, "sent": 1, "failed": 0, "skipped": 1}
    assert [m.plant.name for m in retry_channel.sent] == ["Fern"]


async def test_sweep_debounces_repeat_reminders(client, alice, session_factory):
    await create_plant(client, bearer(alice), "Monstera", days_ago=10)
    channel = FakeChannel()
    sweep = ReminderSweep(session_factory, channels=[channel])

    first = await sweep.run_sweep()
    second = await sweep.run_sweep()
    later = await sweep.run_sweep(now=utcnow() + timedelta(days=1))

    assert (first.sent, second.sent, second.skipped) == (1, 0, 1)
    assert later.sent == 1
    assert len(channel.sent) == 2


async def test_sweep_ignores_users_with_notifications_disabled(client, alice, bob, session_factory):
    await create_plant(client, bearer(alice), "Monstera", days_ago=10)
    await create_plant(client, bearer(bob), "Cactus", days_ago=30)
    await client.put(f"{API}/notification-settings", json={"enabled": False}, headers=bearer(bob))
    channel = FakeChannel()

    result = await ReminderSweep(session_factory, channels=[channel]).run_sweep()

    assert result.users == 1
    assert [m.plant.name for m in channel.sent] == ["Monstera"]


async def test_member_is_reminded_about_shared_household_plants(client, alice, bob, session_factory):
    households = await client.get(f"{API}/households", headers=bearer(alice))
    invite_code = households.json()[0]["inviteCode"]
    await client.post(f"{API}/households/join", json={"inviteCode": invite_code}, headers=bearer(bob))
    await create_plant(client, bearer(alice), "Shared Fern", days_ago=10)
    channel = FakeChannel()

    result = await ReminderSweep(session_factory, channels=[channel]).run_sweep()

    assert result.to_dict() == {"users": 2, "sent": 2, "failed": 0, "skipped": 0}
    assert [m.plant.name for m in channel.sent] == ["Shared Fern", "Shared Fern"]


async def test_daily_digest_is_sent_once_per_day(client, alice, session_factory):
    headers = bearer(alice)
    await create_plant(client, headers, "Monstera", days_ago=10)
    await create_plant(client, headers, "Pothos", days_ago=9)
    channel = FakeChannel()
    sweep = ReminderSweep(session_factory, channels=[channel])

    # An hourly summary must not count as the day's digest
    await sweep.run_sweep()
    first = await sweep.run_daily_digest()
    second = await sweep.run_daily_digest()

    assert first.sent == 1
    assert second.to_dict() == {"users": 1, "sent": 0, "failed": 0, "skipped": 1}
    digest = channel.sent[-1]
    assert digest.title == SUMMARY_TITLE
    assert digest.message.startswith("2 plants need watering today:")

    log = await log_for(session_factory, alice["user"]["id"])
    assert sum(1 for entry in log if entry.kind == NotificationKind.DIGEST) == 1


async def test_digest_skipped_when_nothing_is_overdue(client, alice, session_factory):
    await create_plant(client, bearer(alice), "Fresh", days_ago=1)
    channel = FakeChannel()

    result = await ReminderSweep(session_factory, channels=[channel]).run_daily_digest()

    assert result.sent == 0
    assert channel.sent == []
