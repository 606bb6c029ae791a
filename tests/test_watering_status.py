from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from plantdaddy.modules.plant_care.domain.services import watering_status
from plantdaddy.modules.plant_care.domain.services.watering_status import WateringStatus

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@dataclass
class Schedule:
    last_watered: Any
    watering_frequency: Any = 7
    snoozed_until: Optional[Any] = None
    name: str = "Fern"
    id: int = 1


def test_next_watering_date_adds_frequency():
    last = NOW - timedelta(days=2)
    assert watering_status.next_watering_date(last, 7) == last + timedelta(days=7)


def test_next_watering_date_prefers_later_snooze():
    last = NOW - timedelta(days=10)
    snooze = NOW + timedelta(days=2)
    assert watering_status.next_watering_date(last, 7, snooze) == snooze
    # A snooze ending before the due date changes nothing
    early = last + timedelta(days=1)
    assert watering_status.next_watering_date(last, 7, early) == last + timedelta(days=7)


def test_days_until_watering_counts_calendar_days():
    # Due at 01:00 tomorrow while it is 23:00 today
    now = datetime(2024, 5, 10, 23, 0, tzinfo=timezone.utc)
    last = datetime(2024, 5, 4, 1, 0, tzinfo=timezone.utc)
    assert watering_status.days_until_watering(last, 7, None, now) == 1


def test_watered_late_evening_is_due_today_next_morning():
    last = datetime(2024, 5, 9, 23, 0, tzinfo=timezone.utc)
    morning = datetime(2024, 5, 10, 8, 0, tzinfo=timezone.utc)

    assert watering_status.days_until_watering(last, 1, None, morning) == 0
    assert not watering_status.is_overdue(last, 1, None, morning)


def test_days_until_watering_negative_when_overdue():
    assert watering_status.days_until_watering(NOW - timedelta(days=10), 7, None, NOW) == -3


def test_naive_and_iso_inputs_are_utc():
    naive = datetime(2024, 5, 1, 12, 0)
    iso = "2024-05-01T12:00:00Z"
    assert watering_status.days_until_watering(naive, 7, None, NOW) == -2
    assert watering_status.days_until_watering(iso, 7, None, NOW) == -2


def test_is_overdue_false_while_snoozed():
    last = NOW - timedelta(days=10)
    assert watering_status.is_overdue(last, 7, None, NOW)
    assert not watering_status.is_overdue(last, 7, NOW + timedelta(hours=3), NOW)


def test_expired_snooze_is_ignored():
    last = NOW - timedelta(days=10)
    expired = NOW - timedelta(days=1)
    assert not watering_status.is_snoozed(expired, NOW)
    assert watering_status.is_overdue(last, 7, expired, NOW)


def test_classify_statuses():
    assert watering_status.classify(Schedule(NOW - timedelta(days=10)), NOW) == WateringStatus.OVERDUE
    assert watering_status.classify(Schedule(NOW - timedelta(days=5)), NOW) == WateringStatus.SOON
    assert watering_status.classify(Schedule(NOW - timedelta(days=1)), NOW) == WateringStatus.WATERED


def test_watered_today_is_watered_even_with_short_frequency():
    plant = Schedule(NOW - timedelta(hours=2), watering_frequency=1)
    assert watering_status.classify(plant, NOW) == WateringStatus.WATERED


def test_unusable_schedule_is_unknown_and_never_raises():
    for plant in (
        Schedule(None),
        Schedule("not a date"),
        Schedule(NOW, watering_frequency=0),
        Schedule(NOW, watering_frequency="7"),
    ):
        snapshot = watering_status.describe(plant, NOW)
        assert snapshot.status == WateringStatus.UNKNOWN
        assert snapshot.days_until_watering is None
        assert not snapshot.is_overdue


def test_snapshot_days_overdue():
    snapshot = watering_status.describe(Schedule(NOW - timedelta(days=12)), NOW)
    assert snapshot.days_overdue == 5
    assert snapshot.is_due_today


def test_group_by_status_partitions_every_plant():
    overdue = Schedule(NOW - timedelta(days=9), name="overdue")
    due_today = Schedule(NOW - timedelta(days=7), name="due-today")
    upcoming = Schedule(NOW - timedelta(days=5), name="upcoming")
    watered = Schedule(NOW - timedelta(days=1), name="watered")
    unknown = Schedule(None, name="unknown")
    snoozed = Schedule(NOW - timedelta(days=9), snoozed_until=NOW + timedelta(days=2), name="snoozed")

    groups = watering_status.group_by_status([overdue, due_today, upcoming, watered, unknown, snoozed], NOW)

    assert [p.name for p in groups.due_today] == ["overdue", "due-today"]
    assert [p.name for p in groups.upcoming] == ["upcoming", "snoozed"]
    assert [p.name for p in groups.recently_watered] == ["watered", "unknown"]
    assert len(groups) == 6
