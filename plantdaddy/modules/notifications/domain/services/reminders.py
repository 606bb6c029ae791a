# 📄 File: plantdaddy/modules/notifications/domain/services/reminders.py
# 🧭 Purpose (Layman Explanation):
# Writes the words of a watering reminder, and decides when a late plant is "urgent".
# 🧪 Purpose (Technical Summary):
# Pure builders for per-plant reminders, the overdue summary and the daily digest text.
# Urgency is derived from the watering snapshot and URGENT_OVERDUE_DAYS.
# 🔗 Dependencies:
# watering_status snapshot, notification models
# 🔄 Connected Modules / Calls From:
# reminder sweep, notifications API

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from plantdaddy.modules.notifications.domain.models.notification import NotificationUrgency
from plantdaddy.modules.plant_care.domain.services.watering_status import WateringSnapshot

SUMMARY_TITLE = "🪴 PlantDaddy Daily Summary"
TEST_TITLE = "🪴 PlantDaddy Test"
TEST_MESSAGE = "This is a test notification from PlantDaddy. Your notifications are working!"


@dataclass(frozen=True)
class Reminder:
    title: str
    message: str
    urgency: NotificationUrgency
    extra: Dict[str, Any] = field(default_factory=dict)


def build_reminder(plant: Any, snapshot: WateringSnapshot, urgent_after_days: int) -> Reminder:
    """
    Reminder for one plant.

    More than ``urgent_after_days`` days overdue makes the reminder urgent.
    """
    days_overdue = snapshot.days_overdue
    title = f"🪴 PlantDaddy: {plant.name} needs water!"

    if days_overdue > urgent_after_days:
        return Reminder(
            title=title,
            message=f"Your {plant.name} in {plant.location} is {days_overdue} days overdue for watering!",
            urgency=NotificationUrgency.URGENT,
            extra={"days_overdue": days_overdue},
        )

    return Reminder(
        title=title,
        message=f"Time to water your {plant.name} in {plant.location}",
        urgency=NotificationUrgency.NORMAL,
        extra={"days_overdue": days_overdue},
    )


def build_summary(count: int) -> Reminder:
    return Reminder(
        title=SUMMARY_TITLE,
        message=f"You have {count} plants that need watering today.",
        urgency=NotificationUrgency.NORMAL,
    )


def build_digest(plant_names: Sequence[str]) -> Reminder:
    """Daily digest listing every plant still waiting for water."""
    count = len(plant_names)
    noun = "plant needs" if count == 1 else "plants need"
    return Reminder(
        title=SUMMARY_TITLE,
        message=f"{count} {noun} watering today: {', '.join(plant_names)}",
        urgency=NotificationUrgency.NORMAL,
        extra={"plant_count": count},
    )
