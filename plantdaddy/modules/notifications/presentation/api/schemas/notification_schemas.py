# 📄 File: plantdaddy/modules/notifications/presentation/api/schemas/notification_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of reminder preferences and reminder history as the apps see them.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for notification settings (credentials are write-only and reported
# by presence), the notification log and delivery / sweep results.
#
# 🔗 Dependencies:
# - pydantic, plantdaddy.shared.core.schemas, notification domain models
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.modules.notifications.presentation.api.v1.notifications

from datetime import datetime
from typing import Optional

from pydantic import Field

from plantdaddy.modules.notifications.domain.models.notification import (
    NotificationKind,
    NotificationLogEntry,
    NotificationSettings,
)
from plantdaddy.shared.core.schemas import CamelModel


class NotificationSettingsUpdateRequest(CamelModel):
    enabled: Optional[bool] = None
    pushover_enabled: Optional[bool] = None
    pushover_app_token: Optional[str] = Field(None, max_length=100)
    pushover_user_key: Optional[str] = Field(None, max_length=100)
    email_enabled: Optional[bool] = None
    email_address: Optional[str] = Field(None, max_length=254, pattern=r"^$|^[^@\s]+@[^@\s]+\.[^@\s]+$")
    sendgrid_api_key: Optional[str] = Field(None, max_length=200)


class NotificationSettingsResponse(CamelModel):
    """Settings without secrets; credentials are reported as present or not."""
    enabled: bool
    pushover_enabled: bool
    pushover_app_token_set: bool
    pushover_user_key_set: bool
    email_enabled: bool
    email_address: Optional[str] = None
    sendgrid_api_key_set: bool
    last_updated: Optional[datetime] = None

    @classmethod
    def from_domain(cls, settings: NotificationSettings) -> "NotificationSettingsResponse":
        return cls(
            enabled=settings.enabled,
            pushover_enabled=settings.pushover_enabled,
            pushover_app_token_set=bool(settings.pushover_app_token),
            pushover_user_key_set=bool(settings.pushover_user_key),
            email_enabled=settings.email_enabled,
            email_address=settings.email_address,
            sendgrid_api_key_set=bool(settings.sendgrid_api_key),
            last_updated=settings.last_updated,
        )


class NotificationLogResponse(CamelModel):
    id: int
    plant_id: Optional[int] = None
    plant_name: Optional[str] = None
    kind: NotificationKind
    title: str
    message: str
    channel: str
    success: bool
    sent_at: datetime

    @classmethod
    def from_domain(cls, entry: NotificationLogEntry) -> "NotificationLogResponse":
        return cls(**entry.model_dump(exclude={"user_id"}))


class DeliveryResponse(CamelModel):
    sent: bool
    message: str


class SweepResultResponse(CamelModel):
    users: int
    sent: int
    failed: int
    skipped: int
