# 📄 File: plantdaddy/modules/notifications/domain/models/notification.py
# 🧭 Purpose (Layman Explanation):
# Describes how each person wants to be reminded and what a sent reminder looks like.
# 🧪 Purpose (Technical Summary):
# Domain models for notification settings, log entries and the enumerations for urgency,
# notification kind and delivery channel.
# 🔗 Dependencies:
# pydantic, enum
# 🔄 Connected Modules / Calls From:
# notification repositories, dispatcher, channels, reminder sweep, notifications API

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from plantdaddy.shared.utils.helpers import UTCDateTime


class NotificationUrgency(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"


class NotificationKind(str, Enum):
    REMINDER = "reminder"
    DIGEST = "digest"
    TEST = "test"


class NotificationChannelName(str, Enum):
    PUSHOVER = "pushover"
    EMAIL = "email"


class NotificationSettings(BaseModel):
    """Channel preferences and credentials of one user."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    user_id: int
    enabled: bool = True
    pushover_enabled: bool = True
    pushover_app_token: Optional[str] = None
    pushover_user_key: Optional[str] = None
    email_enabled: bool = False
    email_address: Optional[str] = None
    sendgrid_api_key: Optional[str] = None
    last_updated: Optional[UTCDateTime] = None


class NotificationLogEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    plant_id: Optional[int] = None
    plant_name: Optional[str] = None
    kind: NotificationKind
    title: str
    message: str
    channel: str
    success: bool
    sent_at: UTCDateTime
