# 📄 File: plantdaddy/modules/notifications/infrastructure/database/notification_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves each person's reminder preferences and keeps a record of every reminder we tried
# to send, so we do not nag twice in a row.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repositories for per-user notification settings (with default provisioning)
# and the append-only notification log used for history and sweep debouncing.
#
# 🔗 Dependencies:
# - notifications ORM models and domain models, PlantModel (plant names in history)
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - notification dispatcher, reminder sweep, notifications API, registration provisioning

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from plantdaddy.modules.notifications.domain.models.notification import (
    NotificationKind,
    NotificationLogEntry,
    NotificationSettings,
)
from plantdaddy.modules.notifications.infrastructure.database.models import (
    NotificationLogModel,
    NotificationSettingsModel,
)
from plantdaddy.modules.plant_care.infrastructure.database.models import PlantModel
from plantdaddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = frozenset({
    "enabled",
    "pushover_enabled",
    "pushover_app_token",
    "pushover_user_key",
    "email_enabled",
    "email_address",
    "sendgrid_api_key",
})

RECENT_LOG_LIMIT = 50


class NotificationSettingsRepositoryImpl:
    """Per-user notification settings (one row per user)."""

    def __init__(self, session):
        self._session = session

    async def _get_model(self, user_id: int) -> Optional[NotificationSettingsModel]:
        stmt = select(NotificationSettingsModel).where(NotificationSettingsModel.user_id == user_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_for_user(self, user_id: int) -> Optional[NotificationSettings]:
        model = await self._get_model(user_id)
        return NotificationSettings.model_validate(model) if model else None

    async def get_or_default(self, user_id: int) -> NotificationSettings:
        """Stored settings, or unsaved defaults when the user has none yet."""
        return await self.get_for_user(user_id) or NotificationSettings(user_id=user_id)

    async def create_defaults(self, user_id: int) -> NotificationSettings:
        model = await self._get_model(user_id)
        if model is None:
            model = NotificationSettingsModel(user_id=user_id)
            self._session.add(model)
            await self._session.flush()
            logger.debug(f"Created default notification settings for user {user_id}")
        return NotificationSettings.model_validate(model)

    async def update(self, user_id: int, values: Dict[str, Any]) -> NotificationSettings:
        model = await self._get_model(user_id)
        if model is None:
            model = NotificationSettingsModel(user_id=user_id)
            self._session.add(model)

        for field, value in values.items():
            if field in SETTINGS_FIELDS:
                setattr(model, field, value)
        model.last_updated = utcnow()
        await self._session.flush()

        logger.info(f"Notification settings updated for user {user_id}")
        return NotificationSettings.model_validate(model)

    async def list_enabled(self) -> List[NotificationSettings]:
        """Settings of every user with notifications switched on."""
        stmt = (
            select(NotificationSettingsModel)
            .where(NotificationSettingsModel.enabled.is_(True))
            .order_by(NotificationSettingsModel.user_id)
        )
        models = (await self._session.execute(stmt)).scalars().all()
        return [NotificationSettings.model_validate(m) for m in models]


class NotificationLogRepositoryImpl:
    """Append-only delivery log."""

    def __init__(self, session):
        self._session = session

    async def record(
        self,
        user_id: int,
        kind: NotificationKind,
        title: str,
        message: str,
        channel: str,
        success: bool,
        plant_id: Optional[int] = None,
    ) -> None:
        self._session.add(NotificationLogModel(
            user_id=user_id,
            plant_id=plant_id,
            kind=NotificationKind(kind).value,
            title=title,
            message=message,
            channel=channel,
            success=success,
            sent_at=utcnow(),
        ))
        await self._session.flush()

    async def recent(self, user_id: int, limit: int = RECENT_LOG_LIMIT) -> List[NotificationLogEntry]:
        stmt = (
            select(NotificationLogModel, PlantModel.name)
            .outerjoin(PlantModel, PlantModel.id == NotificationLogModel.plant_id)
            .where(NotificationLogModel.user_id == user_id)
            .order_by(NotificationLogModel.sent_at.desc(), NotificationLogModel.id.desc())
            .limit(limit)
        )
        entries = []
        for model, plant_name in (await self._session.execute(stmt)).all():
            entry = NotificationLogEntry.model_validate(model)
            entry.plant_name = plant_name
            entries.append(entry)
        return entries

    async def sent_since(
        self,
        user_id: int,
        kind: NotificationKind,
        since: datetime,
        plant_id: Optional[int] = None,
    ) -> bool:
        """True if a successful notification of ``kind`` went out since ``since``."""
        stmt = select(NotificationLogModel.id).where(
            NotificationLogModel.user_id == user_id,
            NotificationLogModel.kind == NotificationKind(kind).value,
            NotificationLogModel.success.is_(True),
            NotificationLogModel.sent_at >= since,
        )
        if plant_id is not None:
            stmt = stmt.where(NotificationLogModel.plant_id == plant_id)
        return (await self._session.execute(stmt.limit(1))).first() is not None
