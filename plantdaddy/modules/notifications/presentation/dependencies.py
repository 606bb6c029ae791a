# 📄 File: plantdaddy/modules/notifications/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands the reminder endpoints the tools they need for the current request.
# 🧪 Purpose (Technical Summary):
# FastAPI providers for delivery channels and the NotificationService. Channels are a
# separate dependency so tests can override vendor delivery.
# 🔗 Dependencies:
# FastAPI Depends, notification repositories/services, channels
# 🔄 Connected Modules / Calls From:
# notifications API router

from typing import List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from plantdaddy.modules.notifications.domain.services.dispatcher import NotificationDispatcher, default_channels
from plantdaddy.modules.notifications.domain.services.notification_service import NotificationService
from plantdaddy.modules.notifications.domain.services.reminder_sweep import PlantReminder
from plantdaddy.modules.notifications.infrastructure.channels.base import NotificationChannel
from plantdaddy.modules.notifications.infrastructure.database.notification_repository_impl import (
    NotificationLogRepositoryImpl,
    NotificationSettingsRepositoryImpl,
)
from plantdaddy.shared.infrastructure.database import get_db_session


def get_notification_channels() -> List[NotificationChannel]:
    return default_channels()


def get_notification_service(
    db: AsyncSession = Depends(get_db_session),
    channels: List[NotificationChannel] = Depends(get_notification_channels),
) -> NotificationService:
    settings_repository = NotificationSettingsRepositoryImpl(db)
    log_repository = NotificationLogRepositoryImpl(db)
    return NotificationService(
        settings_repository,
        log_repository,
        NotificationDispatcher(settings_repository, log_repository, channels),
        PlantReminder(db, channels),
    )
