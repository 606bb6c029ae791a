# 📄 File: plantdaddy/modules/notifications/presentation/api/v1/notifications.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for reminder preferences, test messages, reminder history and
# "remind me now".
#
# 🧪 Purpose (Technical Summary):
# FastAPI notification endpoints. Settings and history belong to the current user; the
# per-plant reminder reads the plant through the household-scoped PlantService.
#
# 🔗 Dependencies:
# - FastAPI router
# - NotificationService, PlantService, notification schemas
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router (mounted under /api/v1)

"""
Notifications API Endpoints

Endpoints:
- GET /notification-settings: Current user's settings (credential presence only)
- PUT /notification-settings: Update settings
- POST /notification-settings/test: Send a test notification
- GET /notification-log: Last 50 delivery attempts
- POST /plants/{plant_id}/notify: Send a reminder for one plant now
- POST /notifications/check-plants: Run the overdue sweep for the current user
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from plantdaddy.modules.notifications.domain.services.notification_service import NotificationService
from plantdaddy.modules.notifications.presentation.api.schemas.notification_schemas import (
    DeliveryResponse,
    NotificationLogResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdateRequest,
    SweepResultResponse,
)
from plantdaddy.modules.notifications.presentation.dependencies import get_notification_service
from plantdaddy.modules.plant_care.domain.services.plant_service import PlantService
from plantdaddy.modules.plant_care.presentation.dependencies import get_plant_service
from plantdaddy.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

notifications_router = APIRouter()


@notifications_router.get(
    "/notification-settings",
    response_model=NotificationSettingsResponse,
    summary="Get notification settings",
)
async def get_notification_settings(
    current_user: CurrentUser = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationSettingsResponse:
    return NotificationSettingsResponse.from_domain(await service.get_settings(current_user.user_id))


@notifications_router.put(
    "/notification-settings",
    response_model=NotificationSettingsResponse,
    summary="Update notification settings",
)
async def update_notification_settings(
    payload: NotificationSettingsUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationSettingsResponse:
    settings = await service.update_settings(current_user.user_id, payload.model_dump(exclude_unset=True))
    return NotificationSettingsResponse.from_domain(settings)


@notifications_router.post(
    "/notification-settings/test",
    response_model=DeliveryResponse,
    summary="Send a test notification",
)
async def send_test_notification(
    current_user: CurrentUser = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> DeliveryResponse:
    sent = await service.send_test(current_user.user_id)
    message = "Test notification sent" if sent else "No notification channel delivered the test message"
    return DeliveryResponse(sent=sent, message=message)


@notifications_router.get(
    "/notification-log",
    response_model=List[NotificationLogResponse],
    summary="Recent notifications",
)
async def notification_log(
    current_user: CurrentUser = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> List[NotificationLogResponse]:
    return [NotificationLogResponse.from_domain(entry) for entry in await service.history(current_user.user_id)]


@notifications_router.post(
    "/plants/{plant_id}/notify",
    response_model=DeliveryResponse,
    summary="Send a watering reminder for one plant now",
)
async def notify_plant(
    plant_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
    service: NotificationService = Depends(get_notification_service),
) -> DeliveryResponse:
    view = await plant_service.get_plant(plant_id)
    sent = await service.notify_plant(current_user.user_id, view)
    message = "Reminder sent" if sent else "No notification channel delivered the reminder"
    return DeliveryResponse(sent=sent, message=message)


@notifications_router.post(
    "/notifications/check-plants",
    response_model=SweepResultResponse,
    summary="Check my plants and send due reminders",
)
async def check_plants(
    current_user: CurrentUser = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> SweepResultResponse:
    result = await service.check_plants(current_user.user_id)
    return SweepResultResponse(**result.to_dict())
