# 📄 File: plantdaddy/modules/notifications/tasks.py
# 🧭 Purpose (Layman Explanation):
# The jobs the background worker runs on a timer: the hourly check for thirsty plants
# and the morning round-up.
# 🧪 Purpose (Technical Summary):
# Celery tasks wrapping ReminderSweep. Each task runs its coroutine in a fresh event loop
# with a private engine (standalone_session_factory) and returns the SweepResult counters.
# 🔗 Dependencies:
# celery.shared_task, asyncio, ReminderSweep, standalone_session_factory
# 🔄 Connected Modules / Calls From:
# celery_config.py beat schedule (autodiscovered)

import asyncio
import logging

from celery import shared_task

from plantdaddy.modules.notifications.domain.services.reminder_sweep import ReminderSweep, SweepResult
from plantdaddy.shared.infrastructure.database import standalone_session_factory

logger = logging.getLogger(__name__)

SWEEP_TASK = "plantdaddy.reminders.sweep_overdue_plants"
DIGEST_TASK = "plantdaddy.reminders.send_daily_digest"


async def _sweep() -> SweepResult:
    async with standalone_session_factory() as factory:
        return await ReminderSweep(factory).run_sweep()


async def _digest() -> SweepResult:
    async with standalone_session_factory() as factory:
        return await ReminderSweep(factory).run_daily_digest()


@shared_task(name=SWEEP_TASK, ignore_result=False)
def sweep_overdue_plants() -> dict:
    """Hourly: remind users about overdue plants."""
    result = asyncio.run(_sweep())
    logger.info(f"Overdue plant sweep complete: {result.to_dict()}")
    return result.to_dict()


@shared_task(name=DIGEST_TASK, ignore_result=False)
def send_daily_digest() -> dict:
    """Daily: send each user a summary of plants needing water."""
    result = asyncio.run(_digest())
    logger.info(f"Daily digest complete: {result.to_dict()}")
    return result.to_dict()
