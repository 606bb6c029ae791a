# 📄 File: celery_config.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for our background worker (Celery) that checks for thirsty plants every
# hour and sends a daily watering summary, even when nobody has the app open.
#
# 🧪 Purpose (Technical Summary):
# Celery application, queue routing and beat schedule for the reminder sweep. Redis is
# the broker and result backend. The sweep runs on a timedelta interval, the digest on a
# crontab at DAILY_DIGEST_HOUR UTC.
#
# 🔗 Dependencies:
# - celery, kombu
# - Redis server (message broker)
# - plantdaddy.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy/modules/notifications/tasks.py (autodiscovered tasks)
# - Worker / beat processes (`celery -A celery_config worker -B`)

import logging
from datetime import timedelta

from celery import Celery
from celery.schedules import crontab
from kombu import Queue

from plantdaddy.modules.notifications.tasks import DIGEST_TASK, SWEEP_TASK
from plantdaddy.shared.config import get_settings
from plantdaddy.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()

# =============================================================================
# CELERY CONFIGURATION CLASS
# =============================================================================


class CeleryConfig:
    """
    Celery configuration for PlantDaddy.

    Defines broker, task execution, routing and the reminder schedule.
    """

    # =========================================================================
    # BROKER AND BACKEND SETTINGS
    # =========================================================================

    broker_url = settings.CELERY_BROKER_URL
    result_backend = settings.CELERY_RESULT_BACKEND

    broker_connection_retry_on_startup = True
    broker_connection_max_retries = 10
    result_expires = timedelta(hours=24)

    # =========================================================================
    # TASK SETTINGS
    # =========================================================================

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]
    timezone = "UTC"
    enable_utc = True

    task_default_queue = "default"
    task_time_limit = 600  # 10 minutes hard limit
    task_soft_time_limit = 540
    task_acks_late = True
    worker_prefetch_multiplier = 1
    task_reject_on_worker_lost = True

    # =========================================================================
    # QUEUE DEFINITIONS
    # =========================================================================

    task_routes = {
        "plantdaddy.reminders.*": {"queue": "notifications"},
    }

    task_queues = (
        Queue("notifications", routing_key="notifications"),
        Queue("default", routing_key="default"),
    )

    # =========================================================================
    # BEAT SCHEDULER SETTINGS
    # =========================================================================

    beat_schedule = {
        "sweep-overdue-plants": {
            "task": SWEEP_TASK,
            "schedule": timedelta(minutes=settings.REMINDER_SWEEP_INTERVAL_MINUTES),
            "options": {"queue": "notifications"},
        },
        "send-daily-digest": {
            "task": DIGEST_TASK,
            "schedule": crontab(hour=settings.DAILY_DIGEST_HOUR, minute=0),
            "options": {"queue": "notifications"},
        },
    }

    beat_scheduler = "celery.beat:PersistentScheduler"
    beat_schedule_filename = "celerybeat-schedule"

    # =========================================================================
    # WORKER SETTINGS
    # =========================================================================

    worker_max_tasks_per_child = 1000
    worker_hijack_root_logger = False
    task_track_started = True


class DevelopmentCeleryConfig(CeleryConfig):
    """Development-specific Celery configuration."""
    worker_log_level = "DEBUG"


class ProductionCeleryConfig(CeleryConfig):
    """Production-specific Celery configuration."""
    worker_log_level = "INFO"
    worker_max_tasks_per_child = 5000


# =============================================================================
# CONFIG FACTORY
# =============================================================================

def get_celery_config() -> CeleryConfig:
    """
    Pick the Celery configuration for the current environment.

    Returns:
        CeleryConfig: Configuration instance for current environment
    """
    config_map = {
        "development": DevelopmentCeleryConfig,
        "staging": ProductionCeleryConfig,
        "production": ProductionCeleryConfig,
    }
    config_class = config_map.get(settings.ENVIRONMENT, DevelopmentCeleryConfig)
    return config_class()


# =============================================================================
# CELERY APPLICATION INSTANCE
# =============================================================================

setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

app = Celery("plantdaddy")
app.config_from_object(get_celery_config())

# Finds plantdaddy/modules/notifications/tasks.py
app.autodiscover_tasks(["plantdaddy.modules.notifications"])


if __name__ == "__main__":
    app.start()
