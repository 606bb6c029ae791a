from datetime import timedelta

from celery_config import app, get_celery_config
from plantdaddy.modules.notifications.tasks import DIGEST_TASK, SWEEP_TASK


def test_beat_runs_sweep_and_digest():
    schedule = get_celery_config().beat_schedule

    sweep = schedule["sweep-overdue-plants"]
    digest = schedule["send-daily-digest"]

    assert sweep["task"] == SWEEP_TASK
    assert sweep["schedule"] == timedelta(minutes=60)
    assert digest["task"] == DIGEST_TASK
    assert digest["schedule"].hour == {8}
    assert digest["schedule"].minute == {0}


def test_reminder_tasks_are_registered():
    assert SWEEP_TASK in app.tasks
    assert DIGEST_TASK in app.tasks
