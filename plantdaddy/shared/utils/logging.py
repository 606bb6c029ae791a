# 📄 File: plantdaddy/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up how PlantDaddy writes its diary of events, stamping every line with which
# request, user and household it belongs to so problems are easy to trace.

# 🧪 Purpose (Technical Summary):
# Structured logging with optional JSON output (python-json-logger), request/user/household
# context variables injected into every record, and a context manager for background jobs.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: plantdaddy.main (startup), request logging middleware, household scoping dependency,
# reminder sweep and Celery tasks

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from plantdaddy.shared.config.settings import get_settings

# Context variables for request tracking. These mirror the request scope for
# diagnostics only; data access never reads them.
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')
household_id_var: ContextVar[str] = ContextVar('household_id', default='')

_logging_configured = False

SERVICE_NAME = 'plantdaddy-api'


class ContextFilter(logging.Filter):
    """
    Attach request, user and household identifiers to every log record.
    """

    def __init__(self, name: str = ''):
        super().__init__(name)
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.user_id = user_id_var.get()
        record.household_id = household_id_var.get()
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return True


class ContextualFormatter(logging.Formatter):
    """
    Human-readable formatter that appends the request context when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = []
        for key in ('request_id', 'user_id', 'household_id'):
            value = getattr(record, key, '')
            if value:
                context.append(f"{key}={value}")
        if context:
            message = f"{message} [{' '.join(context)}]"
        return message


class PlantDaddyJSONFormatter(JsonFormatter):
    """
    JSON formatter for log aggregation.

    Drops empty context fields so records from background jobs stay compact.
    """

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        for key in ('request_id', 'user_id', 'household_id'):
            if not log_record.get(key):
                log_record.pop(key, None)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Overrides LOG_LEVEL from settings
        log_format: "text" or "json"; overrides LOG_FORMAT from settings
        log_file: Optional file to log to in addition to the console
        enable_console: Attach a stdout handler

    Returns:
        The "startup" logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter: logging.Formatter = PlantDaddyJSONFormatter(
            '%(timestamp)s %(name)s %(levelname)s %(message)s '
            '%(request_id)s %(user_id)s %(household_id)s %(service)s'
        )
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

    context_filter = ContextFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(context_filter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(
    request_id: Optional[str] = None,
    user_id: Optional[str] = None,
    household_id: Optional[str] = None
):
    """
    Context manager for adding contextual information to logs.

    Used by background jobs, which have no request to take an id from.

    Args:
        request_id: Request or job identifier (generated when omitted)
        user_id: User identifier
        household_id: Household identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')
    household_token = household_id_var.set(household_id or '')

    try:
        yield {
            'request_id': request_id,
            'user_id': user_id,
            'household_id': household_id
        }
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)
        household_id_var.reset(household_token)
