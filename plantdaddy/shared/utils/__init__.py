# 📄 File: plantdaddy/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Small helpers the whole app shares, currently the logging setup.

# 🧪 Purpose (Technical Summary):
# Utilities package exporting logging configuration and log context helpers.

# 🔗 Dependencies:
# - logging.py

# 🔄 Connected Modules / Calls From:
# plantdaddy.main, middleware, Celery tasks

from .logging import (
    household_id_var,
    log_context,
    request_id_var,
    setup_logging,
    user_id_var,
)

__all__ = [
    "setup_logging",
    "log_context",
    "request_id_var",
    "user_id_var",
    "household_id_var",
]
