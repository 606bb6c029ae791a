# 📄 File: plantdaddy/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the settings that tell PlantDaddy how to connect to its database,
# notification vendors and background workers.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exporting the settings model and its cached factory.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.main (application startup)
# - Infrastructure components and Celery tasks

"""
Configuration Management Package

Handles environment-based settings for the API, database, Celery and
notification channels.
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
