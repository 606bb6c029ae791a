# 📄 File: plantdaddy/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'plantdaddy' folder as our plant-care backend and records its version.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version and descriptive metadata for the
# PlantDaddy FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.main (OpenAPI metadata)
# - celery_config.py

"""
PlantDaddy - Household Plant Care Backend

Tracks plants, watering schedules and care history for households that
share their plants, and reminds members when something needs water.
"""

__version__ = "1.0.0"
__title__ = "PlantDaddy Backend API"
__description__ = "Household plant care tracking and watering reminders"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
