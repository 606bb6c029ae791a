# 📄 File: plantdaddy/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The switchboard that connects every part of the app (sign-in, households, plants,
# reminders) to its web address.
# 🧪 Purpose (Technical Summary):
# Aggregates module routers into the /api/v1 router with their route prefixes and
# OpenAPI tags.
# 🔗 Dependencies:
# FastAPI APIRouter, module presentation routers, health router
# 🔄 Connected Modules / Calls From:
# plantdaddy.main (mounted under /api/v1)

import logging

from fastapi import APIRouter

from plantdaddy.modules.households.presentation.api.v1.households import households_router
from plantdaddy.modules.notifications.presentation.api.v1.notifications import notifications_router
from plantdaddy.modules.plant_care.presentation.api.v1.care import care_router
from plantdaddy.modules.plant_care.presentation.api.v1.catalog import locations_router, species_router
from plantdaddy.modules.plant_care.presentation.api.v1.plants import plants_router
from plantdaddy.modules.user_management.presentation.api.v1.admin import admin_router
from plantdaddy.modules.user_management.presentation.api.v1.auth import auth_router

from .health import health_router

logger = logging.getLogger(__name__)

ROUTE_PREFIXES = {
    "auth": "/auth",
    "admin": "/admin",
    "households": "/households",
    "plants": "/plants",
    "locations": "/locations",
    "species": "/plant-species",
}

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["Health Check"])
api_v1_router.include_router(auth_router, prefix=ROUTE_PREFIXES["auth"], tags=["Authentication"])
api_v1_router.include_router(admin_router, prefix=ROUTE_PREFIXES["admin"], tags=["Admin"])
api_v1_router.include_router(households_router, prefix=ROUTE_PREFIXES["households"], tags=["Households"])
api_v1_router.include_router(plants_router, prefix=ROUTE_PREFIXES["plants"], tags=["Plants"])
api_v1_router.include_router(locations_router, prefix=ROUTE_PREFIXES["locations"], tags=["Locations"])
api_v1_router.include_router(species_router, prefix=ROUTE_PREFIXES["species"], tags=["Plant Species"])
# Care and notification routes span several resources, so they carry full paths
api_v1_router.include_router(care_router, tags=["Plant Care"])
api_v1_router.include_router(notifications_router, tags=["Notifications"])
