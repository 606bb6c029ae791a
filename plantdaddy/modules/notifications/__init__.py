# 📄 File: plantdaddy/modules/notifications/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Reminds people when their plants are thirsty, by phone push or email.
#
# 🧪 Purpose (Technical Summary):
# Per-user notification settings, delivery log, Pushover and SendGrid channels, the
# dispatcher and the Celery-driven reminder sweep and daily digest.
#
# 🔗 Dependencies:
# - plantdaddy.modules.plant_care (watering status, plant reads)
# - plantdaddy.modules.households (memberships)
#
# 🔄 Connected Modules / Calls From:
# - celery_config.py (tasks), plantdaddy.api.v1.router
