# 📄 File: plantdaddy/modules/plant_care/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Everything about the plants themselves: where they live, what species they are, when
# they need water and how they have been cared for.
#
# 🧪 Purpose (Technical Summary):
# Household-scoped plant aggregate with locations, species catalog, care activities,
# health records, journal entries, watering status classification and care statistics.
#
# 🔗 Dependencies:
# - plantdaddy.modules.households (HouseholdContext, capabilities)
# - plantdaddy.shared
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router, notifications reminder sweep
