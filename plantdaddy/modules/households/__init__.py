# 📄 File: plantdaddy/modules/households/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Households let several people share the same plants, each with a role that decides
# what they may do.
#
# 🧪 Purpose (Technical Summary):
# Household aggregate, membership roles with the capability table, invite codes and
# the per-request HouseholdContext used to scope every plant-care query.
#
# 🔗 Dependencies:
# - plantdaddy.shared (database, exceptions, logging)
#
# 🔄 Connected Modules / Calls From:
# - plant_care and notifications (scoping), user_management (registration provisioning)
