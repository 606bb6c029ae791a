# 📄 File: plantdaddy/modules/user_management/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Accounts: signing up, signing in, knowing who is using the app, and letting an
# administrator look after everyone else's account.
#
# 🧪 Purpose (Technical Summary):
# Username/password users with bcrypt hashes and JWT access tokens. Registration
# provisions a default household, default locations and notification settings.
# Admins can list accounts with usage counts and delete an account with its data.
#
# 🔗 Dependencies:
# - plantdaddy.shared.core.security
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.api.v1.router
