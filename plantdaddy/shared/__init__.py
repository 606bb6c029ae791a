# 📄 File: plantdaddy/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Common tools every part of PlantDaddy uses, like settings, the database and error types.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, infrastructure and cross-cutting concerns.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All feature modules under plantdaddy.modules

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Database infrastructure
- Security and request dependencies
- Exception hierarchy
- Logging utilities
"""

__all__ = []
