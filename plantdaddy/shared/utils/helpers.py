# 📄 File: plantdaddy/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small shared helpers: the current time in one agreed timezone, and the key style our
# mobile and web clients expect in JSON.

# 🧪 Purpose (Technical Summary):
# UTC clock helper used for every persisted timestamp, and snake_case -> camelCase
# conversion used as the pydantic alias generator for API schemas.

# 🔗 Dependencies:
# - datetime, pydantic (annotated validators)

# 🔄 Connected Modules / Calls From:
# ORM model defaults, domain services, reminder sweep, API schemas

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def snake_to_camel(snake_str: str, first_upper: bool = False) -> str:
    """Convert snake_case to camelCase (or PascalCase)."""
    components = snake_str.split('_')
    if first_upper:
        return ''.join(word.capitalize() for word in components)
    return components[0] + ''.join(word.capitalize() for word in components[1:])


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo) and convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Datetime field type for domain models and schemas
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]
