# 📄 File: plantdaddy/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Describes a PlantDaddy account.
# 🧪 Purpose (Technical Summary):
# User domain models loaded from the ORM row; the password hash stays in infrastructure.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# user and admin repositories, auth and admin services, auth and admin APIs

from pydantic import BaseModel, ConfigDict

from plantdaddy.shared.utils.helpers import UTCDateTime


class User(BaseModel):
    """A registered account."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    is_admin: bool = False
    created_at: UTCDateTime


class UserStats(User):
    """An account with what it holds, for the admin listing."""
    plant_count: int = 0
    household_count: int = 0
    care_activity_count: int = 0
