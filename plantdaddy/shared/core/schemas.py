# 📄 File: plantdaddy/shared/core/schemas.py
# 🧭 Purpose (Layman Explanation):
# Common building blocks for the data the API sends and receives, so every endpoint
# speaks the same camelCase JSON the mobile app expects.
# 🧪 Purpose (Technical Summary):
# Base pydantic schema with camelCase aliases plus a few shared response envelopes.
# 🔗 Dependencies:
# pydantic, plantdaddy.shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# All module presentation/api/schemas packages

from pydantic import BaseModel, ConfigDict

from plantdaddy.shared.utils.helpers import snake_to_camel


class CamelModel(BaseModel):
    """Schema base: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Simple acknowledgement."""
    message: str
    success: bool = True
