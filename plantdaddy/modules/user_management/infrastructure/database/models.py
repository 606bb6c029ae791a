# 📄 File: plantdaddy/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how user accounts are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for user accounts (username, bcrypt hash, admin flag).
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantdaddy.shared.config.database (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py (CRUD operations)
# - migrations (schema generation)
# - households and plant_care repositories (username joins)

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from plantdaddy.shared.config.database import Base
from plantdaddy.shared.utils.helpers import utcnow


class UserModel(Base):
    """SQLAlchemy model for user accounts."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="Login name, unique across the system"
    )
    password_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed password using bcrypt"
    )
    is_admin = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="May manage the global species catalog"
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Account creation date"
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"
