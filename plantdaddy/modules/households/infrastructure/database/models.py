# 📄 File: plantdaddy/modules/households/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how households and their members are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for households (unique invite code) and household membership
# (unique per household/user pair, role constrained to owner/member/caretaker).
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantdaddy.shared.config.database (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - household_repository_impl.py
# - migrations (schema generation)

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)

from plantdaddy.shared.config.database import Base
from plantdaddy.shared.utils.helpers import utcnow


class HouseholdModel(Base):
    """SQLAlchemy model for households."""
    __tablename__ = "households"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, comment="Display name")
    invite_code = Column(
        String(16),
        unique=True,
        nullable=False,
        comment="Code other users enter to join"
    )
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User who created the household"
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<HouseholdModel(id={self.id}, name={self.name})>"


class HouseholdMemberModel(Base):
    """SQLAlchemy model linking a user to a household with a role."""
    __tablename__ = "household_members"
    __table_args__ = (
        UniqueConstraint("household_id", "user_id", name="household_member_unique"),
        CheckConstraint("role IN ('owner', 'member', 'caretaker')", name="valid_role"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    role = Column(String(20), nullable=False, default="member")
    joined_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return (
            f"<HouseholdMemberModel(household_id={self.household_id}, "
            f"user_id={self.user_id}, role={self.role})>"
        )
