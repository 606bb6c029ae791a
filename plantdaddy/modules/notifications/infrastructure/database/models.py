# 📄 File: plantdaddy/modules/notifications/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Stores each person's notification preferences and a history of reminders we sent.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for per-user notification settings (one row per user) and the
# append-only notification log used for the history endpoint and reminder debouncing.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantdaddy.shared.config.database (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - notification repositories, dispatcher, reminder sweep
# - migrations (schema generation)

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from plantdaddy.shared.config.database import Base
from plantdaddy.shared.utils.helpers import utcnow


class NotificationSettingsModel(Base):
    """Channel preferences and credentials for one user."""
    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )
    enabled = Column(Boolean, nullable=False, default=True)

    pushover_enabled = Column(Boolean, nullable=False, default=True)
    pushover_app_token = Column(String(100), nullable=True)
    pushover_user_key = Column(String(100), nullable=True)

    email_enabled = Column(Boolean, nullable=False, default=False)
    email_address = Column(String(255), nullable=True)
    sendgrid_api_key = Column(String(255), nullable=True)

    last_updated = Column(DateTime(timezone=True), nullable=True, default=utcnow)


class NotificationLogModel(Base):
    """One delivery attempt on one channel."""
    __tablename__ = "notification_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    plant_id = Column(
        Integer,
        ForeignKey("plants.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    kind = Column(String(20), nullable=False, default="reminder", comment="reminder, digest or test")
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    channel = Column(String(20), nullable=False)
    success = Column(Boolean, nullable=False)
    sent_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
