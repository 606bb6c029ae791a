# 📄 File: plantdaddy/modules/plant_care/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how plants, rooms, the species catalog and the care history are stored.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for locations, plants, plant species, care activities, health
# records and journal entries. Plants and locations carry household_id; child rows of a
# plant are scoped through their plant.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantdaddy.shared.config.database (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - plant_care repository implementations
# - notifications reminder sweep (through the plant repository)
# - migrations (schema generation)

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from plantdaddy.shared.config.database import Base
from plantdaddy.shared.utils.helpers import utcnow


# =============================================================================
# LOCATIONS
# =============================================================================

class LocationModel(Base):
    """Named place in the home where plants live."""
    __tablename__ = "locations"
    __table_args__ = (
        UniqueConstraint("household_id", "name", name="location_household_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )


# =============================================================================
# PLANTS
# =============================================================================

class PlantModel(Base):
    """A plant with its watering schedule."""
    __tablename__ = "plants"
    __table_args__ = (
        CheckConstraint("watering_frequency >= 1", name="positive_watering_frequency"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    species = Column(String(200), nullable=True, comment="Species name from the catalog")
    location = Column(String(100), nullable=False, comment="Location label")
    watering_frequency = Column(Integer, nullable=False, comment="Days between waterings")
    last_watered = Column(DateTime(timezone=True), nullable=False)
    snoozed_until = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


# =============================================================================
# SPECIES CATALOG
# =============================================================================

class PlantSpeciesModel(Base):
    """
    Species catalog entry.

    Rows without household_id are global and visible to everyone; rows with
    household_id are custom species of that household.
    """
    __tablename__ = "plant_species"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    scientific_name = Column(String(200), nullable=False)
    family = Column(String(100), nullable=True)
    origin = Column(String(200), nullable=True)
    description = Column(Text, nullable=False)
    care_level = Column(String(20), nullable=False, comment="easy, moderate or difficult")
    light_requirements = Column(String(200), nullable=False)
    watering_frequency = Column(Integer, nullable=False, comment="Recommended days between waterings")
    humidity = Column(String(20), nullable=True)
    soil_type = Column(String(200), nullable=True)
    propagation = Column(Text, nullable=True)
    toxicity = Column(String(100), nullable=True)
    common_issues = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )


# =============================================================================
# CARE HISTORY
# =============================================================================

class CareActivityModel(Base):
    """Append-only care log entry."""
    __tablename__ = "care_activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plant_id = Column(
        Integer,
        ForeignKey("plants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    activity_type = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)
    performed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)


class PlantHealthRecordModel(Base):
    """Health observation, optionally with a comparison photo."""
    __tablename__ = "plant_health_records"
    __table_args__ = (
        CheckConstraint("status IN ('thriving', 'struggling', 'sick')", name="valid_health_status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    plant_id = Column(
        Integer,
        ForeignKey("plants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    status = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    recorded_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)


class PlantJournalEntryModel(Base):
    """Photo journal entry telling the plant's story."""
    __tablename__ = "plant_journal_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plant_id = Column(
        Integer,
        ForeignKey("plants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    image_url = Column(Text, nullable=False)
    caption = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
