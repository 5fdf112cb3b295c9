"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Numeric, Date, ForeignKey,
    Enum as SQLEnum, Index
)
from sqlalchemy.orm import relationship

from app.domain.models.entry import EntryStatus, EntryType
from app.domain.models.user import UserRole
from .database import Base


class UserModel(Base):
    """Portal user table"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole, name='user_role'), nullable=False, default=UserRole.EMPLOYEE)
    department = Column(String(100))
    phone_number = Column(String(20))
    password_hash = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False)

    # Relationships
    entries = relationship(
        "EntryModel",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )


class EntryModel(Base):
    """
    Entry table.
    One row per entry; ``type`` says which variant columns are populated.
    """
    __tablename__ = 'entries'

    id = Column(String(36), primary_key=True)
    owner_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    type = Column(SQLEnum(EntryType, name='entry_type'), nullable=False)
    status = Column(SQLEnum(EntryStatus, name='entry_status'), nullable=False, default=EntryStatus.PENDING)
    description = Column(Text)

    # WORK_HOURS and EXPENSE
    date = Column(Date)
    hours_worked = Column(Numeric(5, 2))
    amount = Column(Numeric(12, 2))
    category = Column(String(100))
    receipt_url = Column(String(500))

    # VACATION
    start_date = Column(Date)
    end_date = Column(Date)
    days = Column(Integer)

    # TRAVEL
    travel_date = Column(Date)
    from_location = Column(String(255))
    to_location = Column(String(255))
    distance_km = Column(Numeric(10, 2))

    # Review stamp
    reviewed_by = Column(String(36))
    reviewed_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, nullable=False)

    # Relationships
    owner = relationship("UserModel", back_populates="entries")

    __table_args__ = (
        Index('idx_entries_owner_type', 'owner_id', 'type'),
        Index('idx_entries_status_created', 'status', 'created_at'),
        Index('idx_entries_date', 'date'),
        Index('idx_entries_vacation_range', 'start_date', 'end_date'),
        Index('idx_entries_travel_date', 'travel_date'),
    )
