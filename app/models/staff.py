# File: app/models/staff.py
from __future__ import annotations
from enum import Enum as PyEnum
from datetime import datetime
from sqlalchemy import String, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models.user import _now

class StaffStatus(PyEnum):
    pending = "pending"
    approved = "approved"

class Availability(PyEnum):
    available = "available"
    busy = "busy"
    not_available = "not_available"

class Staff(Base):
    """Field-worker application; identity space separate from users."""
    __tablename__ = "staff"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    photo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[str | None] = mapped_column(String(300), nullable=True)
    district: Mapped[str | None] = mapped_column(String(120), index=True, nullable=True)
    status: Mapped[StaffStatus] = mapped_column(Enum(StaffStatus), nullable=False, default=StaffStatus.pending, index=True)
    availability: Mapped[Availability] = mapped_column(
        Enum(Availability), nullable=False, default=Availability.available
    )
    applied_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
