# File: app/models/user.py
# Project: city-fix-backend

from __future__ import annotations
from enum import Enum as PyEnum
from datetime import datetime, timezone
from sqlalchemy import String, Integer, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

def _now() -> datetime:
    return datetime.now(timezone.utc)

class UserRole(PyEnum):
    user = "user"
    staff = "staff"
    admin = "admin"

class Membership(PyEnum):
    free = "free"
    standard = "standard"
    premium = "premium"

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False, default=UserRole.user)
    membership: Mapped[Membership] = mapped_column(Enum(Membership), nullable=False, default=Membership.free)
    # only ever incremented, by issue submission
    post_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    last_logged_in: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
