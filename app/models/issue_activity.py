# File: app/models/issue_activity.py
from __future__ import annotations
from enum import Enum as PyEnum
from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models.user import _now

class ActivityKind(PyEnum):
    submitted = "submitted"
    edited = "edited"
    approved = "approved"
    rejected = "rejected"
    assigned = "assigned"
    accepted = "accepted"
    resolved = "resolved"

class IssueActivity(Base):
    __tablename__ = "issue_activity"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    issue_id: Mapped[int] = mapped_column(ForeignKey("issues.id", ondelete="CASCADE"), index=True, nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    actor_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, nullable=False, index=True)
