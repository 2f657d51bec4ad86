# File: app/models/issue.py
from __future__ import annotations
from enum import Enum as PyEnum
from datetime import datetime
from sqlalchemy import String, Integer, Enum, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.base import Base
from app.models.user import _now

class IssueStatus(PyEnum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

class IssueWorkflow(PyEnum):
    in_queue = "in queue"
    in_progress = "in-progress"
    working = "Working"
    resolved = "resolved"
    rejected = "rejected"

class AssignState(PyEnum):
    waiting = "waiting"
    assigned = "assigned"

# content a reporter may change while the issue is not approved
EDITABLE_FIELDS = (
    "issue_name",
    "description",
    "category",
    "priority",
    "division",
    "district",
    "upazila",
    "address",
    "issue_image_url",
    "phone_number",
)

class Issue(Base):
    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), index=True)

    issue_name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str | None] = mapped_column(String(4000), nullable=True)
    category: Mapped[str | None] = mapped_column(String(120), index=True, nullable=True)
    priority: Mapped[str | None] = mapped_column(String(30), nullable=True)
    division: Mapped[str | None] = mapped_column(String(120), nullable=True)
    district: Mapped[str | None] = mapped_column(String(120), index=True, nullable=True)
    upazila: Mapped[str | None] = mapped_column(String(120), nullable=True)
    address: Mapped[str | None] = mapped_column(String(300), nullable=True)
    issue_image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(30), nullable=True)

    status: Mapped[IssueStatus] = mapped_column(Enum(IssueStatus), default=IssueStatus.pending, index=True)
    workflow: Mapped[IssueWorkflow] = mapped_column(Enum(IssueWorkflow), default=IssueWorkflow.in_queue, index=True)
    assign: Mapped[AssignState] = mapped_column(Enum(AssignState), default=AssignState.waiting)

    tracking_id: Mapped[str | None] = mapped_column(String(40), unique=True, nullable=True)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    # assignment snapshot, copied from the staff record at assign time
    assigned_staff_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    assigned_staff_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    assigned_staff_email: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    assigned_staff_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    assigned_staff_photo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, index=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    accept_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    upvoters: Mapped[list["IssueUpvote"]] = relationship(
        back_populates="issue", cascade="all, delete-orphan"
    )

    @property
    def upvoted_by(self) -> list[str]:
        return [u.voter_email for u in self.upvoters]

    @property
    def assigned_staff(self) -> dict | None:
        if self.assigned_staff_id is None:
            return None
        return {
            "staff_id": self.assigned_staff_id,
            "name": self.assigned_staff_name,
            "email": self.assigned_staff_email,
            "phone": self.assigned_staff_phone,
            "photo": self.assigned_staff_photo,
            "assigned_at": self.assigned_at,
        }

class IssueUpvote(Base):
    __tablename__ = "issue_upvotes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    issue_id: Mapped[int] = mapped_column(ForeignKey("issues.id", ondelete="CASCADE"), index=True, nullable=False)
    voter_email: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    issue: Mapped[Issue] = relationship(back_populates="upvoters")

    __table_args__ = (UniqueConstraint("issue_id", "voter_email", name="uq_issue_upvote"),)

Index("ix_issues_status_workflow", Issue.status, Issue.workflow)
