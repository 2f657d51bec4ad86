# File: app/services/staff.py
import logging
from datetime import datetime, timezone
from typing import Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.errors import InvalidTransition, NotFound
from app.models.staff import Staff, StaffStatus
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


def get_staff(db: Session, staff_id: int) -> Staff:
    staff = db.query(Staff).filter(Staff.id == staff_id).first()
    if not staff:
        raise NotFound("Staff not found")
    return staff


def apply_as_staff(db: Session, email: str, data: dict[str, Any]) -> Staff:
    if db.query(Staff.id).filter(Staff.email == email).first():
        raise InvalidTransition("Staff application already exists for this email")
    staff = Staff(email=email, status=StaffStatus.pending, applied_at=datetime.now(timezone.utc), **data)
    db.add(staff)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidTransition("Staff application already exists for this email")
    db.refresh(staff)
    logger.info("staff application received", extra={"staff_id": staff.id, "email": email})
    return staff


def approve_staff(db: Session, staff_id: int, actor_email: str) -> Staff:
    """Approve the application and promote the matching user account, if any, to staff."""
    staff = get_staff(db, staff_id)
    if staff.status != StaffStatus.pending:
        raise InvalidTransition("Only pending applications can be approved")
    now = datetime.now(timezone.utc)
    staff.status = StaffStatus.approved
    staff.approved_at = now
    staff.updated_at = now
    db.query(User).filter(User.email == staff.email, User.role != UserRole.admin).update(
        {User.role: UserRole.staff, User.updated_at: now}, synchronize_session=False
    )
    db.commit()
    db.refresh(staff)
    logger.info("staff approved", extra={"staff_id": staff.id, "actor": actor_email})
    return staff


def delete_staff(db: Session, staff_id: int, actor_email: str) -> None:
    """Remove the staff record and drop the linked account back to a plain user.

    Issues keep their assignment snapshot.
    """
    staff = get_staff(db, staff_id)
    db.query(User).filter(User.email == staff.email, User.role == UserRole.staff).update(
        {User.role: UserRole.user, User.updated_at: datetime.now(timezone.utc)}, synchronize_session=False
    )
    db.delete(staff)
    db.commit()
    logger.info("staff deleted", extra={"staff_id": staff_id, "actor": actor_email})


def update_staff(db: Session, staff_id: int, data: dict[str, Any]) -> Staff:
    staff = get_staff(db, staff_id)
    for key, value in data.items():
        setattr(staff, key, value)
    staff.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(staff)
    return staff
