# File: app/services/assignment.py
import logging
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from app.core.errors import StaffUnavailable
from app.models.issue import Issue, IssueWorkflow, AssignState
from app.models.issue_activity import ActivityKind
from app.models.staff import Staff, StaffStatus, Availability
from app.services.lifecycle import get_issue, guard, record_activity

logger = logging.getLogger(__name__)


def find_assignable_staff(db: Session, staff_id: int) -> Staff | None:
    return (
        db.query(Staff)
        .filter(
            Staff.id == staff_id,
            Staff.status == StaffStatus.approved,
            Staff.availability != Availability.not_available,
        )
        .first()
    )


def assign_staff(db: Session, issue_id: int, staff_id: int, actor_email: str) -> Issue:
    """
    Bind an approved issue to an approved, available staff member.

    The staff identity is copied onto the issue; later edits to the staff
    profile do not reach issues that were already assigned.
    """
    issue = get_issue(db, issue_id)
    guard("assign", issue)

    staff = find_assignable_staff(db, staff_id)
    if not staff:
        logger.warning("staff unavailable", extra={"issue_id": issue_id, "staff_id": staff_id})
        raise StaffUnavailable("Staff not found, not approved or not available")

    issue.assigned_staff_id = staff.id
    issue.assigned_staff_name = staff.name
    issue.assigned_staff_email = staff.email
    issue.assigned_staff_phone = staff.phone
    issue.assigned_staff_photo = staff.photo
    issue.assigned_at = datetime.now(timezone.utc)
    issue.workflow = IssueWorkflow.in_progress
    issue.assign = AssignState.assigned
    record_activity(db, issue.id, ActivityKind.assigned, actor_email)
    db.commit()
    db.refresh(issue)
    logger.info("staff assigned", extra={"issue_id": issue.id, "staff_id": staff.id, "actor": actor_email})
    return issue
