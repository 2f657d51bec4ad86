import pytest

from app.core.errors import InvalidTransition, NotFound, StaffUnavailable
from app.models.issue import AssignState, IssueWorkflow
from app.models.staff import Availability, StaffStatus
from app.services import lifecycle
from app.services.assignment import assign_staff
from app.services.staff import update_staff

from conftest import create_staff, create_user


def approved_issue(db):
    create_user(db, "citizen@example.com")
    issue = lifecycle.submit_issue(
        db, "citizen@example.com", {"issue_name": "Leaking pipe", "description": "Water everywhere", "category": "Water"}
    )
    return lifecycle.approve_issue(db, issue.id, "admin@example.com")


def test_assign_copies_staff_snapshot(db):
    issue = approved_issue(db)
    staff = create_staff(db, "worker@example.com", name="Rahim")

    issue = assign_staff(db, issue.id, staff.id, "admin@example.com")

    assert issue.assign == AssignState.assigned
    assert issue.workflow == IssueWorkflow.in_progress
    snap = issue.assigned_staff
    assert snap["staff_id"] == staff.id
    assert snap["name"] == "Rahim"
    assert snap["email"] == "worker@example.com"
    assert snap["assigned_at"] is not None


def test_snapshot_not_updated_by_later_staff_edits(db):
    issue = approved_issue(db)
    staff = create_staff(db, "worker@example.com", name="Rahim")
    assign_staff(db, issue.id, staff.id, "admin@example.com")

    update_staff(db, staff.id, {"name": "Rahim Uddin", "phone": "01800000000"})

    issue = lifecycle.get_issue(db, issue.id)
    assert issue.assigned_staff["name"] == "Rahim"
    assert issue.assigned_staff["phone"] == "01700000000"


def test_not_available_staff_rejected_and_issue_untouched(db):
    issue = approved_issue(db)
    staff = create_staff(db, "worker@example.com", availability=Availability.not_available)

    with pytest.raises(StaffUnavailable):
        assign_staff(db, issue.id, staff.id, "admin@example.com")

    db.expire_all()
    issue = lifecycle.get_issue(db, issue.id)
    assert issue.assign == AssignState.waiting
    assert issue.assigned_staff is None


def test_pending_staff_cannot_be_assigned(db):
    issue = approved_issue(db)
    staff = create_staff(db, "worker@example.com", status=StaffStatus.pending)
    with pytest.raises(StaffUnavailable):
        assign_staff(db, issue.id, staff.id, "admin@example.com")


def test_unknown_staff_is_unavailable(db):
    issue = approved_issue(db)
    with pytest.raises(StaffUnavailable):
        assign_staff(db, issue.id, 404, "admin@example.com")


def test_busy_staff_can_still_be_assigned(db):
    issue = approved_issue(db)
    staff = create_staff(db, "worker@example.com", availability=Availability.busy)
    assert assign_staff(db, issue.id, staff.id, "admin@example.com").assign == AssignState.assigned


def test_pending_issue_cannot_be_assigned(db):
    create_user(db, "citizen@example.com")
    issue = lifecycle.submit_issue(
        db, "citizen@example.com", {"issue_name": "Leaking pipe", "description": "Water", "category": "Water"}
    )
    staff = create_staff(db, "worker@example.com")
    with pytest.raises(InvalidTransition):
        assign_staff(db, issue.id, staff.id, "admin@example.com")


def test_missing_issue(db):
    staff = create_staff(db, "worker@example.com")
    with pytest.raises(NotFound):
        assign_staff(db, 999, staff.id, "admin@example.com")
