# File: app/services/lifecycle.py
"""
Issue lifecycle.

status:   pending -> approved | rejected
workflow: in queue -> in-progress -> Working -> resolved   (approved issues)

Rejected and resolved are terminal. Every transition is a guarded write in a
single transaction; counters (post_count, upvotes) only move through SQL-side
arithmetic so concurrent requests cannot lose updates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequest, Forbidden, InvalidTransition, NotFound, QuotaExceeded
from app.models.issue import EDITABLE_FIELDS, AssignState, Issue, IssueStatus, IssueUpvote, IssueWorkflow
from app.models.issue_activity import ActivityKind, IssueActivity
from app.models.user import User, UserRole
from app.services.quota import post_limit
from app.services.tracking import new_tracking_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    status: frozenset = field(default_factory=frozenset)
    workflow: frozenset = field(default_factory=frozenset)
    assign: frozenset = field(default_factory=frozenset)

    def allows(self, issue: Issue) -> bool:
        if self.status and issue.status not in self.status:
            return False
        if self.workflow and issue.workflow not in self.workflow:
            return False
        if self.assign and issue.assign not in self.assign:
            return False
        return True


# preconditions of each transition; an empty set means "any"
RULES: dict[str, Rule] = {
    "edit": Rule(status=frozenset({IssueStatus.pending, IssueStatus.rejected})),
    "approve": Rule(status=frozenset({IssueStatus.pending})),
    "reject": Rule(status=frozenset({IssueStatus.pending})),
    "assign": Rule(
        status=frozenset({IssueStatus.approved}),
        workflow=frozenset({IssueWorkflow.in_queue, IssueWorkflow.in_progress}),
    ),
    "accept": Rule(
        status=frozenset({IssueStatus.approved}),
        workflow=frozenset({IssueWorkflow.in_progress}),
        assign=frozenset({AssignState.assigned}),
    ),
    "resolve": Rule(
        status=frozenset({IssueStatus.approved}),
        workflow=frozenset({IssueWorkflow.working}),
    ),
}

MESSAGES = {
    "edit": "Approved issues cannot be edited",
    "approve": "Only pending issues can be approved",
    "reject": "Only pending issues can be rejected",
    "assign": "Only approved, unstarted issues can be assigned",
    "accept": "Issue must be assigned and in progress to be accepted",
    "resolve": "Issue must be accepted before it can be resolved",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def guard(action: str, issue: Issue) -> None:
    if not RULES[action].allows(issue):
        logger.warning(
            "transition refused",
            extra={"action": action, "issue_id": issue.id, "status": issue.status.value,
                   "workflow": issue.workflow.value},
        )
        raise InvalidTransition(MESSAGES[action])


def record_activity(db: Session, issue_id: int, kind: ActivityKind, actor_email: str | None) -> None:
    db.add(IssueActivity(issue_id=issue_id, kind=kind.value, actor_email=actor_email))


def get_issue(db: Session, issue_id: int) -> Issue:
    issue = db.query(Issue).filter(Issue.id == issue_id).first()
    if not issue:
        raise NotFound("Issue not found")
    return issue


def _content(data: dict[str, Any]) -> dict[str, Any]:
    unknown = set(data) - set(EDITABLE_FIELDS)
    if unknown:
        raise BadRequest(f"Fields not editable: {', '.join(sorted(unknown))}")
    return data


def submit_issue(db: Session, reporter_email: str, data: dict[str, Any]) -> Issue:
    content = _content(data)
    user = db.query(User).filter(User.email == reporter_email).first()
    if not user:
        raise NotFound("User not found")

    limit = post_limit(user.membership)
    q = db.query(User).filter(User.id == user.id)
    if limit is not None:
        q = q.filter(User.post_count < limit)
    claimed = q.update({User.post_count: User.post_count + 1}, synchronize_session=False)
    if not claimed:
        db.rollback()
        logger.warning("quota exceeded", extra={"email": reporter_email, "limit": limit})
        raise QuotaExceeded(f"Post limit of {limit} reached for {user.membership.value} membership")

    issue = Issue(
        email=reporter_email,
        status=IssueStatus.pending,
        workflow=IssueWorkflow.in_queue,
        assign=AssignState.waiting,
        upvotes=0,
        created_at=_now(),
        **content,
    )
    db.add(issue)
    try:
        # the post_count increment commits or rolls back together with the insert
        db.flush()
        record_activity(db, issue.id, ActivityKind.submitted, reporter_email)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(issue)
    logger.info("issue submitted", extra={"issue_id": issue.id, "email": reporter_email})
    return issue


def edit_issue(db: Session, issue_id: int, actor_email: str, data: dict[str, Any]) -> Issue:
    content = _content(data)
    issue = get_issue(db, issue_id)
    # approved issues are frozen for everyone, owner or not
    guard("edit", issue)
    if issue.email != actor_email:
        raise Forbidden("Only the reporter can edit this issue")

    for key, value in content.items():
        setattr(issue, key, value)
    issue.updated_at = _now()
    record_activity(db, issue.id, ActivityKind.edited, actor_email)
    db.commit()
    db.refresh(issue)
    return issue


def approve_issue(db: Session, issue_id: int, actor_email: str) -> Issue:
    issue = get_issue(db, issue_id)
    guard("approve", issue)

    now = _now()
    tracking_id = new_tracking_id(db, now)
    issue.status = IssueStatus.approved
    issue.workflow = IssueWorkflow.in_progress
    issue.approved_at = now
    issue.tracking_id = tracking_id
    record_activity(db, issue.id, ActivityKind.approved, actor_email)
    db.commit()
    db.refresh(issue)
    logger.info("issue approved", extra={"issue_id": issue.id, "tracking_id": issue.tracking_id,
                                         "actor": actor_email})
    return issue


def reject_issue(db: Session, issue_id: int, actor_email: str) -> Issue:
    issue = get_issue(db, issue_id)
    guard("reject", issue)

    issue.status = IssueStatus.rejected
    issue.workflow = IssueWorkflow.rejected
    issue.rejected_at = _now()
    record_activity(db, issue.id, ActivityKind.rejected, actor_email)
    db.commit()
    db.refresh(issue)
    logger.info("issue rejected", extra={"issue_id": issue.id, "actor": actor_email})
    return issue


def _ensure_assignee(issue: Issue, actor: User) -> None:
    if actor.role == UserRole.admin:
        return
    if not issue.assigned_staff_email or issue.assigned_staff_email != actor.email:
        raise Forbidden("Only the assigned staff member can update this issue")


def accept_issue(db: Session, issue_id: int, actor: User) -> Issue:
    issue = get_issue(db, issue_id)
    guard("accept", issue)
    _ensure_assignee(issue, actor)

    issue.workflow = IssueWorkflow.working
    issue.accept_at = _now()
    record_activity(db, issue.id, ActivityKind.accepted, actor.email)
    db.commit()
    db.refresh(issue)
    logger.info("issue accepted", extra={"issue_id": issue.id, "actor": actor.email})
    return issue


def resolve_issue(db: Session, issue_id: int, actor: User) -> Issue:
    issue = get_issue(db, issue_id)
    guard("resolve", issue)
    _ensure_assignee(issue, actor)

    issue.workflow = IssueWorkflow.resolved
    issue.resolved_at = _now()
    record_activity(db, issue.id, ActivityKind.resolved, actor.email)
    db.commit()
    db.refresh(issue)
    logger.info("issue resolved", extra={"issue_id": issue.id, "actor": actor.email})
    return issue


def toggle_upvote(db: Session, issue_id: int, voter_email: str) -> tuple[Issue, bool]:
    """Returns the issue and whether the vote is now on."""
    issue = get_issue(db, issue_id)
    if issue.email == voter_email:
        raise Forbidden("You cannot upvote your own issue")

    removed = (
        db.query(IssueUpvote)
        .filter(IssueUpvote.issue_id == issue.id, IssueUpvote.voter_email == voter_email)
        .delete(synchronize_session=False)
    )
    if not removed:
        db.add(IssueUpvote(issue_id=issue.id, voter_email=voter_email))
        try:
            db.flush()
        except IntegrityError:
            # a concurrent toggle by the same voter won the insert
            db.rollback()
            raise InvalidTransition("Upvote is already being recorded")
    delta = -1 if removed else 1
    db.query(Issue).filter(Issue.id == issue.id).update(
        {Issue.upvotes: Issue.upvotes + delta}, synchronize_session=False
    )
    db.commit()
    db.refresh(issue)
    return issue, not removed


def delete_issue(db: Session, issue_id: int, actor_email: str) -> None:
    issue = get_issue(db, issue_id)
    db.query(IssueActivity).filter(IssueActivity.issue_id == issue.id).delete(synchronize_session=False)
    db.delete(issue)
    db.commit()
    logger.info("issue deleted", extra={"issue_id": issue_id, "actor": actor_email})
