# File: app/routers/issues.py
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.issue import Issue, IssueStatus, IssueWorkflow
from app.models.issue_activity import IssueActivity
from app.models.user import User
from app.schemas.issue import IssueCreate, IssueUpdate, IssueOut, AssignIn, UpvoteOut, ActivityOut
from app.core.config import settings
from app.core.ratelimit import limiter
from app.core.security import get_current_user, require_role, ensure_self_or_admin, is_admin
from app.services import lifecycle
from app.services.assignment import assign_staff

router = APIRouter(tags=["issues"])


@router.post("/issues", response_model=IssueOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.issue_submit_rate_limit)
def create_issue(
    request: Request,
    body: IssueCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return lifecycle.submit_issue(db, current.email, body.model_dump())


@router.get("/issues", response_model=List[IssueOut])
def list_issues(
    email: Optional[str] = Query(None),
    status_: Optional[IssueStatus] = Query(None, alias="status"),
    workflow: Optional[IssueWorkflow] = Query(None),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    # admins see everything unless they filter; everyone else only sees their own
    if email:
        ensure_self_or_admin(current, email)
    elif not is_admin(current):
        email = current.email

    q = db.query(Issue)
    if email:
        q = q.filter(Issue.email == email.lower())
    if status_:
        q = q.filter(Issue.status == status_)
    if workflow:
        q = q.filter(Issue.workflow == workflow)
    return q.order_by(Issue.created_at.desc(), Issue.id.desc()).all()


@router.get("/issues/assigned/{email}", response_model=List[IssueOut])
def list_assigned_issues(
    email: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    ensure_self_or_admin(current, email)
    return (
        db.query(Issue)
        .filter(Issue.assigned_staff_email == email.lower())
        .order_by(Issue.assigned_at.desc())
        .all()
    )


@router.get("/issues/{issue_id}", response_model=IssueOut)
def get_issue(issue_id: int, db: Session = Depends(get_db), _=Depends(get_current_user)):
    return lifecycle.get_issue(db, issue_id)


@router.get("/issues/{issue_id}/activity", response_model=List[ActivityOut])
def get_issue_activity(issue_id: int, db: Session = Depends(get_db), _=Depends(get_current_user)):
    lifecycle.get_issue(db, issue_id)
    return (
        db.query(IssueActivity)
        .filter(IssueActivity.issue_id == issue_id)
        .order_by(IssueActivity.at.asc(), IssueActivity.id.asc())
        .all()
    )


@router.patch("/issue-edit/{issue_id}", response_model=IssueOut)
def edit_issue(
    issue_id: int,
    body: IssueUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    return lifecycle.edit_issue(db, issue_id, current.email, changes)


@router.patch("/issues/approve/{issue_id}", response_model=IssueOut)
def approve_issue(issue_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))):
    return lifecycle.approve_issue(db, issue_id, admin.email)


@router.patch("/issues/reject/{issue_id}", response_model=IssueOut)
def reject_issue(issue_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))):
    return lifecycle.reject_issue(db, issue_id, admin.email)


@router.patch("/issues/assign/{issue_id}", response_model=IssueOut)
def assign_issue(
    issue_id: int,
    body: AssignIn,
    db: Session = Depends(get_db),
    admin: User = Depends(require_role("admin")),
):
    return assign_staff(db, issue_id, body.staff_id, admin.email)


@router.patch("/issues/upvote/{issue_id}", response_model=UpvoteOut)
def upvote_issue(issue_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    issue, on = lifecycle.toggle_upvote(db, issue_id, current.email)
    return {"upvoted": on, "upvotes": issue.upvotes, "upvoted_by": issue.upvoted_by}


@router.delete("/issues/{issue_id}")
def delete_issue(issue_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))):
    lifecycle.delete_issue(db, issue_id, admin.email)
    return {"ok": True}


@router.patch("/accept-issu/{issue_id}", response_model=IssueOut)
def accept_issue(issue_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return lifecycle.accept_issue(db, issue_id, current)


@router.patch("/resolved-issu/{issue_id}", response_model=IssueOut)
def resolve_issue(issue_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return lifecycle.resolve_issue(db, issue_id, current)


@router.get("/track-issue", response_model=List[IssueOut])
def track_my_issues(
    email: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    email = email or current.email
    ensure_self_or_admin(current, email)
    return (
        db.query(Issue)
        .filter(Issue.email == email.lower(), Issue.status == IssueStatus.approved)
        .order_by(Issue.approved_at.desc())
        .all()
    )
