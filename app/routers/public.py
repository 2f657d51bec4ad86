# app/routers/public.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.core.errors import NotFound
from app.db.session import get_db
from app.models.issue import Issue, IssueStatus, IssueWorkflow
from app.schemas.issue import IssueOut

router = APIRouter(tags=["public"])

@router.get("/approve-issues", response_model=List[IssueOut])
def approved_issues(db: Session = Depends(get_db)):
    return (
        db.query(Issue)
        .filter(Issue.status == IssueStatus.approved)
        .order_by(Issue.upvotes.desc(), Issue.approved_at.desc())
        .all()
    )

@router.get("/approve-issues/{issue_id}", response_model=IssueOut)
def approved_issue(issue_id: int, db: Session = Depends(get_db)):
    issue = db.query(Issue).filter(Issue.id == issue_id, Issue.status == IssueStatus.approved).first()
    if not issue:
        raise NotFound("Issue not found")
    return issue

@router.get("/resolved-issue", response_model=List[IssueOut])
def resolved_issues(db: Session = Depends(get_db)):
    return (
        db.query(Issue)
        .filter(Issue.workflow == IssueWorkflow.resolved)
        .order_by(Issue.resolved_at.desc())
        .all()
    )

@router.get("/track-issue/{tracking_id}", response_model=IssueOut)
def track_by_id(tracking_id: str, db: Session = Depends(get_db)):
    issue = db.query(Issue).filter(Issue.tracking_id == tracking_id).first()
    if not issue:
        raise NotFound("No issue with this tracking id")
    return issue
