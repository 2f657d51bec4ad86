# app/routers/issues_stats.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import datetime, timedelta, timezone
from sqlalchemy import func
from app.core.security import require_role
from app.db.session import get_db
from app.models.issue import Issue

router = APIRouter(prefix="/issues/stats", tags=["issues:stats"])

def range_to_dt(range_key: str):
    now = datetime.now(timezone.utc)
    if range_key == "today": return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if range_key == "7d": return now - timedelta(days=7)
    if range_key == "30d": return now - timedelta(days=30)
    if range_key == "90d": return now - timedelta(days=90)
    if range_key == "year": return now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    return None

@router.get("/summary", dependencies=[Depends(require_role("admin"))])
def summary(range: str = Query("all"), db: Session = Depends(get_db)):
    since = range_to_dt(range)

    def grouped(column):
        q = db.query(column, func.count(Issue.id))
        if since:
            q = q.filter(Issue.created_at >= since)
        return {k.value: n for k, n in q.group_by(column).all()}

    by_status = grouped(Issue.status)
    by_workflow = grouped(Issue.workflow)
    return {
        "total": sum(by_status.values()),
        "byStatus": by_status,
        "byWorkflow": by_workflow,
    }
