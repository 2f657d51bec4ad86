# File: app/services/tracking.py
import logging
import secrets
from datetime import datetime
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.errors import TrackingIdExhausted
from app.models.issue import Issue

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5

def make_tracking_id(approved_at: datetime, prefix: str | None = None) -> str:
    """<prefix>-<YYYYMMDD>-<6 hex>, dated by the (UTC) approval time."""
    prefix = prefix or settings.tracking_prefix
    return f"{prefix}-{approved_at.strftime('%Y%m%d')}-{secrets.token_hex(3).upper()}"

def new_tracking_id(db: Session, approved_at: datetime) -> str:
    for attempt in range(1, MAX_ATTEMPTS + 1):
        candidate = make_tracking_id(approved_at)
        taken = db.query(Issue.id).filter(Issue.tracking_id == candidate).first()
        if not taken:
            return candidate
        logger.warning("tracking id collision", extra={"tracking_id": candidate, "attempt": attempt})
    logger.error("tracking id allocation exhausted", extra={"attempts": MAX_ATTEMPTS})
    raise TrackingIdExhausted()
