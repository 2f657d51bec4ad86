# File: app/routers/users.py
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
from app.core.errors import BadRequest, Forbidden, NotFound
from app.core.security import get_identity, get_current_user, require_role, ensure_self_or_admin, is_admin
from app.db.session import get_db
from app.models.user import User, UserRole, Membership
from app.schemas.user import UserLogin, UserUpdate, UserOut, LoginOut, RoleOut, UsageOut
from app.services.quota import quota_for

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

def _get_by_email(db: Session, email: str) -> User:
    u = db.query(User).filter(User.email == email.lower()).first()
    if not u:
        raise NotFound("User not found")
    return u

@router.post("/user", response_model=LoginOut)
def login_user(body: UserLogin, email: str = Depends(get_identity), db: Session = Depends(get_db)):
    """First call creates the account; later calls only stamp last_logged_in."""
    now = datetime.now(timezone.utc)
    u = db.query(User).filter(User.email == email).first()
    if u:
        u.last_logged_in = now
        db.commit(); db.refresh(u)
        return {"created": False, "user": u}

    u = User(
        email=email,
        name=body.name,
        photo_url=body.photo_url,
        role=UserRole.user,
        membership=Membership.free,
        post_count=0,
        created_at=now,
        last_logged_in=now,
    )
    db.add(u)
    try:
        db.commit()
    except IntegrityError:
        # concurrent first login created it
        db.rollback()
        u = _get_by_email(db, email)
        u.last_logged_in = now
        db.commit(); db.refresh(u)
        return {"created": False, "user": u}
    db.refresh(u)
    logger.info("user registered", extra={"email": email})
    return {"created": True, "user": u}

@router.get("/user", response_model=List[UserOut], dependencies=[Depends(require_role("admin"))])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

@router.patch("/users/{email}", response_model=UserOut)
def update_user(email: str, body: UserUpdate, db: Session = Depends(get_db),
                current: User = Depends(get_current_user)):
    ensure_self_or_admin(current, email)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    # role and membership decide privileges and quota
    if ("role" in changes or "membership" in changes) and not is_admin(current):
        raise Forbidden("Only admins can change role or membership")
    u = _get_by_email(db, email)
    for key, value in changes.items():
        setattr(u, key, value)
    u.updated_at = datetime.now(timezone.utc)
    db.commit(); db.refresh(u)
    return u

@router.delete("/user/{user_id}", dependencies=[Depends(require_role("admin"))])
def delete_user(user_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    u = db.query(User).filter(User.id == user_id).first()
    if not u:
        raise NotFound("User not found")
    if u.id == current.id:
        raise BadRequest("You cannot delete your own account")
    # issues filed by this user are kept
    db.delete(u); db.commit()
    logger.info("user deleted", extra={"user_id": user_id, "actor": current.email})
    return {"ok": True}

@router.get("/user/role/{email}", response_model=RoleOut)
def user_role(email: str, db: Session = Depends(get_db), _=Depends(get_current_user)):
    return {"role": _get_by_email(db, email).role}

@router.get("/users/usage/{email}", response_model=UsageOut)
def user_usage(email: str, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    ensure_self_or_admin(current, email)
    u = _get_by_email(db, email)
    quota = quota_for(u.membership, u.post_count)
    return {
        "email": u.email,
        "membership": u.membership,
        "post_count": u.post_count,
        "limit": quota.limit,
        "remaining": quota.remaining,
    }
