# File: app/routers/staff.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.errors import Forbidden, NotFound
from app.core.security import get_current_user, require_role, is_admin
from app.db.session import get_db
from app.models.staff import Staff, StaffStatus, Availability
from app.models.user import User
from app.schemas.staff import StaffApply, StaffUpdate, StaffOut
from app.services import staff as staff_service

router = APIRouter(tags=["staff"])

@router.post("/staff", response_model=StaffOut, status_code=status.HTTP_201_CREATED)
def apply_staff(body: StaffApply, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return staff_service.apply_as_staff(db, current.email, body.model_dump())

@router.get("/staff", response_model=List[StaffOut], dependencies=[Depends(require_role("admin"))])
def list_staff(status_: Optional[StaffStatus] = Query(None, alias="status"), db: Session = Depends(get_db)):
    q = db.query(Staff)
    if status_:
        q = q.filter(Staff.status == status_)
    return q.order_by(Staff.applied_at.desc(), Staff.id.desc()).all()

@router.get("/approve-staff", response_model=List[StaffOut], dependencies=[Depends(require_role("admin"))])
def approved_staff(available: bool = Query(False), db: Session = Depends(get_db)):
    q = db.query(Staff).filter(Staff.status == StaffStatus.approved)
    if available:
        q = q.filter(Staff.availability != Availability.not_available)
    return q.order_by(Staff.name.asc()).all()

@router.patch("/staff-approve/{staff_id}", response_model=StaffOut)
def approve_staff(staff_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))):
    return staff_service.approve_staff(db, staff_id, admin.email)

@router.delete("/staff/{staff_id}")
def delete_staff(staff_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))):
    staff_service.delete_staff(db, staff_id, admin.email)
    return {"ok": True}

@router.get("/staff/{email}", response_model=StaffOut)
def get_staff_by_email(email: str, db: Session = Depends(get_db), _=Depends(get_current_user)):
    s = db.query(Staff).filter(Staff.email == email.lower()).first()
    if not s:
        raise NotFound("Staff not found")
    return s

@router.patch("/staff/{staff_id}", response_model=StaffOut)
def update_staff(staff_id: int, body: StaffUpdate, db: Session = Depends(get_db),
                 current: User = Depends(get_current_user)):
    s = staff_service.get_staff(db, staff_id)
    if s.email != current.email and not is_admin(current):
        raise Forbidden("forbidden")
    return staff_service.update_staff(db, staff_id, body.model_dump(exclude_unset=True, exclude_none=True))
