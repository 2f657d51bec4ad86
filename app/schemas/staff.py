# File: app/schemas/staff.py
from pydantic import Field
from typing import Optional
from datetime import datetime
from app.models.staff import StaffStatus, Availability
from app.schemas.common import CamelModel


class StaffApply(CamelModel):
    name: str = Field(min_length=2, max_length=120)
    phone: Optional[str] = Field(default=None, max_length=30)
    photo: Optional[str] = None
    address: Optional[str] = None
    district: Optional[str] = None


class StaffUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=120)
    phone: Optional[str] = Field(default=None, max_length=30)
    photo: Optional[str] = None
    address: Optional[str] = None
    district: Optional[str] = None
    availability: Optional[Availability] = None


class StaffOut(CamelModel):
    id: int
    email: str
    name: str
    phone: Optional[str] = None
    photo: Optional[str] = None
    address: Optional[str] = None
    district: Optional[str] = None
    status: StaffStatus
    availability: Availability
    applied_at: datetime
    approved_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
