from pydantic import Field
from typing import Optional, List
from datetime import datetime
from app.models.issue import IssueStatus, IssueWorkflow, AssignState
from app.schemas.common import CamelModel


class IssueCreate(CamelModel):
    issue_name: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=1, max_length=4000)
    category: str = Field(min_length=1, max_length=120)
    priority: Optional[str] = None
    division: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None
    address: Optional[str] = None
    issue_image_url: Optional[str] = Field(default=None, alias="issueImageURL")
    phone_number: Optional[str] = None


class IssueUpdate(CamelModel):
    issue_name: Optional[str] = Field(default=None, min_length=3, max_length=200)
    description: Optional[str] = Field(default=None, max_length=4000)
    category: Optional[str] = None
    priority: Optional[str] = None
    division: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None
    address: Optional[str] = None
    issue_image_url: Optional[str] = Field(default=None, alias="issueImageURL")
    phone_number: Optional[str] = None


class AssignedStaffOut(CamelModel):
    """Copy of the staff identity taken when the issue was assigned."""
    staff_id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None
    assigned_at: Optional[datetime] = None


class IssueOut(CamelModel):
    id: int
    email: str
    issue_name: str
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    division: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None
    address: Optional[str] = None
    issue_image_url: Optional[str] = Field(default=None, alias="issueImageURL")
    phone_number: Optional[str] = None

    status: IssueStatus
    workflow: IssueWorkflow
    assign: AssignState
    tracking_id: Optional[str] = None

    upvotes: int = 0
    upvoted_by: List[str] = []
    assigned_staff: Optional[AssignedStaffOut] = None

    created_at: datetime
    updated_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    accept_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


class AssignIn(CamelModel):
    staff_id: int


class UpvoteOut(CamelModel):
    upvoted: bool
    upvotes: int
    upvoted_by: List[str]


class ActivityOut(CamelModel):
    kind: str
    actor_email: Optional[str] = None
    at: datetime
