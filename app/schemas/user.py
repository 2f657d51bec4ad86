#app\schemas\user.py
from pydantic import Field
from typing import Optional, Union
from datetime import datetime
from app.models.user import UserRole, Membership
from app.schemas.common import CamelModel

class UserLogin(CamelModel):
    name: Optional[str] = Field(default=None, max_length=120)
    photo_url: Optional[str] = Field(default=None, alias="photoURL")

class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=120)
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    membership: Optional[Membership] = None
    role: Optional[UserRole] = None

class UserOut(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    role: UserRole
    membership: Membership
    post_count: int
    created_at: datetime
    last_logged_in: Optional[datetime] = Field(default=None, alias="last_logged_in")
    updated_at: Optional[datetime] = None

class LoginOut(CamelModel):
    created: bool
    user: UserOut

class RoleOut(CamelModel):
    role: UserRole

class UsageOut(CamelModel):
    email: str
    membership: Membership
    post_count: int
    limit: Optional[int] = None
    remaining: Union[int, str]
