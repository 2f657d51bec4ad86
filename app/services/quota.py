# File: app/services/quota.py
from dataclasses import dataclass
from typing import Optional, Union
from app.models.user import Membership

UNLIMITED = "unlimited"

# None means unbounded
TIER_LIMITS: dict[Membership, Optional[int]] = {
    Membership.free: 5,
    Membership.standard: 50,
    Membership.premium: None,
}


@dataclass(frozen=True)
class Quota:
    limit: Optional[int]
    remaining: Union[int, str]


def check_tier_table() -> None:
    """Called once at startup: every tier needs an entry."""
    missing = [m.value for m in Membership if m not in TIER_LIMITS]
    if missing:
        raise RuntimeError(f"No post limit configured for membership tier(s): {', '.join(missing)}")


def post_limit(membership: Membership) -> Optional[int]:
    return TIER_LIMITS[membership]


def quota_for(membership: Membership, post_count: int) -> Quota:
    limit = post_limit(membership)
    if limit is None:
        return Quota(limit=None, remaining=UNLIMITED)
    return Quota(limit=limit, remaining=max(limit - post_count, 0))
