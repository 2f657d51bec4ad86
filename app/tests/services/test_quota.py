import pytest

from app.models.user import Membership
from app.services import quota
from app.services.quota import UNLIMITED, check_tier_table, quota_for


def test_free_tier_limit_and_remaining():
    q = quota_for(Membership.free, 2)
    assert q.limit == 5
    assert q.remaining == 3


def test_standard_tier_limit():
    assert quota_for(Membership.standard, 0).limit == 50


def test_remaining_never_negative():
    assert quota_for(Membership.free, 9).remaining == 0


def test_premium_is_unlimited():
    q = quota_for(Membership.premium, 10_000)
    assert q.limit is None
    assert q.remaining == UNLIMITED


def test_missing_tier_is_a_startup_error(monkeypatch):
    monkeypatch.setattr(quota, "TIER_LIMITS", {Membership.free: 5})
    with pytest.raises(RuntimeError):
        check_tier_table()


def test_tier_table_complete():
    check_tier_table()
