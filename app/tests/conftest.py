import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TRACKING_PREFIX"] = "cityfix"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app as api
from app.db.base import Base
from app.db.session import get_db
from app.core.security import make_token
from app.models.user import User, UserRole, Membership
from app.models.staff import Staff, StaffStatus, Availability

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    def override_get_db():
        s = TestingSessionLocal()
        try:
            yield s
        finally:
            s.close()

    api.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(api)
    finally:
        api.dependency_overrides.clear()


def auth(email: str) -> dict:
    return {"Authorization": f"Bearer {make_token(email)}"}


def create_user(db, email, role=UserRole.user, membership=Membership.free, post_count=0) -> User:
    u = User(email=email, name=email.split("@")[0], role=role, membership=membership, post_count=post_count)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def create_staff(db, email, name="Field Worker", status=StaffStatus.approved,
                 availability=Availability.available) -> Staff:
    s = Staff(email=email, name=name, phone="01700000000", status=status, availability=availability)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


ISSUE_BODY = {
    "issueName": "Broken streetlight",
    "description": "The light at the corner has been out for a week",
    "category": "Streetlight",
    "priority": "normal",
    "district": "Dhaka",
    "address": "Road 7, House 12",
    "issueImageURL": "https://img.example/streetlight.jpg",
}
