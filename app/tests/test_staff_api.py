from app.models.user import User, UserRole

from conftest import auth, create_user

APPLICATION = {"name": "Rahim Uddin", "phone": "01700000000", "district": "Dhaka"}


def apply(client, email):
    r = client.post("/staff", json=APPLICATION, headers=auth(email))
    assert r.status_code == 201, r.text
    return r.json()


def test_apply_then_duplicate_rejected(client, db):
    create_user(db, "worker@example.com")
    staff = apply(client, "worker@example.com")
    assert staff["status"] == "pending"
    assert staff["availability"] == "available"
    assert staff["appliedAt"] is not None

    r = client.post("/staff", json=APPLICATION, headers=auth("worker@example.com"))
    assert r.status_code == 409


def test_admin_approval_promotes_user(client, db):
    create_user(db, "admin@example.com", role=UserRole.admin)
    create_user(db, "worker@example.com")
    staff = apply(client, "worker@example.com")

    assert client.patch(f"/staff-approve/{staff['id']}", headers=auth("worker@example.com")).status_code == 403

    r = client.patch(f"/staff-approve/{staff['id']}", headers=auth("admin@example.com"))
    assert r.status_code == 200
    assert r.json()["status"] == "approved"
    assert r.json()["approvedAt"] is not None

    db.expire_all()
    assert db.query(User).filter(User.email == "worker@example.com").one().role == UserRole.staff
    assert client.get("/user/role/worker@example.com", headers=auth("worker@example.com")).json() == {"role": "staff"}


def test_listing_endpoints(client, db):
    create_user(db, "admin@example.com", role=UserRole.admin)
    create_user(db, "a@example.com")
    create_user(db, "b@example.com")
    a = apply(client, "a@example.com")
    apply(client, "b@example.com")
    client.patch(f"/staff-approve/{a['id']}", headers=auth("admin@example.com"))

    everyone = client.get("/staff", headers=auth("admin@example.com")).json()
    assert len(everyone) == 2
    pending = client.get("/staff", params={"status": "pending"}, headers=auth("admin@example.com")).json()
    assert [s["email"] for s in pending] == ["b@example.com"]

    approved = client.get("/approve-staff", headers=auth("admin@example.com")).json()
    assert [s["email"] for s in approved] == ["a@example.com"]

    client.patch(f"/staff/{a['id']}", json={"availability": "not_available"}, headers=auth("a@example.com"))
    available = client.get("/approve-staff", params={"available": True}, headers=auth("admin@example.com")).json()
    assert available == []

    assert client.get("/staff", headers=auth("a@example.com")).status_code == 403


def test_get_and_update_own_profile(client, db):
    create_user(db, "worker@example.com")
    create_user(db, "other@example.com")
    staff = apply(client, "worker@example.com")

    r = client.get("/staff/worker@example.com", headers=auth("other@example.com"))
    assert r.json()["name"] == "Rahim Uddin"
    assert client.get("/staff/ghost@example.com", headers=auth("other@example.com")).status_code == 404

    r = client.patch(f"/staff/{staff['id']}", json={"availability": "busy"}, headers=auth("worker@example.com"))
    assert r.status_code == 200
    assert r.json()["availability"] == "busy"
    assert r.json()["updatedAt"] is not None

    r = client.patch(f"/staff/{staff['id']}", json={"name": "Hijacked"}, headers=auth("other@example.com"))
    assert r.status_code == 403


def test_delete_staff(client, db):
    create_user(db, "admin@example.com", role=UserRole.admin)
    create_user(db, "worker@example.com")
    staff = apply(client, "worker@example.com")

    assert client.delete(f"/staff/{staff['id']}", headers=auth("worker@example.com")).status_code == 403
    assert client.delete(f"/staff/{staff['id']}", headers=auth("admin@example.com")).json() == {"ok": True}
    assert client.delete(f"/staff/{staff['id']}", headers=auth("admin@example.com")).status_code == 404


def test_approving_twice_is_refused(client, db):
    create_user(db, "admin@example.com", role=UserRole.admin)
    create_user(db, "worker@example.com")
    staff = apply(client, "worker@example.com")

    first = client.patch(f"/staff-approve/{staff['id']}", headers=auth("admin@example.com")).json()
    r = client.patch(f"/staff-approve/{staff['id']}", headers=auth("admin@example.com"))
    assert r.status_code == 409

    again = client.get("/staff/worker@example.com", headers=auth("worker@example.com")).json()
    assert again["approvedAt"] == first["approvedAt"]


def test_deleting_staff_demotes_account(client, db):
    create_user(db, "admin@example.com", role=UserRole.admin)
    create_user(db, "worker@example.com")
    staff = apply(client, "worker@example.com")
    client.patch(f"/staff-approve/{staff['id']}", headers=auth("admin@example.com"))
    assert client.get("/user/role/worker@example.com", headers=auth("worker@example.com")).json() == {"role": "staff"}

    assert client.delete(f"/staff/{staff['id']}", headers=auth("admin@example.com")).json() == {"ok": True}

    db.expire_all()
    assert db.query(User).filter(User.email == "worker@example.com").one().role == UserRole.user
    assert client.get("/user/role/worker@example.com", headers=auth("worker@example.com")).json() == {"role": "user"}
