from app.services import storage

from conftest import auth, create_user


def test_issue_image_upload_without_storage(client, db, monkeypatch):
    monkeypatch.setattr(storage, "SUPABASE_URL", None)
    create_user(db, "citizen@example.com")

    r = client.post(
        "/uploads/issue-image",
        files={"file": ("pothole.png", b"\x89PNG fake", "image/png")},
        headers=auth("citizen@example.com"),
    )
    assert r.status_code == 200
    assert r.json()["url"].startswith("data:image/png;base64,")

    r = client.post(
        "/uploads/issue-image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth("citizen@example.com"),
    )
    assert r.status_code == 400
