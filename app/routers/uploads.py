# File: app/routers/uploads.py
from fastapi import APIRouter, Depends, UploadFile, File
from app.core.errors import BadRequest
from app.core.security import get_current_user
from app.models.user import User
from app.services.storage import upload_image, make_object_key

router = APIRouter(prefix="/uploads", tags=["uploads"])

MAX_BYTES = 2 * 1024 * 1024
ALLOWED = {"image/jpeg", "image/png", "image/webp", "image/gif"}

@router.post("/issue-image")
def upload_issue_image(file: UploadFile = File(...), current: User = Depends(get_current_user)):
    if file.content_type not in ALLOWED:
        raise BadRequest("Unsupported image type")
    data = file.file.read()
    if len(data) > MAX_BYTES:
        raise BadRequest("Image too large (max 2MB)")
    key = make_object_key(current.email, file.filename or "image.jpg")
    return {"url": upload_image(data, file.content_type, key)}
