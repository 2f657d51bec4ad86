#app\services\storage.py
import base64, logging, requests, uuid
from app.core.config import settings

logger = logging.getLogger(__name__)

SUPABASE_URL = settings.supabase_url
SUPABASE_SERVICE_ROLE = settings.supabase_service_role
BUCKET = settings.supabase_bucket

def upload_image(data: bytes, content_type: str, path: str) -> str:
    """Uploads to Supabase Storage via REST; returns public URL (bucket must be public)."""
    if not (SUPABASE_URL and SUPABASE_SERVICE_ROLE):
        # storage not configured: inline the image
        b64 = base64.b64encode(data).decode('utf-8')
        return f"data:{content_type};base64,{b64}"
    url = f"{SUPABASE_URL}/storage/v1/object/{BUCKET}/{path}"
    r = requests.post(url, headers={
        "Authorization": f"Bearer {SUPABASE_SERVICE_ROLE}",
        "Content-Type": content_type,
        "x-upsert": "true",
    }, data=data, timeout=settings.storage_timeout)
    r.raise_for_status()
    logger.info("image stored", extra={"path": path, "bytes": len(data)})
    return f"{SUPABASE_URL}/storage/v1/object/public/{BUCKET}/{path}"

def make_object_key(owner_email: str, filename: str) -> str:
    ext = (filename.rsplit(".",1)[-1] if "." in filename else "jpg").lower()
    owner = owner_email.split("@", 1)[0] or "anon"
    return f"{owner}/{uuid.uuid4().hex}.{ext}"
