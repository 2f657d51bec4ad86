# app/core/security.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import time, jwt
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.errors import Unauthorized, Forbidden
from app.db.session import get_db
from app.models.user import User, UserRole

TOKEN_TTL = 60 * 60
bearer = HTTPBearer(auto_error=False)

def make_token(email: str, ttl: int = TOKEN_TTL) -> str:
    """Issue an identity token the way the identity provider does (tests, local dev)."""
    now = int(time.time())
    payload = {"sub": email, "email": email, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

def _decode_token(creds: Optional[HTTPAuthorizationCredentials]) -> dict:
    if not creds:
        raise Unauthorized()
    try:
        return jwt.decode(creds.credentials, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.PyJWTError:
        raise Unauthorized()

def get_identity(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> str:
    """Verified caller email. Never taken from the request body."""
    payload = _decode_token(creds)
    email = payload.get("email") or payload.get("sub")
    if not email:
        raise Unauthorized("Invalid token payload")
    return email.lower()

def get_current_user(email: str = Depends(get_identity),
                     db: Session = Depends(get_db)) -> User:
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise Forbidden("User not registered")
    return user

def require_role(*roles):
    role_values = [r.value if isinstance(r, UserRole) else r for r in roles]
    def _dep(user: User = Depends(get_current_user)):
        if user.role.value not in role_values:
            raise Forbidden("forbidden")
        return user
    return _dep

def is_admin(user: User) -> bool:
    return user.role == UserRole.admin

def ensure_self_or_admin(user: User, email: str) -> None:
    if user.email != email.lower() and not is_admin(user):
        raise Forbidden("forbidden")
