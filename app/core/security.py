import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from app.config import Settings
from app.core.errors import AuthenticationError, AuthorizationError
from app.db.session import get_db
from app.db.models.user import User

logger = logging.getLogger(__name__)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

# Used to extract token from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _encode(claims: dict, settings: Settings, expires_delta: timedelta) -> str:
    to_encode = claims.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(user: User, settings: Settings) -> str:
    claims = {"sub": str(user.id), "email": user.email, "role": user.role, "type": ACCESS_TOKEN}
    return _encode(claims, settings, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(user: User, settings: Settings) -> str:
    claims = {"sub": str(user.id), "email": user.email, "type": REFRESH_TOKEN}
    return _encode(claims, settings, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str, settings: Settings, expected_type: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except JWTError as e:
        logger.warning("JWT decode failed: %s", e)
        raise AuthenticationError("Invalid token")

    if payload.get("type") != expected_type:
        raise AuthenticationError("Invalid token type")
    if payload.get("sub") is None:
        logger.warning("JWT token missing 'sub' claim")
        raise AuthenticationError("Invalid token")
    return payload


def user_from_payload(db: Session, payload: dict) -> User:
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.warning("User %s from token no longer exists", user_id)
        raise AuthenticationError("User not found")
    return user


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> User:
    if not token:
        raise AuthenticationError("No token provided")
    payload = decode_token(token, settings, ACCESS_TOKEN)
    return user_from_payload(db, payload)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        logger.warning("User %s attempted to access admin-only resource", current_user.email)
        raise AuthorizationError("Access denied. admin role required")
    return current_user
