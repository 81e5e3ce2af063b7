import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.config import Settings
from app.core.errors import AuthenticationError
from app.core.hashing import Hasher
from app.core.security import (
    REFRESH_TOKEN, create_access_token, create_refresh_token, decode_token, user_from_payload,
)
from app.db.models.user import User
from . import schemas

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def issue_tokens(user: User, settings: Settings) -> dict:
    return {
        "token": create_access_token(user, settings),
        "refresh_token": create_refresh_token(user, settings),
    }


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.email == email).first()
    if not user or not Hasher.verify_password(password, user.password_hash):
        return None
    return user


def login(db: Session, credentials: schemas.LoginRequest, settings: Settings) -> dict:
    user = authenticate(db, credentials.email, credentials.password)
    if not user:
        logger.info("Failed login for %s", credentials.email)
        raise AuthenticationError("Invalid credentials")

    logger.info("User logged in: %s", user.email)
    return {**issue_tokens(user, settings), "user": user}


def refresh(db: Session, refresh_token: str, settings: Settings) -> dict:
    try:
        payload = decode_token(refresh_token, settings, REFRESH_TOKEN)
    except AuthenticationError:
        raise AuthenticationError("Invalid refresh token")
    user = user_from_payload(db, payload)
    return issue_tokens(user, settings)


def update_profile(db: Session, user: User, profile: schemas.ProfileUpdate) -> User:
    """Apply the valid parts of a self-service profile update; invalid values are skipped."""
    if profile.name and len(profile.name.strip()) >= MIN_NAME_LENGTH:
        user.name = profile.name.strip()
    if profile.password and len(profile.password) >= MIN_PASSWORD_LENGTH:
        user.password_hash = Hasher.hash_password(profile.password)
    if profile.avatar_url:
        user.avatar_url = profile.avatar_url
    if profile.theme:
        user.theme = profile.theme

    db.commit()
    db.refresh(user)
    logger.info("User profile updated: %s", user.email)
    return user
