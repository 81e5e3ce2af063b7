from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.schemas import Envelope, ok
from app.api.users import services as user_services
from app.api.users.schemas import UserCreate
from app.config import Settings
from app.core.security import get_app_settings, get_current_user, require_admin
from app.db.models.user import User
from app.db.session import get_db
from . import schemas, services

router = APIRouter()


@router.post("/login", response_model=Envelope[schemas.LoginOut])
def login(
    credentials: schemas.LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    return ok(services.login(db, credentials, settings))


@router.post("/refresh", response_model=Envelope[schemas.TokenPair])
def refresh(
    body: schemas.RefreshRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    return ok(services.refresh(db, body.refresh_token, settings))


@router.post("/register", response_model=Envelope[schemas.UserOut], status_code=201)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return ok(user_services.create_user(db, user))


@router.get("/me", response_model=Envelope[schemas.UserOut])
def read_me(current_user: User = Depends(get_current_user)):
    return ok(current_user)


@router.put("/me", response_model=Envelope[schemas.UserOut])
def update_me(
    profile: schemas.ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ok(services.update_profile(db, current_user, profile))
