import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from hedge_tracker.core.config import Settings
from hedge_tracker.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from hedge_tracker.db.dal import Database
from hedge_tracker.models.auth import LoginIn, RegisterIn, TokenOut
from hedge_tracker.models.investment import MessageOut

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger("hedge_tracker.auth")

# Dependencies -----------------------------------------------------


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_db(settings: Settings = Depends(get_settings_dep)) -> Database:
    return Database(settings.db_path)


def require_registration_enabled(settings: Settings = Depends(get_settings_dep)):
    if not settings.enable_registration:
        raise HTTPException(status_code=403, detail="registration is disabled")
    return True


# Routes -----------------------------------------------------------
@router.post("/login", response_model=TokenOut, summary="Exchange credentials for a JWT")
def login(
    payload: LoginIn,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    user = db.get_user(payload.user_id)
    if not user:
        raise HTTPException(
            status_code=404, detail="User not found. Please register first."
        )
    if not verify_password(payload.password, user["password_hash"]):
        logger.info("failed login", extra={"user_id": payload.user_id})
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(user["user_id"], settings)
    return TokenOut(token=token, user_id=user["user_id"])


@router.post(
    "/register",
    response_model=MessageOut,
    status_code=201,
    summary="Create a login (only when registration is enabled)",
)
def register(
    payload: RegisterIn,
    _: bool = Depends(require_registration_enabled),
    db: Database = Depends(get_db),
):
    try:
        db.create_user(payload.user_id, hash_password(payload.password))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    logger.info("user registered", extra={"user_id": payload.user_id})
    return MessageOut(message="User registered successfully")
