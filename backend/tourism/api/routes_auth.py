from fastapi import APIRouter, Depends, Response, status

from tourism.api import get_auth_service, get_current_identity
from tourism.core.config import settings
from tourism.models.domain import Identity
from tourism.models.schemas import (
    LoginRequest,
    MessageResponse,
    SessionResponse,
    UserCreate,
    UserSchema,
    UserUpdate,
)
from tourism.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, auth: AuthService = Depends(get_auth_service)) -> UserSchema:
    return UserSchema.from_domain(auth.register(payload))


@router.post("/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    user = auth.authenticate(body.email, body.password)
    token = auth.issue_session(user)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.environment != "local",
        max_age=settings.access_token_expire_minutes * 60,
    )
    return SessionResponse(access_token=token, user=UserSchema.from_domain(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserSchema)
def me(
    identity: Identity = Depends(get_current_identity),
    auth: AuthService = Depends(get_auth_service),
) -> UserSchema:
    return UserSchema.from_domain(auth.get_user(identity))


@router.patch("/me", response_model=UserSchema)
def update_me(
    payload: UserUpdate,
    identity: Identity = Depends(get_current_identity),
    auth: AuthService = Depends(get_auth_service),
) -> UserSchema:
    return UserSchema.from_domain(auth.update_profile(identity, payload))
