from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.requests import Request

from tourism.core.config import settings
from tourism.core.errors import ForbiddenError
from tourism.models.domain import Identity
from tourism.services.auth_service import AuthService
from tourism.services.payment_client import StripeClient
from tourism.storage.repository import Repository

bearer = HTTPBearer(auto_error=False)


def get_repository(request: Request) -> Repository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(status_code=500, detail="Repository not initialized")
    return repository


def get_stripe_client(request: Request) -> StripeClient:
    client = getattr(request.app.state, "stripe_client", None)
    if client is None:
        raise HTTPException(status_code=500, detail="Payment client not initialized")
    return client


def get_auth_service(repository: Repository = Depends(get_repository)) -> AuthService:
    return AuthService(repository=repository)


def get_current_identity(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    token = creds.credentials if creds else request.cookies.get(settings.session_cookie_name)
    return auth.resolve_identity(token)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise ForbiddenError("Admin access required")
    return identity
