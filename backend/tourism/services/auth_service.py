import logging
from typing import List, Optional

from tourism.core.config import settings
from tourism.core.errors import ConflictError, NotFoundError, Unauthenticated
from tourism.core.security import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from tourism.models.domain import Identity, User
from tourism.models.schemas import UserCreate, UserUpdate
from tourism.storage.repository import Repository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    def __init__(self, repository: Repository, admin_emails: Optional[List[str]] = None):
        self.repository = repository
        self.admin_emails = set(
            admin_emails if admin_emails is not None else settings.admin_email_list
        )

    def register(self, payload: UserCreate) -> User:
        email = str(payload.email).lower()
        with self.repository.transaction():
            if self.repository.get_user_by_email(email) is not None:
                raise ConflictError("User already exists", details={"field": "email"})
            user = self.repository.create_user(
                User(
                    email=email,
                    username=payload.username,
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    password_hash=hash_password(payload.password),
                    avatar=str(payload.avatar) if payload.avatar else None,
                    preferences=list(payload.preferences),
                )
            )
        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.repository.get_user_by_email(email.lower())
        # same message for unknown email and bad password
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise Unauthenticated(INVALID_CREDENTIALS)
        return user

    def identity_for(self, user: User) -> Identity:
        return Identity(
            user_id=user.id,
            email=user.email,
            is_admin=user.email.lower() in self.admin_emails,
        )

    def issue_session(self, user: User) -> str:
        return create_session_token(user.id)

    def resolve_identity(self, token: Optional[str]) -> Identity:
        if not token:
            raise Unauthenticated()
        user = self.repository.get_user(decode_session_token(token))
        if user is None:
            raise Unauthenticated("Invalid session")
        return self.identity_for(user)

    def get_user(self, identity: Identity) -> User:
        user = self.repository.get_user(identity.user_id)
        if user is None:
            raise NotFoundError("User", identity.user_id)
        return user

    def update_profile(self, identity: Identity, payload: UserUpdate) -> User:
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None
        }
        if "avatar" in changes:
            changes["avatar"] = str(payload.avatar)
        return self.repository.update_user(identity.user_id, changes)

    def attach_billing(
        self, user_id: str, customer_id: str, subscription_id: Optional[str] = None
    ) -> User:
        changes = {"billing_customer_id": customer_id}
        if subscription_id is not None:
            changes["billing_subscription_id"] = subscription_id
        return self.repository.update_user(user_id, changes)
