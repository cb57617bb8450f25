from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from main import create_app
from tourism.core.config import settings
from tourism.models.domain import Identity
from tourism.services.payment_client import StripeClient
from tourism.storage.repository import InMemoryRepository
from tourism.storage.seed import seed_destinations

ADMIN_EMAIL = settings.admin_email_list[0]


@pytest.fixture
def repository() -> InMemoryRepository:
    repo = InMemoryRepository()
    seed_destinations(repo)
    return repo


@pytest.fixture
def alice() -> Identity:
    return Identity(user_id="u1", email="alice@example.com")


@pytest.fixture
def bob() -> Identity:
    return Identity(user_id="u2", email="bob@example.com")


@pytest.fixture
def admin() -> Identity:
    return Identity(user_id="admin", email=ADMIN_EMAIL, is_admin=True)


@pytest.fixture
def stripe_client() -> MagicMock:
    return MagicMock(spec=StripeClient)


@pytest.fixture
def client(repository, stripe_client):
    app = create_app(repository=repository, stripe_client=stripe_client)
    with TestClient(app) as test_client:
        yield test_client
