"""Test fixtures and configuration."""

import pytest
from fastapi.testclient import TestClient

from users_api.main import create_app
from users_api.schemas import UpsertUser
from users_api.users_repo import UsersRepository
from users_api.users_service import UsersService


def make_request(email: str, **overrides) -> UpsertUser:
    fields = {
        "email": email,
        "password": "these_pretzels_are_making_me_thirsty",
        "fullname": "Kramer",
        "role": "entrepreneur",
    }
    fields.update(overrides)
    return UpsertUser(**fields)


@pytest.fixture
def repository():
    return UsersRepository()


@pytest.fixture
def service(repository):
    return UsersService(repository)


@pytest.fixture
def client(service):
    """Test client backed by a fresh store."""
    return TestClient(create_app(service))
