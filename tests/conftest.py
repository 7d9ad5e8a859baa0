import os

# Must be set before bank_api is imported: settings and the engine are
# built at import time.
os.environ["DB_URL"] = "sqlite://"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["SEED_DATABASE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402

from bank_api.entities.user import NewUser  # noqa: E402
from bank_api.infrastructure.database.base_model import BaseModel  # noqa: E402
from bank_api.infrastructure.database.session import db_session, engine  # noqa: E402
from bank_api.main import app as flask_app  # noqa: E402
from bank_api.repositories.user_repository import UserRepository  # noqa: E402
from bank_api.services.user_service import UserService  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    """Drop and recreate every table so each test starts from an empty store."""
    BaseModel.metadata.drop_all(bind=engine)
    BaseModel.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def session():
    with db_session() as s:
        yield s


@pytest.fixture()
def user_service(session):
    return UserService(UserRepository(session))


@pytest.fixture()
def new_user_factory():
    def _new_user(**overrides) -> NewUser:
        data = {
            "first_name": "John",
            "last_name": "Doe",
            "email": "john@example.com",
            "password": "password123",
            "phone_number": "+1 (555) 123-4567",
        }
        data.update(overrides)
        return NewUser(**data)

    return _new_user


@pytest.fixture()
def client():
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as c:
        yield c


@pytest.fixture()
def register(client):
    """Registers an account over HTTP and returns the parsed response."""

    def _register(**overrides) -> dict:
        payload = {
            "firstName": "John",
            "lastName": "Doe",
            "email": "john@example.com",
            "password": "password123",
            "phoneNumber": "+1234567890",
        }
        payload.update(overrides)
        response = client.post("/v1/auth/register", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return _register


@pytest.fixture()
def auth_headers():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _headers
