"""
Pytest fixtures for product API tests.

Provides an in-memory application, test client, a clean database per test,
a registered user and bearer-token headers.
"""

import pytest

from product_api import create_app
from product_api.config import get_auth_settings
from product_api.extensions import db
from product_api.models import User
from product_api.services import auth_service, token_service


TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'JWT_SECRET': 'test-signing-secret-0123456789abcdef0123456789',
    'BCRYPT_ROUNDS': 4,
}

USER_PASSWORD = "pw123"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def user(db_session) -> User:
    """Registered user with password USER_PASSWORD."""
    return auth_service.register(
        {
            "username": "HB",
            "firstname": "hamza",
            "email": "a@b.com",
            "password": USER_PASSWORD,
        },
        get_auth_settings(),
    )


@pytest.fixture(scope='function')
def token(user) -> str:
    return token_service.issue_token(user, get_auth_settings())


@pytest.fixture(scope='function')
def auth_headers(token) -> dict:
    return auth_header(token)


@pytest.fixture(scope='function')
def product_payload() -> dict:
    return {
        "code": "P12345",
        "name": "Example Product",
        "description": "A sample product",
        "image": "http://example.com/image.jpg",
        "category": "Electronics",
        "price": 199.99,
        "quantity": 10,
        "internalReference": "REF123",
        "shellId": 1,
        "inventoryStatus": "INSTOCK",
        "rating": 4.5,
    }


def auth_header(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}
