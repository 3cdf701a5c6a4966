"""
Test configuration and fixtures
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from customer_api.config import Settings, get_settings
from customer_api.db.engine import build_engine, get_engine
from customer_api.db.schema import metadata
from customer_api.main import app
from customer_api.repositories import CustomerRepository, InvoiceRepository, TelephoneNumberRepository

# In-memory SQLite shared by every connection of the test engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def engine():
    """Fresh schema for each test"""
    engine = build_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def customer_repository(engine):
    return CustomerRepository(engine)


@pytest.fixture
def invoice_repository(engine):
    return InvoiceRepository(engine)


@pytest.fixture
def telephone_number_repository(engine):
    return TelephoneNumberRepository(engine)


@pytest.fixture(params=["declarative", "rules"])
def validation_strategy(request):
    return request.param


@pytest.fixture(scope="function")
def client(engine, validation_strategy):
    """Test client bound to the test engine, once per validation strategy"""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_settings] = lambda: Settings(validation_strategy=validation_strategy)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_customer_payload():
    """Customer create payload with two invoices and two phone numbers"""
    return {
        "name": "Test Company",
        "email": "test@company.com",
        "invoices": [
            {"invoiceNumber": "INV-001", "invoiceDate": "2024-01-15", "amount": 100.50},
            {"invoiceNumber": "INV-002", "invoiceDate": "2024-02-15", "amount": "250.25"},
        ],
        "phoneNumbers": [
            {"type": "Mobile", "number": "555-1234"},
            {"type": "Work", "number": "555-5678"},
        ],
    }
