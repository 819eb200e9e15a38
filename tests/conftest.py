"""Shared pytest fixtures for invoicekit tests."""

import tempfile
import os
from datetime import datetime, UTC
from decimal import Decimal
import pytest

from invoicekit.database.factories import create_sqlite_database
from invoicekit.domain.business import BusinessService
from invoicekit.domain.client import ClientService
from invoicekit.domain.dashboard import DashboardService
from invoicekit.domain.entities import Client, Invoice, InvoiceStatus, LineItem
from invoicekit.domain.invoice import InvoiceService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def business_service(temp_db):
    """Create a BusinessService with a temporary database."""
    return BusinessService(temp_db)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def sample_business(business_service):
    """Register the business that acts as caller in most tests."""
    business_id = business_service.register_business(
        name="Acme Traders", tax_number="27AAPFU0939F1ZV", address="12 MG Road, Pune"
    )
    return business_service.get_profile(business_id)


@pytest.fixture
def other_business(business_service):
    """Register a second, unrelated tenant."""
    business_id = business_service.register_business(
        name="Globex Supplies", tax_number="29ABCDE1234F1Z5", address="4 Residency Road, Bengaluru"
    )
    return business_service.get_profile(business_id)


@pytest.fixture
def sample_client(client_service, sample_business):
    """Create a client owned by sample_business."""
    client_id = client_service.create_client(
        sample_business.id,
        name="Initech",
        email="billing@initech.example",
        phone="9876543210",
        address="42 Park Street, Kolkata",
    )
    return client_service.get_client(client_id, sample_business.id)


@pytest.fixture
def other_client(client_service, other_business):
    """Create a client owned by other_business."""
    client_id = client_service.create_client(other_business.id, name="Umbrella Corp")
    return client_service.get_client(client_id, other_business.id)


@pytest.fixture
def sample_items():
    """Raw line items as a request layer would pass them."""
    return [
        {"description": "Website design", "quantity": 2, "unit_price": "50"},
        {"description": "Hosting", "quantity": 1, "unit_price": "25"},
    ]


@pytest.fixture
def sample_invoice(invoice_service, sample_business, sample_client, sample_items):
    """Create an invoice for sample_client with 10% discount and 5% tax."""
    return invoice_service.create_invoice(
        sample_business.id, sample_client.id, sample_items, tax_rate=5, discount_rate=10
    )


@pytest.fixture
def make_invoice():
    """Build an in-memory Invoice entity for renderer tests."""

    def _make(item_count=2, tax_rate="5", discount_rate="10", **overrides):
        items = tuple(
            LineItem(
                description=f"Item {index + 1}",
                quantity=Decimal("1"),
                unit_price=Decimal("10.00"),
            )
            for index in range(item_count)
        )
        values = dict(
            id=1,
            business_id=1,
            client_id=1,
            invoice_number="INV-2503-ABC123",
            items=items,
            tax_rate=Decimal(tax_rate),
            discount_rate=Decimal(discount_rate),
            subtotal=Decimal("0"),
            tax_amount=Decimal("0"),
            total=Decimal("0"),
            status=InvoiceStatus.UNPAID,
            created_at=datetime(2025, 3, 5, 10, 30, tzinfo=UTC),
        )
        values.update(overrides)
        return Invoice(**values)

    return _make


@pytest.fixture
def render_client():
    """In-memory client matching make_invoice defaults."""
    return Client(
        id=1,
        business_id=1,
        name="Initech",
        email="billing@initech.example",
        phone=None,
        address="42 Park Street, Kolkata",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
